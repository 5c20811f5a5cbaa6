"""
Creative-director evaluation of a generated campaign.

The model scores insight, originality, execution and award potential; the
bravery score always comes from the local heuristic so it stays
reproducible whatever the model says.
"""

from typing import Any, Dict, Optional

import structlog
from pydantic import ValidationError

from campaign_studio.core.bravery import bravery_display_score, calculate_bravery_score
from campaign_studio.core.exceptions import JSONExtractionError, LLMServiceError
from campaign_studio.core.json_extraction import parse_json_response
from campaign_studio.core.llm_service import LLMService, get_llm_service
from campaign_studio.data.models import CampaignEvaluation, GeneratedCampaign

logger = structlog.get_logger()

FALLBACK_VERDICT = "Evaluation failed. Default scores applied."
SCORE_FIELDS = ("insightSharpness", "ideaOriginality", "executionPotential", "awardPotential")


class CampaignEvaluator:
    """Scores a campaign like an awards juror."""

    SYSTEM_PROMPT = """You are an award-winning creative director reviewing marketing campaigns.
Be sharp, opinionated and honest. Always respond with valid JSON."""

    def __init__(self, llm: Optional[LLMService] = None):
        self._llm = llm or get_llm_service()
        self._logger = logger.bind(component="campaign_evaluator")

    def build_prompt(self, campaign: GeneratedCampaign, brand: str, industry: str) -> str:
        references = "\n".join(
            f"- {ref.name} ({ref.brand}, {ref.year}) - {ref.key_message}"
            for ref in campaign.reference_campaigns[:3]
        )
        insights = "; ".join(str(i) for i in campaign.creative_insights) or "None"

        return f"""Score this campaign like an awards juror. Judge creative bravery, emotional power
and execution originality. Would it make other creatives jealous? Could it spark a cultural shift?

Do NOT reward safe or familiar formats, gimmicky tech without depth, influencer or UGC
tropes, or generic feel-good messaging without insight.

## Campaign
Name: {campaign.campaign_name}
Brand: {brand}
Industry: {industry}
Key Message: {campaign.key_message}
Creative Strategy: {"; ".join(campaign.creative_strategy)}
Execution Plan: {"; ".join(campaign.execution_plan)}
Creative Insights: {insights}
Emotional Appeal: {", ".join(campaign.emotional_appeal) or "None"}
Call to Action: {campaign.call_to_action or campaign.consumer_interaction or "None"}

## Similar reference campaigns
{references or "None"}

## Format
Return a JSON object:
{{
  "insightSharpness": 1-10,
  "ideaOriginality": 1-10,
  "executionPotential": 1-10,
  "awardPotential": 1-10,
  "finalVerdict": "One bold, witty sentence that sums up your point of view."
}}"""

    async def _model_scores(self, campaign: GeneratedCampaign, brand: str, industry: str) -> Dict[str, Any]:
        try:
            response = await self._llm.generate(
                self.build_prompt(campaign, brand, industry),
                system_prompt=self.SYSTEM_PROMPT,
                temperature=0.7,
            )
            parsed = parse_json_response(response)
        except (LLMServiceError, JSONExtractionError) as e:
            self._logger.warning("evaluation_failed", error=str(e))
            return {"finalVerdict": FALLBACK_VERDICT}

        if not isinstance(parsed, dict):
            self._logger.warning("evaluation_failed", error="response was not a JSON object")
            return {"finalVerdict": FALLBACK_VERDICT}
        return parsed

    async def evaluate(self, campaign: GeneratedCampaign, brand: str, industry: str) -> CampaignEvaluation:
        scores = await self._model_scores(campaign, brand, industry)

        try:
            evaluation = CampaignEvaluation.model_validate(scores)
        except ValidationError as e:
            self._logger.warning("evaluation_invalid", error=str(e))
            evaluation = CampaignEvaluation(final_verdict=FALLBACK_VERDICT)

        bravery = calculate_bravery_score(campaign)
        evaluation.creative_bravery = bravery_display_score(bravery.score)
        evaluation.bravery_breakdown = bravery.to_dict()["breakdown"]
        evaluation.bravery_suggestions = bravery.suggestions

        self._logger.info(
            "campaign_evaluated",
            campaign=campaign.campaign_name,
            creative_bravery=evaluation.creative_bravery,
            **{name: scores.get(name) for name in SCORE_FIELDS if name in scores},
        )
        return evaluation
