"""
Campaign Generator

End-to-end pipeline that turns a brief into an evaluated campaign concept:

1. Pick a strategist persona (explicit or inferred)
2. Generate creative insights
3. Match reference campaigns
4. Prompt the model and recover the JSON payload
5. Creative-director rewrite and one disruptive twist
6. Clean, diversify and spike the execution plan
7. Push timid concepts toward bravery
8. Storytelling, narrative anchor and evaluation
9. Save to the library

Only the main generation call is fatal. Every enrichment step after it
degrades to a fallback and logs a warning.
"""

import random
from typing import Any, Dict, Optional

import structlog

from campaign_studio.agents.campaign_evaluator import CampaignEvaluator
from campaign_studio.agents.campaign_matcher import CampaignMatcher
from campaign_studio.agents.creative_director import CreativeDirector
from campaign_studio.agents.insight_generator import CreativeInsightGenerator
from campaign_studio.agents.persona import infer_persona
from campaign_studio.agents.prompt_builder import build_campaign_prompt
from campaign_studio.agents.storyteller import StorytellingGenerator
from campaign_studio.config import settings
from campaign_studio.core.bravery import enhance_bravery
from campaign_studio.core.exceptions import CampaignLibraryError, CampaignStructureError, LLMServiceError
from campaign_studio.core.execution import (
    clean_execution_steps,
    enforce_execution_diversity,
    ensure_brave_execution,
    needs_spike,
    normalize_execution_numbers,
    pick_spike_execution,
    validate_campaign_structure,
)
from campaign_studio.core.json_extraction import parse_json_response
from campaign_studio.core.llm_service import LLMService, get_llm_service
from campaign_studio.data.campaign_library import CampaignLibrary
from campaign_studio.data.models import CampaignBrief, GeneratedCampaign, normalize_campaign_lists

logger = structlog.get_logger()


class CampaignGenerator:
    """
    Orchestrates the generation pipeline.

    All collaborators can be injected; by default they share the global
    LLM service and one random source seeded from settings.
    """

    SYSTEM_PROMPT = """You are an award-winning creative team in one: strategist, copywriter and
creative director. You write campaigns that win at Cannes and get talked about in culture.
Always respond with valid JSON."""

    def __init__(
        self,
        llm: Optional[LLMService] = None,
        matcher: Optional[CampaignMatcher] = None,
        library: Optional[CampaignLibrary] = None,
        rng: Optional[random.Random] = None,
    ):
        self._llm = llm or get_llm_service()
        self._rng = rng or random.Random(settings.random_seed)
        self.matcher = matcher or CampaignMatcher(rng=self._rng)
        self.library = library
        self.insights = CreativeInsightGenerator(self._llm)
        self.director = CreativeDirector(self._llm)
        self.storyteller = StorytellingGenerator(self._llm)
        self.evaluator = CampaignEvaluator(self._llm)
        self._logger = logger.bind(component="campaign_generator")

    def _refine_execution(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        steps = enforce_execution_diversity(
            clean_execution_steps(normalize_execution_numbers(payload.get("executionPlan") or []))
        )

        if needs_spike(steps):
            spike = pick_spike_execution(self._rng)
            self._logger.warning("execution_too_flat", spike=spike)
            steps.append(spike)

        guarded = ensure_brave_execution(steps)
        if len(guarded) > len(steps):
            self._logger.warning("execution_too_safe")

        return {**payload, "executionPlan": guarded}

    async def generate(self, brief: CampaignBrief) -> GeneratedCampaign:
        if brief.persona is None:
            brief = brief.model_copy(update={"persona": infer_persona(brief)})

        self._logger.info("campaign_generation_started", brand=brief.brand, persona=brief.persona.value)

        insights = await self.insights.generate(brief)
        references = self.matcher.find_similar_campaigns(brief)

        response = await self._llm.generate(
            build_campaign_prompt(brief, references, insights),
            system_prompt=self.SYSTEM_PROMPT,
        )
        payload = parse_json_response(response)
        if not isinstance(payload, dict):
            raise CampaignStructureError(["model response is not a JSON object"])
        payload = normalize_campaign_lists(payload)

        problems = validate_campaign_structure(payload)
        if problems:
            self._logger.warning("campaign_structure_issues", problems=problems)
        if not payload.get("targetAudience"):
            payload["targetAudience"] = list(brief.target_audience)

        payload = await self.director.apply_creative_director_pass(payload)
        payload = normalize_campaign_lists(await self.director.inject_disruptive_device(payload))

        payload = self._refine_execution(payload)
        payload = enhance_bravery(payload, brief.brand, brief.industry)
        payload["executionPlan"] = clean_execution_steps(payload["executionPlan"])

        campaign = GeneratedCampaign.model_validate({
            **payload,
            "creativeInsights": insights or payload.get("creativeInsights") or [],
            "referenceCampaigns": references,
            "storytelling": "",
            "evaluation": None,
        })

        try:
            campaign.storytelling = await self.storyteller.generate(
                brand=brief.brand,
                industry=brief.industry,
                target_audience=brief.target_audience,
                emotional_appeal=brief.emotional_appeal,
                campaign_name=campaign.campaign_name,
                key_message=campaign.key_message,
            )
        except LLMServiceError as e:
            self._logger.warning("storytelling_failed", error=str(e))

        campaign.storytelling = await self.storyteller.inject_narrative_anchor(campaign)
        campaign.evaluation = await self.evaluator.evaluate(campaign, brief.brand, brief.industry)

        if self.library is not None:
            try:
                self.library.save(campaign, brief.brand, brief.industry)
            except (CampaignLibraryError, OSError) as e:
                self._logger.error("campaign_save_failed", error=str(e))

        self._logger.info(
            "campaign_generated",
            brand=brief.brand,
            campaign=campaign.campaign_name,
            references=[c.name for c in references],
            creative_bravery=campaign.evaluation.creative_bravery,
        )
        return campaign
