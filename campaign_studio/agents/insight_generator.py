"""
Creative insight generation and strategy boosting.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

import structlog

from campaign_studio.core.exceptions import JSONExtractionError, LLMServiceError
from campaign_studio.core.json_extraction import extract_json_from_response, parse_json_response
from campaign_studio.core.llm_service import LLMService, get_llm_service
from campaign_studio.data.models import CampaignBrief

logger = structlog.get_logger()

DEFAULT_INSIGHTS = [
    "The audience seeks authentic connections in an increasingly digital world.",
    "They value brands that understand their specific needs rather than generic solutions.",
    "They want to feel seen and validated through their brand choices.",
]


class CreativeInsightGenerator:
    """Maps one cultural tension for the audience and derives three insights from it."""

    SYSTEM_PROMPT = """You are a cultural strategist. You find the tension shaping an audience's worldview
and turn it into sharp, emotionally grounded truths a creative team can build on.
Always respond with valid JSON."""

    def __init__(self, llm: Optional[LLMService] = None):
        self._llm = llm or get_llm_service()
        self._logger = logger.bind(component="insight_generator")

    def build_prompt(self, brief: CampaignBrief) -> str:
        return f"""### Cultural Tension Mapper

The year is {datetime.now().year}. Identify ONE macro cultural tension affecting this audience,
then write 3 insights derived from it.

Target Audience: {", ".join(brief.target_audience)}
Brand: {brief.brand}
Industry: {brief.industry}
Campaign Objectives: {", ".join(brief.objectives)}
Emotional Appeal: {", ".join(brief.emotional_appeal)}

Each insight should show a contradiction, a behaviour or an unmet need.

Return a JSON object:
{{
  "tension": "Macro tension here",
  "insights": ["Insight 1", "Insight 2", "Insight 3"]
}}"""

    async def generate(self, brief: CampaignBrief) -> List[str]:
        """
        Returns three insights. A response that cannot be parsed falls back
        to DEFAULT_INSIGHTS; a failed model call returns an empty list.
        """
        try:
            response = await self._llm.generate(self.build_prompt(brief), system_prompt=self.SYSTEM_PROMPT)
        except LLMServiceError as e:
            self._logger.warning("insight_generation_failed", error=str(e))
            return []

        try:
            parsed = parse_json_response(response)
        except (JSONExtractionError, ValueError) as e:
            self._logger.warning("insight_parse_failed", error=str(e))
            return list(DEFAULT_INSIGHTS)

        insights = parsed.get("insights") if isinstance(parsed, dict) else None
        if not isinstance(insights, list) or not insights:
            return list(DEFAULT_INSIGHTS)

        return [str(i) for i in insights[:3]]


def _format_insight(insight: Union[str, Dict[str, Any]]) -> str:
    if isinstance(insight, dict):
        return "\n".join(f"- {key}: {value}" for key, value in insight.items() if value)
    return f"- {insight}"


async def boost_creative_strategy(
    existing: List[str],
    insight: Union[str, Dict[str, Any]],
    llm: Optional[LLMService] = None,
) -> List[str]:
    """Ask the model to sharpen a strategy list; keep the original on any failure."""
    llm = llm or get_llm_service()
    strategies = "\n".join(f"- {s}" for s in existing)
    prompt = f"""Rewrite and upgrade these campaign strategies so they are bolder, more emotionally
resonant and tailored to the insight below.

Existing strategies:
{strategies}

Insight:
{_format_insight(insight)}

Return ONLY a valid JSON array of 3-5 rewritten strategy lines, no commentary."""

    try:
        raw = extract_json_from_response(await llm.generate(prompt))
        if not raw.lstrip().startswith("["):
            raise JSONExtractionError("response was not a JSON array", raw)
        boosted = parse_json_response(raw)
    except (LLMServiceError, JSONExtractionError) as e:
        logger.warning("strategy_boost_failed", error=str(e))
        return existing

    if not isinstance(boosted, list) or not boosted:
        return existing
    return [str(s) for s in boosted]
