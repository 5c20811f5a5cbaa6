"""
Case-film style storytelling for a generated campaign, plus the narrative
anchor pass that adds a human point of view when the story lacks one.
"""

import re
from datetime import datetime
from typing import Optional, Sequence

import structlog

from campaign_studio.core.exceptions import JSONExtractionError, LLMServiceError
from campaign_studio.core.json_extraction import parse_json_response, parse_mixed_response
from campaign_studio.core.llm_service import LLMService, get_llm_service
from campaign_studio.data.models import GeneratedCampaign

logger = structlog.get_logger()

NARRATIVE_ANCHOR = re.compile(
    r"I\s(felt|remember|watched|lost)|they\s(struggled|sacrificed|resisted|confessed)",
    re.IGNORECASE,
)


def has_narrative_anchor(text: Optional[str]) -> bool:
    return bool(NARRATIVE_ANCHOR.search(text or ""))


class StorytellingGenerator:
    """Writes the voiceover-style story that accompanies a campaign."""

    def __init__(self, llm: Optional[LLMService] = None):
        self._llm = llm or get_llm_service()
        self._logger = logger.bind(component="storyteller")

    def build_prompt(
        self,
        brand: str,
        industry: str,
        target_audience: Sequence[str],
        emotional_appeal: Sequence[str],
        campaign_name: str,
        key_message: str,
    ) -> str:
        return f"""You're a top-tier brand storyteller writing a {datetime.now().year} case film voiceover.

Transform this campaign into an emotionally resonant story that could open a manifesto film.

Campaign data:
- Brand: {brand}
- Industry: {industry}
- Target Audience: {", ".join(target_audience)}
- Emotional Appeal: {", ".join(emotional_appeal)}
- Campaign Name: {campaign_name}
- Key Message: {key_message}

Write a 150-200 word story that starts with a human insight or cultural tension, builds
emotional stakes with specific sensory detail, and resolves with how the idea steps in.
Avoid cliché lines.

Return only the final story as plain text, no titles or notes."""

    async def generate(
        self,
        brand: str,
        industry: str,
        target_audience: Sequence[str],
        emotional_appeal: Sequence[str],
        campaign_name: str,
        key_message: str,
    ) -> str:
        """
        Return the story as plain text. A story the model wraps in a JSON
        object under "story" or "narrative" is unwrapped. Model failures
        propagate as LLMServiceError.
        """
        prompt = self.build_prompt(brand, industry, target_audience, emotional_appeal, campaign_name, key_message)
        response = await self._llm.generate(prompt)
        mixed = parse_mixed_response(response)
        if isinstance(mixed.json, dict):
            wrapped = mixed.json.get("story") or mixed.json.get("narrative")
            if isinstance(wrapped, str) and wrapped.strip():
                response = wrapped
        self._logger.debug("story_generated", campaign=campaign_name, length=len(response))
        return response.strip()

    async def inject_narrative_anchor(self, campaign: GeneratedCampaign) -> str:
        """
        Return the campaign's storytelling, replaced by a short first-person
        narrative when it has no human anchor. Falls back to the existing
        storytelling on any model or parse failure.
        """
        existing = campaign.storytelling or ""
        if has_narrative_anchor(existing):
            return existing

        prompt = f"""This campaign needs a human-centered anchor.
Write a short, emotionally resonant narrative (max 80 words) from a real or fictional
point of view that elevates the core message.

Campaign: {campaign.campaign_name}
Key message: {campaign.key_message}
Strategy: {"; ".join(campaign.creative_strategy)}

Output as:
{{
  "narrative": "..."
}}"""

        try:
            parsed = parse_json_response(await self._llm.generate(prompt))
        except (LLMServiceError, JSONExtractionError) as e:
            self._logger.warning("narrative_anchor_failed", error=str(e))
            return existing

        narrative = parsed.get("narrative") if isinstance(parsed, dict) else None
        return narrative or existing


async def inject_narrative_anchor(campaign: GeneratedCampaign, llm: Optional[LLMService] = None) -> str:
    return await StorytellingGenerator(llm).inject_narrative_anchor(campaign)
