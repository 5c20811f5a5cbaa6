"""
Rewrite passes applied to the raw campaign payload before execution cleanup:

- the creative-director pass sharpens naming, messaging and tension while
  keeping the payload's structure, and records what changed
- the disruptive pass adds one twist, merged back into a fixed set of
  messaging fields only
"""

import json
from typing import Any, Dict, List, Optional, Tuple

import structlog

from campaign_studio.core.exceptions import JSONExtractionError, LLMServiceError
from campaign_studio.core.json_extraction import parse_json_response
from campaign_studio.core.llm_service import LLMService, get_llm_service
from campaign_studio.data.models import normalize_campaign_lists

logger = structlog.get_logger()

MODIFICATIONS_KEY = "cdModifications"

DISRUPTIVE_FIELDS: Tuple[str, ...] = (
    "keyMessage",
    "prHeadline",
    "viralHook",
    "viralElement",
    "callToAction",
    "consumerInteraction",
)


def _campaign_json(payload: Dict[str, Any]) -> str:
    shown = {k: v for k, v in payload.items() if k != MODIFICATIONS_KEY}
    return json.dumps(shown, indent=2, ensure_ascii=False, default=str)


def describe_modifications(original: Dict[str, Any], revised: Dict[str, Any]) -> List[str]:
    """Human-readable list of what a rewrite changed."""
    changes = []
    if original.get("campaignName") != revised.get("campaignName"):
        changes.append(f'Renamed: "{original.get("campaignName")}" -> "{revised.get("campaignName")}"')

    before = set(original.get("executionPlan") or [])
    changes.extend(f"Added: {step}" for step in revised.get("executionPlan") or [] if step not in before)

    if original.get("creativeInsights") != revised.get("creativeInsights"):
        changes.append("Enhanced insights")
    return changes


class CreativeDirector:
    """Runs the creative-director and disruptive rewrite passes."""

    def __init__(self, llm: Optional[LLMService] = None):
        self._llm = llm or get_llm_service()
        self._logger = logger.bind(component="creative_director")

    async def _rewrite(self, prompt: str, temperature: float) -> Dict[str, Any]:
        parsed = parse_json_response(await self._llm.generate(prompt, temperature=temperature))
        if not isinstance(parsed, dict):
            raise JSONExtractionError("response was not a JSON object", str(parsed))
        return parsed

    async def apply_creative_director_pass(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return an improved payload with a ``cdModifications`` list.

        Keys the model drops are kept from the input. On any failure the
        input comes back unchanged, with the failure recorded.
        """
        prompt = f"""You are an award-winning creative director. Improve this campaign with:
1. Sharper naming and messaging
2. Heightened cultural tension
3. Emotional storytelling hooks
4. One disruptive element

Rules:
- Keep the original JSON structure and never remove elements
- Return ONLY the modified JSON
- Track your changes in a "_cdModifications" array

CAMPAIGN:
```json
{_campaign_json(payload)}
```"""

        try:
            revised = await self._rewrite(prompt, temperature=0.7)
        except (LLMServiceError, JSONExtractionError) as e:
            self._logger.warning("creative_director_pass_failed", error=str(e))
            return {**payload, MODIFICATIONS_KEY: [f"Failed: {e}"]}

        revised.pop("_cdModifications", None)
        revised = normalize_campaign_lists({**payload, **revised})
        changes = describe_modifications(payload, revised)
        if not changes:
            self._logger.info("creative_director_no_changes")
            return {**payload, MODIFICATIONS_KEY: ["No changes made"]}

        self._logger.info("creative_director_pass_applied", changes=len(changes))
        return {**revised, MODIFICATIONS_KEY: changes}

    async def inject_disruptive_device(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add one norm-breaking twist. Only the messaging fields in
        DISRUPTIVE_FIELDS are taken from the response; failures return the
        input unchanged.
        """
        prompt = f"""You're a disruptive creative director. Inject ONE creative twist into this campaign
that challenges norms or adds cultural sharpness: hijack a ritual, force co-creation, turn the
medium against itself, create friction, or let people sabotage the campaign.

Rewrite only what's needed in keyMessage, prHeadline, viralHook, viralElement, callToAction or
consumerInteraction. Return the result in valid JSON.

CAMPAIGN:
```json
{_campaign_json(payload)}
```"""

        try:
            twisted = await self._rewrite(prompt, temperature=0.8)
        except (LLMServiceError, JSONExtractionError) as e:
            self._logger.warning("disruptive_pass_failed", error=str(e))
            return payload

        merged = dict(payload)
        for key in DISRUPTIVE_FIELDS:
            value = twisted.get(key)
            if isinstance(value, str) and value.strip():
                merged[key] = value
        self._logger.info("disruptive_twist_added", fields=[k for k in DISRUPTIVE_FIELDS if merged.get(k) != payload.get(k)])
        return merged


async def apply_creative_director_pass(payload: Dict[str, Any], llm: Optional[LLMService] = None) -> Dict[str, Any]:
    return await CreativeDirector(llm).apply_creative_director_pass(payload)


async def inject_disruptive_device(payload: Dict[str, Any], llm: Optional[LLMService] = None) -> Dict[str, Any]:
    return await CreativeDirector(llm).inject_disruptive_device(payload)
