"""
Best-effort recovery of JSON from free-text model responses.

Order of attempts: direct parse, parse with markdown code fences removed,
the largest brace- or bracket-delimited substring, and finally that
substring with trailing commas and single quotes repaired.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Optional

from campaign_studio.core.exceptions import JSONExtractionError

_FENCE = re.compile(r"```(?:json|JSON)?")
_TRAILING_COMMA = re.compile(r",\s*([}\]])")
_UNQUOTED_KEY = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)\s*:")


def _parses(candidate: str) -> bool:
    try:
        json.loads(candidate)
    except ValueError:
        return False
    return True


def _largest_block(text: str) -> Optional[str]:
    """Longest span from the first opening brace/bracket to its last closing pair."""
    spans = []
    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        start, end = text.find(open_ch), text.rfind(close_ch)
        if start != -1 and end > start:
            spans.append(text[start:end + 1])
    if not spans:
        return None
    return max(spans, key=len)


def _repair(candidate: str) -> str:
    repaired = _TRAILING_COMMA.sub(r"\1", candidate)
    repaired = _UNQUOTED_KEY.sub(r'\1"\2":', repaired)
    if '"' not in repaired:
        repaired = repaired.replace("'", '"')
    return repaired


def extract_json_from_response(raw: str) -> str:
    """Return a JSON string recovered from ``raw`` or raise JSONExtractionError."""
    if raw is None or not raw.strip():
        raise JSONExtractionError("empty response", raw or "")

    text = raw.strip()
    if _parses(text):
        return text

    unfenced = _FENCE.sub("", text).strip()
    if _parses(unfenced):
        return unfenced

    block = _largest_block(unfenced)
    if block is None:
        raise JSONExtractionError("no JSON object or array found", raw)
    if _parses(block):
        return block

    repaired = _repair(block)
    if _parses(repaired):
        return repaired

    raise JSONExtractionError("brace-delimited content is not valid JSON", raw)


def parse_json_response(raw: str) -> Any:
    return json.loads(extract_json_from_response(raw))


@dataclass
class MixedResponse:
    """Free text with an optional embedded JSON payload."""
    text: str
    json: Any = None
    error: Optional[str] = None


def parse_mixed_response(raw: str) -> MixedResponse:
    """Split a response into its prose and its JSON payload, if any."""
    if _parses(raw):
        return MixedResponse(text=raw, json=json.loads(raw))

    block = _largest_block(raw)
    if block is None:
        return MixedResponse(text=raw)

    try:
        payload = json.loads(block)
    except ValueError as e:
        return MixedResponse(text=raw, error=f"Partial JSON found but invalid: {e}")

    return MixedResponse(text=raw.replace(block, "").strip(), json=payload)
