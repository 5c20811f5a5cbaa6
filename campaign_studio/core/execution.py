"""
Execution-plan helpers: cleanup, numbering, format diversity and the
"is this too safe" checks applied to a generated campaign.
"""

import random
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

REQUIRED_CAMPAIGN_FIELDS: Tuple[str, ...] = ("campaignName", "keyMessage", "executionPlan", "targetAudience")

EXECUTION_FORMATS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("installation", re.compile(r"installation|immersive|popup|pop-up|display", re.IGNORECASE)),
    ("event", re.compile(r"workshop|activation|live|flash mob", re.IGNORECASE)),
    ("parade", re.compile(r"parade|march|protest", re.IGNORECASE)),
    ("swap", re.compile(r"swap|exchange", re.IGNORECASE)),
    # AR is matched case-sensitively so "art" or "car" do not count as digital.
    ("digital", re.compile(r"\bAR\b|(?i:virtual|online|filter|app\b)")),
    ("public speech", re.compile(r"speech|monologue|storytelling", re.IGNORECASE)),
)
CAP_PER_FORMAT = 2

# (pattern, points) used by score_execution
EXECUTION_SIGNALS: Tuple[Tuple[re.Pattern, int], ...] = (
    (re.compile(r"delete|burn|sacrifice|confront|risk|forced", re.IGNORECASE), 3),
    (re.compile(r"public|unexpected|hack|glitch|confession|live stream", re.IGNORECASE), 2),
    (re.compile(r"bus stop|receipt|fridge|toilet|mirror|door|drone|ad blocker", re.IGNORECASE), 2),
)
FLAT_EXECUTION_THRESHOLD = 4

SAFE_FORMATS: Tuple[str, ...] = ("docuseries", "ar experience", "pop-up", "co-creation", "tiktok challenge")
BRAVE_FALLBACK = "Create an experience that forces people to confront a personal truth in a public way."

SPIKE_EXECUTIONS: Tuple[str, ...] = (
    "Turn receipts into breakup letters printed at checkout, based on abandoned carts.",
    "Let users burn a digital wishlist to unlock a limited drop.",
    "Set up a one-day 'Regret Museum' in a flagship store, showcasing returned items and their breakup stories.",
    "Launch a hotline where people confess their worst adulting fail and get a makeover inspired by it.",
)

_STEP_PREFIX = re.compile(r"^(\d+[.)]\s*)?(execution\s*\d+[:.]?\s*)?", re.IGNORECASE)
_DOTTED_NUMBER = re.compile(r"^\d+(\.\d+)*\s*[:.-]?\s*")
_HASHTAG = re.compile(r"#[\w-]+")


def capitalize_first_letter(text: str) -> str:
    return text[:1].upper() + text[1:]


def clean_execution_steps(steps: Sequence[str]) -> List[str]:
    """Drop existing numbering or "Execution N:" prefixes and renumber from 1."""
    cleaned = []
    for index, step in enumerate(steps, start=1):
        body = _STEP_PREFIX.sub("", step.strip(), count=1).strip()
        cleaned.append(f"{index}. {capitalize_first_letter(body)}")
    return cleaned


def normalize_execution_numbers(steps: Sequence[str]) -> List[str]:
    """Replace leading "1.1", "2.3:" style numbers with "1.", "2." and so on."""
    return [_DOTTED_NUMBER.sub(f"{index}. ", step, count=1) for index, step in enumerate(steps, start=1)]


def enforce_execution_diversity(steps: Sequence[str], cap_per_format: int = CAP_PER_FORMAT) -> List[str]:
    """
    Keep at most ``cap_per_format`` steps of each execution format.

    A step counts toward the first format it matches. Steps matching no
    format are always kept.
    """
    used: Dict[str, int] = {}
    kept = []
    for step in steps:
        fmt = next((key for key, pattern in EXECUTION_FORMATS if pattern.search(step)), None)
        if fmt is None:
            kept.append(step)
            continue
        if used.get(fmt, 0) >= cap_per_format:
            continue
        used[fmt] = used.get(fmt, 0) + 1
        kept.append(step)
    return kept


def score_execution(idea: str) -> int:
    """Provocation (+3), shock factor (+2) and format subversion (+2)."""
    return sum(points for pattern, points in EXECUTION_SIGNALS if pattern.search(idea))


def needs_spike(steps: Sequence[str], threshold: float = FLAT_EXECUTION_THRESHOLD) -> bool:
    """True when the average execution score is below ``threshold``."""
    if not steps:
        return True
    return sum(score_execution(s) for s in steps) / len(steps) < threshold


def pick_spike_execution(rng: Optional[random.Random] = None) -> str:
    return (rng or random).choice(SPIKE_EXECUTIONS)


def ensure_brave_execution(steps: Sequence[str]) -> List[str]:
    """Append a braver fallback when any step leans on a safe, familiar format."""
    lowered = [s.lower() for s in steps]
    if any(fmt in step for step in lowered for fmt in SAFE_FORMATS):
        return [*steps, BRAVE_FALLBACK]
    return list(steps)


def generate_campaign_slug(name: str) -> str:
    slug = re.sub(r"[^\w\s-]", "", name.lower())
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def extract_hashtags(text: str) -> List[str]:
    """Unique hashtags in order of first appearance."""
    return list(dict.fromkeys(_HASHTAG.findall(text)))


def validate_campaign_structure(payload: Mapping[str, Any]) -> List[str]:
    """Return a list of problems with a generated payload (empty when valid)."""
    errors = []
    for name in REQUIRED_CAMPAIGN_FIELDS:
        value = payload.get(name)
        if isinstance(value, (list, tuple)) and len(value) == 0:
            errors.append(f"Empty array in required field: {name}")
        elif not value:
            errors.append(f"Missing required field: {name}")
    return errors
