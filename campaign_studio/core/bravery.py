"""
Heuristic "creative bravery" scoring.

The score is a fixed-table regex heuristic, not a model: each pattern in
BRAVERY_PATTERNS adds its weight once if it matches anywhere in the
campaign text, each cliché in CLICHE_PATTERNS subtracts CLICHE_PENALTY,
and the result is floored at 0. Same text in, same assessment out.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

import structlog
from pydantic import BaseModel

from campaign_studio.core.patterns import (
    BRAVERY_EXCLUDED_KEYS,
    BRAVERY_PATTERNS,
    BRAVERY_SUGGESTIONS,
    CLICHE_PATTERNS,
    CLICHE_PENALTY,
    BraveryCategory,
)

logger = structlog.get_logger()

BRAVE_ENOUGH_SCORE = 6
DISPLAY_MAX = 10

PUBLIC_LOCATIONS: Dict[str, str] = {
    "tech": "Apple Store",
    "finance": "bank branch",
    "fashion": "luxury boutique",
}

INDUSTRY_AUTHORITIES: Dict[str, str] = {
    "tech": "Big Tech",
    "education": "school systems",
    "finance": "traditional banks",
    "food": "health regulators",
    "fashion": "beauty standards",
    "travel": "border control",
}


@dataclass
class BraveryAssessment:
    """Score plus the categories that fired and what to do about the rest."""
    score: float
    breakdown: Dict[BraveryCategory, bool] = field(default_factory=dict)
    suggestions: List[str] = field(default_factory=list)
    matched_patterns: List[str] = field(default_factory=list)
    cliche_hits: List[str] = field(default_factory=list)

    def flag(self, category: BraveryCategory) -> bool:
        return self.breakdown.get(category, False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "breakdown": {c.value: flagged for c, flagged in self.breakdown.items()},
            "suggestions": self.suggestions,
            "matched_patterns": self.matched_patterns,
            "cliche_hits": self.cliche_hits,
        }


def campaign_text(campaign: Any) -> str:
    """Serialize a campaign (model, mapping or plain text) to one lowercased blob."""
    if isinstance(campaign, str):
        return campaign.lower()
    if isinstance(campaign, BaseModel):
        campaign = campaign.model_dump(mode="json", by_alias=True)
    if isinstance(campaign, Mapping):
        campaign = {k: v for k, v in campaign.items() if k not in BRAVERY_EXCLUDED_KEYS}
    return json.dumps(campaign, ensure_ascii=False, default=str).lower()


def calculate_bravery_score(campaign: Any) -> BraveryAssessment:
    text = campaign_text(campaign)

    score = 0.0
    breakdown = {category: False for category in BraveryCategory}
    matched = []
    for rule in BRAVERY_PATTERNS:
        if rule.pattern.search(text):
            score += rule.weight
            breakdown[rule.category] = True
            matched.append(rule.name)

    cliches = []
    for pattern in CLICHE_PATTERNS:
        hit = pattern.search(text)
        if hit:
            score -= CLICHE_PENALTY
            cliches.append(hit.group(0))

    suggestions = [BRAVERY_SUGGESTIONS[c] for c, flagged in breakdown.items() if not flagged]

    return BraveryAssessment(
        score=max(score, 0.0),
        breakdown=breakdown,
        suggestions=suggestions,
        matched_patterns=matched,
        cliche_hits=cliches,
    )


def bravery_display_score(score: float) -> float:
    """Clamp a raw bravery score into the 0-10 range shown to users."""
    return round(min(max(score, 0.0), DISPLAY_MAX), 1)


def location_for_brand(brand: str) -> str:
    return PUBLIC_LOCATIONS.get(brand.strip().lower(), "public square")


def authority_for_industry(industry: str) -> str:
    return INDUSTRY_AUTHORITIES.get(industry.strip().lower(), "the status quo")


def enhance_bravery(campaign: Dict[str, Any], brand: str, industry: str) -> Dict[str, Any]:
    """
    Push a timid campaign payload toward the missing bravery categories.

    Campaigns already scoring BRAVE_ENOUGH_SCORE or more are returned as-is.
    Returns a new dict; the input is left untouched.
    """
    assessment = calculate_bravery_score(campaign)
    if assessment.score >= BRAVE_ENOUGH_SCORE:
        return campaign

    enhanced = dict(campaign)
    enhanced["executionPlan"] = list(campaign.get("executionPlan") or [])

    if not assessment.flag(BraveryCategory.PHYSICAL_INTERVENTION):
        enhanced["executionPlan"].append(
            f"Stage a {brand} intervention in public space ({location_for_brand(brand)})"
        )

    if not assessment.flag(BraveryCategory.CHALLENGES_AUTHORITY):
        key_message = (campaign.get("keyMessage") or "").strip()
        enhanced["keyMessage"] = f"{key_message} This directly challenges {authority_for_industry(industry)}".strip()

    logger.info(
        "bravery_enhanced",
        score_before=assessment.score,
        score_after=calculate_bravery_score(enhanced).score,
    )
    return enhanced
