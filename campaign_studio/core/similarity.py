"""
Multi-dimensional similarity between a campaign brief and a reference campaign.

Seven dimensions, each bounded and never negative:

    industry     0, 3 or 5
    audience     0-15  (5 per matched brief tag)
    objectives   0-15
    emotion      0-15
    style        0-10  (only when the brief names a style)
    sentiment    0, 5 or 10
    tone         0-10  (read from the tone compatibility matrix)
"""

import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from campaign_studio.core.patterns import (
    DEFAULT_TONE,
    SENTIMENT_KEYWORDS,
    STYLE_ALIASES,
    STYLE_KEYWORDS,
    STYLE_SCORE_STEPS,
    TONE_COMPATIBILITY,
    TONE_KEYWORDS,
)
from campaign_studio.data.models import CampaignBrief, ReferenceCampaign

INDUSTRY_EXACT_SCORE = 5
INDUSTRY_PARTIAL_SCORE = 3
TAG_MATCH_POINTS = 5
TAG_MATCH_CAP = 15
SENTIMENT_EXACT_SCORE = 10
SENTIMENT_NEUTRAL_SCORE = 5
TONE_EXACT_SCORE = 10

DIMENSIONS: Tuple[str, ...] = ("industry", "audience", "objectives", "emotion", "style", "sentiment", "tone")


@dataclass(frozen=True)
class DimensionScores:
    """Per-dimension similarity scores for one (brief, reference campaign) pair."""
    industry: float = 0
    audience: float = 0
    objectives: float = 0
    emotion: float = 0
    style: float = 0
    sentiment: float = 0
    tone: float = 0

    @property
    def total(self) -> float:
        return sum(self.get(d) for d in DIMENSIONS)

    def get(self, dimension: str) -> float:
        return getattr(self, dimension)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ScoredCampaign:
    """A reference campaign with its similarity to the current brief."""
    campaign: ReferenceCampaign
    scores: DimensionScores

    @property
    def total(self) -> float:
        return self.scores.total

    def to_dict(self) -> Dict:
        return {
            "campaign": self.campaign.to_dict(),
            "dimension_scores": self.scores.to_dict(),
            "total_score": self.total,
        }


# ==================== Label derivation ====================

def _lower_tags(tags: Iterable[str]) -> List[str]:
    return [t.strip().lower() for t in tags if t and t.strip()]


def determine_sentiment(emotional_appeal: Sequence[str]) -> str:
    """Coarse sentiment of a tag list: majority of keyword hits, ties are neutral."""
    counts = {label: 0 for label in SENTIMENT_KEYWORDS}
    for tag in _lower_tags(emotional_appeal):
        for label, keywords in SENTIMENT_KEYWORDS.items():
            if any(k in tag for k in keywords):
                counts[label] += 1

    positive, negative = counts.get("positive", 0), counts.get("negative", 0)
    if positive > negative:
        return "positive"
    if negative > positive:
        return "negative"
    return "neutral"


def determine_tone(objectives: Sequence[str], emotional_appeal: Sequence[str]) -> str:
    """Coarse tone from objectives and emotions; first tone with the most hits wins."""
    text_tags = _lower_tags(objectives) + _lower_tags(emotional_appeal)
    best_tone, best_hits = DEFAULT_TONE, 0
    for tone, keywords in TONE_KEYWORDS.items():
        hits = sum(1 for tag in text_tags if any(k in tag for k in keywords))
        if hits > best_hits:
            best_tone, best_hits = tone, hits
    return best_tone


def tone_compatibility(tone_a: str, tone_b: str) -> int:
    if tone_a == tone_b:
        return TONE_EXACT_SCORE
    return TONE_COMPATIBILITY.get(frozenset({tone_a, tone_b}), 0)


def normalize_style(style: str) -> str:
    key = style.strip().lower().replace("_", "-").replace(" ", "-")
    return STYLE_ALIASES.get(key, key)


def score_campaign_style(campaign_text: str, style: str) -> int:
    """
    Score how strongly a campaign's text carries the cues of a style.

    Distinct cue words found (each as a word prefix, case-insensitive) map
    through STYLE_SCORE_STEPS: 0 hits -> 0, 1 -> 4, 2 -> 7, 3 or more -> 10.
    Unknown styles score 0.
    """
    cues = STYLE_KEYWORDS.get(normalize_style(style), ())
    text = campaign_text.lower()
    hits = sum(1 for cue in cues if re.search(r"\b" + re.escape(cue), text))
    return STYLE_SCORE_STEPS[min(hits, len(STYLE_SCORE_STEPS) - 1)]


# ==================== Dimension scoring ====================

def score_industry(brief_industry: str, campaign_industry: str) -> int:
    a, b = brief_industry.strip().lower(), campaign_industry.strip().lower()
    if not a or not b:
        return 0
    if a == b:
        return INDUSTRY_EXACT_SCORE
    if a in b or b in a:
        return INDUSTRY_PARTIAL_SCORE
    return 0


def score_tag_overlap(brief_tags: Sequence[str], campaign_tags: Sequence[str]) -> int:
    """5 points per brief tag that substring-matches any campaign tag, capped at 15."""
    theirs = _lower_tags(campaign_tags)
    matches = 0
    for tag in _lower_tags(brief_tags):
        if any(tag in other or other in tag for other in theirs):
            matches += 1
    return min(matches * TAG_MATCH_POINTS, TAG_MATCH_CAP)


def score_sentiment(brief_sentiment: str, campaign_sentiment: str) -> int:
    if brief_sentiment == campaign_sentiment:
        return SENTIMENT_EXACT_SCORE
    if "neutral" in (brief_sentiment, campaign_sentiment):
        return SENTIMENT_NEUTRAL_SCORE
    return 0


def score_campaign(brief: CampaignBrief, campaign: ReferenceCampaign) -> DimensionScores:
    """Compute the dimension score vector for a brief against one reference campaign."""
    style = 0
    if brief.campaign_style:
        style = score_campaign_style(f"{campaign.strategy} {campaign.key_message}", brief.campaign_style)

    return DimensionScores(
        industry=score_industry(brief.industry, campaign.industry),
        audience=score_tag_overlap(brief.target_audience, campaign.target_audience),
        objectives=score_tag_overlap(brief.objectives, campaign.objectives),
        emotion=score_tag_overlap(brief.emotional_appeal, campaign.emotional_appeal),
        style=style,
        sentiment=score_sentiment(
            determine_sentiment(brief.emotional_appeal),
            determine_sentiment(campaign.emotional_appeal),
        ),
        tone=tone_compatibility(
            determine_tone(brief.objectives, brief.emotional_appeal),
            determine_tone(campaign.objectives, campaign.emotional_appeal),
        ),
    )


def score_catalog(brief: CampaignBrief, catalog: Iterable[ReferenceCampaign]) -> List[ScoredCampaign]:
    """Score every catalog entry, preserving catalog order."""
    return [ScoredCampaign(campaign=c, scores=score_campaign(brief, c)) for c in catalog]
