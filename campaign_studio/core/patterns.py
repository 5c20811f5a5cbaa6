"""
Keyword and regex tables used by the heuristic scorers.

Every table here is plain data. The scoring functions in
``campaign_studio.core.similarity`` and ``campaign_studio.core.bravery``
only interpret these tables, so the taxonomy can be extended or tested
without touching the algorithms. Bump the matching ``*_VERSION`` constant
whenever a table changes in a way that moves scores.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Pattern, Tuple


# ==================== Bravery ====================

BRAVERY_PATTERN_VERSION = "2025.1"


class BraveryCategory(str, Enum):
    """Categories a bravery pattern can flag."""
    PHYSICAL_INTERVENTION = "physical_intervention"
    CHALLENGES_AUTHORITY = "challenges_authority"
    CULTURAL_TENSION = "cultural_tension"
    PERSONAL_RISK = "personal_risk"


@dataclass(frozen=True)
class BraveryPattern:
    """A weighted regex; counts once per text no matter how often it matches."""
    name: str
    pattern: Pattern[str]
    category: BraveryCategory
    weight: float


def _rx(source: str) -> Pattern[str]:
    return re.compile(source, re.IGNORECASE)


BRAVERY_PATTERNS: Tuple[BraveryPattern, ...] = (
    # Physical intervention: 2-3 points
    BraveryPattern(
        name="occupation",
        pattern=_rx(r"\b(occupy|occupied|occupying|sit-ins?|takeovers?|take over|blockades?|vandali[sz]\w*)\b"),
        category=BraveryCategory.PHYSICAL_INTERVENTION,
        weight=2.0,
    ),
    BraveryPattern(
        name="public_disruption",
        pattern=_rx(
            r"\b(hijack\w*|storm(?:s|ed|ing)? the|chain(?:s|ed)? (?:themselves|ourselves)"
            r"|trespass\w*|intervention in public space|guerrilla)\b"
        ),
        category=BraveryCategory.PHYSICAL_INTERVENTION,
        weight=3.0,
    ),
    # Institutional challenge: 3 points
    BraveryPattern(
        name="institution_named",
        pattern=_rx(
            r"\b(government|ministry|ministries|police|parliament|congress|senate"
            r"|board of (?:trustees|directors)|universit(?:y|ies)|regulators?|city hall)\b"
        ),
        category=BraveryCategory.CHALLENGES_AUTHORITY,
        weight=3.0,
    ),
    BraveryPattern(
        name="authority_challenged",
        pattern=_rx(
            r"\bchallenges? (?:big tech|school systems|traditional banks|health regulators"
            r"|beauty standards|border control|the status quo)\b"
        ),
        category=BraveryCategory.CHALLENGES_AUTHORITY,
        weight=3.0,
    ),
    # Personal risk: 1.5-2 points
    BraveryPattern(
        name="confession",
        pattern=_rx(r"\b(confess\w*|secrets?|expos(?:e|es|ed|ing))\b"),
        category=BraveryCategory.PERSONAL_RISK,
        weight=1.5,
    ),
    BraveryPattern(
        name="vulnerability",
        pattern=_rx(r"\b(vulnerab\w*|shame\w*|admit(?:s|ted|ting)?|personal truth)\b"),
        category=BraveryCategory.PERSONAL_RISK,
        weight=2.0,
    ),
    # Cultural tension: 3-4 points
    BraveryPattern(
        name="structural_injustice",
        pattern=_rx(r"\b(inequality|privilege|racism|sexism|patriarchy|gentrification|misogyny)\b"),
        category=BraveryCategory.CULTURAL_TENSION,
        weight=4.0,
    ),
    BraveryPattern(
        name="taboo",
        pattern=_rx(r"\b(taboos?|stigma\w*|censorship|gender norms|class divide|cultural tension)\b"),
        category=BraveryCategory.CULTURAL_TENSION,
        weight=3.0,
    ),
)

CLICHE_PENALTY = 2.0

CLICHE_PATTERNS: Tuple[Pattern[str], ...] = (
    _rx(r"\bhashtag activism\b"),
    _rx(r"\bmurals?\b"),
    _rx(r"\bpetitions?\b"),
    _rx(r"\b(?:tiktok|hashtag) challenges?\b"),
)

# Suggestion offered when a category never fired.
BRAVERY_SUGGESTIONS: Dict[BraveryCategory, str] = {
    BraveryCategory.PHYSICAL_INTERVENTION: (
        "Move the idea off the screen: stage a physical intervention in a real public space."
    ),
    BraveryCategory.CHALLENGES_AUTHORITY: (
        "Name the institution or authority the campaign is pushing against."
    ),
    BraveryCategory.CULTURAL_TENSION: (
        "Anchor the work in a concrete cultural tension, such as a taboo or an inequality."
    ),
    BraveryCategory.PERSONAL_RISK: (
        "Add personal stakes: a confession or an admission from real people."
    ),
}

# Keys of a campaign payload that are not part of the idea itself.
BRAVERY_EXCLUDED_KEYS: FrozenSet[str] = frozenset({"referenceCampaigns", "evaluation", "cdModifications"})


# ==================== Themes ====================

@dataclass(frozen=True)
class ThemePattern:
    """A theme bucket, the campaign field it inspects and its regex."""
    theme: str
    field: str
    pattern: Pattern[str]


THEME_PATTERNS: Tuple[ThemePattern, ...] = (
    ThemePattern("institutional rebellion", "key_message", _rx(r"protest|activism|petition")),
    ThemePattern("personal vulnerability", "strategy", _rx(r"confess|vulnerable|truth")),
    ThemePattern("cultural tension", "strategy", _rx(r"culture|society|inequality|privilege")),
    ThemePattern("system hacking", "strategy", _rx(r"subvert|glitch|hack")),
)


# ==================== Similarity ====================

SIMILARITY_TABLE_VERSION = "2025.1"

SENTIMENT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "positive": (
        "joy", "happi", "hope", "inspir", "empathy", "love", "pride", "excite",
        "humor", "humour", "fun", "nostalgia", "belonging", "trust", "optimis",
        "empower", "liberation", "gratitude", "warmth", "delight", "compassion",
        "kindness", "connection", "curiosity",
    ),
    "negative": (
        "fear", "anger", "outrage", "guilt", "shame", "sad", "grief", "urgency",
        "frustrat", "anxiety", "rebellion", "defiance", "disgust", "regret",
        "loneliness", "tension",
    ),
}

# Checked in order; the first tone with the most hits wins.
TONE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "playful": ("humor", "humour", "fun", "playful", "joy", "delight", "surprise", "entertain", "excite", "viral"),
    "heartfelt": ("empathy", "love", "nostalgia", "belonging", "compassion", "warmth", "connection", "kindness", "community"),
    "inspirational": ("hope", "inspir", "empower", "pride", "optimis", "aspiration", "achievement", "liberation"),
    "serious": ("fear", "guilt", "grief", "sad", "safety", "awareness", "trust", "responsib", "health"),
    "provocative": ("rebellion", "anger", "outrage", "defiance", "disrupt", "provoc", "activism", "controvers", "challenge", "urgency"),
}

DEFAULT_TONE = "balanced"

# Symmetric; missing pairs score 0, identical tones score 10.
TONE_COMPATIBILITY: Dict[FrozenSet[str], int] = {
    frozenset({"playful", "heartfelt"}): 5,
    frozenset({"playful", "inspirational"}): 6,
    frozenset({"playful", "serious"}): 0,
    frozenset({"playful", "provocative"}): 4,
    frozenset({"heartfelt", "inspirational"}): 7,
    frozenset({"heartfelt", "serious"}): 5,
    frozenset({"heartfelt", "provocative"}): 2,
    frozenset({"inspirational", "serious"}): 4,
    frozenset({"inspirational", "provocative"}): 5,
    frozenset({"serious", "provocative"}): 6,
    frozenset({"balanced", "playful"}): 5,
    frozenset({"balanced", "heartfelt"}): 5,
    frozenset({"balanced", "inspirational"}): 5,
    frozenset({"balanced", "serious"}): 5,
    frozenset({"balanced", "provocative"}): 5,
}

# Lexical cues looked for in a reference campaign's strategy + key message.
STYLE_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "digital": ("digital", "online", "website", "app", "interactive", "stream"),
    "experiential": ("experience", "immersive", "installation", "pop-up", "live", "event"),
    "social": ("social", "share", "viral", "tiktok", "instagram", "twitter", "meme"),
    "influencer": ("influencer", "creator", "celebrit", "ambassador", "personalit"),
    "guerrilla": ("guerrilla", "street", "unexpected", "ambush", "hijack", "disrupt"),
    "ugc": ("user-generated", "ugc", "submit", "crowdsourc", "fans created", "participat"),
    "brand-activism": ("activism", "protest", "cause", "petition", "rights", "equality", "social change"),
    "branded-entertainment": ("film", "series", "documentary", "storytelling", "episode", "music video"),
    "retail-activation": ("store", "retail", "shop", "checkout", "in-store", "pop-up"),
    "product-placement": ("placement", "integrated", "cameo", "featured in", "product in"),
    "data-personalization": ("data", "personali", "tailored", "algorithm", "custom"),
    "real-time": ("real-time", "real time", "reactive", "trending", "news", "live"),
    "event-based": ("event", "concert", "festival", "match", "olympic", "super bowl", "world cup"),
    "ooh-ambient": ("billboard", "outdoor", "ooh", "bus stop", "poster", "ambient", "mural"),
    "ai-generated": ("ai", "artificial intelligence", "generated", "machine learning", "algorithm"),
    "co-creation": ("co-creat", "collab", "partnership", "together with", "designed by"),
    "stunt-marketing": ("stunt", "one-day", "bold", "spectacle", "publicity", "shock"),
    "ar-vr": ("augmented reality", "virtual reality", "ar ", "vr", "filter", "metaverse"),
    "performance": ("conversion", "sales", "roi", "download", "sign-up", "measurable"),
    "loyalty-community": ("loyalty", "community", "members", "exclusive", "club", "belonging"),
}

STYLE_ALIASES: Dict[str, str] = {
    "stunt": "stunt-marketing",
    "user-generated": "ugc",
    "activism": "brand-activism",
}

# Distinct cue hits -> style dimension score (0, 1, 2, 3+ hits).
STYLE_SCORE_STEPS: Tuple[int, ...] = (0, 4, 7, 10)
