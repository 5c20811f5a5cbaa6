"""
Data models for Campaign Studio.

Everything here serializes to plain JSON. Field names are snake_case in
Python and camelCase on the wire so saved records keep the shape the
campaign library has always used.
"""

import enum
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: camelCase aliases, construction by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Persona(str, enum.Enum):
    UNFILTERED_DIRECTOR = "unfiltered-director"
    STRATEGIC_PLANNER = "strategic-planner"
    CULTURE_HACKER = "culture-hacker"
    TECH_INNOVATOR = "tech-innovator"


# Models
class ReferenceCampaign(CamelModel):
    """A real-world campaign from the reference catalog. Read-only."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str = ""
    name: str = Field(min_length=1)
    brand: str = Field(min_length=1)
    year: int = Field(default_factory=lambda: datetime.now().year)
    industry: str = Field(min_length=1)
    target_audience: Tuple[str, ...] = ()
    objectives: Tuple[str, ...] = ()
    key_message: str = ""
    strategy: str = ""
    features: Tuple[str, ...] = ()
    emotional_appeal: Tuple[str, ...] = ()
    outcomes: Tuple[str, ...] = ()

    @field_validator("target_audience", "objectives", "features", "emotional_appeal", "outcomes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return () if v is None else v


class CampaignBrief(CamelModel):
    """What the user asked for. Immutable for the duration of a request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    brand: str
    industry: str
    target_audience: Tuple[str, ...] = ()
    objectives: Tuple[str, ...] = ()
    emotional_appeal: Tuple[str, ...] = ()
    campaign_style: Optional[str] = None
    persona: Optional[Persona] = None
    additional_constraints: Optional[str] = None
    brand_personality: Optional[str] = None
    differentiator: Optional[str] = None
    cultural_insights: Optional[str] = None


class CampaignEvaluation(CamelModel):
    """Creative-director scores plus the heuristic bravery assessment."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    insight_sharpness: float = 5
    idea_originality: float = 5
    execution_potential: float = 5
    award_potential: float = 5
    creative_bravery: float = 0
    final_verdict: str = ""
    bravery_breakdown: Dict[str, bool] = Field(default_factory=dict)
    bravery_suggestions: List[str] = Field(default_factory=list)


STRING_LIST_FIELDS: Tuple[str, ...] = (
    "creative_strategy",
    "execution_plan",
    "expected_outcomes",
    "emotional_appeal",
    "target_audience",
    "cd_modifications",
)

# Keys tried, in order, when a model returns a list item as an object
_ITEM_TEXT_KEYS = ("step", "description", "text", "title", "idea", "name")


def _item_text(item: Any) -> str:
    if isinstance(item, dict):
        for key in _ITEM_TEXT_KEYS:
            if item.get(key):
                return str(item[key])
        return " - ".join(str(v) for v in item.values() if v)
    return str(item)


def as_string_list(value: Any) -> List[str]:
    """Coerce a model-returned value into a list of strings."""
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        value = [value]
    return [_item_text(item) for item in value]


def normalize_campaign_lists(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a camelCase payload with every list field coerced to strings."""
    normalized = dict(payload)
    for name in STRING_LIST_FIELDS:
        key = to_camel(name)
        if key in normalized:
            normalized[key] = as_string_list(normalized[key])
    return normalized


class GeneratedCampaign(CamelModel):
    """
    A campaign concept as returned by the model and enriched by the pipeline.

    Unknown keys from the model are kept so nothing it said is lost.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    campaign_name: str = ""
    key_message: str = ""
    insight: Optional[str] = None
    idea: Optional[str] = None
    creative_strategy: List[str] = Field(default_factory=list)
    execution_plan: List[str] = Field(default_factory=list)
    expected_outcomes: List[str] = Field(default_factory=list)
    viral_hook: Optional[str] = None
    viral_element: Optional[str] = None
    pr_headline: str = ""
    emotional_appeal: List[str] = Field(default_factory=list)
    call_to_action: Optional[str] = None
    consumer_interaction: Optional[str] = None
    target_audience: List[str] = Field(default_factory=list)
    creative_insights: List[Any] = Field(default_factory=list)
    cd_modifications: List[str] = Field(default_factory=list)
    reference_campaigns: List[ReferenceCampaign] = Field(default_factory=list)
    evaluation: Optional[CampaignEvaluation] = None
    storytelling: str = ""

    @field_validator(*STRING_LIST_FIELDS, mode="before")
    @classmethod
    def coerce_string_list(cls, v):
        return as_string_list(v)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class SavedCampaign(CamelModel):
    """A generated campaign stored in the library, keyed by ``id``."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: str = Field(default_factory=_utc_now_iso)
    campaign: GeneratedCampaign
    brand: str
    industry: str
    favorite: bool = False
    slug: str = ""
