"""
Strategist personas and the rules that pick one for a brief.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from campaign_studio.data.models import CampaignBrief, Persona


@dataclass(frozen=True)
class PersonaProfile:
    id: Persona
    name: str
    description: str
    characteristics: List[str]
    instructions: str


PERSONAS: Dict[Persona, PersonaProfile] = {
    Persona.UNFILTERED_DIRECTOR: PersonaProfile(
        id=Persona.UNFILTERED_DIRECTOR,
        name="Unfiltered Creative Director",
        description="Pushes creative boundaries with raw, emotional and subversive ideas.",
        characteristics=["Tension-rich insights", "Creative rebellion", "Unapologetic tone", "Genre-breaking execution"],
        instructions=(
            "Do not play it safe. Start from real human behaviour, bend a boring brief into "
            "something unforgettable, and skip tech gimmicks unless they are used subversively."
        ),
    ),
    Persona.STRATEGIC_PLANNER: PersonaProfile(
        id=Persona.STRATEGIC_PLANNER,
        name="Strategic Planner",
        description="Builds insight-driven campaigns with measurable objectives and clear journeys.",
        characteristics=["Data-backed thinking", "Tightly scoped strategy", "Conversion clarity", "Audience segmentation"],
        instructions=(
            "Ground every element in audience research and behavioural economics. Map touchpoints "
            "and conversion paths; balance emotional appeal with rational drivers."
        ),
    ),
    Persona.CULTURE_HACKER: PersonaProfile(
        id=Persona.CULTURE_HACKER,
        name="Culture Hacker",
        description="Creates culturally contagious ideas by hijacking memes, rituals and behaviours.",
        characteristics=["Internet-native mindset", "Cultural relevance", "Movement mechanics", "Participation-first thinking"],
        instructions=(
            "Spot the cultural tension before it goes mainstream. Make the idea feel like a movement "
            "people join rather than an ad they watch."
        ),
    ),
    Persona.TECH_INNOVATOR: PersonaProfile(
        id=Persona.TECH_INNOVATOR,
        name="Tech Innovator",
        description="Applies technology to solve brand problems, not for novelty.",
        characteristics=["AR/AI utility", "Future-first formats", "Connected ecosystems", "Tech with purpose"],
        instructions=(
            "Use emerging technology only where it adds real utility to a human experience, and "
            "aim for a memorable first that is still practical to build."
        ),
    ),
}


def get_persona(persona: Optional[Persona]) -> PersonaProfile:
    return PERSONAS.get(persona, PERSONAS[Persona.UNFILTERED_DIRECTOR])


def infer_persona(brief: CampaignBrief) -> Persona:
    """Pick a strategist persona from the brief's industry, objectives and emotions."""
    objectives = " ".join(brief.objectives).lower()
    emotion = " ".join(brief.emotional_appeal).lower()
    industry = brief.industry.lower()

    if "tech" in industry or "ai" in industry.split():
        return Persona.TECH_INNOVATOR

    if "rebellion" in emotion or "urgency" in emotion or "break rules" in objectives:
        return Persona.UNFILTERED_DIRECTOR

    if "movement" in objectives or "culture" in objectives or "belonging" in emotion:
        return Persona.CULTURE_HACKER

    if "conversion" in objectives or "data" in objectives or "trust" in emotion:
        return Persona.STRATEGIC_PLANNER

    return Persona.UNFILTERED_DIRECTOR
