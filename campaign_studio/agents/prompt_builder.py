"""
Builds the main campaign-generation prompt from a brief, its reference
campaigns and the creative insights.
"""

from typing import Dict, Sequence

from campaign_studio.agents.persona import get_persona
from campaign_studio.data.models import CampaignBrief, ReferenceCampaign

STYLE_DESCRIPTIONS: Dict[str, str] = {
    "digital": "Digital-first approach with highly shareable, interactive content",
    "experiential": "Experiential marketing focused on real-world brand immersion",
    "social": "Social-led approach optimized for engagement and virality",
    "influencer": "Influencer-driven marketing leveraging creators and personalities",
    "guerrilla": "Unexpected, disruptive guerrilla marketing activation",
    "stunt": "Attention-grabbing PR stunt designed to generate buzz",
    "ugc": "User-generated content strategy encouraging consumer participation",
    "brand-activism": "Brand activism focused on social or environmental causes",
    "branded-entertainment": "Branded entertainment: storytelling through content",
    "retail-activation": "Retail activation: in-store experiences and interactive retail moments",
    "product-placement": "Product placement and integration in media",
    "data-personalization": "Data-driven personalization based on user data",
    "real-time": "Real-time, reactive marketing on trending topics",
    "event-based": "Tied to concerts, sports or cultural events",
    "ooh-ambient": "OOH and ambient: billboards and unexpected placements",
    "ai-generated": "Campaign created or enhanced by AI tools",
    "co-creation": "Co-creation and collabs with artists, designers or other brands",
    "stunt-marketing": "One-time, bold activations to grab attention",
    "ar-vr": "Interactive experiences using augmented or virtual reality",
    "performance": "Performance-driven, focused on measurable conversions and ROI",
    "loyalty-community": "Loyalty and community-building around exclusivity and brand affinity",
}

HEADLINE_PATTERNS = """### Award-winning headline patterns
- "The [Unexpected Mechanism] That [Human Outcome]"
- "We Didn't [Do X], We [Did Y Instead]"
- "Turning [Problem] Into [Cultural Power]"
- "When [Group] Meets [World/Context]"
Use these to name the campaign or spark a structure."""

EXECUTION_REMINDER = """### Execution spike
The execution plan must include at least one brave or controversial move, a genre-defying
medium or a bold channel hack. At least one execution must punch above the brief."""

OUTPUT_FORMAT = """### Output
Return ONLY a JSON object with these keys:
{
  "campaignName": "...",
  "keyMessage": "...",
  "insight": "...",
  "idea": "...",
  "creativeStrategy": ["...", "..."],
  "executionPlan": ["1. ...", "2. ...", "3. ..."],
  "viralHook": "...",
  "consumerInteraction": "...",
  "expectedOutcomes": ["...", "..."],
  "viralElement": "...",
  "prHeadline": "...",
  "callToAction": "...",
  "emotionalAppeal": ["..."],
  "targetAudience": ["..."]
}"""


def describe_style(style: str) -> str:
    if not style:
        return "Any"
    return STYLE_DESCRIPTIONS.get(style.strip().lower(), style)


def format_reference(campaign: ReferenceCampaign) -> str:
    return (
        f"- {campaign.name} ({campaign.brand}, {campaign.year}, {campaign.industry}): "
        f"{campaign.key_message} | Strategy: {campaign.strategy} | "
        f"Emotional appeal: {', '.join(campaign.emotional_appeal) or 'n/a'}"
    )


def build_campaign_prompt(
    brief: CampaignBrief,
    references: Sequence[ReferenceCampaign],
    insights: Sequence[str] = (),
) -> str:
    persona = get_persona(brief.persona)

    sections = [
        "### Generate a groundbreaking marketing campaign",
        f"### Strategist persona: {persona.name}\n{persona.instructions}",
        "#### Brand & strategy\n"
        f"- Brand: {brief.brand}\n"
        f"- Industry: {brief.industry}\n"
        f"- Target Audience: {', '.join(brief.target_audience)}\n"
        f"- Objectives: {', '.join(brief.objectives)}\n"
        f"- Personality: {brief.brand_personality or 'Flexible'}\n"
        f"- Differentiator: {brief.differentiator or 'N/A'}\n"
        f"- Market Trends: {brief.cultural_insights or 'N/A'}\n"
        f"- Emotional Appeal: {', '.join(brief.emotional_appeal)}\n"
        f"- Campaign Style: {describe_style(brief.campaign_style or '')}",
    ]

    if insights:
        numbered = "\n".join(f'{i}. "{insight}"' for i, insight in enumerate(insights, start=1))
        sections.append(
            f"#### Creative insights\nThese human truths should shape the concept:\n{numbered}\n"
            "Use at least one of them."
        )

    if references:
        sections.append(
            "#### Reference campaigns\nStudy their emotional appeal and structure, but do not copy:\n"
            + "\n".join(format_reference(c) for c in references)
        )

    if brief.additional_constraints:
        sections.append(f"#### Constraints\n{brief.additional_constraints}")

    sections.extend([HEADLINE_PATTERNS, EXECUTION_REMINDER, OUTPUT_FORMAT])
    return "\n\n".join(sections)
