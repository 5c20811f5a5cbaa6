"""
Matching engine and the LLM-backed agents of the generation pipeline.
"""

from campaign_studio.agents.campaign_matcher import CampaignMatcher, group_by_themes, select_diverse
from campaign_studio.agents.persona import PERSONAS, get_persona, infer_persona
from campaign_studio.agents.insight_generator import CreativeInsightGenerator, boost_creative_strategy
from campaign_studio.agents.storyteller import StorytellingGenerator, inject_narrative_anchor
from campaign_studio.agents.creative_director import (
    CreativeDirector,
    apply_creative_director_pass,
    inject_disruptive_device,
)
from campaign_studio.agents.campaign_evaluator import CampaignEvaluator
from campaign_studio.agents.campaign_generator import CampaignGenerator

__all__ = [
    "CampaignMatcher",
    "group_by_themes",
    "select_diverse",
    "PERSONAS",
    "get_persona",
    "infer_persona",
    "CreativeInsightGenerator",
    "boost_creative_strategy",
    "StorytellingGenerator",
    "inject_narrative_anchor",
    "CreativeDirector",
    "apply_creative_director_pass",
    "inject_disruptive_device",
    "CampaignEvaluator",
    "CampaignGenerator",
]
