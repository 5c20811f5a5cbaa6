#!/usr/bin/env python3
"""
Demo script for Campaign Studio.
Runs reference matching, bravery scoring and the full generation pipeline.
Without API keys the mock provider answers every prompt.
"""

import argparse
import asyncio
import json
import random

from campaign_studio.agents.campaign_generator import CampaignGenerator
from campaign_studio.agents.campaign_matcher import CampaignMatcher, group_by_themes
from campaign_studio.core.bravery import calculate_bravery_score
from campaign_studio.core.execution import extract_hashtags
from campaign_studio.core.similarity import score_campaign
from campaign_studio.data.campaign_library import CampaignLibrary
from campaign_studio.data.models import CampaignBrief


def print_section(title: str):
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_json(data, indent: int = 2):
    print(json.dumps(data, indent=indent, default=str))


def demo_matching(brief: CampaignBrief, seed: int):
    print_section("REFERENCE CAMPAIGN MATCHING")
    matcher = CampaignMatcher(rng=random.Random(seed))

    matches = matcher.find_similar_campaigns(brief)
    for campaign in matches:
        scores = score_campaign(brief, campaign)
        print(f"  {campaign.name:<32} {campaign.industry:<14} total={scores.total:>5.1f}")

    print("\n  Themes:")
    for theme, campaigns in group_by_themes(matches).items():
        print(f"    {theme}: {', '.join(c.name for c in campaigns) or '-'}")


def demo_bravery():
    print_section("BRAVERY HEURISTIC")
    for text in (
        "Launch a hashtag challenge and paint a mural",
        "Occupy bank branches and confront the board of trustees",
    ):
        result = calculate_bravery_score(text)
        print(f"\n  {text}")
        print(f"  score={result.score} patterns={result.matched_patterns} cliches={result.cliche_hits}")


async def demo_generation(brief: CampaignBrief, seed: int, library_path: str):
    print_section("CAMPAIGN GENERATION")
    rng = random.Random(seed)
    generator = CampaignGenerator(
        matcher=CampaignMatcher(rng=rng),
        library=CampaignLibrary(library_path) if library_path else None,
        rng=rng,
    )

    campaign = await generator.generate(brief)
    print_json(campaign.to_dict())

    text = " ".join(filter(None, [campaign.viral_hook, campaign.pr_headline, *campaign.execution_plan]))
    print(f"\n  Hashtags: {', '.join(extract_hashtags(text)) or '-'}")


def main():
    parser = argparse.ArgumentParser(description="Campaign Studio demo")
    parser.add_argument("--brand", default="Acme")
    parser.add_argument("--industry", default="Retail")
    parser.add_argument("--style", default=None)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--library", default="", help="Save the generated campaign to this JSON file")
    args = parser.parse_args()

    brief = CampaignBrief(
        brand=args.brand,
        industry=args.industry,
        target_audience=["Young adults"],
        objectives=["Brand awareness", "Start a conversation"],
        emotional_appeal=["Empathy", "Defiance"],
        campaign_style=args.style,
    )

    demo_matching(brief, args.seed)
    demo_bravery()
    asyncio.run(demo_generation(brief, args.seed, args.library))


if __name__ == "__main__":
    main()
