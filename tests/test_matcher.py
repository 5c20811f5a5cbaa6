"""
Tests for the reference campaign matching engine.
"""

import random

import pytest

from campaign_studio.agents.campaign_matcher import (
    CANDIDATE_POOL_SIZE,
    CampaignMatcher,
    group_by_themes,
    select_diverse,
)
from campaign_studio.core.similarity import DimensionScores, ScoredCampaign
from campaign_studio.data.catalog import load_catalog
from campaign_studio.data.models import CampaignBrief


def scored(campaign, **scores):
    return ScoredCampaign(campaign=campaign, scores=DimensionScores(**scores))


class TestSelectDiverse:
    """Tests for greedy diverse top-K selection."""

    def test_first_pick_is_best_total(self, campaign_factory):
        """The highest total always comes first."""
        items = [
            scored(campaign_factory("a"), industry=3),
            scored(campaign_factory("b"), industry=5, audience=15),
            scored(campaign_factory("c"), industry=5),
        ]

        picked = select_diverse(items, count=2)

        assert picked[0].campaign.id == "b"

    def test_prefers_new_industry_and_emotion(self, campaign_factory):
        """A lower-ranked entry from a new industry beats a redundant one."""
        items = [
            scored(campaign_factory("a", "Retail", ("Empathy",)), industry=5, audience=15, tone=10),
            scored(campaign_factory("b", "Retail", ("Empathy",)), industry=5, audience=15, tone=10),
            scored(campaign_factory("c", "Finance", ("Trust",)), audience=10, tone=10),
        ]

        picked = select_diverse(items, count=2)

        assert [p.campaign.id for p in picked] == ["a", "c"]

    def test_complement_rewards_weak_dimensions(self, campaign_factory):
        """Strength where the selection is weak wins when diversity is equal."""
        items = [
            scored(campaign_factory("a", "Retail", ("Empathy",)), industry=5, audience=15, sentiment=10),
            scored(campaign_factory("b", "Retail", ("Empathy",)), industry=5, audience=15, sentiment=10),
            scored(campaign_factory("c", "Retail", ("Empathy",)), industry=5, emotion=15),
        ]

        picked = select_diverse(items, count=2)

        assert picked[1].campaign.id == "c"

    def test_ties_go_to_better_rank(self, campaign_factory):
        """Equal improvements keep the earlier-ranked candidate."""
        items = [
            scored(campaign_factory("a", "Retail"), industry=5),
            scored(campaign_factory("b", "Finance", ("Trust",)), industry=3),
            scored(campaign_factory("c", "Beauty", ("Pride",)), industry=3),
        ]

        picked = select_diverse(items, count=2)

        assert picked[1].campaign.id == "b"

    def test_falls_back_to_next_ranked(self, campaign_factory):
        """With no positive improvement the next-ranked entry is taken."""
        items = [
            scored(campaign_factory("a", "Retail", ("Empathy",)), industry=5, audience=15),
            scored(campaign_factory("b", "Retail", ("Empathy",)), industry=5, audience=10),
            scored(campaign_factory("c", "Retail", ("Empathy",)), industry=5, audience=5),
        ]

        picked = select_diverse(items, count=3)

        assert [p.campaign.id for p in picked] == ["a", "b", "c"]

    def test_short_pool_returns_everything(self, campaign_factory):
        """Asking for five from three returns three without error."""
        items = [scored(campaign_factory(str(i)), industry=i) for i in range(3)]

        assert len(select_diverse(items, count=5)) == 3

    def test_empty_and_zero(self, campaign_factory):
        """Empty input and non-positive counts yield nothing."""
        assert select_diverse([], count=5) == []
        assert select_diverse([scored(campaign_factory("a"))], count=0) == []

    def test_duplicate_ids_collapsed(self, campaign_factory):
        """Repeated ids in the input are selected once."""
        entry = campaign_factory("a")
        items = [scored(entry, industry=5), scored(entry, industry=5), scored(campaign_factory("b"), industry=3)]

        picked = select_diverse(items, count=5)

        assert [p.campaign.id for p in picked] == ["a", "b"]

    def test_pool_cutoff(self, campaign_factory):
        """Entries ranked below the pool size are never picked."""
        items = [scored(campaign_factory(f"c{i}", f"Industry {i}"), audience=100 - i) for i in range(30)]

        picked = select_diverse(items, count=30)

        assert len(picked) == CANDIDATE_POOL_SIZE
        assert {p.campaign.id for p in picked} == {f"c{i}" for i in range(CANDIDATE_POOL_SIZE)}


class TestCampaignMatcher:
    """Tests for the matcher bound to a catalog."""

    @pytest.fixture
    def matcher(self, small_catalog):
        return CampaignMatcher(catalog=small_catalog, rng=random.Random(42), count=5)

    def test_find_similar_campaigns_no_duplicates(self, matcher, retail_brief):
        """Results are unique and capped."""
        result = matcher.find_similar_campaigns(retail_brief)

        ids = [c.id for c in result]
        assert len(ids) == len(set(ids))
        assert len(result) <= 5
        assert result[0].id == "r1"

    def test_catalog_smaller_than_count(self, campaign_factory, retail_brief):
        """A catalog of three yields exactly three."""
        catalog = (
            campaign_factory("a", "Retail"),
            campaign_factory("b", "Finance"),
            campaign_factory("c", "Beauty"),
        )
        matcher = CampaignMatcher(catalog=catalog, rng=random.Random(1), count=5)

        result = matcher.find_similar_campaigns(retail_brief)

        assert sorted(c.id for c in result) == ["a", "b", "c"]

    def test_empty_catalog(self, retail_brief):
        """An empty catalog is not an error."""
        matcher = CampaignMatcher(catalog=(), rng=random.Random(1))
        assert matcher.find_similar_campaigns(retail_brief) == []
        assert matcher.select_wildcards([], 3) == []

    def test_wildcards_exclude_selected_industries(self, matcher, small_catalog):
        """Wildcards come from industries the selection does not cover."""
        selection = [small_catalog[0]]

        wildcards = matcher.select_wildcards(selection, 10)

        assert wildcards
        assert all(w.industry != "Retail" for w in wildcards)
        assert all(w.id != "r1" for w in wildcards)

    def test_wildcard_count_non_positive(self, matcher, small_catalog):
        """Zero or negative counts return an empty list."""
        assert matcher.select_wildcards(small_catalog[:1], 0) == []
        assert matcher.select_wildcards(small_catalog[:1], -2) == []

    def test_same_seed_same_wildcards(self, small_catalog):
        """Two matchers seeded alike pick the same wildcards."""
        first = CampaignMatcher(catalog=small_catalog, rng=random.Random(99))
        second = CampaignMatcher(catalog=small_catalog, rng=random.Random(99))

        assert first.select_wildcards(small_catalog[:1], 3) == second.select_wildcards(small_catalog[:1], 3)

    def test_diversify_prefers_new_industries(self, matcher, small_catalog):
        """Entries adding nothing new move behind the diverse ones."""
        r1, r2, f1 = small_catalog[0], small_catalog[1], small_catalog[2]

        result = matcher.diversify([r1, r2, f1], max_results=3)

        assert [c.id for c in result] == ["r1", "f1", "r2"]

    def test_diversify_case_insensitive(self, matcher, campaign_factory):
        """Industry and emotion comparisons ignore case."""
        a = campaign_factory("a", "Retail", ("Empathy",))
        b = campaign_factory("b", "retail", ("empathy",))
        c = campaign_factory("c", "Finance", ("Trust",))

        result = matcher.diversify([a, b, c], max_results=3)

        assert [x.id for x in result] == ["a", "c", "b"]

    def test_diversify_backfills_and_caps(self, matcher, small_catalog):
        """Short lists are topped up with unique wildcards and capped."""
        result = matcher.diversify([small_catalog[0]], max_results=4)

        ids = [c.id for c in result]
        assert len(ids) == 4
        assert len(set(ids)) == 4
        assert ids[0] == "r1"

    def test_thematic_matches(self, matcher, retail_brief):
        """Thematic matches are the rebellion bucket plus wildcards."""
        result = matcher.find_thematic_matches(retail_brief)
        similar = matcher.find_similar_campaigns(retail_brief)

        rebels = [c for c in similar if "protest" in c.key_message.lower()]
        assert len(result) <= len(rebels) + 2


class TestGroupByThemes:
    """Tests for theme buckets."""

    def test_buckets_are_independent(self, small_catalog):
        """One campaign can land in several buckets."""
        themes = group_by_themes(small_catalog)

        assert [c.id for c in themes["institutional rebellion"]] == ["n1"]
        assert [c.id for c in themes["personal vulnerability"]] == ["n2"]
        assert [c.id for c in themes["cultural tension"]] == ["n2"]
        assert themes["system hacking"] == []

    def test_empty_input(self):
        """All four buckets exist even for no campaigns."""
        themes = group_by_themes([])
        assert set(themes) == {"institutional rebellion", "personal vulnerability", "cultural tension", "system hacking"}


class TestBundledCatalogMatching:
    """End-to-end matching over the bundled catalog."""

    def test_seeded_results_repeatable(self):
        """The same brief and seed give the same shortlist."""
        catalog = load_catalog()
        brief = CampaignBrief(
            brand="Acme",
            industry="Fast Food",
            target_audience=["Young adults"],
            objectives=["Brand awareness"],
            emotional_appeal=["Humor", "Surprise"],
        )

        first = CampaignMatcher(catalog=catalog, rng=random.Random(5)).find_similar_campaigns(brief)
        second = CampaignMatcher(catalog=catalog, rng=random.Random(5)).find_similar_campaigns(brief)

        assert [c.id for c in first] == [c.id for c in second]
        assert len(first) == 5
        assert len({c.id for c in first}) == 5
