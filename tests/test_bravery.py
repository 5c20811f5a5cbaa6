"""
Tests for the bravery heuristic.
"""

import pytest

from campaign_studio.core.bravery import (
    bravery_display_score,
    calculate_bravery_score,
    campaign_text,
    enhance_bravery,
)
from campaign_studio.core.patterns import BRAVERY_PATTERNS, BraveryCategory
from campaign_studio.data.models import GeneratedCampaign


class TestCalculateBraveryScore:
    """Tests for pattern weights, clichés and the floor."""

    def test_physical_intervention(self):
        """An occupation counts two points."""
        result = calculate_bravery_score({"executionPlan": ["Occupy the lobby overnight"]})

        assert result.score == 2
        assert result.flag(BraveryCategory.PHYSICAL_INTERVENTION)
        assert result.matched_patterns == ["occupation"]

    def test_institution_named(self):
        """Naming an institution counts three points."""
        result = calculate_bravery_score({"keyMessage": "We name the ministry that looked away"})

        assert result.score == 3
        assert result.flag(BraveryCategory.CHALLENGES_AUTHORITY)

    def test_personal_risk(self):
        """A confession counts one and a half points."""
        result = calculate_bravery_score({"executionPlan": ["Readers confess their worst purchase"]})

        assert result.score == 1.5
        assert result.flag(BraveryCategory.PERSONAL_RISK)

    def test_cliche_floored_at_zero(self):
        """A lone cliché cannot push the score below zero."""
        result = calculate_bravery_score({"executionPlan": ["Paint a mural downtown"]})

        assert result.score == 0
        assert result.cliche_hits == ["mural"]

    def test_cliche_penalty_applies(self):
        """Each cliché subtracts two points from what the patterns earned."""
        result = calculate_bravery_score("Occupy the square, then start a petition")

        assert result.score == 0
        assert calculate_bravery_score("Stage a guerrilla sit-in, then start a petition").score == 3

    def test_occupy_and_board_of_trustees(self):
        """Physical intervention plus an institution scores at least five."""
        result = calculate_bravery_score("Occupy bank branches and confront the board of trustees")

        assert result.flag(BraveryCategory.PHYSICAL_INTERVENTION)
        assert result.flag(BraveryCategory.CHALLENGES_AUTHORITY)
        assert result.score >= 5

    def test_pattern_counts_once(self):
        """Repeating a word does not repeat its weight."""
        once = calculate_bravery_score("Occupy the lobby")
        twice = calculate_bravery_score("Occupy the lobby. Occupy the roof. Occupy the car park.")

        assert once.score == twice.score == 2

    def test_safe_campaign_scores_zero(self):
        """Nothing provocative means zero and every suggestion."""
        result = calculate_bravery_score({"keyMessage": "Enjoy the summer", "executionPlan": []})

        assert result.score == 0
        assert len(result.suggestions) == len(BraveryCategory)
        assert not any(result.breakdown.values())

    def test_suggestions_for_unflagged_only(self):
        """One suggestion per category that did not fire."""
        result = calculate_bravery_score("Occupy the lobby")

        assert len(result.suggestions) == len(BraveryCategory) - 1

    @pytest.mark.parametrize(
        "base, addition",
        [
            ("Occupy the square", " and expose the government"),
            ("Enjoy the summer", " despite the stigma"),
            ("Confess your secrets", " about inequality"),
            ("A quiet campaign about socks", " then occupy the store"),
            ("Start a petition", " and hijack the billboard"),
        ],
    )
    def test_adding_brave_text_never_lowers_score(self, base, addition):
        """Appending pattern text without clichés is monotonic."""
        assert calculate_bravery_score(base + addition).score >= calculate_bravery_score(base).score

    def test_excluded_keys_ignored(self):
        """Reference campaigns and evaluation do not count toward bravery."""
        result = calculate_bravery_score({
            "keyMessage": "A quiet idea",
            "referenceCampaigns": [{"keyMessage": "Racism in hiring"}],
            "evaluation": {"finalVerdict": "Occupy everything"},
        })

        assert result.score == 0

    def test_model_input(self):
        """Generated campaign models are scored on their camelCase dump."""
        campaign = GeneratedCampaign(key_message="Expose the racism in hiring")

        result = calculate_bravery_score(campaign)

        assert result.score == 5.5
        assert result.flag(BraveryCategory.CULTURAL_TENSION)

    def test_deterministic(self):
        """Same input, same assessment."""
        text = "Hijack the parliament livestream to confess our privilege"
        assert calculate_bravery_score(text).to_dict() == calculate_bravery_score(text).to_dict()

    def test_to_dict_uses_category_values(self):
        """The breakdown serializes with plain string keys."""
        breakdown = calculate_bravery_score("Occupy the lobby").to_dict()["breakdown"]

        assert breakdown["physical_intervention"] is True
        assert breakdown["personal_risk"] is False

    def test_weights_within_documented_ranges(self):
        """Pattern weights stay inside their category bands."""
        bands = {
            BraveryCategory.PHYSICAL_INTERVENTION: (2, 3),
            BraveryCategory.CHALLENGES_AUTHORITY: (3, 3),
            BraveryCategory.PERSONAL_RISK: (1.5, 2),
            BraveryCategory.CULTURAL_TENSION: (3, 4),
        }
        for rule in BRAVERY_PATTERNS:
            low, high = bands[rule.category]
            assert low <= rule.weight <= high


class TestBraveryHelpers:
    """Tests for display clamping and text serialization."""

    def test_display_score_clamped(self):
        """Display scores stay in 0-10."""
        assert bravery_display_score(14.5) == 10
        assert bravery_display_score(-1) == 0
        assert bravery_display_score(6.5) == 6.5

    def test_campaign_text_lowercases(self):
        """Text input is lowercased as-is."""
        assert campaign_text("LOUD") == "loud"
        assert '"keymessage": "hi"' in campaign_text({"keyMessage": "Hi"})


class TestEnhanceBravery:
    """Tests for the bravery enhancer."""

    def test_timid_campaign_enhanced(self):
        """Missing intervention and authority are added."""
        original = {"keyMessage": "Buy more socks", "executionPlan": ["Launch a website"]}

        enhanced = enhance_bravery(original, "Acme", "Finance")

        assert enhanced["executionPlan"][-1] == "Stage a Acme intervention in public space (public square)"
        assert enhanced["keyMessage"] == "Buy more socks This directly challenges traditional banks"
        assert calculate_bravery_score(enhanced).score >= 6

    def test_input_not_mutated(self):
        """The original payload is left as it was."""
        original = {"keyMessage": "Buy more socks", "executionPlan": ["Launch a website"]}

        enhance_bravery(original, "Acme", "Finance")

        assert original == {"keyMessage": "Buy more socks", "executionPlan": ["Launch a website"]}

    def test_brave_campaign_untouched(self):
        """Campaigns already brave enough come back unchanged."""
        brave = {"keyMessage": "Occupy city hall to expose gentrification"}

        assert enhance_bravery(brave, "Acme", "Finance") is brave

    def test_unknown_industry_challenges_status_quo(self):
        """Industries without a named authority challenge the status quo."""
        enhanced = enhance_bravery({"keyMessage": "Hello"}, "Acme", "Gardening")

        assert enhanced["keyMessage"].endswith("This directly challenges the status quo")
