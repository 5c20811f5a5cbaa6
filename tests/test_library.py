"""
Tests for the saved-campaign library.
"""

import json

import pytest

from campaign_studio.core.exceptions import CampaignLibraryError
from campaign_studio.data.campaign_library import CampaignLibrary
from campaign_studio.data.models import GeneratedCampaign, SavedCampaign


@pytest.fixture
def library(tmp_path):
    return CampaignLibrary(tmp_path / "library" / "saved.json")


@pytest.fixture
def campaign():
    return GeneratedCampaign(campaign_name="The Honest Receipt", key_message="Stop pretending")


class TestCampaignLibrary:
    """Tests for the JSON-file library."""

    def test_empty_library(self, library):
        """A missing file is an empty library."""
        assert library.list_saved() == {}
        assert library.get("nope") is None

    def test_save_and_get(self, library, campaign):
        """Saved campaigns can be read back by id."""
        entry = library.save(campaign, "Acme", "Retail")

        loaded = library.get(entry.id)
        assert loaded.campaign.campaign_name == "The Honest Receipt"
        assert loaded.brand == "Acme"
        assert loaded.favorite is False
        assert loaded.slug == "the-honest-receipt"
        assert library.path.exists()

    def test_duplicate_guard(self, library, campaign):
        """Same name and brand returns the existing record."""
        first = library.save(campaign, "Acme", "Retail")
        second = library.save(campaign, "Acme", "Retail")

        assert first.id == second.id
        assert len(library.list_saved()) == 1
        assert library.is_saved("The Honest Receipt", "Acme")
        assert not library.is_saved("The Honest Receipt", "Other")

    def test_same_name_other_brand_saved(self, library, campaign):
        """The duplicate guard is per brand."""
        library.save(campaign, "Acme", "Retail")
        library.save(campaign, "Other", "Retail")

        assert len(library.list_saved()) == 2

    def test_remove(self, library, campaign):
        """Removing deletes once and reports missing ids."""
        entry = library.save(campaign, "Acme", "Retail")

        assert library.remove(entry.id) is True
        assert library.remove(entry.id) is False
        assert library.list_saved() == {}

    def test_toggle_favorite(self, library, campaign):
        """Favorites flip on each toggle."""
        entry = library.save(campaign, "Acme", "Retail")

        assert library.toggle_favorite(entry.id) is True
        assert library.get(entry.id).favorite is True
        library.toggle_favorite(entry.id)
        assert library.get(entry.id).favorite is False
        assert library.toggle_favorite("missing") is False

    def test_save_entry(self, library, campaign):
        """Complete records are stored under their own id."""
        entry = SavedCampaign(id="fixed", campaign=campaign, brand="Acme", industry="Retail", favorite=True)

        library.save_entry(entry)

        assert library.get("fixed").favorite is True

    def test_subscribers_notified(self, library, campaign):
        """Every mutation notifies subscribers until they unsubscribe."""
        calls = []
        unsubscribe = library.subscribe(lambda: calls.append(1))

        entry = library.save(campaign, "Acme", "Retail")
        library.toggle_favorite(entry.id)
        unsubscribe()
        library.remove(entry.id)

        assert len(calls) == 2

    def test_legacy_list_file(self, tmp_path, campaign):
        """Older list-shaped files are read as a mapping by id."""
        path = tmp_path / "saved.json"
        record = SavedCampaign(id="old", campaign=campaign, brand="Acme", industry="Retail").to_dict()
        path.write_text(json.dumps([record]), encoding="utf-8")

        library = CampaignLibrary(path)

        assert list(library.list_saved()) == ["old"]

    def test_file_is_camel_case(self, library, campaign):
        """The file keeps the camelCase shape."""
        entry = library.save(campaign, "Acme", "Retail")

        data = json.loads(library.path.read_text(encoding="utf-8"))
        assert data[entry.id]["campaign"]["campaignName"] == "The Honest Receipt"

    def test_corrupt_file_raises(self, tmp_path):
        """Unreadable files raise a library error."""
        path = tmp_path / "saved.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CampaignLibraryError):
            CampaignLibrary(path).list_saved()
