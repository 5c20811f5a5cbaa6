"""
Campaign Library

Saved campaigns live in one JSON file holding a flat mapping of
id -> SavedCampaign. Every mutation rewrites the file and then notifies
subscribers.
"""

import json
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import structlog
from pydantic import ValidationError

from campaign_studio.config import settings
from campaign_studio.core.exceptions import CampaignLibraryError
from campaign_studio.core.execution import generate_campaign_slug
from campaign_studio.data.models import GeneratedCampaign, SavedCampaign

logger = structlog.get_logger()

Subscriber = Callable[[], None]


class CampaignLibrary:
    """JSON-file backed store of generated campaigns."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else Path(settings.library_path)
        self._subscribers: List[Subscriber] = []
        self._logger = logger.bind(component="campaign_library", path=str(self.path))

    # ==================== Persistence ====================

    def _read(self) -> Dict[str, SavedCampaign]:
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except ValueError as e:
            raise CampaignLibraryError(f"Library file is not valid JSON: {self.path}") from e

        # Older files stored a list of entries
        if isinstance(raw, list):
            raw = {entry["id"]: entry for entry in raw if isinstance(entry, dict) and entry.get("id")}

        if not isinstance(raw, dict):
            raise CampaignLibraryError(f"Library file must hold a JSON object: {self.path}")

        try:
            return {key: SavedCampaign.model_validate(value) for key, value in raw.items()}
        except ValidationError as e:
            raise CampaignLibraryError(f"Library file holds an invalid entry: {e}") from e

    def _write(self, entries: Dict[str, SavedCampaign]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {key: entry.to_dict() for key, entry in entries.items()}
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        self._notify()

    # ==================== Events ====================

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback()

    # ==================== Queries ====================

    def list_saved(self) -> Dict[str, SavedCampaign]:
        return self._read()

    def get(self, campaign_id: str) -> Optional[SavedCampaign]:
        return self._read().get(campaign_id)

    def is_saved(self, campaign_name: str, brand: str) -> bool:
        return self._find(self._read(), campaign_name, brand) is not None

    @staticmethod
    def _find(entries: Dict[str, SavedCampaign], campaign_name: str, brand: str) -> Optional[SavedCampaign]:
        for entry in entries.values():
            if entry.campaign.campaign_name == campaign_name and entry.brand == brand:
                return entry
        return None

    # ==================== Mutations ====================

    def save(self, campaign: GeneratedCampaign, brand: str, industry: str) -> SavedCampaign:
        """
        Save a generated campaign.

        A campaign with the same name for the same brand is not saved twice;
        the existing record is returned instead.
        """
        entries = self._read()
        existing = self._find(entries, campaign.campaign_name, brand)
        if existing:
            self._logger.info("campaign_already_saved", campaign=campaign.campaign_name, brand=brand)
            return existing

        entry = SavedCampaign(
            campaign=campaign,
            brand=brand,
            industry=industry,
            slug=generate_campaign_slug(campaign.campaign_name),
        )
        entries[entry.id] = entry
        self._write(entries)
        self._logger.info("campaign_saved", id=entry.id, campaign=campaign.campaign_name, brand=brand)
        return entry

    def save_entry(self, entry: SavedCampaign) -> SavedCampaign:
        """Store a complete record under its own id, replacing any previous one."""
        entries = self._read()
        entries[entry.id] = entry
        self._write(entries)
        return entry

    def remove(self, campaign_id: str) -> bool:
        entries = self._read()
        if campaign_id not in entries:
            return False
        del entries[campaign_id]
        self._write(entries)
        self._logger.info("campaign_removed", id=campaign_id)
        return True

    def toggle_favorite(self, campaign_id: str) -> bool:
        entries = self._read()
        entry = entries.get(campaign_id)
        if entry is None:
            return False
        entry.favorite = not entry.favorite
        self._write(entries)
        return True
