"""
Reference campaign catalog loader.

The catalog is loaded once per process and treated as read-only afterwards.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union
from uuid import uuid4

import structlog
from pydantic import ValidationError

from campaign_studio.config import settings
from campaign_studio.core.exceptions import CatalogValidationError
from campaign_studio.data.models import ReferenceCampaign

logger = structlog.get_logger()

Catalog = Tuple[ReferenceCampaign, ...]


def build_catalog(records: Iterable[Dict[str, Any]]) -> Catalog:
    """
    Validate raw records into reference campaigns.

    Records without an id get a generated one. A malformed record raises
    CatalogValidationError naming its position and the failing fields.
    """
    entries = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise CatalogValidationError(index, [{"loc": (), "msg": "record is not an object"}])

        data = dict(record)
        if not data.get("id"):
            data["id"] = str(uuid4())

        try:
            entries.append(ReferenceCampaign.model_validate(data))
        except ValidationError as e:
            raise CatalogValidationError(index, e.errors(), name=data.get("name")) from e

    return tuple(entries)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Catalog:
    """Load and validate a catalog file (defaults to the bundled dataset)."""
    catalog_path = Path(path) if path else Path(settings.catalog_path)

    with open(catalog_path, "r", encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise CatalogValidationError(-1, [{"loc": (), "msg": "catalog file must hold a JSON array"}])

    catalog = build_catalog(records)
    logger.info("catalog_loaded", path=str(catalog_path), count=len(catalog))
    return catalog


@lru_cache
def get_catalog() -> Catalog:
    """Get the process-wide catalog instance."""
    return load_catalog()
