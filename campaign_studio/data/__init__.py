"""
Data models, the bundled reference catalog and the saved-campaign library.
"""

from campaign_studio.data.models import (
    CampaignBrief,
    CampaignEvaluation,
    GeneratedCampaign,
    Persona,
    ReferenceCampaign,
    SavedCampaign,
)
from campaign_studio.data.catalog import Catalog, build_catalog, get_catalog, load_catalog
from campaign_studio.data.campaign_library import CampaignLibrary

__all__ = [
    "CampaignBrief",
    "CampaignEvaluation",
    "GeneratedCampaign",
    "Persona",
    "ReferenceCampaign",
    "SavedCampaign",
    "Catalog",
    "build_catalog",
    "get_catalog",
    "load_catalog",
    "CampaignLibrary",
]
