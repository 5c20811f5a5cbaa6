"""
Core module containing the scoring heuristics, JSON recovery, execution-plan
utilities and the LLM service.
"""

from campaign_studio.core.exceptions import (
    CampaignStudioError,
    CatalogValidationError,
    JSONExtractionError,
    LLMServiceError,
    CampaignStructureError,
    CampaignLibraryError,
)
from campaign_studio.core.similarity import DimensionScores, ScoredCampaign, score_campaign, score_catalog
from campaign_studio.core.bravery import BraveryAssessment, calculate_bravery_score, enhance_bravery
from campaign_studio.core.json_extraction import extract_json_from_response, parse_json_response, parse_mixed_response
from campaign_studio.core.llm_service import LLMService, MockLLMProvider, get_llm_service

__all__ = [
    # Errors
    "CampaignStudioError",
    "CatalogValidationError",
    "JSONExtractionError",
    "LLMServiceError",
    "CampaignStructureError",
    "CampaignLibraryError",
    # Similarity
    "DimensionScores",
    "ScoredCampaign",
    "score_campaign",
    "score_catalog",
    # Bravery
    "BraveryAssessment",
    "calculate_bravery_score",
    "enhance_bravery",
    # JSON recovery
    "extract_json_from_response",
    "parse_json_response",
    "parse_mixed_response",
    # LLM Service
    "LLMService",
    "MockLLMProvider",
    "get_llm_service",
]
