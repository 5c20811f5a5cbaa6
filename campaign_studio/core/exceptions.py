"""
Exception hierarchy for Campaign Studio.
"""

from typing import Any, Dict, List, Optional


class CampaignStudioError(Exception):
    """Base class for all errors raised by the package."""


class CatalogValidationError(CampaignStudioError):
    """A reference campaign record is missing required fields or has bad values."""

    def __init__(self, index: int, errors: List[Dict[str, Any]], name: Optional[str] = None):
        self.index = index
        self.errors = errors
        self.name = name
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) or "<root>" for e in errors)
        label = f" ({name!r})" if name else ""
        super().__init__(f"Invalid catalog entry #{index}{label}: {fields}")


class JSONExtractionError(CampaignStudioError):
    """No parseable JSON could be recovered from a model response."""

    def __init__(self, message: str, content: str = ""):
        self.content = content
        preview = content[:100].replace("\n", " ")
        super().__init__(f"JSON extraction failed: {message}\nContent: {preview}...")


class LLMServiceError(CampaignStudioError):
    """The text-generation provider failed or timed out."""


class CampaignStructureError(CampaignStudioError):
    """A generated campaign payload is unusable."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class CampaignLibraryError(CampaignStudioError):
    """The saved-campaign library file could not be read."""
