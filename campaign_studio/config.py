"""
Application configuration management.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # LLM Providers
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    llm_provider: str = "openai"  # "openai", "anthropic", or "mock"
    openai_model: str = "gpt-4o"
    anthropic_model: str = "claude-sonnet-4-20250514"
    llm_temperature: float = 0.8
    llm_max_tokens: int = 2000
    llm_timeout_seconds: float = 15.0

    # Data
    catalog_path: Path = PACKAGE_DIR / "data" / "reference_campaigns.json"
    library_path: Path = Path("./data/saved_campaigns.json")

    # Matching
    match_count: int = 5
    candidate_pool_size: int = 20
    random_seed: Optional[int] = None

    @field_validator("llm_provider", mode="before")
    @classmethod
    def normalize_provider(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
