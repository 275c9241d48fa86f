"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_LLM_MODEL = "llama-3.3-70b-versatile"
DEFAULT_VISION_MODEL = "llama-3.2-11b-vision-preview"
DEFAULT_DATABASE_URL = "sqlite:///./smart_trip.db"


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials."""

    groq_api_key: Optional[str] = None
    deepgram_api_key: Optional[str] = None
    geoapify_api_key: Optional[str] = None
    hf_token: Optional[str] = None
    auth_secret: Optional[str] = None
    auth_algorithm: str = "HS256"
    database_url: str = DEFAULT_DATABASE_URL
    llm_model: str = DEFAULT_LLM_MODEL
    vision_model: str = DEFAULT_VISION_MODEL

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables."""

        return cls(
            groq_api_key=os.getenv("GROQ_API_KEY"),
            deepgram_api_key=os.getenv("DEEPGRAM_API_KEY"),
            geoapify_api_key=os.getenv("GEOAPIFY_API_KEY"),
            hf_token=os.getenv("HF_TOKEN"),
            auth_secret=os.getenv("AUTH_SECRET"),
            auth_algorithm=os.getenv("AUTH_ALGORITHM", "HS256"),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            llm_model=os.getenv("LLM_MODEL", DEFAULT_LLM_MODEL),
            vision_model=os.getenv("VISION_MODEL", DEFAULT_VISION_MODEL),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the process-wide logging level (``LOG_LEVEL`` by default)."""

    resolved = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
