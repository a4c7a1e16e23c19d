"""
PhishGuard Configuration

Central settings loaded from environment variables.
Scoring weights are not configurable here; they live in catalog.py.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    API_VERSION: str = "1"

    # --- Server ---
    HOST: str = os.getenv("PHISHGUARD_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PHISHGUARD_PORT", "8000"))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("PHISHGUARD_CORS_ORIGINS", "*")

    # --- Result cache ---
    CACHE_TTL_SECONDS: int = int(os.getenv("PHISHGUARD_CACHE_TTL", "3600"))
    CACHE_MAX_ENTRIES: int = int(os.getenv("PHISHGUARD_CACHE_MAX_ENTRIES", "500"))

    # --- Request limits ---
    MAX_TEXT_LENGTH: int = int(os.getenv("PHISHGUARD_MAX_TEXT_LENGTH", "100000"))


settings = Settings()
