"""
Blame Mom Configuration

Central settings loaded from environment variables.
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    # --- Versioning ---
    ENGINE_VERSION: str = "1.0.0"

    # --- Server ---
    HOST: str = os.getenv("BLAMEMOM_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("BLAMEMOM_PORT", os.getenv("PORT", "3000")))

    # --- CORS ---
    CORS_ORIGINS: str = os.getenv("BLAMEMOM_CORS_ORIGINS", "*")

    # --- Headline cache ---
    CACHE_TTL_SECONDS: int = int(os.getenv("BLAMEMOM_CACHE_TTL", "1800"))

    # --- News fetching ---
    NEWS_MAX_ARTICLES: int = int(os.getenv("NEWS_MAX_ARTICLES", "200"))
    FETCH_TIMEOUT: int = int(os.getenv("BLAMEMOM_FETCH_TIMEOUT", "10"))
    MAX_CONCURRENT_FEEDS: int = int(os.getenv("BLAMEMOM_MAX_CONCURRENT_FEEDS", "5"))

    # --- Linguistic layer ---
    TAGGER: str = os.getenv("BLAMEMOM_TAGGER", "spacy")
    SPACY_MODEL: str = os.getenv("BLAMEMOM_SPACY_MODEL", "en_core_web_sm")

    # --- Static build ---
    SNAPSHOT_PATH: str = os.getenv(
        "BLAMEMOM_SNAPSHOT_PATH", os.path.join("app", "public", "headlines.json")
    )


settings = Settings()
