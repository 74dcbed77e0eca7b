"""
Application settings read from the environment (and a local .env file).

Only the HTTP layer and the pathway enricher read these; the matching core
takes explicit arguments.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from .logic.constants import DEFAULT_TOP_N

load_dotenv()

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_CACHE_TTL_SECONDS = 3600.0
DEFAULT_CACHE_MAXSIZE = 512

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    catalog_path: Optional[str] = None  # None -> packaged catalog
    top_n: int = DEFAULT_TOP_N
    openai_api_key: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    enrichment_enabled: bool = False
    enrichment_cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    enrichment_cache_maxsize: int = DEFAULT_CACHE_MAXSIZE
    log_level: str = "INFO"

    @property
    def enrichment_active(self) -> bool:
        """Enrichment needs both the flag and an API key."""
        return self.enrichment_enabled and bool(self.openai_api_key)


def get_settings() -> Settings:
    """
    Read settings from the environment.

    Raises:
        ValueError: if a numeric setting is not a number
    """
    return Settings(
        catalog_path=os.getenv("CAREER_CATALOG_PATH") or None,
        top_n=_env_int("TOP_N_MATCHES", DEFAULT_TOP_N),
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL),
        enrichment_enabled=_env_bool("ENRICHMENT_ENABLED", False),
        enrichment_cache_ttl_seconds=_env_float("ENRICHMENT_CACHE_TTL_SECONDS", DEFAULT_CACHE_TTL_SECONDS),
        enrichment_cache_maxsize=_env_int("ENRICHMENT_CACHE_MAXSIZE", DEFAULT_CACHE_MAXSIZE),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
