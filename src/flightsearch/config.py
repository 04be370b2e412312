# src/flightsearch/config.py

"""
Environment-driven settings.

Keeps os.getenv calls in one place; clients still accept explicit arguments
that take precedence over these values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# Load .env once on module import
load_dotenv()

DEFAULT_AMADEUS_HOST = "https://test.api.amadeus.com"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _project_root() -> Path:
    # src/flightsearch/.. -> project root
    return Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    amadeus_client_id: str = field(
        default_factory=lambda: os.getenv("AMADEUS_CLIENT_ID", "").strip())
    amadeus_client_secret: str = field(
        default_factory=lambda: os.getenv("AMADEUS_CLIENT_SECRET", "").strip())
    amadeus_host: str = field(
        default_factory=lambda: os.getenv("AMADEUS_HOST", DEFAULT_AMADEUS_HOST).strip().rstrip("/"))
    timeout_seconds: int = field(
        default_factory=lambda: _int_env("AMADEUS_TIMEOUT_SECONDS", 20))
    max_results: int = field(
        default_factory=lambda: _int_env("FLIGHT_SEARCH_MAX_RESULTS", 50))
    airports_cache_path: Path = field(
        default_factory=lambda: Path(os.getenv(
            "AIRPORTS_CACHE_PATH",
            str(_project_root() / "data" / "airports_dynamic.csv"))))
    airports_refresh_hours: int = field(
        default_factory=lambda: _int_env("AIRPORTS_REFRESH_HOURS", 24))
    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").strip().upper())

    def amadeus_configured(self) -> bool:
        return bool(self.amadeus_client_id and self.amadeus_client_secret)


@lru_cache()
def get_settings() -> Settings:
    """Return settings loaded from the environment (cached)."""
    return Settings()


__all__ = ["Settings", "get_settings", "DEFAULT_AMADEUS_HOST"]
