# src/flightsearch/airports_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import pandas as pd
import requests

from flightsearch.config import get_settings
from flightsearch.core.models import LocationOption

logger = logging.getLogger(__name__)

# OurAirports "airports.csv" download
OURAIRPORTS_AIRPORTS_CSV_URL = "https://davidmegginson.github.io/ourairports-data/airports.csv"

DEFAULT_LIMIT = 12


@dataclass(frozen=True)
class AirportsConfig:
    cache_path: Path
    refresh_hours: int = 24


def _default_config() -> AirportsConfig:
    settings = get_settings()
    return AirportsConfig(cache_path=settings.airports_cache_path,
                          refresh_hours=settings.airports_refresh_hours)


def _download_csv(url: str) -> bytes:
    r = requests.get(url, timeout=20)
    r.raise_for_status()
    return r.content


def _is_cache_fresh(path: Path, refresh_hours: int) -> bool:
    if not path.exists():
        return False
    age_seconds = (pd.Timestamp.now(tz="UTC") - pd.Timestamp(
        path.stat().st_mtime, unit="s", tz="UTC")).total_seconds()
    return age_seconds < refresh_hours * 3600


def prepare_airports(df: pd.DataFrame) -> pd.DataFrame:
    """
    Reduce an OurAirports frame to commercial airports with a valid IATA code.

    Output columns: iata, name, city, country_code.
    """
    # OurAirports schema: iata_code, name, municipality, iso_country, type, scheduled_service, etc.
    df = df[df["iata_code"].notna()].copy()
    df["iata_code"] = df["iata_code"].astype(str).str.upper().str.strip()
    df = df[df["iata_code"].str.len() == 3].copy()

    # Prefer scheduled_service == "yes" when available (keeps commercial airports)
    if "scheduled_service" in df.columns:
        df["scheduled_service"] = df["scheduled_service"].astype(
            str).str.lower().str.strip()
        df = df[df["scheduled_service"].isin(["yes"])].copy()

    out = pd.DataFrame({
        "iata": df["iata_code"],
        "name": df["name"].fillna("").astype(str),
        "city": df.get("municipality", pd.Series([""] * len(df), index=df.index)).fillna("").astype(str),
        "country_code": df.get("iso_country", pd.Series([""] * len(df), index=df.index)).fillna("").astype(str),
    })
    return out.drop_duplicates(subset=["iata"]).sort_values("iata").reset_index(drop=True)


@lru_cache(maxsize=4)
def _load_airports(csv_path: str, mtime: float) -> pd.DataFrame:
    logger.debug("Loading airports from %s", csv_path)
    return prepare_airports(pd.read_csv(csv_path))


def get_airports_df(force_refresh: bool = False, config: Optional[AirportsConfig] = None) -> pd.DataFrame:
    """
    Returns a dataframe with columns iata, name, city, country_code.
    Uses a local cached CSV and refreshes it periodically.
    """
    cfg = config or _default_config()
    cfg.cache_path.parent.mkdir(parents=True, exist_ok=True)

    if force_refresh or not _is_cache_fresh(cfg.cache_path, cfg.refresh_hours):
        logger.info("Refreshing airports dataset into %s", cfg.cache_path)
        cfg.cache_path.write_bytes(_download_csv(OURAIRPORTS_AIRPORTS_CSV_URL))

    return _load_airports(str(cfg.cache_path), cfg.cache_path.stat().st_mtime)


def search_airports_df(airports: pd.DataFrame, keyword: str, limit: int = DEFAULT_LIMIT) -> List[LocationOption]:
    """
    Match on IATA code, city or airport name. Exact code first, then code
    prefix, then city/name substring matches.
    """
    needle = (keyword or "").strip()
    if len(needle) < 2 or airports.empty:
        return []

    upper = needle.upper()
    lower = needle.lower()

    exact = airports["iata"] == upper
    prefix = airports["iata"].str.startswith(upper) & ~exact
    text = (
        airports["city"].str.lower().str.contains(lower, regex=False)
        | airports["name"].str.lower().str.contains(lower, regex=False)
    ) & ~exact & ~prefix

    ranked = pd.concat([airports[exact], airports[prefix], airports[text]]).head(limit)

    options = [
        LocationOption(
            iata=row.iata,
            name=row.name,
            city=row.city or row.name,
            country=row.country_code,
            country_code=row.country_code or None,
            sub_type="AIRPORT",
        )
        for row in ranked.itertuples(index=False)
    ]
    return [o for o in options if o.iata and o.city]


def search_airports(keyword: str, limit: int = DEFAULT_LIMIT) -> List[LocationOption]:
    return search_airports_df(get_airports_df(), keyword, limit)
