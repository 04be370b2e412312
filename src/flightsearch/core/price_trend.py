# src/flightsearch/core/price_trend.py

"""
Synthetic price trend around the requested travel dates.

This is a visual approximation derived from the offers already on screen, not a
pricing feed: no network calls, no clock, no real randomness. Identical inputs
always give identical output.

For each leg (outbound, and return on round trips) a 7-day window centred on
the anchor date is generated:

    price(d) = round((base + spread * |i - c| / c) * (1 + band * seeded_variance(key)))

where c is the centre index, spread = max(25, base * 0.12) and key is
"<date>-<leg>".
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from flightsearch.core.models import FlightOffer, TrendDatum

# Tunable parameters; kept at their historical values.
WINDOW_DAYS = 3
OUTBOUND_SHARE = 0.55
RETURN_SHARE = 0.45
VARIANCE_BAND = 0.04
MIN_SPREAD = 25.0
SPREAD_RATIO = 0.12

_HASH_MODULUS = 997
_VARIANCE_STEPS = 9  # -4..+4

LEG_OUTBOUND = "outbound"
LEG_RETURN = "return"

DateLike = Union[date, str, None]


def _hash_seed(value: str) -> int:
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) % _HASH_MODULUS
    return h


def seeded_variance(key: str) -> float:
    """Stable pseudo-random value in [-1, 1] derived from key."""
    half = _VARIANCE_STEPS // 2
    return ((_hash_seed(key) % _VARIANCE_STEPS) - half) / half


def _to_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def format_label(day: date) -> str:
    """'Mar 5'"""
    return f"{day:%b} {day.day}"


def build_window(anchor: date, window_days: int = WINDOW_DAYS) -> List[date]:
    return [anchor + timedelta(days=offset)
            for offset in range(-window_days, window_days + 1)]


def compute_series(dates: Sequence[date], base_price: float, leg: str) -> Dict[date, int]:
    center = len(dates) // 2
    spread = max(MIN_SPREAD, base_price * SPREAD_RATIO)

    series: Dict[date, int] = {}
    for index, day in enumerate(dates):
        distance = abs(index - center)
        variance = VARIANCE_BAND * seeded_variance(f"{day.isoformat()}-{leg}")
        trend = base_price + spread * (distance / max(1, center))
        # half-up rounding
        series[day] = math.floor(trend * (1 + variance) + 0.5)
    return series


def build_price_trend(
    offers: Sequence[FlightOffer],
    depart_date: DateLike,
    return_date: DateLike = None,
) -> List[TrendDatum]:
    """
    Build the chart series for the given (filtered) offers.

    Returns [] when there is no usable depart date or no offers. Dates that fall
    in only one leg's window carry None for the other leg.
    """
    depart = _to_date(depart_date)
    if depart is None or not offers:
        return []

    round_trip = bool(return_date)
    min_price = min(o.price.total for o in offers)
    base_outbound = min_price * OUTBOUND_SHARE if round_trip else min_price
    base_return = min_price * RETURN_SHARE

    outbound_dates = build_window(depart)
    outbound_series = compute_series(outbound_dates, base_outbound, LEG_OUTBOUND)

    return_series: Dict[date, int] = {}
    if round_trip:
        ret = _to_date(return_date)
        if ret is not None:
            return_series = compute_series(build_window(ret), base_return, LEG_RETURN)

    all_dates = sorted(set(outbound_series) | set(return_series))
    return [
        TrendDatum(
            date=day,
            label=format_label(day),
            outbound=outbound_series.get(day),
            return_price=return_series.get(day),
        )
        for day in all_dates
    ]


def trend_to_frame(trend: Sequence[TrendDatum]) -> pd.DataFrame:
    """Chart-ready table indexed by date; missing leg values are NaN."""
    df = pd.DataFrame(
        [t.as_dict() for t in trend],
        columns=["date", "label", "outbound", "return"],
    )
    df["date"] = pd.to_datetime(df["date"])
    df["outbound"] = pd.to_numeric(df["outbound"])
    df["return"] = pd.to_numeric(df["return"])
    return df.set_index("date")
