# src/flightsearch/core/filter_state.py

"""
Query-string encoding of FiltersState.

    stops=0,2&airlines=AA,DL&priceMin=150&priceMax=600

Params are any mutable string mapping (a plain dict works); writers return the
same mapping after updating it.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import List, Mapping, MutableMapping, Optional, Tuple

from flightsearch.core.models import FiltersState, PriceBounds

ALLOWED_STOPS = (0, 1, 2)

# Leading numeric prefix; trailing junk ("12.5USD", "1.5") is ignored.
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class ParsedFilterParams:
    stops: Tuple[int, ...] = ()
    airlines: Tuple[str, ...] = ()
    price_min: Optional[float] = None
    price_max: Optional[float] = None


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _parse_int(value: str) -> Optional[int]:
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return None
    parsed = float(match.group(1))
    return parsed if math.isfinite(parsed) else None


def parse_filter_params(params: Mapping[str, str]) -> ParsedFilterParams:
    stops: List[int] = []
    for raw in (params.get("stops") or "").split(","):
        value = _parse_int(raw)
        if value in ALLOWED_STOPS:
            stops.append(value)

    airlines = [
        code.strip().upper()
        for code in (params.get("airlines") or "").split(",")
        if code.strip()
    ]

    return ParsedFilterParams(
        stops=tuple(stops),
        airlines=tuple(airlines),
        price_min=_parse_float(params.get("priceMin")),
        price_max=_parse_float(params.get("priceMax")),
    )


def build_filters_from_params(params: Mapping[str, str], bounds: PriceBounds) -> FiltersState:
    """Decode filters, clamping the price range into the current bounds."""
    parsed = parse_filter_params(params)

    range_min = _clamp(
        parsed.price_min if parsed.price_min is not None else bounds.min,
        bounds.min, bounds.max)
    range_max = _clamp(
        parsed.price_max if parsed.price_max is not None else bounds.max,
        bounds.min, bounds.max)

    return FiltersState(
        stops=parsed.stops,
        airlines=parsed.airlines,
        price_range=(min(range_min, range_max), max(range_min, range_max)),
    )


def write_filters_to_params(
    params: MutableMapping[str, str],
    filters: FiltersState,
    bounds: PriceBounds,
) -> MutableMapping[str, str]:
    if filters.stops:
        params["stops"] = ",".join(str(s) for s in filters.stops)
    else:
        params.pop("stops", None)

    if filters.airlines:
        params["airlines"] = ",".join(filters.airlines)
    else:
        params.pop("airlines", None)

    min_price, max_price = filters.price_range
    if min_price > bounds.min:
        params["priceMin"] = str(_round_half_up(min_price))
    else:
        params.pop("priceMin", None)

    if max_price < bounds.max:
        params["priceMax"] = str(_round_half_up(max_price))
    else:
        params.pop("priceMax", None)

    return params
