# src/flightsearch/core/scoring.py

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Union

from flightsearch.core.models import FlightOffer

# Tunable weights for the "best" ordering; kept at their historical values.
BEST_PRICE_WEIGHT = 0.65
BEST_DURATION_WEIGHT = 0.35


class SortOption(str, Enum):
    CHEAPEST = "cheapest"
    FASTEST = "fastest"
    BEST = "best"


def total_duration_minutes(offer: FlightOffer) -> int:
    return sum(it.duration_minutes for it in offer.itineraries)


def _best_scores(
    offers: Sequence[FlightOffer],
    price_weight: float,
    duration_weight: float,
) -> List[float]:
    """
    Price and total duration rescaled to [0, 1] over the current set, then
    blended. Lower is better. A flat range is treated as 1.
    """
    totals = [o.price.total for o in offers]
    durations = [total_duration_minutes(o) for o in offers]

    min_price, max_price = min(totals), max(totals)
    min_duration, max_duration = min(durations), max(durations)

    price_range = (max_price - min_price) or 1
    duration_range = (max_duration - min_duration) or 1

    return [
        price_weight * (price - min_price) / price_range
        + duration_weight * (duration - min_duration) / duration_range
        for price, duration in zip(totals, durations)
    ]


def sort_offers(
    offers: Sequence[FlightOffer],
    mode: Union[SortOption, str] = SortOption.CHEAPEST,
    *,
    price_weight: float = BEST_PRICE_WEIGHT,
    duration_weight: float = BEST_DURATION_WEIGHT,
) -> List[FlightOffer]:
    """
    Return a new list ordered by price, by total duration, or by the blended
    "best" score. The input sequence is never modified.
    """
    mode = SortOption(mode)

    if len(offers) <= 1:
        return list(offers)

    if mode is SortOption.CHEAPEST:
        return sorted(offers, key=lambda o: o.price.total)

    if mode is SortOption.FASTEST:
        return sorted(offers, key=total_duration_minutes)

    scores = _best_scores(offers, price_weight, duration_weight)
    order = sorted(range(len(offers)), key=lambda i: scores[i])
    return [offers[i] for i in order]


def pick_best_by_price(offers: Sequence[FlightOffer]) -> Optional[FlightOffer]:
    if not offers:
        return None
    return min(offers, key=lambda o: o.price.total)
