# src/flightsearch/core/filters.py

from __future__ import annotations

import math
from typing import List, Sequence

from flightsearch.core.models import FiltersState, FlightOffer, PriceBounds


def get_price_bounds(offers: Sequence[FlightOffer]) -> PriceBounds:
    if not offers:
        return PriceBounds(min=0, max=0)

    totals = [o.price.total for o in offers]
    return PriceBounds(min=math.floor(min(totals)), max=math.ceil(max(totals)))


def _matches_stops(stops_count: int, buckets: frozenset) -> bool:
    return (
        (0 in buckets and stops_count == 0)
        or (1 in buckets and stops_count == 1)
        or (2 in buckets and stops_count >= 2)
    )


def apply_filters(offers: Sequence[FlightOffer], filters: FiltersState) -> List[FlightOffer]:
    """
    Keep offers that match every active criterion (stops bucket, airline
    allow-list, inclusive price range). Input order is preserved.
    """
    stops = frozenset(filters.stops)
    airlines = frozenset(filters.airlines)
    min_price, max_price = filters.price_range

    def passes(offer: FlightOffer) -> bool:
        if stops and not _matches_stops(offer.stops_count, stops):
            return False
        if airlines and not any(code in airlines for code in offer.airlines):
            return False
        return min_price <= offer.price.total <= max_price

    return [o for o in offers if passes(o)]
