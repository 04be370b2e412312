# src/flightsearch/engine.py

"""
Results pipeline used by whatever front end sits on top of the core.

    offers -> price bounds -> filters (from query params) -> filtered
           -> sorted (for the list)
           -> price trend (from the filtered, unsorted set)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence, Tuple, Union

import requests

from flightsearch.airports_service import search_airports
from flightsearch.core.filter_state import build_filters_from_params
from flightsearch.core.filters import apply_filters, get_price_bounds
from flightsearch.core.models import (
    FiltersState,
    FlightOffer,
    FlightOffersResult,
    LocationOption,
    PriceBounds,
    SearchParams,
    TrendDatum,
)
from flightsearch.core.price_trend import build_price_trend
from flightsearch.core.scoring import SortOption, pick_best_by_price, sort_offers
from flightsearch.core.search_state import effective_return_date
from flightsearch.providers.base import FlightSearchProvider, ProviderError
from flightsearch.services.amadeus_client import AmadeusError

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class AirlineOption:
    code: str
    name: str


@dataclass(frozen=True)
class ResultsView:
    price_bounds: PriceBounds
    filters: FiltersState
    offers: Tuple[FlightOffer, ...]  # filtered and sorted
    trend: Tuple[TrendDatum, ...]
    airline_options: Tuple[AirlineOption, ...]
    currency: str
    total_count: int
    cheapest: Optional[FlightOffer] = None


def airline_options(offers: Sequence[FlightOffer], carriers: Mapping[str, str]) -> List[AirlineOption]:
    """Every carrier seen in the (unfiltered) offers, by code, with display names."""
    codes = sorted({code for o in offers for code in o.airlines})
    return [AirlineOption(code=c, name=carriers.get(c, c)) for c in codes]


def build_results_view(
    result: FlightOffersResult,
    search: SearchParams,
    query_params: Optional[Mapping[str, str]] = None,
    sort: Union[SortOption, str] = SortOption.CHEAPEST,
) -> ResultsView:
    offers = list(result.offers)

    bounds = get_price_bounds(offers)
    filters = build_filters_from_params(query_params or {}, bounds)
    filtered = apply_filters(offers, filters)
    sorted_offers = sort_offers(filtered, sort)
    trend = build_price_trend(filtered, search.depart_date,
                              effective_return_date(search) or None)

    currency = offers[0].price.currency if offers else DEFAULT_CURRENCY

    logger.debug("Results view: %d/%d offers after filters, sort=%s",
                 len(filtered), len(offers), SortOption(sort).value)

    return ResultsView(
        price_bounds=bounds,
        filters=filters,
        offers=tuple(sorted_offers),
        trend=tuple(trend),
        airline_options=tuple(airline_options(offers, result.carriers)),
        currency=currency,
        total_count=len(offers),
        cheapest=pick_best_by_price(filtered),
    )


def search_locations(provider: FlightSearchProvider, keyword: str) -> List[LocationOption]:
    """
    Typeahead lookup: provider first, local airport dataset when the provider
    fails or has nothing.
    """
    trimmed = (keyword or "").strip()
    if len(trimmed) < 2:
        return []

    try:
        options = provider.search_locations(trimmed)
        if options:
            return options
    except (AmadeusError, ProviderError, requests.RequestException) as exc:
        logger.warning("Location lookup failed for %r, using local airports: %s", trimmed, exc)

    try:
        return search_airports(trimmed)
    except (requests.RequestException, OSError) as exc:
        logger.warning("Local airport lookup unavailable: %s", exc)
        return []

