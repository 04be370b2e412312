# src/flightsearch/core/search_state.py

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from flightsearch.core.models import CABIN_CLASSES, TRIP_ONEWAY, TRIP_ROUNDTRIP, SearchParams

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_adults(value: Any) -> int:
    try:
        adults = int(str(value).strip())
    except (TypeError, ValueError):
        return 1
    return adults if adults > 0 else 1


def parse_search_params(params: Mapping[str, str]) -> SearchParams:
    """Decode the search form from query params. A return date implies a round trip."""
    return_date = params.get("returnDate") or ""
    cabin = params.get("cabin") or ""

    if return_date or params.get("trip") == "rt":
        trip_type = TRIP_ROUNDTRIP
    else:
        trip_type = TRIP_ONEWAY

    return SearchParams(
        origin=params.get("origin") or "",
        destination=params.get("destination") or "",
        depart_date=params.get("departDate") or "",
        return_date=return_date,
        adults=_parse_adults(params.get("adults", "1")),
        cabin=cabin if cabin in CABIN_CLASSES else "",
        trip_type=trip_type,
    )


def build_search_params(state: SearchParams) -> Dict[str, str]:
    params: Dict[str, str] = {}

    if state.origin:
        params["origin"] = state.origin
    if state.destination:
        params["destination"] = state.destination
    if state.depart_date:
        params["departDate"] = state.depart_date
    if state.trip_type == TRIP_ROUNDTRIP and state.return_date:
        params["returnDate"] = state.return_date
    params["adults"] = str(state.adults)
    if state.cabin:
        params["cabin"] = state.cabin
    params["trip"] = "rt" if state.trip_type == TRIP_ROUNDTRIP else "ow"

    return params


def search_key(state: SearchParams) -> str:
    """Stable cache key for a search."""
    return "|".join([
        state.origin,
        state.destination,
        state.depart_date,
        state.return_date,
        str(state.adults),
        state.cabin,
        state.trip_type,
    ])


def is_search_ready(state: SearchParams) -> bool:
    if not state.origin or not state.destination or not state.depart_date:
        return False
    if state.trip_type == TRIP_ROUNDTRIP and not state.return_date:
        return False
    return True


def effective_return_date(state: SearchParams) -> str:
    """Return date that applies to this search ("" for one-way trips)."""
    return state.return_date if state.trip_type == TRIP_ROUNDTRIP else ""


def validate_search(state: SearchParams) -> Dict[str, str]:
    """
    Field -> message for anything the flight-offers endpoint would reject.
    Empty dict means the search can be sent.
    """
    issues: Dict[str, str] = {}
    if len(state.origin.strip()) != 3:
        issues["origin"] = "Origin must be a 3-letter IATA code"
    if len(state.destination.strip()) != 3:
        issues["destination"] = "Destination must be a 3-letter IATA code"
    if not _DATE_RE.match(state.depart_date):
        issues["departDate"] = "Depart date must be YYYY-MM-DD"
    ret = effective_return_date(state)
    if ret and not _DATE_RE.match(ret):
        issues["returnDate"] = "Return date must be YYYY-MM-DD"
    if not 1 <= state.adults <= 9:
        issues["adults"] = "Adults must be between 1 and 9"
    if state.cabin and state.cabin not in CABIN_CLASSES:
        issues["cabin"] = "Unknown cabin class"
    return issues


def build_flight_offers_query(state: SearchParams, max_results: int = 50) -> Dict[str, Any]:
    """Amadeus /v2/shopping/flight-offers query for a validated search."""
    query: Dict[str, Any] = {
        "originLocationCode": state.origin.strip().upper(),
        "destinationLocationCode": state.destination.strip().upper(),
        "departureDate": state.depart_date,
        "adults": str(state.adults),
        "max": str(max_results),
    }

    ret = effective_return_date(state)
    if ret:
        query["returnDate"] = ret
    if state.cabin:
        query["travelClass"] = state.cabin

    return query
