# src/flightsearch/providers/mock_provider.py

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from flightsearch.core.durations import minutes_to_iso_duration
from flightsearch.core.locations import normalize_locations
from flightsearch.core.models import FlightOffersResult, LocationOption, SearchParams
from flightsearch.core.normalizer import normalize_flight_offers
from flightsearch.core.schemas import (
    validate_flight_offers_response,
    validate_locations_response,
)
from flightsearch.core.search_state import effective_return_date
from flightsearch.providers.base import FlightSearchProvider, ProviderError

MOCK_CARRIERS = {
    "AA": "American Airlines",
    "DL": "Delta Air Lines",
    "UA": "United Airlines",
    "B6": "JetBlue Airways",
}

MOCK_LOCATIONS: List[Dict[str, Any]] = [
    {"iataCode": "JFK", "name": "John F Kennedy Intl", "subType": "AIRPORT",
     "address": {"cityName": "New York", "countryName": "United States", "countryCode": "US"}},
    {"iataCode": "NYC", "name": "New York", "subType": "CITY",
     "address": {"cityName": "New York", "countryName": "United States", "countryCode": "US"}},
    {"iataCode": "LAX", "name": "Los Angeles Intl", "subType": "AIRPORT",
     "address": {"cityName": "Los Angeles", "countryName": "United States", "countryCode": "US"}},
    {"iataCode": "SJU", "name": "Luis Munoz Marin Intl", "subType": "AIRPORT",
     "address": {"cityName": "San Juan", "countryName": "Puerto Rico", "countryCode": "PR"}},
    {"iataCode": "MIA", "name": "Miami Intl", "subType": "AIRPORT",
     "address": {"cityName": "Miami", "countryName": "United States", "countryCode": "US"}},
]

# (carrier per leg, connection hubs, leg minutes, layover minutes, price delta)
_TEMPLATES: List[Tuple[List[str], List[str], int, int, float]] = [
    (["AA"], [], 330, 0, 0.0),
    (["DL", "DL"], ["ATL"], 200, 75, -15.0),
    (["UA", "UA", "UA"], ["ORD", "DEN"], 140, 60, -45.0),
    (["B6", "AA"], ["BOS"], 190, 95, -35.0),
]


def _parse_day(value: str) -> date:
    return date.fromisoformat(value)


def _fmt(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%dT%H:%M:%S")


def _build_itinerary(
    offer_id: str,
    origin: str,
    destination: str,
    day: date,
    carriers: List[str],
    hubs: List[str],
    leg_minutes: int,
    layover_minutes: int,
) -> Dict[str, Any]:
    stops = [origin] + hubs + [destination]
    at = datetime.combine(day, datetime.min.time()) + timedelta(hours=8)

    segments: List[Dict[str, Any]] = []
    for i, carrier in enumerate(carriers):
        arrive = at + timedelta(minutes=leg_minutes)
        segments.append({
            "id": f"{offer_id}-{len(segments) + 1}",
            "carrierCode": carrier,
            "number": str(100 + 37 * (i + 1) + len(offer_id)),
            "departure": {"iataCode": stops[i], "at": _fmt(at)},
            "arrival": {"iataCode": stops[i + 1], "at": _fmt(arrive)},
            "duration": minutes_to_iso_duration(leg_minutes),
            "numberOfStops": 0,
        })
        at = arrive + timedelta(minutes=layover_minutes)

    total = leg_minutes * len(carriers) + layover_minutes * (len(carriers) - 1)
    return {"duration": minutes_to_iso_duration(total), "segments": segments}


def generate_dummy_payload(params: SearchParams, base_price: float = 300.0) -> Dict[str, Any]:
    """
    Deterministic flight-offers payload shaped like the Amadeus response.

    Four fixed itineraries per search (nonstop, 1 stop, 2 stops, mixed carriers);
    round trips mirror the outbound routing on the return date.
    """
    origin = params.origin.strip().upper()
    destination = params.destination.strip().upper()
    depart = _parse_day(params.depart_date)
    ret_str = effective_return_date(params)
    ret = _parse_day(ret_str) if ret_str else None

    data: List[Dict[str, Any]] = []
    for idx, (carriers, hubs, leg_minutes, layover, delta) in enumerate(_TEMPLATES, start=1):
        offer_id = str(idx)
        itineraries = [
            _build_itinerary(offer_id, origin, destination, depart,
                             carriers, hubs, leg_minutes, layover)
        ]
        price = base_price + delta
        if ret is not None:
            itineraries.append(
                _build_itinerary(offer_id + "R", destination, origin, ret,
                                 list(reversed(carriers)), list(reversed(hubs)),
                                 leg_minutes, layover)
            )
            price *= 1.8

        data.append({
            "id": offer_id,
            "price": {"total": f"{price * params.adults:.2f}", "currency": "USD"},
            "itineraries": itineraries,
            "validatingAirlineCodes": [carriers[0]],
        })

    used = {c for carriers, *_ in _TEMPLATES for c in carriers}
    return {
        "data": data,
        "dictionaries": {"carriers": {c: n for c, n in MOCK_CARRIERS.items() if c in used}},
    }


class MockProvider(FlightSearchProvider):
    """
    Deterministic offline provider for dev/testing.
    Payloads go through the same validation and normalization as live ones.
    """

    def __init__(self, base_price: float = 300.0, locations: Optional[List[Dict[str, Any]]] = None):
        self.base_price = base_price
        self.locations = MOCK_LOCATIONS if locations is None else locations

    def search(self, params: SearchParams) -> FlightOffersResult:
        try:
            payload = generate_dummy_payload(params, self.base_price)
        except ValueError as exc:
            raise ProviderError(f"Invalid search parameters: {exc}", status_code=400) from exc

        parsed = validate_flight_offers_response(payload)
        if not parsed.ok:
            raise ProviderError("Invalid mock payload", issues=list(parsed.issues))
        return normalize_flight_offers(parsed.value)

    def search_locations(self, keyword: str) -> List[LocationOption]:
        needle = (keyword or "").strip().lower()
        if len(needle) < 2:
            return []

        matches = [
            loc for loc in self.locations
            if needle in loc["iataCode"].lower()
            or needle in loc["name"].lower()
            or needle in ((loc.get("address") or {}).get("cityName") or "").lower()
        ]
        parsed = validate_locations_response({"data": matches})
        if not parsed.ok:
            raise ProviderError("Invalid mock locations", issues=list(parsed.issues))
        return normalize_locations(parsed.value)
