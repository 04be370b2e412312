# src/flightsearch/core/normalizer.py

from __future__ import annotations

import logging
import math
import re
from typing import Dict, Iterable, List, Optional, Tuple

from flightsearch.core.durations import parse_iso_duration_to_minutes
from flightsearch.core.models import (
    FlightItinerary,
    FlightOffer,
    FlightOffersResult,
    FlightSegment,
    Price,
    SegmentEndpoint,
)
from flightsearch.core.schemas import AmadeusItinerary, AmadeusOffer, FlightOffersResponse

logger = logging.getLogger(__name__)

_DECIMAL_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_price_total(value: Optional[str]) -> float:
    """Leading decimal of the string -> float; anything unparsable (or negative) becomes 0."""
    match = _DECIMAL_PREFIX.match("" if value is None else str(value))
    if not match:
        return 0.0
    parsed = float(match.group(1))
    if not math.isfinite(parsed) or parsed < 0:
        return 0.0
    return parsed


def _build_itinerary(offer_id: str, itinerary: AmadeusItinerary) -> FlightItinerary:
    segs: List[FlightSegment] = []
    for index, seg in enumerate(itinerary.segments):
        segs.append(
            FlightSegment(
                id=seg.id or f"{offer_id}-{index}-{seg.carrierCode}",
                carrier_code=seg.carrierCode,
                number=seg.number,
                departure=SegmentEndpoint(
                    iata_code=seg.departure.iataCode, at=seg.departure.at),
                arrival=SegmentEndpoint(
                    iata_code=seg.arrival.iataCode, at=seg.arrival.at),
                duration_minutes=parse_iso_duration_to_minutes(seg.duration),
                stops=seg.numberOfStops or 0,
            )
        )

    return FlightItinerary(
        duration_minutes=parse_iso_duration_to_minutes(itinerary.duration),
        segments=tuple(segs),
    )


def count_stops(itineraries: Iterable[FlightItinerary]) -> int:
    """
    Headline stop count: the itinerary with the most connections wins.
    """
    return max((max(0, len(it.segments) - 1) for it in itineraries), default=0)


def collect_airlines(
    itineraries: Iterable[FlightItinerary],
    validating_codes: Optional[Iterable[str]] = None,
) -> Tuple[str, ...]:
    codes = set(validating_codes or ())
    for it in itineraries:
        codes.update(seg.carrier_code for seg in it.segments)
    return tuple(sorted(codes))


def normalize_offer(offer_raw: AmadeusOffer) -> FlightOffer:
    itineraries = tuple(_build_itinerary(offer_raw.id, it)
                        for it in offer_raw.itineraries)

    return FlightOffer(
        id=offer_raw.id,
        price=Price(
            total=_to_price_total(offer_raw.price.total),
            currency=offer_raw.price.currency,
        ),
        itineraries=itineraries,
        stops_count=count_stops(itineraries),
        airlines=collect_airlines(itineraries, offer_raw.validatingAirlineCodes),
    )


def normalize_flight_offers(response: FlightOffersResponse) -> FlightOffersResult:
    """
    Convert a validated Amadeus flight-offers response into canonical offers
    plus the carrier code -> name dictionary.
    """
    carriers: Dict[str, str] = {}
    if response.dictionaries and response.dictionaries.carriers:
        carriers = dict(response.dictionaries.carriers)

    offers = tuple(normalize_offer(o) for o in response.data)
    logger.debug("Normalized %d offers (%d carriers)",
                 len(offers), len(carriers))
    return FlightOffersResult(offers=offers, carriers=carriers)
