from typing import Sequence

import pytest

from flightsearch.core.models import (
    FlightItinerary,
    FlightOffer,
    FlightSegment,
    Price,
    SegmentEndpoint,
)


def _segment(offer_id: str, index: int, carrier: str) -> FlightSegment:
    return FlightSegment(
        id=f"{offer_id}-{index}-{carrier}",
        carrier_code=carrier,
        number=str(100 + index),
        departure=SegmentEndpoint(iata_code="AAA", at="2026-03-05T08:00:00"),
        arrival=SegmentEndpoint(iata_code="BBB", at="2026-03-05T10:00:00"),
        duration_minutes=120,
    )


def build_offer(
    offer_id: str,
    price: float,
    stops: int = 0,
    airlines: Sequence[str] = ("AA",),
    durations: Sequence[int] = (300,),
    currency: str = "USD",
) -> FlightOffer:
    itineraries = tuple(
        FlightItinerary(
            duration_minutes=minutes,
            segments=tuple(_segment(offer_id, i, airlines[0]) for i in range(stops + 1)),
        )
        for minutes in durations
    )
    return FlightOffer(
        id=offer_id,
        price=Price(total=price, currency=currency),
        itineraries=itineraries,
        stops_count=stops,
        airlines=tuple(sorted(set(airlines))),
    )


@pytest.fixture
def make_offer():
    return build_offer


@pytest.fixture
def three_offers():
    return [
        build_offer("A", 200, stops=0, airlines=["AA"]),
        build_offer("B", 400, stops=1, airlines=["DL"]),
        build_offer("C", 600, stops=2, airlines=["UA"]),
    ]
