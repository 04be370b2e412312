# src/flightsearch/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple

CABIN_CLASSES: Tuple[str, ...] = ("ECONOMY", "PREMIUM_ECONOMY", "BUSINESS", "FIRST")

TRIP_ONEWAY = "oneway"
TRIP_ROUNDTRIP = "roundtrip"


@dataclass(frozen=True)
class SearchParams:
    origin: str = ""
    destination: str = ""
    depart_date: str = ""  # YYYY-MM-DD, "" when unset
    return_date: str = ""
    adults: int = 1
    cabin: str = ""  # one of CABIN_CLASSES or ""
    trip_type: str = TRIP_ONEWAY  # "oneway" | "roundtrip"


@dataclass(frozen=True)
class SegmentEndpoint:
    iata_code: str
    at: str  # timestamp string, carried verbatim from the source


@dataclass(frozen=True)
class FlightSegment:
    """A single flown leg."""

    id: str
    carrier_code: str  # e.g. "AA"
    number: str  # e.g. "1234"
    departure: SegmentEndpoint
    arrival: SegmentEndpoint
    duration_minutes: int = 0
    stops: int = 0


@dataclass(frozen=True)
class FlightItinerary:
    """One direction of travel.

    duration_minutes comes from the itinerary's own duration field and includes
    layovers, so it is not the sum of segment durations.
    """

    duration_minutes: int = 0
    segments: Tuple[FlightSegment, ...] = ()


@dataclass(frozen=True)
class Price:
    total: float
    currency: str


@dataclass(frozen=True)
class FlightOffer:
    """Canonical offer representation used throughout the system."""

    id: str
    price: Price
    itineraries: Tuple[FlightItinerary, ...] = ()
    stops_count: int = 0
    airlines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class FlightOffersResult:
    offers: Tuple[FlightOffer, ...] = ()
    carriers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class LocationOption:
    iata: str
    name: str
    city: str
    country: str
    sub_type: str  # "AIRPORT" | "CITY"
    country_code: Optional[str] = None


@dataclass(frozen=True)
class PriceBounds:
    min: float = 0
    max: float = 0


@dataclass(frozen=True)
class FiltersState:
    stops: Tuple[int, ...] = ()  # 0, 1, 2 where 2 means "2 or more"
    airlines: Tuple[str, ...] = ()
    price_range: Tuple[float, float] = (0.0, 0.0)


@dataclass(frozen=True)
class TrendDatum:
    """One chart point. A leg with no data point on this date is None, not 0."""

    date: date
    label: str
    outbound: Optional[int] = None
    return_price: Optional[int] = None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "label": self.label,
            "outbound": self.outbound,
            "return": self.return_price,
        }
