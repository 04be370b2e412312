# src/flightsearch/core/schemas.py

"""
Raw Amadeus response shapes and the validation stage in front of the core.

Normalizers only ever see models that passed through one of the validate_*
functions below; anything structurally wrong is reported as an Err with
field-level issues instead of reaching the core.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Literal, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError


class _AmadeusModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class AmadeusToken(_AmadeusModel):
    access_token: str
    expires_in: int
    token_type: Optional[str] = None


class AmadeusEndpoint(_AmadeusModel):
    iataCode: str
    at: str


class AmadeusSegment(_AmadeusModel):
    id: Optional[str] = None
    carrierCode: str
    number: str
    departure: AmadeusEndpoint
    arrival: AmadeusEndpoint
    duration: str
    numberOfStops: Optional[int] = None


class AmadeusItinerary(_AmadeusModel):
    duration: str
    segments: List[AmadeusSegment]


class AmadeusPrice(_AmadeusModel):
    total: str
    currency: str


class AmadeusOffer(_AmadeusModel):
    id: str
    price: AmadeusPrice
    itineraries: List[AmadeusItinerary]
    validatingAirlineCodes: Optional[List[str]] = None


class AmadeusDictionaries(_AmadeusModel):
    carriers: Optional[Dict[str, str]] = None


class FlightOffersResponse(_AmadeusModel):
    data: List[AmadeusOffer]
    dictionaries: Optional[AmadeusDictionaries] = None


class AmadeusAddress(_AmadeusModel):
    cityName: Optional[str] = None
    countryName: Optional[str] = None
    countryCode: Optional[str] = None


class AmadeusLocation(_AmadeusModel):
    iataCode: str
    name: str
    subType: Literal["AIRPORT", "CITY"]
    address: Optional[AmadeusAddress] = None


class LocationsResponse(_AmadeusModel):
    data: List[AmadeusLocation]


# -----------------------------------------------------------------------------
# Tagged validation result
# -----------------------------------------------------------------------------

T = TypeVar("T")


@dataclass(frozen=True)
class FieldIssue:
    loc: str  # dotted path, e.g. "data.0.price.total"
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    issues: Tuple[FieldIssue, ...]

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[Ok[T], Err]

M = TypeVar("M", bound=BaseModel)


def _issues_from(exc: ValidationError) -> Tuple[FieldIssue, ...]:
    return tuple(
        FieldIssue(
            loc=".".join(str(part) for part in err.get("loc", ())),
            message=str(err.get("msg", "")),
        )
        for err in exc.errors()
    )


def _validate(model: Type[M], payload: Any) -> ValidationResult[M]:
    try:
        return Ok(model.model_validate(payload))
    except ValidationError as exc:
        return Err(_issues_from(exc))


def validate_flight_offers_response(payload: Any) -> ValidationResult[FlightOffersResponse]:
    return _validate(FlightOffersResponse, payload)


def validate_locations_response(payload: Any) -> ValidationResult[LocationsResponse]:
    return _validate(LocationsResponse, payload)


def validate_token_response(payload: Any) -> ValidationResult[AmadeusToken]:
    return _validate(AmadeusToken, payload)
