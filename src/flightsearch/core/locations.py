# src/flightsearch/core/locations.py

from __future__ import annotations

from typing import List

from flightsearch.core.models import LocationOption
from flightsearch.core.schemas import AmadeusLocation, LocationsResponse


def _to_option(item: AmadeusLocation) -> LocationOption:
    address = item.address
    city = address.cityName if address and address.cityName is not None else item.name
    country = address.countryName if address and address.countryName is not None else ""

    return LocationOption(
        iata=item.iataCode,
        name=item.name,
        city=city,
        country=country,
        country_code=address.countryCode if address else None,
        sub_type=item.subType,
    )


def normalize_locations(response: LocationsResponse) -> List[LocationOption]:
    """
    Map Amadeus location results to typeahead options.
    Entries without an IATA code or a city are dropped.
    """
    options = [_to_option(item) for item in response.data]
    return [o for o in options if o.iata and o.city]
