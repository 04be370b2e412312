# src/flightsearch/providers/amadeus_provider.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from flightsearch.config import get_settings
from flightsearch.core.locations import normalize_locations
from flightsearch.core.models import FlightOffersResult, LocationOption, SearchParams
from flightsearch.core.normalizer import normalize_flight_offers
from flightsearch.core.schemas import (
    validate_flight_offers_response,
    validate_locations_response,
)
from flightsearch.core.search_state import build_flight_offers_query, validate_search
from flightsearch.providers.base import FlightSearchProvider, ProviderError
from flightsearch.services.amadeus_client import AmadeusClient

logger = logging.getLogger(__name__)

FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"
LOCATIONS_PATH = "/v1/reference-data/locations"

MIN_KEYWORD_LENGTH = 2
LOCATIONS_PAGE_LIMIT = 12


def build_locations_query(keyword: str) -> Dict[str, Any]:
    return {
        "keyword": keyword,
        "subType": "AIRPORT,CITY",
        "view": "LIGHT",
        "page[limit]": str(LOCATIONS_PAGE_LIMIT),
    }


class AmadeusProvider(FlightSearchProvider):
    """
    Live provider (Amadeus Self-Service Flight Offers Search + Airport & City Search).
    """

    def __init__(self, client: Optional[AmadeusClient] = None, max_results: Optional[int] = None):
        self.client = client or AmadeusClient()
        self.max_results = max_results or get_settings().max_results

    def search(self, params: SearchParams) -> FlightOffersResult:
        issues = validate_search(params)
        if issues:
            raise ProviderError("Invalid search parameters",
                                status_code=400, issues=sorted(issues.items()))

        query = build_flight_offers_query(params, self.max_results)
        payload = self.client.get(FLIGHT_OFFERS_PATH, query)

        parsed = validate_flight_offers_response(payload)
        if not parsed.ok:
            logger.warning("Flight offers response failed validation (%d issues)",
                           len(parsed.issues))
            raise ProviderError("Unexpected response from Amadeus",
                                status_code=502, issues=list(parsed.issues))

        result = normalize_flight_offers(parsed.value)
        logger.info("Amadeus returned %d offers for %s -> %s",
                    len(result.offers), query["originLocationCode"],
                    query["destinationLocationCode"])
        return result

    def search_locations(self, keyword: str) -> List[LocationOption]:
        trimmed = (keyword or "").strip()
        if len(trimmed) < MIN_KEYWORD_LENGTH:
            return []

        payload = self.client.get(LOCATIONS_PATH, build_locations_query(trimmed))

        parsed = validate_locations_response(payload)
        if not parsed.ok:
            logger.warning("Locations response failed validation (%d issues)",
                           len(parsed.issues))
            raise ProviderError("Unexpected response from Amadeus",
                                status_code=502, issues=list(parsed.issues))

        return normalize_locations(parsed.value)
