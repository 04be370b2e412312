import pytest

from flightsearch.core.models import SearchParams
from flightsearch.providers.amadeus_provider import AmadeusProvider, FLIGHT_OFFERS_PATH, LOCATIONS_PATH
from flightsearch.providers.base import ProviderError
from flightsearch.providers.mock_provider import MockProvider, generate_dummy_payload


class FakeClient:
    def __init__(self, payload):
        self.payload = payload
        self.calls = []

    def get(self, path, params):
        self.calls.append((path, params))
        return self.payload


ONE_WAY = SearchParams(origin="jfk", destination="lax", depart_date="2026-03-05")
ROUND_TRIP = SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05",
                          return_date="2026-03-10", trip_type="roundtrip")


def test_amadeus_search_builds_query_and_normalizes():
    client = FakeClient(generate_dummy_payload(ONE_WAY))
    provider = AmadeusProvider(client=client, max_results=50)

    result = provider.search(ONE_WAY)

    path, query = client.calls[0]
    assert path == FLIGHT_OFFERS_PATH
    assert query["originLocationCode"] == "JFK"
    assert query["max"] == "50"
    assert len(result.offers) == 4
    assert result.carriers["AA"] == "American Airlines"


def test_amadeus_search_rejects_invalid_params_without_calling():
    client = FakeClient({"data": []})
    provider = AmadeusProvider(client=client, max_results=50)

    with pytest.raises(ProviderError) as exc_info:
        provider.search(SearchParams(origin="J", destination="LAX", depart_date="2026-03-05"))

    assert exc_info.value.status_code == 400
    assert client.calls == []


def test_amadeus_search_rejects_unexpected_payload():
    provider = AmadeusProvider(client=FakeClient({"data": [{"id": "1"}]}), max_results=50)

    with pytest.raises(ProviderError) as exc_info:
        provider.search(ONE_WAY)

    assert exc_info.value.status_code == 502
    assert exc_info.value.issues


def test_amadeus_locations():
    client = FakeClient({"data": [
        {"iataCode": "LON", "name": "LONDON", "subType": "CITY",
         "address": {"cityName": "LONDON", "countryName": "UNITED KINGDOM", "countryCode": "GB"}},
        {"iataCode": "", "name": "BROKEN", "subType": "AIRPORT"},
    ]})
    provider = AmadeusProvider(client=client, max_results=50)

    options = provider.search_locations("  lon ")

    assert [o.iata for o in options] == ["LON"]
    path, query = client.calls[0]
    assert path == LOCATIONS_PATH
    assert query["keyword"] == "lon"
    assert query["subType"] == "AIRPORT,CITY"
    assert query["page[limit]"] == "12"


def test_amadeus_locations_short_keyword_skips_call():
    client = FakeClient({"data": []})
    assert AmadeusProvider(client=client, max_results=50).search_locations("l") == []
    assert client.calls == []


def test_mock_provider_one_way():
    result = MockProvider().search(ONE_WAY)

    assert [o.id for o in result.offers] == ["1", "2", "3", "4"]
    assert [o.stops_count for o in result.offers] == [0, 1, 2, 1]
    assert [o.price.total for o in result.offers] == [300.0, 285.0, 255.0, 265.0]
    assert result.offers[3].airlines == ("AA", "B6")
    assert result.offers[2].itineraries[0].duration_minutes == 540
    assert all(len(o.itineraries) == 1 for o in result.offers)


def test_mock_provider_round_trip_is_deterministic():
    first = MockProvider().search(ROUND_TRIP)
    second = MockProvider().search(ROUND_TRIP)

    assert first == second
    assert all(len(o.itineraries) == 2 for o in first.offers)
    assert first.offers[0].price.total == pytest.approx(540.0)
    assert first.offers[0].itineraries[1].segments[0].departure.iata_code == "LAX"


def test_mock_provider_bad_date():
    with pytest.raises(ProviderError):
        MockProvider().search(SearchParams(origin="JFK", destination="LAX", depart_date="soon"))


def test_mock_locations():
    options = MockProvider().search_locations("new")
    assert {o.iata for o in options} == {"JFK", "NYC"}
    assert MockProvider().search_locations("n") == []


def test_mock_locations_tolerate_missing_city():
    custom = [{"iataCode": "WAW", "name": "Chopin", "subType": "AIRPORT",
               "address": {"cityName": None, "countryName": "Poland"}}]

    options = MockProvider(locations=custom).search_locations("chop")

    assert [(o.iata, o.city, o.country) for o in options] == [("WAW", "Chopin", "Poland")]
    assert MockProvider(locations=custom).search_locations("warsaw") == []
