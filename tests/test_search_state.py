from flightsearch.core.models import SearchParams
from flightsearch.core.search_state import (
    build_flight_offers_query,
    build_search_params,
    is_search_ready,
    parse_search_params,
    search_key,
    validate_search,
)


def test_parse_defaults():
    state = parse_search_params({})
    assert state == SearchParams()
    assert state.adults == 1
    assert state.trip_type == "oneway"


def test_return_date_implies_round_trip_and_bad_values_are_dropped():
    state = parse_search_params({
        "origin": "JFK", "destination": "LAX", "departDate": "2026-03-05",
        "returnDate": "2026-03-10", "adults": "0", "cabin": "LUXURY",
    })
    assert state.trip_type == "roundtrip"
    assert state.adults == 1
    assert state.cabin == ""

    assert parse_search_params({"trip": "rt"}).trip_type == "roundtrip"
    assert parse_search_params({"adults": "3", "cabin": "BUSINESS"}).cabin == "BUSINESS"


def test_build_round_trips_through_parse():
    state = SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05",
                         return_date="2026-03-10", adults=2, cabin="ECONOMY", trip_type="roundtrip")
    params = build_search_params(state)
    assert params["trip"] == "rt"
    assert parse_search_params(params) == state


def test_one_way_does_not_write_return_date():
    state = SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05",
                         return_date="2026-03-10", trip_type="oneway")
    params = build_search_params(state)
    assert "returnDate" not in params
    assert params["trip"] == "ow"


def test_search_ready_gating():
    assert not is_search_ready(SearchParams(origin="JFK", destination="LAX"))
    assert is_search_ready(SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05"))
    assert not is_search_ready(SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05",
                                            trip_type="roundtrip"))


def test_search_key_is_stable():
    a = SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05")
    assert search_key(a) == search_key(SearchParams(**a.__dict__))
    assert search_key(a) != search_key(SearchParams(origin="JFK", destination="SFO", depart_date="2026-03-05"))


def test_validate_search_reports_fields():
    issues = validate_search(SearchParams(origin="JF", destination="LAX", depart_date="05/03/2026", adults=12))
    assert set(issues) == {"origin", "departDate", "adults"}
    assert validate_search(SearchParams(origin="jfk", destination="lax", depart_date="2026-03-05")) == {}


def test_flight_offers_query():
    state = SearchParams(origin="jfk", destination=" lax", depart_date="2026-03-05",
                         return_date="2026-03-10", adults=2, cabin="FIRST", trip_type="roundtrip")
    assert build_flight_offers_query(state, max_results=50) == {
        "originLocationCode": "JFK",
        "destinationLocationCode": "LAX",
        "departureDate": "2026-03-05",
        "returnDate": "2026-03-10",
        "adults": "2",
        "max": "50",
        "travelClass": "FIRST",
    }

    one_way = SearchParams(origin="JFK", destination="LAX", depart_date="2026-03-05", return_date="2026-03-10")
    assert "returnDate" not in build_flight_offers_query(one_way)
