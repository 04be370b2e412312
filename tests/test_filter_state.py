from flightsearch.core.filter_state import (
    build_filters_from_params,
    parse_filter_params,
    write_filters_to_params,
)
from flightsearch.core.models import FiltersState, PriceBounds

BOUNDS = PriceBounds(min=100, max=500)


def test_parse_keeps_known_stop_buckets_and_normalizes_airlines():
    parsed = parse_filter_params({"stops": "0,2,5,x,", "airlines": " aa, ,dl", "priceMin": "abc",
                                  "priceMax": "inf"})

    assert parsed.stops == (0, 2)
    assert parsed.airlines == ("AA", "DL")
    assert parsed.price_min is None
    assert parsed.price_max is None


def test_defaults_to_full_bounds():
    filters = build_filters_from_params({}, BOUNDS)
    assert filters == FiltersState(stops=(), airlines=(), price_range=(100, 500))


def test_price_range_is_clamped_and_ordered():
    clamped = build_filters_from_params({"priceMin": "50", "priceMax": "900"}, BOUNDS)
    assert clamped.price_range == (100, 500)

    swapped = build_filters_from_params({"priceMin": "450", "priceMax": "200"}, BOUNDS)
    assert swapped.price_range == (200, 450)


def test_write_only_non_default_values():
    params = {"origin": "JFK", "stops": "1", "priceMin": "300"}
    filters = FiltersState(stops=(), airlines=("AA", "DL"), price_range=(100, 349.6))

    out = write_filters_to_params(params, filters, BOUNDS)

    assert out is params
    assert out == {"origin": "JFK", "airlines": "AA,DL", "priceMax": "350"}


def test_write_then_read_preserves_filters():
    filters = FiltersState(stops=(0, 1), airlines=("UA",), price_range=(150, 400))
    params = write_filters_to_params({}, filters, BOUNDS)
    assert build_filters_from_params(params, BOUNDS) == filters


def test_numeric_prefixes_are_accepted():
    parsed = parse_filter_params({"stops": "1.5,2x", "priceMin": "12.5USD", "priceMax": " 300abc"})

    assert parsed.stops == (1, 2)
    assert parsed.price_min == 12.5
    assert parsed.price_max == 300


def test_written_prices_round_half_up():
    filters = FiltersState(stops=(), airlines=(), price_range=(150.5, 400.5))
    params = write_filters_to_params({}, filters, BOUNDS)
    assert params == {"priceMin": "151", "priceMax": "401"}
