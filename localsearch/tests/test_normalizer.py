from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from localsearch.catalog.models import PriceRange
from localsearch.errors import InvalidQueryError
from localsearch.search.engine import SearchEngine
from localsearch.search.models import SortBy
from localsearch.search.normalizer import normalize_nearby, normalize_query


def test_defaults_applied():
    request = normalize_query({})
    assert request.radius == 25
    assert request.page == 1
    assert request.limit == 20
    assert request.sort_by == SortBy.relevance
    assert request.open_now is False
    assert request.has_origin is False
    assert request.has_query is False


def test_query_string_values_are_coerced():
    request = normalize_query({
        "q": "coffee",
        "latitude": "40.7128",
        "longitude": "-74.006",
        "radius": "10",
        "minRating": "4",
        "priceRange": "MODERATE",
        "verified": "true",
        "featured": "false",
        "openNow": "true",
        "sortBy": "reviewCount",
        "page": "2",
        "limit": "50",
    })
    assert request.q == "coffee"
    assert request.latitude == pytest.approx(40.7128)
    assert request.radius == 10
    assert request.min_rating == 4
    assert request.price_range == PriceRange.moderate
    assert request.verified is True
    assert request.featured is False
    assert request.open_now is True
    assert request.sort_by == SortBy.review_count
    assert (request.page, request.limit) == (2, 50)
    assert request.has_origin


def test_origin_needs_both_coordinates():
    assert normalize_query({"latitude": "40.7"}).has_origin is False


def test_blank_values_are_treated_as_absent():
    request = normalize_query({"city": "", "radius": " ", "q": "   "})
    assert request.city is None
    assert request.radius == 25
    assert request.q is None


def test_query_is_trimmed():
    assert normalize_query({"q": "  coffee "}).q == "coffee"


@pytest.mark.parametrize("params", [
    {"radius": "0"},
    {"radius": "101"},
    {"radius": "far"},
    {"minRating": "6"},
    {"minRating": "-1"},
    {"page": "0"},
    {"page": "1.5"},
    {"limit": "0"},
    {"limit": "101"},
    {"limit": "abc"},
    {"latitude": "91", "longitude": "0"},
    {"longitude": "nan", "latitude": "0"},
    {"sortBy": "popularity"},
    {"priceRange": "CHEAP"},
    {"openNow": "sometimes"},
])
def test_out_of_range_or_malformed_values_rejected(params):
    with pytest.raises(InvalidQueryError) as excinfo:
        normalize_query(params)
    assert excinfo.value.errors


def test_error_names_offending_field():
    with pytest.raises(InvalidQueryError) as excinfo:
        normalize_query({"limit": "500"})
    assert excinfo.value.errors[0]["field"] == "limit"


def test_category_slug_resolves_to_id(directory):
    request = normalize_query({"categorySlug": "coffee-shops"}, directory)
    assert request.category_id == "cat-coffee"


def test_unknown_category_slug_is_dropped(directory):
    request = normalize_query({"categorySlug": "does-not-exist"}, directory)
    assert request.category_id is None


def test_category_id_takes_precedence_over_slug():
    directory = MagicMock()
    request = normalize_query({"categoryId": "cat-home", "categorySlug": "coffee-shops"}, directory)
    assert request.category_id == "cat-home"
    directory.resolve_slug.assert_not_called()


def test_invalid_query_never_reaches_store(directory):
    store = MagicMock()
    engine = SearchEngine(store, directory)

    with pytest.raises(InvalidQueryError):
        engine.search({"limit": "0"})

    store.find_active.assert_not_called()


def test_nearby_defaults_radius_to_ten():
    request = normalize_nearby({"latitude": "40.7", "longitude": "-74"})
    assert request.radius == 10


def test_nearby_requires_coordinates():
    with pytest.raises(InvalidQueryError):
        normalize_nearby({"latitude": "40.7"})
