from __future__ import annotations

import json
from pathlib import Path

import pytest

from localsearch.catalog.business_store import BusinessStore
from localsearch.catalog.categories import CategoryDirectory
from localsearch.catalog.data_store import prepare_businesses, prepare_categories
from localsearch.catalog.models import Business
from localsearch.search.engine import SearchEngine
from localsearch.search.models import Candidate

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def _load(name: str) -> list[dict]:
    with (_DATA_DIR / name).open(encoding="utf-8") as fh:
        return json.load(fh)


@pytest.fixture
def business_records() -> list[dict]:
    return _load("businesses.json")


@pytest.fixture
def category_records() -> list[dict]:
    return _load("categories.json")


@pytest.fixture
def store(business_records, category_records) -> BusinessStore:
    return BusinessStore(prepare_businesses(business_records), prepare_categories(category_records))


@pytest.fixture
def directory(category_records) -> CategoryDirectory:
    return CategoryDirectory.from_records(category_records)


@pytest.fixture
def engine(store, directory) -> SearchEngine:
    return SearchEngine(store, directory)


@pytest.fixture
def make_candidate():
    """Build a pipeline candidate from a few business fields."""
    counter = iter(range(1, 10_000))

    def _make(name: str = "Business", distance: float | None = None,
              relevance_score: float | None = None, **fields) -> Candidate:
        n = next(counter)
        business = Business(
            id=fields.pop("id", f"b-{n}"),
            name=name,
            slug=fields.pop("slug", f"business-{n}"),
            latitude=fields.pop("latitude", 40.7128),
            longitude=fields.pop("longitude", -74.006),
            **fields,
        )
        return Candidate(business=business, distance=distance, relevance_score=relevance_score)

    return _make
