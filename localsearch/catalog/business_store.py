from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Iterable

import pandas as pd

from ..errors import StoreUnavailableError
from .data_store import prepare_businesses, prepare_categories
from .models import Business, BusinessStats, CategoryRef, PriceRange


@dataclass(frozen=True)
class BusinessFilters:
    """Predicates the store can evaluate: equality, range and substring only."""

    category_id: str | None = None
    price_range: PriceRange | None = None
    verified: bool | None = None
    featured: bool | None = None
    min_rating: float | None = None
    city: str | None = None
    state: str | None = None
    text: str | None = None


def _clean(value: Any) -> Any:
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


class BusinessStore:
    """Read-only business catalogue backed by a pandas DataFrame."""

    def __init__(self, businesses: pd.DataFrame, categories: pd.DataFrame | None = None) -> None:
        self._df = businesses
        self._category_refs: dict[str, CategoryRef] = {}
        if categories is not None:
            for row in categories.itertuples(index=False):
                self._category_refs[str(row.id)] = CategoryRef(
                    id=str(row.id), name=row.name, slug=row.slug,
                )

    @classmethod
    def from_records(
        cls,
        businesses: Iterable[dict],
        categories: Iterable[dict] = (),
    ) -> "BusinessStore":
        return cls(prepare_businesses(list(businesses)), prepare_categories(list(categories)))

    # ── Queries ──────────────────────────────────────────────────────────

    def find_active(
        self,
        filters: BusinessFilters,
        timeout: float | None = None,
    ) -> tuple[list[Business], int]:
        """Return active businesses matching ``filters`` and their total count."""
        started = time.monotonic()
        df = self._df

        mask = df["active"].astype(bool)

        if filters.category_id:
            mask = mask & (df["category_id"] == filters.category_id)

        if filters.price_range is not None:
            mask = mask & (df["price_range"] == PriceRange(filters.price_range).value)

        if filters.verified is not None:
            mask = mask & (df["verified"] == filters.verified)

        if filters.featured is not None:
            mask = mask & (df["featured"] == filters.featured)

        if filters.min_rating:
            mask = mask & (df["rating"] >= filters.min_rating)

        if filters.city:
            mask = mask & df["city_lower"].str.contains(filters.city.lower(), regex=False)

        if filters.state:
            mask = mask & df["state_lower"].str.contains(filters.state.lower(), regex=False)

        if filters.text:
            text = filters.text.lower()
            mask = mask & (
                df["name_lower"].str.contains(text, regex=False)
                | df["description_lower"].str.contains(text, regex=False)
            )

        matched = df.loc[mask]
        businesses = self._to_businesses(matched)
        self._check_deadline(started, timeout)
        return businesses, int(mask.sum())

    def list_active(self, timeout: float | None = None) -> list[Business]:
        started = time.monotonic()
        businesses = self._to_businesses(self._df.loc[self._df["active"].astype(bool)])
        self._check_deadline(started, timeout)
        return businesses

    def find_name_matches(self, text: str, limit: int) -> list[Business]:
        df = self._df
        mask = df["active"].astype(bool) & df["name_lower"].str.contains(text.lower(), regex=False)
        return self._to_businesses(df.loc[mask].head(limit))

    def top_viewed(self, limit: int) -> list[Business]:
        active = self._df.loc[self._df["active"].astype(bool)]
        ordered = active.sort_values(["view_count", "rating"], ascending=[False, False], kind="stable")
        return self._to_businesses(ordered.head(limit))

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _check_deadline(started: float, timeout: float | None) -> None:
        if timeout is not None and time.monotonic() - started > timeout:
            raise StoreUnavailableError(f"business store query exceeded {timeout}s timeout")

    def _to_businesses(self, frame: pd.DataFrame) -> list[Business]:
        businesses: list[Business] = []
        for record in frame.to_dict(orient="records"):
            category_id = _clean(record.get("category_id"))
            businesses.append(Business(
                id=str(record["id"]),
                name=record["name"],
                slug=record["slug"],
                description=_clean(record.get("description")),
                category_id=category_id,
                category=self._category_refs.get(category_id) if category_id else None,
                latitude=float(record["latitude"]),
                longitude=float(record["longitude"]),
                city=_clean(record.get("city")),
                state=_clean(record.get("state")),
                rating=float(record["rating"]),
                review_count=int(record["review_count"]),
                price_range=_clean(record.get("price_range")),
                verified=bool(record["verified"]),
                featured=bool(record["featured"]),
                active=bool(record["active"]),
                view_count=int(record["view_count"]),
                hours=_clean(record.get("hours")),
                stats=BusinessStats(
                    reviews=int(record["reviews"]),
                    services=int(record["services"]),
                    favorites=int(record["favorites"]),
                ),
            ))
        return businesses
