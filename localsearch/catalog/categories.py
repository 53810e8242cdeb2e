from __future__ import annotations

from typing import Iterable

import pandas as pd

from ..cache import TTLCache
from .config import DEFAULT_CATALOG_CONFIG
from .data_store import prepare_categories
from .models import Category


_ALL_KEY = "categories:all"


class CategoryDirectory:
    """
    Category lookups read through an injected TTL cache.

    Cached entries are not invalidated when categories change; a renamed or
    removed slug keeps resolving until its entry expires.
    """

    def __init__(
        self,
        categories: pd.DataFrame,
        cache: TTLCache | None = None,
        ttl: float = DEFAULT_CATALOG_CONFIG.category_cache_ttl,
    ) -> None:
        self._df = categories
        self._ttl = ttl
        self.cache = cache if cache is not None else TTLCache(default_ttl=ttl)

    @classmethod
    def from_records(cls, records: Iterable[dict], cache: TTLCache | None = None) -> "CategoryDirectory":
        return cls(prepare_categories(list(records)), cache=cache)

    def resolve_slug(self, slug: str) -> str | None:
        """Return the id for ``slug``, or ``None`` when no category has it."""
        key = f"category:slug:{slug}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        match = self._df.loc[self._df["slug"] == slug, "id"]
        if match.empty:
            return None
        category_id = str(match.iloc[0])
        self.cache.set(key, category_id, self._ttl)
        return category_id

    def search(self, text: str, limit: int) -> list[Category]:
        text = text.lower()
        mask = self._df["name_lower"].str.contains(text, regex=False) | self._df[
            "description_lower"
        ].str.contains(text, regex=False)
        return self._to_categories(self._df.loc[mask].head(limit))

    def list_all(self) -> list[Category]:
        return self.cache.get_or_set(
            _ALL_KEY,
            lambda: self._to_categories(self._df.sort_values("name", kind="stable")),
            self._ttl,
        )

    @staticmethod
    def _to_categories(frame: pd.DataFrame) -> list[Category]:
        return [
            Category(
                id=str(row["id"]),
                name=row["name"],
                slug=row["slug"],
                description=row["description"] if isinstance(row["description"], str) else None,
            )
            for row in frame.to_dict(orient="records")
        ]
