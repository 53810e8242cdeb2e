from __future__ import annotations

import json
import re
import sys
from pathlib import Path
from typing import Any, List

import pandas as pd
from pydantic import ValidationError

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import WEEKDAYS, DayHours, PriceRange

CANONICAL_COLUMNS: List[str] = [
    "id",
    "name",
    "slug",
    "description",
    "category_id",
    "latitude",
    "longitude",
    "city",
    "state",
    "rating",
    "review_count",
    "price_range",
    "verified",
    "featured",
    "active",
    "view_count",
    "hours",
    "reviews",
    "services",
    "favorites",
]

# Raw exports use either the API's camelCase or snake_case column names.
_COLUMN_ALIASES: dict[str, List[str]] = {
    "category_id": ["category_id", "categoryId"],
    "review_count": ["review_count", "reviewCount"],
    "price_range": ["price_range", "priceRange", "price_bucket"],
    "view_count": ["view_count", "viewCount"],
    "hours": ["hours", "weekly_hours", "weeklyHours"],
    "reviews": ["reviews", "reviews_count"],
    "services": ["services", "services_count"],
    "favorites": ["favorites", "favorites_count"],
}

_PRICE_SYMBOLS = {
    "$": PriceRange.budget.value,
    "$$": PriceRange.moderate.value,
    "$$$": PriceRange.expensive.value,
}

# Columns whose missing values are carried as None rather than NaN
_NULLABLE_COLUMNS = ("description", "city", "state", "category_id", "price_range", "hours")

_TRUE_STRINGS = {"true", "1", "yes", "y", "t"}
_FALSE_STRINGS = {"false", "0", "no", "n", "f", ""}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (dict, list)):
        return False
    return bool(pd.isna(value))


def _normalize_rating(rating: Any) -> float:
    if _is_missing(rating):
        return 0.0
    raw = str(rating).strip()
    # Handle "X/5" format (e.g. "4.1/5")
    if "/" in raw:
        raw = raw.split("/")[0].strip()
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0

    # Clamp to [0, 5]
    return max(0.0, min(5.0, value))


def _normalize_price_range(value: Any) -> str | None:
    if _is_missing(value):
        return None
    raw = str(value).strip()
    if raw in _PRICE_SYMBOLS:
        return _PRICE_SYMBOLS[raw]
    upper = raw.upper()
    if upper in {p.value for p in PriceRange}:
        return upper
    return None


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _to_bool(value: Any, default: bool) -> bool:
    if _is_missing(value):
        return default
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        return default
    return bool(value)


def _to_count(value: Any) -> int:
    if _is_missing(value):
        return 0
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError):
        return 0


def _normalize_hours(value: Any) -> dict | None:
    """
    Keep only well-formed weekday slots; CSV exports carry the schedule as a
    JSON string. A slot that does not fit ``DayHours`` is dropped.
    """
    if _is_missing(value):
        return None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return None
    if not isinstance(value, dict):
        return None

    hours: dict[str, dict] = {}
    for day, slot in value.items():
        day = str(day).strip().lower()
        if day not in WEEKDAYS or not isinstance(slot, dict):
            continue
        try:
            DayHours.model_validate(slot)
        except ValidationError:
            continue
        hours[day] = slot
    return hours or None


def canonicalize(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Map raw business records into the canonical catalogue schema.

    Ratings are clamped to [0, 5], price ranges upper-cased (``$`` style
    buckets are mapped too), missing slugs derived from the name, counts
    clipped at zero and flags defaulted.
    """

    def _first_present(columns: List[str]) -> str | None:
        for col in columns:
            if col in raw.columns:
                return col
        return None

    canonical = pd.DataFrame(index=raw.index)
    canonical["id"] = raw["id"].astype(str) if "id" in raw.columns else raw.index.astype(str)
    canonical["name"] = raw["name"].fillna("").astype(str) if "name" in raw.columns else ""

    if "slug" in raw.columns:
        slugs = raw["slug"]
        canonical["slug"] = [
            str(s) if not _is_missing(s) and str(s).strip() else _slugify(n)
            for s, n in zip(slugs, canonical["name"])
        ]
    else:
        canonical["slug"] = canonical["name"].apply(_slugify)

    for col in ("description", "city", "state"):
        if col in raw.columns:
            canonical[col] = raw[col].apply(lambda v: None if _is_missing(v) else str(v))
        else:
            canonical[col] = None

    col_category = _first_present(_COLUMN_ALIASES["category_id"])
    canonical["category_id"] = (
        raw[col_category].apply(lambda v: None if _is_missing(v) else str(v))
        if col_category
        else None
    )

    for col in ("latitude", "longitude"):
        if col in raw.columns:
            canonical[col] = pd.to_numeric(raw[col], errors="coerce")
        else:
            canonical[col] = float("nan")

    canonical["rating"] = raw["rating"].apply(_normalize_rating) if "rating" in raw.columns else 0.0

    col_price = _first_present(_COLUMN_ALIASES["price_range"])
    canonical["price_range"] = raw[col_price].apply(_normalize_price_range) if col_price else None

    for col in ("review_count", "view_count", "reviews", "services", "favorites"):
        source = _first_present(_COLUMN_ALIASES[col])
        canonical[col] = raw[source].apply(_to_count) if source else 0

    for col, default in (("verified", False), ("featured", False), ("active", True)):
        canonical[col] = raw[col].apply(_to_bool, default=default) if col in raw.columns else default

    col_hours = _first_present(_COLUMN_ALIASES["hours"])
    canonical["hours"] = raw[col_hours].apply(_normalize_hours) if col_hours else None

    # Records without coordinates cannot take part in distance search
    canonical = canonical.dropna(subset=["latitude", "longitude"]).copy()

    for col in _NULLABLE_COLUMNS:
        canonical[col] = canonical[col].astype(object).where(canonical[col].notna(), None)

    return canonical[CANONICAL_COLUMNS].reset_index(drop=True)


def read_raw(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path)
    with path.open(encoding="utf-8") as fh:
        return pd.DataFrame.from_records(json.load(fh))


def run_ingestion(source: Path, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> Path:
    """
    Canonicalise a raw business export and write it where the store reads it.
    """
    config.data_dir.mkdir(parents=True, exist_ok=True)

    canonical = canonicalize(read_raw(source))

    output_path = config.businesses_path
    canonical.to_json(output_path, orient="records", indent=2)
    return output_path


if __name__ == "__main__":
    path = run_ingestion(Path(sys.argv[1]))
    print(f"Ingestion complete. Canonical catalogue saved to: {path}")
