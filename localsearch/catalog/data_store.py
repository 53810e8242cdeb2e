from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd

from ..errors import StoreUnavailableError
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .ingest import canonicalize

logger = logging.getLogger(__name__)

_CATEGORY_COLUMNS = ["id", "name", "slug", "description"]

_businesses: pd.DataFrame | None = None
_categories: pd.DataFrame | None = None


def _read_records(path: Path) -> list[dict]:
    try:
        with path.open(encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to load catalogue file %s", path, exc_info=True)
        raise StoreUnavailableError(f"catalogue file unavailable: {path.name}") from exc


def prepare_businesses(records: list[dict]) -> pd.DataFrame:
    df = canonicalize(pd.DataFrame.from_records(records))

    # Lowercase searchable text once so per-request filters stay cheap
    df["name_lower"] = df["name"].str.lower()
    df["description_lower"] = df["description"].fillna("").str.lower()
    df["city_lower"] = df["city"].fillna("").str.lower()
    df["state_lower"] = df["state"].fillna("").str.lower()
    return df


def prepare_categories(records: list[dict]) -> pd.DataFrame:
    df = pd.DataFrame.from_records(records, columns=_CATEGORY_COLUMNS)
    df["id"] = df["id"].astype(str)
    df["name_lower"] = df["name"].fillna("").str.lower()
    df["description_lower"] = df["description"].fillna("").str.lower()
    return df


def get_business_frame(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> pd.DataFrame:
    """Return the in-memory business DataFrame, loading it on first call."""
    global _businesses
    if _businesses is None:
        _businesses = prepare_businesses(_read_records(config.businesses_path))
    return _businesses


def get_category_frame(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> pd.DataFrame:
    """Return the in-memory category DataFrame, loading it on first call."""
    global _categories
    if _categories is None:
        _categories = prepare_categories(_read_records(config.categories_path))
    return _categories


def reset() -> None:
    global _businesses, _categories
    _businesses = None
    _categories = None
