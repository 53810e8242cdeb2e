from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


@dataclass(frozen=True)
class SearchConfig:
    default_radius: float = 25.0
    min_radius: float = 1.0
    max_radius: float = 100.0
    default_page: int = 1
    default_limit: int = 20
    max_limit: int = 100
    earth_radius_miles: float = 3959.0
    nearby_radius: float = 10.0
    nearby_limit: int = 10
    trending_limit: int = 10
    suggestion_min_length: int = 2
    business_suggestion_limit: int = 5
    category_suggestion_limit: int = 3
    store_timeout: float | None = _optional_float("LOCALSEARCH_STORE_TIMEOUT")
    search_cache_ttl: float = 60.0
    suggestions_cache_ttl: float = 300.0
    trending_cache_ttl: float = 300.0
    nearby_cache_ttl: float = 60.0


DEFAULT_SEARCH_CONFIG = SearchConfig()
