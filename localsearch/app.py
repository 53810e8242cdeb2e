from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .cache import make_key, response_cache
from .catalog.business_store import BusinessStore
from .catalog.categories import CategoryDirectory
from .catalog.config import DEFAULT_CATALOG_CONFIG
from .catalog.data_store import get_business_frame, get_category_frame
from .catalog.models import Category
from .errors import InvalidQueryError, StoreUnavailableError
from .search.engine import SearchEngine
from .search.models import (
    NearbyResponse,
    SearchResponse,
    SuggestionResponse,
    TrendingResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Local Business Search API", version="1.0.0")

_engine: SearchEngine | None = None


def get_engine() -> SearchEngine:
    """Build the engine over the on-disk catalogue on first use."""
    global _engine
    if _engine is None:
        categories = get_category_frame()
        _engine = SearchEngine(
            store=BusinessStore(get_business_frame(), categories),
            directory=CategoryDirectory(categories, ttl=DEFAULT_CATALOG_CONFIG.category_cache_ttl),
        )
    return _engine


# ── Query parameters ─────────────────────────────────────────────────────
#
# Declared as plain strings so they show up in the OpenAPI schema; parsing
# and range checks stay in the normalizer, which answers 400 rather than 422.


def _present(params: dict[str, str | None]) -> dict[str, str]:
    return {key: value for key, value in params.items() if value is not None}


def search_params(
    q: str | None = Query(None, description="Free-text query matched against name and description"),
    category_id: str | None = Query(None, alias="categoryId"),
    category_slug: str | None = Query(None, alias="categorySlug"),
    latitude: str | None = Query(None, description="Origin latitude, -90 to 90"),
    longitude: str | None = Query(None, description="Origin longitude, -180 to 180"),
    radius: str | None = Query(None, description="Maximum distance in miles, 1 to 100"),
    min_rating: str | None = Query(None, alias="minRating"),
    price_range: str | None = Query(None, alias="priceRange", description="BUDGET, MODERATE or EXPENSIVE"),
    verified: str | None = None,
    featured: str | None = None,
    open_now: str | None = Query(None, alias="openNow"),
    city: str | None = None,
    state: str | None = None,
    sort_by: str | None = Query(None, alias="sortBy", description="relevance, rating, distance, reviewCount or name"),
    page: str | None = None,
    limit: str | None = Query(None, description="Page size, 1 to 100"),
) -> dict[str, str]:
    return _present({
        "q": q,
        "categoryId": category_id,
        "categorySlug": category_slug,
        "latitude": latitude,
        "longitude": longitude,
        "radius": radius,
        "minRating": min_rating,
        "priceRange": price_range,
        "verified": verified,
        "featured": featured,
        "openNow": open_now,
        "city": city,
        "state": state,
        "sortBy": sort_by,
        "page": page,
        "limit": limit,
    })


def nearby_params(
    latitude: str | None = Query(None, description="Origin latitude, required"),
    longitude: str | None = Query(None, description="Origin longitude, required"),
    radius: str | None = Query(None, description="Maximum distance in miles, defaults to 10"),
) -> dict[str, str]:
    return _present({"latitude": latitude, "longitude": longitude, "radius": radius})


# ── Error mapping ────────────────────────────────────────────────────────


@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": exc.message, "errors": exc.errors})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.warning("Business store unavailable for %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Search is temporarily unavailable"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/categories", response_model=list[Category])
def categories(engine: SearchEngine = Depends(get_engine)) -> list[Category]:
    return engine.directory.list_all()


@app.get("/cache/stats")
def cache_stats(engine: SearchEngine = Depends(get_engine)) -> dict:
    return {
        "responses": response_cache.stats(),
        "categories": engine.directory.cache.stats(),
    }


# ── Search endpoints ─────────────────────────────────────────────────────


@app.get("/search", response_model=SearchResponse)
def search(
    params: dict[str, str] = Depends(search_params),
    engine: SearchEngine = Depends(get_engine),
) -> SearchResponse:
    return response_cache.get_or_set(
        make_key("search", params),
        lambda: engine.search(params),
        engine.config.search_cache_ttl,
    )


@app.get("/search/suggestions", response_model=SuggestionResponse)
def suggestions(q: str | None = None, engine: SearchEngine = Depends(get_engine)) -> SuggestionResponse:
    return response_cache.get_or_set(
        make_key("suggestions", {"q": q}),
        lambda: engine.suggestions(q),
        engine.config.suggestions_cache_ttl,
    )


@app.get("/search/trending", response_model=TrendingResponse)
def trending(engine: SearchEngine = Depends(get_engine)) -> TrendingResponse:
    return response_cache.get_or_set(
        make_key("trending", {}),
        engine.trending,
        engine.config.trending_cache_ttl,
    )


@app.get("/search/nearby", response_model=NearbyResponse)
def nearby(
    params: dict[str, str] = Depends(nearby_params),
    engine: SearchEngine = Depends(get_engine),
) -> NearbyResponse:
    return response_cache.get_or_set(
        make_key("nearby", params),
        lambda: engine.nearby(params),
        engine.config.nearby_cache_ttl,
    )
