from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any, Mapping

from ..catalog.business_store import BusinessStore
from ..catalog.categories import CategoryDirectory
from .availability import filter_open_now
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .fetcher import fetch_candidates
from .geo import filter_by_radius
from .models import (
    AppliedFilters,
    Candidate,
    NearbyBusiness,
    NearbyResponse,
    ScoredResult,
    SearchRequest,
    SearchResponse,
    Suggestion,
    SuggestionResponse,
    SuggestionType,
    TrendingBusiness,
    TrendingResponse,
)
from .normalizer import normalize_nearby, normalize_query
from .pagination import paginate
from .ranking import rank, rank_nearby
from .scoring import score_candidates

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now()


class SearchEngine:
    """
    Request-scoped search over the business catalogue.

    Holds no mutable state of its own; the only shared state is whatever the
    category directory caches.
    """

    def __init__(
        self,
        store: BusinessStore,
        directory: CategoryDirectory,
        config: SearchConfig = DEFAULT_SEARCH_CONFIG,
    ) -> None:
        self.store = store
        self.directory = directory
        self.config = config

    def _timeout(self, timeout: float | None) -> float | None:
        return self.config.store_timeout if timeout is None else timeout

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        params: Mapping[str, Any],
        *,
        timeout: float | None = None,
        now: datetime | None = None,
    ) -> SearchResponse:
        request = normalize_query(params, self.directory)
        return self.run(request, timeout=timeout, now=now)

    def run(
        self,
        request: SearchRequest,
        *,
        timeout: float | None = None,
        now: datetime | None = None,
    ) -> SearchResponse:
        start_time = time.time()

        candidates, total = fetch_candidates(self.store, request, self._timeout(timeout))
        fetched = len(candidates)

        if request.has_origin:
            candidates = filter_by_radius(
                candidates, request.latitude, request.longitude, request.radius,
            )

        if request.open_now and candidates:
            candidates = filter_open_now(candidates, now or _local_now())

        if request.has_query:
            candidates = score_candidates(candidates, request.q)

        ranked = rank(candidates, request.sort_by, request.has_query)
        page_items, meta = paginate(ranked, request.page, request.limit, total)

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        logger.info(
            "search q=%r sort=%s total=%d fetched=%d filtered=%d returned=%d in %.1fms",
            request.q, request.sort_by.value, total, fetched, len(ranked), len(page_items), elapsed_ms,
        )

        return SearchResponse(
            businesses=[ScoredResult.from_candidate(c) for c in page_items],
            pagination=meta,
            filters=AppliedFilters(
                has_location=request.has_origin,
                radius=request.radius if request.has_origin else None,
            ),
        )

    # ── Auxiliary read paths ─────────────────────────────────────────────

    def suggestions(self, text: str | None) -> SuggestionResponse:
        text = (text or "").strip()
        if len(text) < self.config.suggestion_min_length:
            return SuggestionResponse(suggestions=[])

        businesses = self.store.find_name_matches(text, self.config.business_suggestion_limit)
        categories = self.directory.search(text, self.config.category_suggestion_limit)

        return SuggestionResponse(suggestions=[
            *(Suggestion(type=SuggestionType.business, text=b.name, slug=b.slug) for b in businesses),
            *(Suggestion(type=SuggestionType.category, text=c.name, slug=c.slug) for c in categories),
        ])

    def trending(self) -> TrendingResponse:
        businesses = self.store.top_viewed(self.config.trending_limit)
        return TrendingResponse(businesses=[
            TrendingBusiness(
                id=b.id,
                name=b.name,
                slug=b.slug,
                category=b.category,
                rating=b.rating,
                review_count=b.review_count,
                view_count=b.view_count,
            )
            for b in businesses
        ])

    def nearby(self, params: Mapping[str, Any], *, timeout: float | None = None) -> NearbyResponse:
        request = normalize_nearby(params)

        candidates = [Candidate(business=b) for b in self.store.list_active(self._timeout(timeout))]
        within = filter_by_radius(candidates, request.latitude, request.longitude, request.radius)
        top = rank_nearby(within)[: self.config.nearby_limit]

        return NearbyResponse(businesses=[
            NearbyBusiness(
                id=c.business.id,
                name=c.business.name,
                slug=c.business.slug,
                category=c.business.category,
                rating=c.business.rating,
                review_count=c.business.review_count,
                distance=c.distance,
            )
            for c in top
        ])
