from __future__ import annotations

from ..catalog.business_store import BusinessFilters, BusinessStore
from .models import Candidate, SearchRequest


def build_filters(request: SearchRequest) -> BusinessFilters:
    return BusinessFilters(
        category_id=request.category_id,
        price_range=request.price_range,
        verified=request.verified,
        featured=request.featured,
        min_rating=request.min_rating,
        city=request.city,
        state=request.state,
        text=request.q,
    )


def fetch_candidates(
    store: BusinessStore,
    request: SearchRequest,
    timeout: float | None = None,
) -> tuple[list[Candidate], int]:
    """
    Run the single store query for a search.

    Distance and open-now predicates are not pushed down, so ``total`` counts
    store-level matches only.
    """
    businesses, total = store.find_active(build_filters(request), timeout=timeout)
    return [Candidate(business=b) for b in businesses], total
