from __future__ import annotations

from typing import Sequence

from .models import Candidate, SortBy


def rank(candidates: Sequence[Candidate], sort_by: SortBy, has_query: bool) -> list[Candidate]:
    """
    Return a new list ordered by ``sort_by``; the input is left untouched.

    Equal keys keep their input order. Relevance falls back to rating when
    there is no text query.
    """
    if sort_by == SortBy.rating:
        return sorted(candidates, key=lambda c: c.business.rating, reverse=True)
    if sort_by == SortBy.distance:
        return sorted(candidates, key=lambda c: c.distance or 0.0)
    if sort_by == SortBy.review_count:
        return sorted(candidates, key=lambda c: c.business.review_count, reverse=True)
    if sort_by == SortBy.name:
        return sorted(candidates, key=lambda c: c.business.name.casefold())

    if has_query:
        return sorted(candidates, key=lambda c: c.relevance_score or 0.0, reverse=True)
    return sorted(candidates, key=lambda c: c.business.rating, reverse=True)


def rank_nearby(candidates: Sequence[Candidate]) -> list[Candidate]:
    """Highest rated first, nearest first among equal ratings."""
    return sorted(candidates, key=lambda c: (-c.business.rating, c.distance or 0.0))
