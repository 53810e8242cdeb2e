from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from ..catalog.models import Business
from .models import Candidate

EXACT_NAME_POINTS = 100
NAME_PREFIX_POINTS = 50
NAME_CONTAINS_POINTS = 25
DESCRIPTION_POINTS = 10
RATING_WEIGHT = 5
REVIEW_CAP = 20
VERIFIED_POINTS = 15
FEATURED_POINTS = 10


def relevance_score(business: Business, query: str) -> float:
    """
    Text-match strength plus quality signals, as a plain unnormalised sum.

    Businesses with no text match still collect the quality points.
    """
    q = query.lower()
    name = business.name.lower()
    description = (business.description or "").lower()

    score = 0.0

    if name == q:
        score += EXACT_NAME_POINTS
    elif name.startswith(q):
        score += NAME_PREFIX_POINTS
    elif q in name:
        score += NAME_CONTAINS_POINTS

    if q in description:
        score += DESCRIPTION_POINTS

    score += business.rating * RATING_WEIGHT
    score += min(business.review_count, REVIEW_CAP)

    if business.verified:
        score += VERIFIED_POINTS
    if business.featured:
        score += FEATURED_POINTS

    return score


def score_candidates(candidates: Sequence[Candidate], query: str) -> list[Candidate]:
    return [replace(c, relevance_score=relevance_score(c.business, query)) for c in candidates]
