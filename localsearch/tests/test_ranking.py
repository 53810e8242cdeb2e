from __future__ import annotations

from localsearch.search.models import SortBy
from localsearch.search.ranking import rank, rank_nearby


def _names(candidates):
    return [c.business.name for c in candidates]


def test_rating_is_non_increasing(make_candidate):
    candidates = [make_candidate(f"B{i}", rating=r) for i, r in enumerate([3.2, 4.9, 0.0, 4.1, 5.0, 2.5])]

    ranked = rank(candidates, SortBy.rating, has_query=False)

    ratings = [c.business.rating for c in ranked]
    assert ratings == sorted(ratings, reverse=True)


def test_rank_returns_new_list_and_leaves_input(make_candidate):
    candidates = [make_candidate("A", rating=1.0), make_candidate("B", rating=5.0)]
    before = list(candidates)

    ranked = rank(candidates, SortBy.rating, has_query=False)

    assert ranked is not candidates
    assert candidates == before
    assert _names(ranked) == ["B", "A"]


def test_ties_keep_input_order(make_candidate):
    candidates = [
        make_candidate("First", rating=4.0),
        make_candidate("Top", rating=4.5),
        make_candidate("Second", rating=4.0),
        make_candidate("Third", rating=4.0),
    ]

    assert _names(rank(candidates, SortBy.rating, has_query=False)) == ["Top", "First", "Second", "Third"]


def test_distance_ascending_with_missing_as_zero(make_candidate):
    candidates = [
        make_candidate("Far", distance=9.0),
        make_candidate("Unknown"),
        make_candidate("Near", distance=0.5),
    ]

    assert _names(rank(candidates, SortBy.distance, has_query=False)) == ["Unknown", "Near", "Far"]


def test_review_count_descending(make_candidate):
    candidates = [
        make_candidate("A", review_count=3),
        make_candidate("B", review_count=300),
        make_candidate("C", review_count=30),
    ]

    assert _names(rank(candidates, SortBy.review_count, has_query=False)) == ["B", "C", "A"]


def test_name_is_non_decreasing_ignoring_case(make_candidate):
    candidates = [make_candidate(n) for n in ["zebra Cafe", "Apple Bistro", "banana Bar", "Cherry"]]

    ranked = rank(candidates, SortBy.name, has_query=False)

    assert _names(ranked) == ["Apple Bistro", "banana Bar", "Cherry", "zebra Cafe"]


def test_relevance_uses_score_when_query_present(make_candidate):
    candidates = [
        make_candidate("High rating", rating=5.0, relevance_score=30.0),
        make_candidate("High score", rating=1.0, relevance_score=90.0),
    ]

    assert _names(rank(candidates, SortBy.relevance, has_query=True)) == ["High score", "High rating"]


def test_relevance_falls_back_to_rating_without_query(make_candidate):
    candidates = [
        make_candidate("Low", rating=2.0),
        make_candidate("High", rating=4.5),
    ]

    assert _names(rank(candidates, SortBy.relevance, has_query=False)) == ["High", "Low"]


def test_nearby_order_is_rating_then_distance(make_candidate):
    candidates = [
        make_candidate("Good far", rating=4.0, distance=8.0),
        make_candidate("Best", rating=4.9, distance=9.0),
        make_candidate("Good near", rating=4.0, distance=1.0),
    ]

    assert _names(rank_nearby(candidates)) == ["Best", "Good near", "Good far"]
