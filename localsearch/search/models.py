from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import ConfigDict, Field

from ..catalog.models import Business, BusinessStats, CamelModel, CategoryRef, PriceRange
from .config import DEFAULT_SEARCH_CONFIG as _C


class SortBy(str, Enum):
    relevance = "relevance"
    rating = "rating"
    distance = "distance"
    review_count = "reviewCount"
    name = "name"


class SearchRequest(CamelModel):
    model_config = ConfigDict(extra="ignore")

    q: str | None = Field(default=None, description="Free-text query matched against name and description")
    category_id: str | None = None
    category_slug: str | None = Field(default=None, description="Alternative to category_id")
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0, allow_inf_nan=False)
    radius: float = Field(
        default=_C.default_radius, ge=_C.min_radius, le=_C.max_radius, allow_inf_nan=False,
        description="Maximum distance in miles",
    )
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0, allow_inf_nan=False)
    price_range: PriceRange | None = None
    verified: bool | None = None
    featured: bool | None = None
    open_now: bool = False
    city: str | None = None
    state: str | None = None
    sort_by: SortBy = SortBy.relevance
    page: int = Field(default=_C.default_page, ge=1)
    limit: int = Field(default=_C.default_limit, ge=1, le=_C.max_limit)

    @property
    def has_origin(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def has_query(self) -> bool:
        return bool(self.q)


class NearbyRequest(CamelModel):
    model_config = ConfigDict(extra="ignore")

    latitude: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)
    radius: float = Field(default=_C.nearby_radius, gt=0.0, le=_C.max_radius, allow_inf_nan=False)


@dataclass(frozen=True)
class Candidate:
    """A fetched business moving through the pipeline with its computed signals."""

    business: Business
    distance: float | None = None
    relevance_score: float | None = None


class ScoredResult(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    category: CategoryRef | None = None
    city: str | None = None
    state: str | None = None
    latitude: float
    longitude: float
    rating: float
    review_count: int
    price_range: PriceRange | None = None
    verified: bool
    featured: bool
    distance: float | None = None
    relevance_score: float | None = None
    stats: BusinessStats

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "ScoredResult":
        b = candidate.business
        return cls(
            id=b.id,
            name=b.name,
            slug=b.slug,
            description=b.description,
            category=b.category,
            city=b.city,
            state=b.state,
            latitude=b.latitude,
            longitude=b.longitude,
            rating=b.rating,
            review_count=b.review_count,
            price_range=b.price_range,
            verified=b.verified,
            featured=b.featured,
            distance=candidate.distance,
            relevance_score=candidate.relevance_score,
            stats=b.stats,
        )


class PageMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class AppliedFilters(CamelModel):
    has_location: bool
    radius: float | None = None


class SearchResponse(CamelModel):
    businesses: list[ScoredResult]
    pagination: PageMeta
    filters: AppliedFilters


class SuggestionType(str, Enum):
    business = "business"
    category = "category"


class Suggestion(CamelModel):
    type: SuggestionType
    text: str
    slug: str


class SuggestionResponse(CamelModel):
    suggestions: list[Suggestion] = Field(default_factory=list)


class TrendingBusiness(CamelModel):
    id: str
    name: str
    slug: str
    category: CategoryRef | None = None
    rating: float
    review_count: int
    view_count: int


class NearbyBusiness(CamelModel):
    id: str
    name: str
    slug: str
    category: CategoryRef | None = None
    rating: float
    review_count: int
    distance: float


class TrendingResponse(CamelModel):
    businesses: list[TrendingBusiness]


class NearbyResponse(CamelModel):
    businesses: list[NearbyBusiness]
