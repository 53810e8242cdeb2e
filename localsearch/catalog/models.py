from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class CamelModel(BaseModel):
    """Base for models serialised with camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceRange(str, Enum):
    budget = "BUDGET"
    moderate = "MODERATE"
    expensive = "EXPENSIVE"


class DayHours(BaseModel):
    open: str | None = None
    close: str | None = None
    closed: bool = False


class WeeklyHours(BaseModel):
    """One optional slot per weekday; a missing slot means no hours are known."""

    monday: DayHours | None = None
    tuesday: DayHours | None = None
    wednesday: DayHours | None = None
    thursday: DayHours | None = None
    friday: DayHours | None = None
    saturday: DayHours | None = None
    sunday: DayHours | None = None

    def for_day(self, weekday: str) -> DayHours | None:
        if weekday not in WEEKDAYS:
            raise ValueError(f"unknown weekday: {weekday!r}")
        return getattr(self, weekday)


class CategoryRef(CamelModel):
    id: str
    name: str
    slug: str


class Category(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None


class BusinessStats(CamelModel):
    reviews: int = 0
    services: int = 0
    favorites: int = 0


class Business(CamelModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    category_id: str | None = None
    category: CategoryRef | None = None
    latitude: float
    longitude: float
    city: str | None = None
    state: str | None = None
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    price_range: PriceRange | None = None
    verified: bool = False
    featured: bool = False
    active: bool = True
    view_count: int = Field(default=0, ge=0)
    hours: WeeklyHours | None = None
    stats: BusinessStats = Field(default_factory=BusinessStats)
