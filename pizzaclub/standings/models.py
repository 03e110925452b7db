from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Input records ────────────────────────────────────────────────────────


class Visit(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True,
    )

    id: str | None = None
    date: str | None = None
    attendees: list[str] = Field(default_factory=list)
    # Flat or nested; the shape is only inferred by is_nested_ratings()
    ratings: Any = Field(default_factory=dict)
    notes: str | None = None


class Restaurant(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True,
    )

    id: str
    name: str
    slug: str | None = None
    visits: list[Visit] = Field(default_factory=list)


# ── Leaderboard output ───────────────────────────────────────────────────


class LeaderboardEntry(BaseModel):
    model_config = _CAMEL

    restaurant_id: str
    restaurant_name: str
    restaurant_slug: str | None = None
    rating: float
    category: str | None = None
    pizza_name: str | None = None
    visit_date: str | None = None


class RankedEntry(LeaderboardEntry):
    rank: int = Field(..., ge=1)
    is_tied: bool = False


class LeaderboardData(BaseModel):
    model_config = _CAMEL

    title: str
    description: str | None = None
    category: str
    entries: list[RankedEntry] = Field(default_factory=list)


class CategoryMeta(BaseModel):
    key: str
    label: str
    parent: str | None = None
    description: str | None = None


class AvailableCategories(BaseModel):
    model_config = _CAMEL

    pizza_components: list[str] = Field(default_factory=list)
    other_stuff: list[str] = Field(default_factory=list)


class StandingsData(BaseModel):
    model_config = _CAMEL

    overall: LeaderboardData
    pizza_overall: LeaderboardData
    pizza_components: list[LeaderboardData] = Field(default_factory=list)
    other_stuff: list[LeaderboardData] = Field(default_factory=list)
    same_named_pizzas: list[LeaderboardData] = Field(default_factory=list)


# Default descriptors used when the caller does not supply its own.
PIZZA_COMPONENT_CATEGORIES: list[CategoryMeta] = [
    CategoryMeta(key="crust", label="Crust", parent="pizza-components"),
    CategoryMeta(key="sauce", label="Sauce", parent="pizza-components"),
    CategoryMeta(key="bake", label="Bake", parent="pizza-components"),
    CategoryMeta(key="consistency", label="Consistency", parent="pizza-components"),
    CategoryMeta(key="toppings", label="Toppings", parent="pizza-components"),
    CategoryMeta(key="cheese", label="Cheese", parent="pizza-components"),
]

OTHER_STUFF_CATEGORIES: list[CategoryMeta] = [
    CategoryMeta(key="appetizers", label="Appetizers", parent="the-other-stuff"),
    CategoryMeta(key="wait-staff", label="Wait Staff", parent="the-other-stuff"),
    CategoryMeta(key="atmosphere", label="Atmosphere", parent="the-other-stuff"),
    CategoryMeta(key="service", label="Service", parent="the-other-stuff"),
    CategoryMeta(key="value", label="Value", parent="the-other-stuff"),
    CategoryMeta(key="beverages", label="Beverages", parent="the-other-stuff"),
]
