from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, NamedTuple

from .models import LeaderboardEntry, Restaurant
from .ratings import (
    PIZZA_OVERALL,
    as_finite_number,
    extract_category_rating,
    is_nested_ratings,
    pizza_ratings,
    round_half_away_from_zero,
)


class CategoryBest(NamedTuple):
    rating: float
    visit_date: str | None


def _best_of(scored_visits: Iterable[tuple[float | None, str | None]]) -> CategoryBest | None:
    best: CategoryBest | None = None
    for rating, visit_date in scored_visits:
        # Strictly greater: the earliest visit keeps an equal maximum
        if rating is not None and (best is None or rating > best.rating):
            best = CategoryBest(rating, visit_date)
    return best


def get_highest_category_rating(restaurant: Restaurant, category: str) -> CategoryBest | None:
    """Return the restaurant's best score for *category* and when it was given.

    Flat-form visits and visits that never rated the category are skipped;
    ``None`` means no visit qualified.
    """
    return _best_of(
        (extract_category_rating(visit.ratings, category), visit.date)
        for visit in restaurant.visits
        if is_nested_ratings(visit.ratings)
    )


def visit_pizza_overall(ratings: Mapping[str, Any]) -> float | None:
    """Explicit ``pizzaOverall`` if present, else the mean of the visit's pizzas."""
    explicit = as_finite_number(ratings.get(PIZZA_OVERALL))
    if explicit is not None:
        return explicit

    scores = [rating for _, rating in pizza_ratings(ratings)]
    if not scores:
        return None
    return round_half_away_from_zero(sum(scores) / len(scores), 2)


def get_highest_pizza_overall_rating(restaurant: Restaurant) -> CategoryBest | None:
    return _best_of(
        (visit_pizza_overall(visit.ratings), visit.date)
        for visit in restaurant.visits
        if is_nested_ratings(visit.ratings)
    )


def _entry(restaurant: Restaurant, best: CategoryBest, category: str) -> LeaderboardEntry:
    return LeaderboardEntry(
        restaurant_id=restaurant.id,
        restaurant_name=restaurant.name,
        restaurant_slug=restaurant.slug,
        rating=best.rating,
        category=category,
        visit_date=best.visit_date,
    )


def _record_order(restaurant: Restaurant, best: CategoryBest) -> tuple[float, str, str, str]:
    return (-best.rating, restaurant.name.casefold(), restaurant.name, best.visit_date or "")


def _aggregate(
    restaurants: Iterable[Restaurant],
    best_for: Callable[[Restaurant], CategoryBest | None],
    category: str,
) -> list[LeaderboardEntry]:
    # Records sharing an id collapse into one entry; the higher score wins and
    # equal scores resolve by name then visit date, never by input position.
    chosen: dict[str, tuple[Restaurant, CategoryBest]] = {}
    for restaurant in restaurants:
        best = best_for(restaurant)
        if best is None or best.rating <= 0:
            continue
        current = chosen.get(restaurant.id)
        if current is None or _record_order(restaurant, best) < _record_order(*current):
            chosen[restaurant.id] = (restaurant, best)
    return [_entry(restaurant, best, category) for restaurant, best in chosen.values()]


def aggregate_restaurant_ratings(
    restaurants: list[Restaurant],
    category: str,
) -> list[LeaderboardEntry]:
    """One entry per restaurant id holding a positive best score for *category*."""
    return _aggregate(restaurants, lambda r: get_highest_category_rating(r, category), category)


def aggregate_pizza_overall_ratings(restaurants: list[Restaurant]) -> list[LeaderboardEntry]:
    return _aggregate(restaurants, get_highest_pizza_overall_rating, PIZZA_OVERALL)
