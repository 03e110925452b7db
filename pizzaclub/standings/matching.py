from __future__ import annotations

import logging
from typing import NamedTuple

from .models import LeaderboardEntry, Restaurant
from .naming import normalize_item_name
from .ratings import is_nested_ratings, pizza_ratings

logger = logging.getLogger(__name__)

MIN_PARTICIPANTS = 2


class _BestPizza(NamedTuple):
    rating: float
    visit_date: str | None
    display_name: str


class ItemGroup(NamedTuple):
    display_name: str
    entries: list[LeaderboardEntry]


def _restaurant_order(restaurant: Restaurant) -> tuple[str, str, str]:
    return (restaurant.name.casefold(), restaurant.name, restaurant.id)


def best_pizzas_for_restaurant(restaurant: Restaurant) -> dict[str, _BestPizza]:
    """Map each comparison key to the restaurant's highest-rated order of it."""
    best: dict[str, _BestPizza] = {}
    for visit in restaurant.visits:
        if not is_nested_ratings(visit.ratings):
            continue
        for order, rating in pizza_ratings(visit.ratings):
            display_name, key = normalize_item_name(order)
            if not key:
                continue
            current = best.get(key)
            if current is None or rating > current.rating:
                best[key] = _BestPizza(rating, visit.date, display_name)
    return best


def aggregate_same_named_pizzas(restaurants: list[Restaurant]) -> dict[str, ItemGroup]:
    """Group every restaurant's best pizza per comparison key.

    Only keys ordered at ``MIN_PARTICIPANTS`` or more distinct restaurants
    survive.  The group's display name comes from its first contributing
    restaurant, taken in name order so the result does not depend on the
    order of *restaurants*.
    """
    grouped: dict[str, list[LeaderboardEntry]] = {}
    seen: dict[str, set[str]] = {}

    for restaurant in sorted(restaurants, key=_restaurant_order):
        for key, pizza in best_pizzas_for_restaurant(restaurant).items():
            # The same restaurant record listed twice still counts once
            if restaurant.id in seen.setdefault(key, set()):
                continue
            seen[key].add(restaurant.id)
            grouped.setdefault(key, []).append(LeaderboardEntry(
                restaurant_id=restaurant.id,
                restaurant_name=restaurant.name,
                restaurant_slug=restaurant.slug,
                rating=pizza.rating,
                pizza_name=pizza.display_name,
                visit_date=pizza.visit_date,
            ))

    groups: dict[str, ItemGroup] = {}
    for key, entries in grouped.items():
        if len(entries) < MIN_PARTICIPANTS:
            logger.debug("Dropping pizza group %r: only %d restaurant(s)", key, len(entries))
            continue
        groups[key] = ItemGroup(entries[0].pizza_name or "Unknown", entries)
    return groups
