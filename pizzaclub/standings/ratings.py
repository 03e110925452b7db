from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

OVERALL = "overall"
PIZZA_OVERALL = "pizzaOverall"
PIZZAS = "pizzas"
PIZZA_COMPONENTS = "pizza-components"
OTHER_STUFF = "the-other-stuff"

PARENT_CATEGORIES = (PIZZA_COMPONENTS, OTHER_STUFF)


def as_finite_number(value: Any) -> float | None:
    """Return *value* as a float if it is a finite real number, else ``None``."""
    # bool is an int subclass; a stray True must not read as a 1.0 score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None


def is_nested_ratings(ratings: Any) -> bool:
    """Tell the nested rating tree apart from the legacy flat category map.

    Nested form is recognised by a mapping under one of the parent-category
    keys, a list under ``pizzas``, or a numeric ``overall``.  Everything else,
    including values that are not mappings at all, counts as flat.
    """
    if not isinstance(ratings, Mapping):
        return False
    if any(isinstance(ratings.get(parent), Mapping) for parent in PARENT_CATEGORIES):
        return True
    if isinstance(ratings.get(PIZZAS), list):
        return True
    return as_finite_number(ratings.get(OVERALL)) is not None


def get_parent_category(ratings: Mapping[str, Any], parent: str) -> Mapping[str, Any] | None:
    child = ratings.get(parent)
    return child if isinstance(child, Mapping) else None


def extract_category_rating(ratings: Mapping[str, Any], category: str) -> float | None:
    """Look up one category's score in a nested rating record.

    Lookup order: ``overall``/``pizzaOverall`` at the top level, then the
    pizza-components map, then the other-stuff map, then any other numeric
    top-level key.  Returns ``None`` when nothing resolves to a finite number.
    """
    if category in (OVERALL, PIZZA_OVERALL):
        value = as_finite_number(ratings.get(category))
        if value is not None:
            return value

    for parent in PARENT_CATEGORIES:
        children = get_parent_category(ratings, parent)
        if children is not None and category in children:
            value = as_finite_number(children[category])
            if value is not None:
                return value

    if category in PARENT_CATEGORIES or category == PIZZAS:
        return None
    return as_finite_number(ratings.get(category))


def pizza_ratings(ratings: Mapping[str, Any]) -> list[tuple[str, float]]:
    """Return ``(order, rating)`` pairs for every well-formed pizza in a visit."""
    pizzas = ratings.get(PIZZAS)
    if not isinstance(pizzas, list):
        return []

    pairs: list[tuple[str, float]] = []
    for pizza in pizzas:
        if not isinstance(pizza, Mapping):
            continue
        order = pizza.get("order")
        rating = as_finite_number(pizza.get("rating"))
        if isinstance(order, str) and order.strip() and rating is not None:
            pairs.append((order, rating))
    return pairs


def round_half_away_from_zero(value: float, digits: int = 2) -> float:
    scale = 10 ** digits
    scaled = abs(value) * scale
    return math.copysign(math.floor(scaled + 0.5) / scale, value)
