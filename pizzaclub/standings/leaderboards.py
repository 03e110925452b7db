from __future__ import annotations

import logging

from .aggregation import aggregate_pizza_overall_ratings, aggregate_restaurant_ratings
from .matching import aggregate_same_named_pizzas
from .models import (
    OTHER_STUFF_CATEGORIES,
    PIZZA_COMPONENT_CATEGORIES,
    AvailableCategories,
    CategoryMeta,
    LeaderboardData,
    Restaurant,
    StandingsData,
)
from .ranking import apply_competition_ranking
from .ratings import (
    OTHER_STUFF,
    OVERALL,
    PIZZA_COMPONENTS,
    PIZZA_OVERALL,
    get_parent_category,
    is_nested_ratings,
)

logger = logging.getLogger(__name__)

_DEFAULT_LABELS: dict[str, str] = {
    OVERALL: "Overall Rating",
    PIZZA_OVERALL: "Pizza Rating",
    **{meta.key: meta.label for meta in PIZZA_COMPONENT_CATEGORIES + OTHER_STUFF_CATEGORIES},
}


def label_for(category: str) -> str:
    """Display label for a category key, e.g. ``wait-staff`` -> ``Wait Staff``."""
    return _DEFAULT_LABELS.get(category) or category.replace("-", " ").replace("_", " ").title()


def build_leaderboard(
    restaurants: list[Restaurant],
    category: str,
    title: str,
    description: str | None = None,
) -> LeaderboardData:
    """Rank every restaurant by its best score for one category.

    Restaurants with no qualifying visit are left out rather than ranked
    with a zero, so the result may have no entries at all.
    """
    if category == PIZZA_OVERALL:
        entries = aggregate_pizza_overall_ratings(restaurants)
    else:
        entries = aggregate_restaurant_ratings(restaurants, category)

    return LeaderboardData(
        title=title,
        description=description,
        category=category,
        entries=apply_competition_ranking(entries),
    )


def _build_category_leaderboards(
    restaurants: list[Restaurant],
    categories: list[CategoryMeta],
) -> list[LeaderboardData]:
    leaderboards = []
    for meta in categories:
        leaderboard = build_leaderboard(restaurants, meta.key, meta.label, meta.description)
        if leaderboard.entries:
            leaderboards.append(leaderboard)
        else:
            logger.debug("No ratings yet for category %r", meta.key)
    return leaderboards


def build_pizza_component_leaderboards(
    restaurants: list[Restaurant],
    categories: list[CategoryMeta] | None = None,
) -> list[LeaderboardData]:
    if categories is None:
        categories = PIZZA_COMPONENT_CATEGORIES
    return _build_category_leaderboards(restaurants, categories)


def build_other_stuff_leaderboards(
    restaurants: list[Restaurant],
    categories: list[CategoryMeta] | None = None,
) -> list[LeaderboardData]:
    if categories is None:
        categories = OTHER_STUFF_CATEGORIES
    return _build_category_leaderboards(restaurants, categories)


def build_same_named_pizza_leaderboards(restaurants: list[Restaurant]) -> list[LeaderboardData]:
    """One leaderboard per pizza ordered at two or more restaurants.

    Boards with more participating restaurants come first.
    """
    leaderboards: list[LeaderboardData] = []
    for key, group in aggregate_same_named_pizzas(restaurants).items():
        count = len(group.entries)
        leaderboards.append(LeaderboardData(
            title=group.display_name,
            description=f"Best {group.display_name} across {count} restaurants",
            category=f"pizza:{key}",
            entries=apply_competition_ranking(group.entries),
        ))

    return sorted(leaderboards, key=lambda lb: (-len(lb.entries), lb.category))


def discover_available_categories(restaurants: list[Restaurant]) -> AvailableCategories:
    """Collect the sub-category keys actually present in nested visits."""
    pizza_components: set[str] = set()
    other_stuff: set[str] = set()

    for restaurant in restaurants:
        for visit in restaurant.visits:
            if not is_nested_ratings(visit.ratings):
                continue
            components = get_parent_category(visit.ratings, PIZZA_COMPONENTS)
            if components is not None:
                pizza_components.update(components.keys())
            other = get_parent_category(visit.ratings, OTHER_STUFF)
            if other is not None:
                other_stuff.update(other.keys())

    return AvailableCategories(
        pizza_components=sorted(pizza_components),
        other_stuff=sorted(other_stuff),
    )


def categories_from_keys(keys: list[str], parent: str) -> list[CategoryMeta]:
    return [CategoryMeta(key=key, label=label_for(key), parent=parent) for key in keys]


def build_all_standings(
    restaurants: list[Restaurant],
    pizza_components: list[CategoryMeta] | None = None,
    other_stuff: list[CategoryMeta] | None = None,
) -> StandingsData:
    return StandingsData(
        overall=build_leaderboard(
            restaurants, OVERALL, label_for(OVERALL), "Best overall restaurant ratings",
        ),
        pizza_overall=build_leaderboard(
            restaurants, PIZZA_OVERALL, label_for(PIZZA_OVERALL), "Best pizza ratings",
        ),
        pizza_components=build_pizza_component_leaderboards(restaurants, pizza_components),
        other_stuff=build_other_stuff_leaderboards(restaurants, other_stuff),
        same_named_pizzas=build_same_named_pizza_leaderboards(restaurants),
    )
