from __future__ import annotations

import random

from pizzaclub.standings.leaderboards import (
    build_all_standings,
    build_leaderboard,
    build_other_stuff_leaderboards,
    build_pizza_component_leaderboards,
    build_same_named_pizza_leaderboards,
    categories_from_keys,
    discover_available_categories,
)
from pizzaclub.standings.models import CategoryMeta, Restaurant


def _restaurant(rid: str, name: str, *ratings: dict) -> Restaurant:
    return Restaurant(
        id=rid,
        name=name,
        visits=[{"date": f"2024-0{i + 1}-01", "ratings": r} for i, r in enumerate(ratings)],
    )


def _pizzas(*orders: tuple[str, float]) -> dict:
    return {"pizzas": [{"order": order, "rating": rating} for order, rating in orders]}


DATASET = [
    _restaurant(
        "1", "Pequod's",
        {"overall": 4.5, "pizza-components": {"crust": 5, "sauce": 4},
         "the-other-stuff": {"wait-staff": 4}},
        {"overall": 4.75, **_pizzas(("Sausage", 4.75), ('14" Pepperoni', 4.0))},
    ),
    _restaurant(
        "2", "Vito & Nick's",
        {"overall": 4.75, "pizza-components": {"crust": 4.5, "toppings": 4.5},
         "the-other-stuff": {"atmosphere": 4.5}, **_pizzas(("Medium Sausage", 5))},
    ),
    _restaurant(
        "3", "Home Run Inn",
        {"overall": 3.5, "crust": 3},
        {"overall": 4, "pizza-components": {"bake": 4}, **_pizzas(("Large Pepperoni", 3.75), ("Sausage", 3.5))},
    ),
    _restaurant("4", "Marie's", {"crust": 4, "garlic-bread": 5}),
]


def test_end_to_end_best_visit_ties():
    restaurants = [
        _restaurant("a", "A", {"overall": 4.5}, {"overall": 4.9}),
        _restaurant("b", "B", {"overall": 4.9}),
    ]
    board = build_leaderboard(restaurants, "overall", "Overall Rating")
    assert board.title == "Overall Rating"
    assert board.category == "overall"
    assert board.description is None
    assert [(e.restaurant_id, e.rating, e.rank, e.is_tied) for e in board.entries] == [
        ("a", 4.9, 1, True),
        ("b", 4.9, 1, True),
    ]
    assert all(e.rating != 4.5 for e in board.entries)
    assert board.entries[0].visit_date == "2024-02-01"


def test_at_most_one_entry_per_restaurant():
    for category in ("overall", "pizzaOverall", "crust", "sauce", "wait-staff", "atmosphere"):
        ids = [e.restaurant_id for e in build_leaderboard(DATASET, category, category).entries]
        assert len(ids) == len(set(ids))


def test_duplicate_restaurant_records_merge_into_one_entry():
    restaurants = [
        _restaurant("1", "Pequod's", {"overall": 4.0, **_pizzas(("Sausage", 4.0))}),
        _restaurant("2", "Vito & Nick's", {"overall": 4.25}),
        _restaurant("1", "Pequod's", {"overall": 4.5, **_pizzas(("Sausage", 3.0))}),
    ]
    for _ in range(5):
        board = build_leaderboard(random.sample(restaurants, len(restaurants)), "overall", "Overall")
        assert [(e.restaurant_id, e.rating, e.rank) for e in board.entries] == [
            ("1", 4.5, 1),
            ("2", 4.25, 2),
        ]

    pizza_board = build_leaderboard(restaurants, "pizzaOverall", "Pizza Rating")
    assert [(e.restaurant_id, e.rating) for e in pizza_board.entries] == [("1", 4.0)]


def test_duplicate_records_with_equal_scores_pick_by_name():
    restaurants = [
        _restaurant("1", "Pequods", {"overall": 4.0}),
        _restaurant("1", "Pequod's", {"overall": 4.0}),
    ]
    for ordering in (restaurants, list(reversed(restaurants))):
        entries = build_leaderboard(ordering, "overall", "Overall").entries
        assert [(e.restaurant_id, e.restaurant_name) for e in entries] == [("1", "Pequod's")]


def test_absent_category_is_not_zero():
    board = build_leaderboard(DATASET, "wait-staff", "Wait Staff")
    assert [e.restaurant_id for e in board.entries] == ["1"]


def test_empty_leaderboard_is_valid():
    board = build_leaderboard(DATASET, "beverages", "Beverages", "Drinks")
    assert board.entries == []
    assert board.description == "Drinks"


def test_pizza_overall_uses_derived_average():
    board = build_leaderboard(DATASET, "pizzaOverall", "Pizza Rating")
    ratings = {e.restaurant_id: e.rating for e in board.entries}
    # Pequod's: (4.75 + 4.0) / 2; Home Run Inn: (3.75 + 3.5) / 2
    assert ratings == {"2": 5.0, "1": 4.38, "3": 3.63}


def test_deterministic_regardless_of_input_order():
    expected = build_leaderboard(DATASET, "crust", "Crust").model_dump()
    shuffled = list(DATASET)
    rng = random.Random(7)
    for _ in range(5):
        rng.shuffle(shuffled)
        assert build_leaderboard(shuffled, "crust", "Crust").model_dump() == expected


def test_flat_only_restaurant_excluded_from_component_boards():
    board = build_leaderboard(DATASET, "crust", "Crust")
    # Home Run Inn's top-level crust counts because that visit has a numeric overall
    assert [(e.restaurant_id, e.rating) for e in board.entries] == [("1", 5.0), ("2", 4.5), ("3", 3.0)]


# ── Batch builders ───────────────────────────────────────────────────────


class TestCategoryBatches:
    def test_default_pizza_components_drop_empty_boards(self):
        boards = build_pizza_component_leaderboards(DATASET)
        assert [b.category for b in boards] == ["crust", "sauce", "bake", "toppings"]

    def test_custom_descriptors(self):
        boards = build_other_stuff_leaderboards(DATASET, [
            CategoryMeta(key="wait-staff", label="Wait Staff", description="Service with a smile"),
            CategoryMeta(key="value", label="Value"),
        ])
        assert len(boards) == 1
        assert boards[0].title == "Wait Staff"
        assert boards[0].description == "Service with a smile"

    def test_explicit_empty_list_builds_nothing(self):
        assert build_other_stuff_leaderboards(DATASET, []) == []


class TestSameNamedPizzas:
    def test_boards_for_shared_pizzas(self):
        boards = build_same_named_pizza_leaderboards(DATASET)
        by_category = {b.category: b for b in boards}
        assert set(by_category) == {"pizza:sausage", "pizza:pepperoni"}

        sausage = by_category["pizza:sausage"]
        assert sausage.title == "Sausage"
        assert sausage.description == "Best Sausage across 3 restaurants"
        assert [e.restaurant_id for e in sausage.entries] == ["2", "1", "3"]
        assert [e.rank for e in sausage.entries] == [1, 2, 3]

    def test_more_participants_first(self):
        boards = build_same_named_pizza_leaderboards(DATASET)
        assert [len(b.entries) for b in boards] == [3, 2]

    def test_single_restaurant_pizza_never_appears(self):
        restaurants = [_restaurant("x", "X", _pizzas(("Hawaiian", 5)))] + DATASET
        categories = [b.category for b in build_same_named_pizza_leaderboards(restaurants)]
        assert "pizza:hawaiian" not in categories


# ── Discovery ────────────────────────────────────────────────────────────


def test_discover_available_categories():
    available = discover_available_categories(DATASET)
    assert available.pizza_components == ["bake", "crust", "sauce", "toppings"]
    assert available.other_stuff == ["atmosphere", "wait-staff"]


def test_discovery_ignores_flat_visits():
    flat_only = [_restaurant("4", "Marie's", {"crust": 4, "garlic-bread": 5})]
    available = discover_available_categories(flat_only)
    assert available.pizza_components == []
    assert available.other_stuff == []


def test_categories_from_keys_labels():
    metas = categories_from_keys(["wait-staff", "garlic_knots", "crust"], "the-other-stuff")
    assert [m.label for m in metas] == ["Wait Staff", "Garlic Knots", "Crust"]
    assert all(m.parent == "the-other-stuff" for m in metas)


def test_build_all_standings():
    standings = build_all_standings(DATASET)
    assert standings.overall.title == "Overall Rating"
    assert standings.pizza_overall.title == "Pizza Rating"
    assert standings.overall.entries[0].rating == 4.75
    assert [b.category for b in standings.other_stuff] == ["wait-staff", "atmosphere"]
    assert len(standings.same_named_pizzas) == 2


def test_builders_do_not_mutate_input():
    before = [r.model_dump() for r in DATASET]
    build_all_standings(DATASET)
    discover_available_categories(DATASET)
    assert [r.model_dump() for r in DATASET] == before
