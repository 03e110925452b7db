from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from ..standings.config import DEFAULT_STANDINGS_CONFIG, StandingsConfig
from ..standings.data_store import get_dataset
from ..standings.leaderboards import (
    build_all_standings,
    categories_from_keys,
    discover_available_categories,
)
from ..standings.models import LeaderboardData, Restaurant, StandingsData
from ..standings.ratings import OTHER_STUFF, PIZZA_COMPONENTS
from .config import DEFAULT_EXPORT_CONFIG, ExportConfig


EXPORT_COLUMNS: List[str] = [
    "board",
    "category",
    "title",
    "rank",
    "is_tied",
    "restaurant_id",
    "restaurant_name",
    "restaurant_slug",
    "rating",
    "pizza_name",
    "visit_date",
]


def _iter_boards(standings: StandingsData):
    yield "overall", standings.overall
    yield "pizza_overall", standings.pizza_overall
    for board in standings.pizza_components:
        yield "pizza_components", board
    for board in standings.other_stuff:
        yield "other_stuff", board
    for board in standings.same_named_pizzas:
        yield "same_named_pizzas", board


def _board_rows(board_name: str, board: LeaderboardData) -> List[dict]:
    return [
        {
            "board": board_name,
            "category": board.category,
            "title": board.title,
            "rank": entry.rank,
            "is_tied": entry.is_tied,
            "restaurant_id": entry.restaurant_id,
            "restaurant_name": entry.restaurant_name,
            "restaurant_slug": entry.restaurant_slug,
            "rating": entry.rating,
            "pizza_name": entry.pizza_name,
            "visit_date": entry.visit_date,
        }
        for entry in board.entries
    ]


def standings_to_frame(restaurants: List[Restaurant]) -> pd.DataFrame:
    """Build all standings and flatten them into one row per ranked entry."""
    available = discover_available_categories(restaurants)
    standings = build_all_standings(
        restaurants,
        pizza_components=categories_from_keys(available.pizza_components, PIZZA_COMPONENTS),
        other_stuff=categories_from_keys(available.other_stuff, OTHER_STUFF),
    )

    rows: List[dict] = []
    for board_name, board in _iter_boards(standings):
        rows.extend(_board_rows(board_name, board))

    # Ensure all expected columns exist and order them
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def run_export(
    config: ExportConfig = DEFAULT_EXPORT_CONFIG,
    standings_config: StandingsConfig = DEFAULT_STANDINGS_CONFIG,
) -> Path:
    """
    Execute the standings export.

    Steps:
    - Load the restaurant snapshot.
    - Build every leaderboard family.
    - Persist the ranked entries as CSV for publishing.
    """

    config.output_dir.mkdir(parents=True, exist_ok=True)

    dataset = get_dataset(standings_config)
    frame = standings_to_frame(dataset.restaurants)

    output_path = config.output_path
    frame.to_csv(output_path, index=False)
    return output_path


if __name__ == "__main__":
    path = run_export()
    print(f"Export complete. Standings saved to: {path}")
