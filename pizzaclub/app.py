from __future__ import annotations

from typing import Callable, TypeVar

from fastapi import Depends, FastAPI, HTTPException

from .standings.cache import cache_get, cache_set, clear_cache, get_cache_stats
from .standings.data_store import Dataset, DatasetUnavailableError, get_dataset
from .standings.leaderboards import (
    build_all_standings,
    build_leaderboard,
    build_same_named_pizza_leaderboards,
    categories_from_keys,
    discover_available_categories,
    label_for,
)
from .standings.models import AvailableCategories, LeaderboardData, StandingsData
from .standings.ratings import OTHER_STUFF, OVERALL, PIZZA_COMPONENTS, PIZZA_OVERALL

T = TypeVar("T")

app = FastAPI(title="Pizza Club Standings API", version="1.0.0")


def require_dataset() -> Dataset:
    """Raise 503 if the restaurant snapshot cannot be loaded."""
    try:
        return get_dataset()
    except DatasetUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


def _cached(dataset: Dataset, view: str, build: Callable[[], T]) -> T:
    value = cache_get(dataset.fingerprint, view)
    if value is None:
        value = build()
        cache_set(dataset.fingerprint, view, value)
    return value


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/standings", response_model=StandingsData)
def standings(dataset: Dataset = Depends(require_dataset)) -> StandingsData:
    def build() -> StandingsData:
        available = discover_available_categories(dataset.restaurants)
        return build_all_standings(
            dataset.restaurants,
            pizza_components=categories_from_keys(available.pizza_components, PIZZA_COMPONENTS),
            other_stuff=categories_from_keys(available.other_stuff, OTHER_STUFF),
        )

    return _cached(dataset, "standings", build)


@app.get("/standings/categories", response_model=AvailableCategories)
def categories(dataset: Dataset = Depends(require_dataset)) -> AvailableCategories:
    return _cached(
        dataset, "categories", lambda: discover_available_categories(dataset.restaurants),
    )


@app.get("/standings/leaderboards/{category}", response_model=LeaderboardData)
def leaderboard(category: str, dataset: Dataset = Depends(require_dataset)) -> LeaderboardData:
    def build() -> LeaderboardData:
        return build_leaderboard(dataset.restaurants, category, label_for(category))

    # An unrated category is a valid, empty leaderboard rather than a 404
    available = categories(dataset)
    known = {OVERALL, PIZZA_OVERALL, *available.pizza_components, *available.other_stuff}
    if category not in known:
        return build()
    return _cached(dataset, f"leaderboard:{category}", build)


@app.get("/standings/pizzas", response_model=list[LeaderboardData])
def same_named_pizzas(dataset: Dataset = Depends(require_dataset)) -> list[LeaderboardData]:
    return _cached(
        dataset, "pizzas", lambda: build_same_named_pizza_leaderboards(dataset.restaurants),
    )


@app.get("/standings/pizzas/{key}", response_model=LeaderboardData)
def same_named_pizza(key: str, dataset: Dataset = Depends(require_dataset)) -> LeaderboardData:
    boards = same_named_pizzas(dataset)
    wanted = key if key.startswith("pizza:") else f"pizza:{key}"
    for board in boards:
        if board.category == wanted:
            return board
    raise HTTPException(status_code=404, detail=f"No pizza ordered at 2+ restaurants matches {key!r}")


# ── Cache endpoints ──────────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()


@app.post("/cache/clear")
def cache_clear() -> dict:
    clear_cache()
    return {"status": "cleared"}
