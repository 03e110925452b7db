from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, NamedTuple

from pydantic import ValidationError

from .config import DEFAULT_STANDINGS_CONFIG, StandingsConfig
from .models import Restaurant

logger = logging.getLogger(__name__)


class DatasetUnavailableError(RuntimeError):
    """The restaurant snapshot is missing or is not a list of restaurants."""


class Dataset(NamedTuple):
    restaurants: list[Restaurant]
    fingerprint: str


_dataset: Dataset | None = None
_loaded_from: tuple[Path, float] | None = None


def parse_restaurants(payload: Any) -> list[Restaurant]:
    """Turn a decoded JSON payload into restaurant records.

    Accepts a bare list or an object with a ``restaurants`` list.  Records
    that fail validation are skipped with a warning.
    """
    if isinstance(payload, dict):
        payload = payload.get("restaurants")
    if not isinstance(payload, list):
        raise DatasetUnavailableError("Expected a JSON list of restaurants")

    restaurants: list[Restaurant] = []
    for index, raw in enumerate(payload):
        try:
            restaurants.append(Restaurant.model_validate(raw))
        except ValidationError:
            logger.warning("Skipping malformed restaurant record at index %d", index, exc_info=True)
    return restaurants


def _load(path: Path) -> Dataset:
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DatasetUnavailableError(f"Cannot read restaurant data at {path}") from exc

    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise DatasetUnavailableError(f"Restaurant data at {path} is not valid JSON") from exc

    fingerprint = hashlib.sha256(raw).hexdigest()[:16]
    return Dataset(parse_restaurants(payload), fingerprint)


def get_dataset(config: StandingsConfig = DEFAULT_STANDINGS_CONFIG) -> Dataset:
    """Return the restaurant snapshot, re-reading it when the file changes."""
    global _dataset, _loaded_from
    path = config.data_path
    try:
        mtime = path.stat().st_mtime
    except OSError as exc:
        raise DatasetUnavailableError(f"Restaurant data not found at {path}") from exc

    if _dataset is None or _loaded_from != (path, mtime):
        _dataset = _load(path)
        _loaded_from = (path, mtime)
        logger.info(
            "Loaded %d restaurants from %s (fingerprint %s)",
            len(_dataset.restaurants), path, _dataset.fingerprint,
        )
    return _dataset


def reset_dataset() -> None:
    global _dataset, _loaded_from
    _dataset = None
    _loaded_from = None
