from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "restaurants.json"


@dataclass(frozen=True)
class StandingsConfig:
    data_path: Path = Path(os.getenv("PIZZACLUB_DATA_PATH", str(_DEFAULT_DATA_PATH)))
    cache_ttl: float = float(os.getenv("PIZZACLUB_CACHE_TTL", "300"))
    cache_max_entries: int = int(os.getenv("PIZZACLUB_CACHE_MAX_ENTRIES", "64"))


DEFAULT_STANDINGS_CONFIG = StandingsConfig()
