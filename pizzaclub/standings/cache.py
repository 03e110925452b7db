from __future__ import annotations

import logging
import time
from typing import Any

from .config import DEFAULT_STANDINGS_CONFIG

logger = logging.getLogger(__name__)

# Insertion ordered, so the first key is always the oldest view
_cache: dict[str, dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0


def _make_key(fingerprint: str, view: str) -> str:
    # A new dataset fingerprint invalidates every view built from the old one
    return f"{fingerprint}:{view}"


def _is_fresh(entry: dict[str, Any], ttl: float, now: float) -> bool:
    return now - entry["created_at"] < ttl


def cache_get(fingerprint: str, view: str, ttl: float = DEFAULT_STANDINGS_CONFIG.cache_ttl) -> Any | None:
    global _hits, _misses
    key = _make_key(fingerprint, view)
    entry = _cache.get(key)
    if entry and _is_fresh(entry, ttl, time.time()):
        _hits += 1
        return entry["value"]
    if entry:
        del _cache[key]
    _misses += 1
    return None


def cache_set(
    fingerprint: str,
    view: str,
    value: Any,
    ttl: float = DEFAULT_STANDINGS_CONFIG.cache_ttl,
    max_entries: int = DEFAULT_STANDINGS_CONFIG.cache_max_entries,
) -> None:
    now = time.time()
    stale = [
        key for key, entry in _cache.items()
        if entry["fingerprint"] != fingerprint or not _is_fresh(entry, ttl, now)
    ]
    for key in stale:
        del _cache[key]

    key = _make_key(fingerprint, view)
    _cache.pop(key, None)
    while _cache and len(_cache) >= max_entries:
        oldest = next(iter(_cache))
        logger.debug("Evicting cached view %s", oldest)
        del _cache[oldest]

    if max_entries > 0:
        _cache[key] = {"fingerprint": fingerprint, "value": value, "created_at": now}


def get_cache_stats() -> dict:
    lookups = _hits + _misses
    return {
        "size": len(_cache),
        "max_size": DEFAULT_STANDINGS_CONFIG.cache_max_entries,
        "snapshots": len({entry["fingerprint"] for entry in _cache.values()}),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / lookups * 100, 1) if lookups else 0.0,
    }


def clear_cache() -> None:
    """Drop every cached view and reset the hit/miss counters."""
    global _hits, _misses
    _cache.clear()
    _hits = _misses = 0
