from __future__ import annotations

from .models import LeaderboardEntry, RankedEntry


def _sort_key(entry: LeaderboardEntry) -> tuple[float, str, str, str]:
    """Rating descending, then restaurant name ascending.

    Name and id act as further tie-breaks so equal inputs in any order
    always sort the same way.
    """
    return (-entry.rating, entry.restaurant_name.casefold(), entry.restaurant_name, entry.restaurant_id)


def apply_competition_ranking(entries: list[LeaderboardEntry]) -> list[RankedEntry]:
    """Sort entries and assign standard competition ranks (1, 2, 2, 4).

    Tied ratings share the rank of the first entry in their block; the next
    lower rating takes its 1-based position in the full list.  ``is_tied``
    is set when either neighbour in sorted order has the same rating.
    """
    ordered = sorted(entries, key=_sort_key)

    ranked: list[RankedEntry] = []
    rank = 1
    for i, entry in enumerate(ordered):
        prev_rating = ordered[i - 1].rating if i > 0 else None
        next_rating = ordered[i + 1].rating if i + 1 < len(ordered) else None

        if prev_rating is not None and entry.rating < prev_rating:
            rank = i + 1

        ranked.append(RankedEntry(
            **entry.model_dump(exclude={"rank", "is_tied"}),
            rank=rank,
            is_tied=entry.rating in (prev_rating, next_rating),
        ))
    return ranked
