"""
Standings engine.

Responsibilities:
- Tell nested rating records apart from legacy flat ones.
- Reduce each restaurant's visits to its best score per category.
- Match the same pizza across restaurants despite free-text order names.
- Rank entries with tie-aware competition ranking.
- Package everything into leaderboards and discover which categories exist.
"""
