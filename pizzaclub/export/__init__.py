"""
Standings export package.

Responsibilities:
- Build every leaderboard from the restaurant snapshot.
- Flatten ranked entries into one tabular row each.
- Persist the published standings as CSV.
"""
