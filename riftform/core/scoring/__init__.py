"""Per-match scoring.

Two complementary scorers, both pure domain logic with zero I/O:
1. Impact Score - absolute 0-10 scalar for one player in one match
2. EdgeScore - relative 0-100 ranking of all 10 players, role-normalized
"""

from riftform.core.scoring.edge_score import (
    CATEGORY_CAPS,
    ROLE_WEIGHTS,
    find_mvp,
    rank_players_in_match,
    team_average_scores,
)
from riftform.core.scoring.impact import ImpactMemo, calculate_match_impact

__all__ = [
    "CATEGORY_CAPS",
    "ROLE_WEIGHTS",
    "ImpactMemo",
    "calculate_match_impact",
    "find_mvp",
    "rank_players_in_match",
    "team_average_scores",
]
