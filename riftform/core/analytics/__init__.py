"""Form analytics over a player's match history.

Pure domain logic (zero I/O):
- aggregation: recent/season windows, trend, stability, combined profile
- feedback: prioritized strengths and improvements from a profile
"""

from riftform.core.analytics.aggregation import (
    aggregate_window,
    analyze_recent,
    analyze_season,
    build_player_profile,
    calculate_stability,
    calculate_trend,
    champion_leaderboard,
    filter_matches,
    lane_label,
    merge_windows,
)
from riftform.core.analytics.feedback import (
    FEEDBACK_RULES,
    classify_stability,
    derive_metrics,
    find_best_champion,
    generate_feedback,
)

__all__ = [
    "FEEDBACK_RULES",
    "aggregate_window",
    "analyze_recent",
    "analyze_season",
    "build_player_profile",
    "calculate_stability",
    "calculate_trend",
    "champion_leaderboard",
    "classify_stability",
    "derive_metrics",
    "filter_matches",
    "find_best_champion",
    "generate_feedback",
    "lane_label",
    "merge_windows",
]
