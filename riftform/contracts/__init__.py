"""Contract models for data validation."""

from .analysis_results import (
    AggregationResult,
    AverageKDA,
    BestChampion,
    CategoryBreakdown,
    ChampionStats,
    DerivedMetrics,
    FeedbackItem,
    FeedbackReport,
    LaneStats,
    PlayerProfile,
    PlayerScore,
    ProfileReport,
)
from .common import KNOWN_LANES, Lane, StabilityClass, Window
from .match import MatchSummary, ParticipantSnapshot, TeamObjectiveTotals

__all__ = [
    "AggregationResult",
    "AverageKDA",
    "BestChampion",
    "CategoryBreakdown",
    "ChampionStats",
    "DerivedMetrics",
    "FeedbackItem",
    "FeedbackReport",
    "KNOWN_LANES",
    "Lane",
    "LaneStats",
    "MatchSummary",
    "ParticipantSnapshot",
    "PlayerProfile",
    "PlayerScore",
    "ProfileReport",
    "StabilityClass",
    "TeamObjectiveTotals",
    "Window",
]
