"""
Result contracts produced by the scoring, aggregation and feedback stages.

These are value objects owned by the caller; nothing here is persisted.
"""

from pydantic import Field, computed_field

from riftform.core.utils.clamp import rounded_percentage

from .common import BaseContract, Lane, StabilityClass, Window


class CategoryBreakdown(BaseContract):
    """Raw (pre role-weight) EdgeScore category points."""

    combat: float = Field(..., ge=0, le=25)
    damage: float = Field(..., ge=0, le=18)
    objectives: float = Field(..., ge=0, le=20)
    economy: float = Field(..., ge=0, le=10)
    vision: float = Field(..., ge=0, le=8)
    utility: float = Field(..., ge=0, le=12)
    clutch: float = Field(..., ge=0, le=12)
    impact: float = Field(..., ge=0, le=10)
    win_contribution: float = Field(..., ge=0, le=10)


class PlayerScore(BaseContract):
    """EdgeScore result for one participant of one match."""

    rank: int = Field(..., ge=1, le=10, description="1 = best in match")
    score: float = Field(..., ge=0, le=100, description="Role-normalized EdgeScore")
    breakdown: CategoryBreakdown


class LaneStats(BaseContract):
    games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)


class ChampionStats(BaseContract):
    """Season totals for one champion."""

    name: str
    games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    total_impact: float = Field(0.0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def win_rate(self) -> int:
        return rounded_percentage(self.wins, self.games)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kda_ratio(self) -> float:
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / self.deaths

    @property
    def is_perfect(self) -> bool:
        """No deaths across every game on this champion."""
        return self.games > 0 and self.deaths == 0

    @property
    def average_impact(self) -> float:
        if self.games == 0:
            return 0.0
        return self.total_impact / self.games


class AverageKDA(BaseContract):
    kills: float = 0.0
    deaths: float = 0.0
    assists: float = 0.0

    @property
    def ratio(self) -> float:
        """KDA ratio of the per-game averages."""
        if self.deaths > 0:
            return (self.kills + self.assists) / self.deaths
        return self.kills + self.assists


class AggregationResult(BaseContract):
    """Summary statistics for one window of a player's history."""

    window: Window
    total_games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    win_rate: int = Field(0, ge=0, le=100, description="Rounded percentage")
    average_kda: AverageKDA = Field(default_factory=AverageKDA)
    lanes: dict[Lane, LaneStats] = Field(default_factory=dict)
    champions: dict[str, ChampionStats] = Field(
        default_factory=dict, description="Season window only"
    )
    impact_scores: tuple[float, ...] = Field(default=(), description="Most-recent-first")
    average_impact: float = Field(0.0, ge=0, le=10)
    trend: float | None = Field(None, description="Recent window only")
    stability: float | None = Field(
        None, ge=0, description="Population std dev of impact; None when insufficient data"
    )


class PlayerProfile(BaseContract):
    """Season totals merged with recent-window impact metrics."""

    puuid: str
    total_games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    win_rate: int = Field(0, ge=0, le=100)
    average_kda: AverageKDA = Field(default_factory=AverageKDA)
    lanes: dict[Lane, LaneStats] = Field(default_factory=dict)
    champions: dict[str, ChampionStats] = Field(default_factory=dict)

    impact_scores: tuple[float, ...] = ()
    average_impact: float = Field(0.0, ge=0, le=10)
    trend: float = 0.0
    stability: float | None = Field(None, ge=0)


class BestChampion(BaseContract):
    name: str
    win_rate: int = Field(..., ge=0, le=100)
    games: int = Field(..., ge=1)


class DerivedMetrics(BaseContract):
    """Feedback inputs computed from a profile."""

    kda_ratio: float = Field(..., ge=0)
    kill_participation: float = Field(..., ge=0, description="Average kills + assists per game")
    stability_class: StabilityClass
    best_champion: BestChampion | None = None
    most_played_champion: str | None = None


class FeedbackItem(BaseContract):
    text: str
    priority: int
    icon: str


class FeedbackReport(BaseContract):
    strengths: tuple[FeedbackItem, ...] = Field(..., min_length=1, max_length=2)
    improvements: tuple[FeedbackItem, ...] = Field(..., min_length=1, max_length=2)


class ProfileReport(BaseContract):
    """Everything the profile view needs for one player."""

    profile: PlayerProfile
    derived: DerivedMetrics
    feedback: FeedbackReport
