"""Rule-based strengths/improvements selection.

A fixed, ordered rule table is evaluated against a player profile. Each rule
reads one metric and walks its tiers top-down; the first tier whose condition
holds contributes one FeedbackItem to its pool. Pools are then sorted by
priority (stable, so table order breaks ties) and cut to the top entries.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

from riftform.contracts.analysis_results import (
    BestChampion,
    DerivedMetrics,
    FeedbackItem,
    FeedbackReport,
    PlayerProfile,
)
from riftform.contracts.common import StabilityClass

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 2
DEFAULT_BEST_CHAMPION_MIN_GAMES = 5

Pool = Literal["strength", "improvement"]


@dataclass(frozen=True)
class FeedbackTier:
    condition: Callable[[Any], bool]
    priority: int
    icon: str
    template: str

    def render(self, value: Any) -> FeedbackItem:
        return FeedbackItem(
            text=self.template.format(value=value), priority=self.priority, icon=self.icon
        )


@dataclass(frozen=True)
class FeedbackRule:
    name: str
    pool: Pool
    metric: Callable[[PlayerProfile, DerivedMetrics], Any]
    tiers: tuple[FeedbackTier, ...]

    def evaluate(self, profile: PlayerProfile, derived: DerivedMetrics) -> FeedbackItem | None:
        value = self.metric(profile, derived)
        if value is None:
            return None
        for tier in self.tiers:
            if tier.condition(value):
                return tier.render(value)
        return None


def classify_stability(stability: float | None) -> StabilityClass:
    """Band a standard deviation of impact scores."""
    if stability is None:
        return StabilityClass.INSUFFICIENT_DATA
    if stability < 1:
        return StabilityClass.HIGH
    if stability < 2:
        return StabilityClass.MEDIUM
    return StabilityClass.LOW


def find_best_champion(
    profile: PlayerProfile, min_games: int = DEFAULT_BEST_CHAMPION_MIN_GAMES
) -> BestChampion | None:
    """Highest win rate champion with at least ``min_games`` games.

    Ties prefer more games, then the champion name.
    """
    eligible = [c for c in profile.champions.values() if c.games >= min_games]
    if not eligible:
        return None
    best = min(eligible, key=lambda c: (-(c.wins / c.games), -c.games, c.name))
    return BestChampion(name=best.name, win_rate=best.win_rate, games=best.games)


def derive_metrics(
    profile: PlayerProfile, *, best_champion_min_games: int = DEFAULT_BEST_CHAMPION_MIN_GAMES
) -> DerivedMetrics:
    """Compute the secondary metrics the rule table reads."""
    kda = profile.average_kda
    most_played = None
    if profile.champions:
        most_played = min(profile.champions.values(), key=lambda c: (-c.games, c.name)).name

    return DerivedMetrics(
        kda_ratio=kda.ratio,
        kill_participation=kda.kills + kda.assists,
        stability_class=classify_stability(profile.stability),
        best_champion=find_best_champion(profile, best_champion_min_games),
        most_played_champion=most_played,
    )


def _tier(condition: Callable[[Any], bool], priority: int, icon: str, template: str) -> FeedbackTier:
    return FeedbackTier(condition=condition, priority=priority, icon=icon, template=template)


def _impact(profile: PlayerProfile, _: DerivedMetrics) -> float:
    return profile.average_impact


def _win_rate(profile: PlayerProfile, _: DerivedMetrics) -> int:
    return profile.win_rate


def _kda_ratio(_: PlayerProfile, derived: DerivedMetrics) -> float:
    return derived.kda_ratio


def _deaths(profile: PlayerProfile, _: DerivedMetrics) -> float:
    return profile.average_kda.deaths


def _kills(profile: PlayerProfile, _: DerivedMetrics) -> float:
    return profile.average_kda.kills


def _assists(profile: PlayerProfile, _: DerivedMetrics) -> float:
    return profile.average_kda.assists


def _trend(profile: PlayerProfile, _: DerivedMetrics) -> float:
    return profile.trend


def _kill_participation(_: PlayerProfile, derived: DerivedMetrics) -> float:
    return derived.kill_participation


def _stability(profile: PlayerProfile, derived: DerivedMetrics) -> float | None:
    if derived.stability_class is StabilityClass.INSUFFICIENT_DATA:
        return None
    return profile.stability


def _best_champion(_: PlayerProfile, derived: DerivedMetrics) -> BestChampion | None:
    return derived.best_champion


def _activity(profile: PlayerProfile, _: DerivedMetrics) -> tuple[float, float]:
    return (profile.average_kda.kills, profile.average_kda.assists)


FEEDBACK_RULES: tuple[FeedbackRule, ...] = (
    # === Strengths ===
    FeedbackRule(
        "impact",
        "strength",
        _impact,
        (
            _tier(lambda v: v >= 8, 10, "fire", "Dominant impact - you are the engine of your team"),
            _tier(lambda v: v >= 7, 8, "bolt", "High impact - you consistently swing results"),
            _tier(lambda v: v >= 6, 5, "spark", "Solid contribution to your team's games"),
        ),
    ),
    FeedbackRule(
        "win_rate",
        "strength",
        _win_rate,
        (
            _tier(lambda v: v >= 65, 10, "crown", "Outstanding {value}% win rate - keep it up!"),
            _tier(lambda v: v >= 55, 7, "chart_up", "Good {value}% win rate - you are climbing"),
            _tier(lambda v: v >= 52, 4, "check", "Positive win/loss record"),
        ),
    ),
    FeedbackRule(
        "kda",
        "strength",
        _kda_ratio,
        (
            _tier(lambda v: v >= 5, 9, "gem", "Excellent {value:.2f} KDA - you minimize mistakes"),
            _tier(lambda v: v >= 4, 7, "sparkles", "Great {value:.2f} KDA - clean play"),
            _tier(lambda v: v >= 3, 5, "swords", "Good kill/death balance"),
        ),
    ),
    FeedbackRule(
        "deaths",
        "strength",
        _deaths,
        (
            _tier(
                lambda v: v < 3, 8, "shield",
                "Only {value:.1f} deaths per game - great positioning",
            ),
            _tier(lambda v: v < 4.5, 4, "shield", "You keep your deaths under control"),
        ),
    ),
    FeedbackRule(
        "trend",
        "strength",
        _trend,
        (
            _tier(lambda v: v > 0.5, 8, "rocket", "Form is rising sharply - you're on fire!"),
            _tier(lambda v: v > 0.2, 5, "chart", "Recent games are above your average"),
        ),
    ),
    FeedbackRule(
        "kill_participation",
        "strength",
        _kill_participation,
        (
            _tier(lambda v: v >= 15, 6, "swords", "Very active in team fights"),
            _tier(lambda v: v >= 12, 4, "target", "Good kill participation"),
        ),
    ),
    FeedbackRule(
        "assists",
        "strength",
        _assists,
        (
            _tier(
                lambda v: v >= 8, 6, "handshake",
                "{value:.1f} assists per game - great team support",
            ),
        ),
    ),
    FeedbackRule(
        "kills",
        "strength",
        _kills,
        (
            _tier(
                lambda v: v >= 8, 6, "skull",
                "{value:.1f} kills per game - aggressive and effective",
            ),
        ),
    ),
    FeedbackRule(
        "stability",
        "strength",
        _stability,
        (
            _tier(lambda v: v < 1, 7, "target", "Very consistent play - predictable results"),
            _tier(lambda v: v < 1.5, 4, "chart", "Stable form with few swings"),
        ),
    ),
    FeedbackRule(
        "best_champion",
        "strength",
        _best_champion,
        (
            _tier(
                lambda v: v.win_rate >= 70, 6, "star",
                "{value.name} is your pocket pick ({value.win_rate}% WR)",
            ),
        ),
    ),
    # === Improvements ===
    FeedbackRule(
        "impact",
        "improvement",
        _impact,
        (
            _tier(lambda v: v < 4, 10, "warning", "Low impact - check the details in match analysis"),
            _tier(lambda v: v < 5, 7, "chart_down", "Below-average impact - see where you lose points"),
            _tier(lambda v: v < 5.5, 4, "thought", "Average impact - match analysis shows what to improve"),
        ),
    ),
    FeedbackRule(
        "win_rate",
        "improvement",
        _win_rate,
        (
            _tier(lambda v: v < 40, 10, "red_circle", "{value}% win rate - review your lost games"),
            _tier(lambda v: v < 48, 7, "chart_down", "{value}% win rate - check the detailed analysis"),
            _tier(lambda v: v < 50, 4, "scales", "Close to 50% WR - see what decides your games"),
        ),
    ),
    FeedbackRule(
        "deaths",
        "improvement",
        _deaths,
        (
            _tier(
                lambda v: v > 7, 9, "skull",
                "{value:.1f} deaths per game - check when you die in the analysis",
            ),
            _tier(lambda v: v > 5.5, 6, "warning", "Too many deaths - look for patterns in your history"),
            _tier(lambda v: v > 4.5, 3, "thought", "Deaths to optimize - review your match timelines"),
        ),
    ),
    FeedbackRule(
        "kda",
        "improvement",
        _kda_ratio,
        (
            _tier(
                lambda v: v < 1.5, 8, "red_circle",
                "{value:.2f} KDA - the analysis shows moments to improve",
            ),
            _tier(lambda v: v < 2, 5, "warning", "Low KDA - check the details in your game history"),
        ),
    ),
    FeedbackRule(
        "trend",
        "improvement",
        _trend,
        (
            _tier(lambda v: v < -0.5, 8, "chart_down", "Form is dropping - compare recent games with earlier ones"),
            _tier(lambda v: v < -0.2, 5, "pause", "Slight dip in form - see what changed"),
        ),
    ),
    FeedbackRule(
        "stability",
        "improvement",
        _stability,
        (
            _tier(lambda v: v > 2.5, 6, "chart", "Form swings - the analysis shows your winning patterns"),
            _tier(lambda v: v > 2, 4, "dice", "Unstable form - check what sets your good games apart"),
        ),
    ),
    FeedbackRule(
        "activity",
        "improvement",
        _activity,
        (
            _tier(
                lambda v: v[0] < 3 and v[1] < 6, 5, "swords",
                "Low activity - look at your share of team fights",
            ),
        ),
    ),
)

DEFAULT_STRENGTH = FeedbackItem(
    text="Play more games to reveal your strengths", priority=0, icon="gamepad"
)
DEFAULT_IMPROVEMENT = FeedbackItem(
    text="Great work! Keep up your current style", priority=0, icon="check"
)


def _top(items: list[FeedbackItem], top_n: int, fallback: FeedbackItem) -> tuple[FeedbackItem, ...]:
    ranked = sorted(items, key=lambda item: -item.priority)[:top_n]
    return tuple(ranked) if ranked else (fallback,)


def generate_feedback(
    profile: PlayerProfile,
    derived: DerivedMetrics,
    *,
    rules: tuple[FeedbackRule, ...] = FEEDBACK_RULES,
    top_n: int = DEFAULT_TOP_N,
) -> FeedbackReport:
    """Evaluate the rule table and keep the highest-priority items per pool."""
    pools: dict[Pool, list[FeedbackItem]] = {"strength": [], "improvement": []}
    for rule in rules:
        item = rule.evaluate(profile, derived)
        if item is not None:
            pools[rule.pool].append(item)
            logger.debug("feedback rule fired: %s/%s p=%d", rule.pool, rule.name, item.priority)

    return FeedbackReport(
        strengths=_top(pools["strength"], top_n, DEFAULT_STRENGTH),
        improvements=_top(pools["improvement"], top_n, DEFAULT_IMPROVEMENT),
    )
