"""Windowed aggregation of a player's match history.

Two windows are folded from the same most-recent-first list:
- recent: the latest ``window_size`` matches (default 20) - impact, trend, stability
- season: every match - totals, lanes, champions

The trend compares the newest slice against the one before it, so input
order matters: callers must pass matches most-recent-first.
"""

import logging
from collections.abc import Sequence
from typing import Literal

import numpy as np

from riftform.contracts.analysis_results import (
    AggregationResult,
    AverageKDA,
    ChampionStats,
    LaneStats,
    PlayerProfile,
)
from riftform.contracts.common import KNOWN_LANES, Lane, Window
from riftform.contracts.match import MatchSummary
from riftform.core.scoring.impact import ImpactMemo, calculate_match_impact
from riftform.core.utils.clamp import rounded_percentage

logger = logging.getLogger(__name__)

DEFAULT_RECENT_WINDOW = 20
DEFAULT_TREND_SLICE = 5
DEFAULT_STABILITY_MIN_SAMPLES = 5

_LANE_LABELS: dict[Lane, str] = {
    Lane.TOP: "Top",
    Lane.JUNGLE: "Jng",
    Lane.MIDDLE: "Mid",
    Lane.BOTTOM: "Adc",
    Lane.UTILITY: "Sup",
    Lane.UNKNOWN: "Unknown",
}


def lane_label(lane: Lane) -> str:
    """Short display key for a lane."""
    return _LANE_LABELS[lane]


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return float(np.mean(values))


def calculate_trend(impact_scores: Sequence[float], slice_size: int = DEFAULT_TREND_SLICE) -> float:
    """Average of the newest slice minus the average of the slice before it.

    When fewer than ``slice_size`` older matches exist, the whole window's
    average is used as the baseline instead.
    """
    newest = impact_scores[:slice_size]
    previous = impact_scores[slice_size : slice_size * 2]
    if len(previous) < slice_size:
        baseline = _mean(impact_scores)
    else:
        baseline = _mean(previous)
    return _mean(newest) - baseline


def calculate_stability(
    impact_scores: Sequence[float], min_samples: int = DEFAULT_STABILITY_MIN_SAMPLES
) -> float | None:
    """Population standard deviation of impact, or None with too few samples."""
    if len(impact_scores) < min_samples:
        return None
    return float(np.std(impact_scores))


def aggregate_window(
    matches: Sequence[MatchSummary],
    puuid: str,
    *,
    window: Window = Window.RECENT,
    window_size: int = DEFAULT_RECENT_WINDOW,
    trend_slice: int = DEFAULT_TREND_SLICE,
    stability_min_samples: int = DEFAULT_STABILITY_MIN_SAMPLES,
    memo: ImpactMemo | None = None,
) -> AggregationResult:
    """Fold one window of ``matches`` into summary statistics for ``puuid``.

    Args:
        matches: Match history, most recent first
        puuid: Target player
        window: RECENT takes the first ``window_size`` matches, SEASON takes all
        window_size: Size of the recent window
        trend_slice: Number of matches per trend slice
        stability_min_samples: Minimum impact samples for a stability value
        memo: Optional Impact Score cache shared across windows

    Returns:
        AggregationResult. Matches without the target player are skipped
        entirely and count toward nothing.
    """
    selected = matches[:window_size] if window is Window.RECENT else matches

    impact_scores: list[float] = []
    lanes = {lane: {"games": 0, "wins": 0} for lane in KNOWN_LANES}
    champions: dict[str, dict[str, float]] = {}
    wins = losses = 0
    total_kills = total_deaths = total_assists = 0
    skipped = 0

    for match in selected:
        participant = match.get_participant(puuid)
        if participant is None:
            skipped += 1
            continue

        if memo is not None:
            impact = memo.score(match, participant)
        else:
            impact = calculate_match_impact(participant, match.game_duration)
        impact_scores.append(impact)

        if participant.win:
            wins += 1
        else:
            losses += 1

        total_kills += participant.kills
        total_deaths += participant.deaths
        total_assists += participant.assists

        if participant.lane is not Lane.UNKNOWN:
            lanes[participant.lane]["games"] += 1
            if participant.win:
                lanes[participant.lane]["wins"] += 1

        if window is Window.SEASON:
            champ = champions.setdefault(
                participant.champion_name,
                {"games": 0, "wins": 0, "kills": 0, "deaths": 0, "assists": 0, "total_impact": 0.0},
            )
            champ["games"] += 1
            champ["wins"] += 1 if participant.win else 0
            champ["kills"] += participant.kills
            champ["deaths"] += participant.deaths
            champ["assists"] += participant.assists
            champ["total_impact"] += impact

    if skipped:
        logger.debug("skipped %d matches without puuid=%s in %s window", skipped, puuid, window.value)

    total_games = wins + losses
    win_rate = rounded_percentage(wins, total_games)
    if total_games > 0:
        average_kda = AverageKDA(
            kills=total_kills / total_games,
            deaths=total_deaths / total_games,
            assists=total_assists / total_games,
        )
    else:
        average_kda = AverageKDA()

    return AggregationResult(
        window=window,
        total_games=total_games,
        wins=wins,
        losses=losses,
        win_rate=win_rate,
        average_kda=average_kda,
        lanes={lane: LaneStats(**stats) for lane, stats in lanes.items()},
        champions={
            name: ChampionStats(name=name, **stats)
            for name, stats in champions.items()
        },
        impact_scores=tuple(impact_scores),
        average_impact=_mean(impact_scores),
        trend=calculate_trend(impact_scores, trend_slice) if window is Window.RECENT else None,
        stability=calculate_stability(impact_scores, stability_min_samples),
    )


def analyze_recent(
    matches: Sequence[MatchSummary],
    puuid: str,
    *,
    window_size: int = DEFAULT_RECENT_WINDOW,
    trend_slice: int = DEFAULT_TREND_SLICE,
    stability_min_samples: int = DEFAULT_STABILITY_MIN_SAMPLES,
    memo: ImpactMemo | None = None,
) -> AggregationResult:
    """Recent-window aggregation (impact, trend, stability)."""
    return aggregate_window(
        matches,
        puuid,
        window=Window.RECENT,
        window_size=window_size,
        trend_slice=trend_slice,
        stability_min_samples=stability_min_samples,
        memo=memo,
    )


def analyze_season(
    matches: Sequence[MatchSummary],
    puuid: str,
    *,
    stability_min_samples: int = DEFAULT_STABILITY_MIN_SAMPLES,
    memo: ImpactMemo | None = None,
) -> AggregationResult:
    """Season-window aggregation (totals, lanes, champions)."""
    return aggregate_window(
        matches,
        puuid,
        window=Window.SEASON,
        stability_min_samples=stability_min_samples,
        memo=memo,
    )


def merge_windows(puuid: str, season: AggregationResult, recent: AggregationResult) -> PlayerProfile:
    """Season totals with the recent window's impact metrics on top."""
    return PlayerProfile(
        puuid=puuid,
        total_games=season.total_games,
        wins=season.wins,
        losses=season.losses,
        win_rate=season.win_rate,
        average_kda=season.average_kda,
        lanes=season.lanes,
        champions=season.champions,
        impact_scores=recent.impact_scores,
        average_impact=recent.average_impact,
        trend=recent.trend or 0.0,
        stability=recent.stability,
    )


def build_player_profile(
    matches: Sequence[MatchSummary],
    puuid: str,
    *,
    window_size: int = DEFAULT_RECENT_WINDOW,
    trend_slice: int = DEFAULT_TREND_SLICE,
    stability_min_samples: int = DEFAULT_STABILITY_MIN_SAMPLES,
) -> PlayerProfile:
    """Run both windows and merge them into the combined profile view."""
    memo = ImpactMemo()
    season = analyze_season(
        matches, puuid, stability_min_samples=stability_min_samples, memo=memo
    )
    recent = analyze_recent(
        matches,
        puuid,
        window_size=window_size,
        trend_slice=trend_slice,
        stability_min_samples=stability_min_samples,
        memo=memo,
    )
    logger.debug("profile built puuid=%s impact cache hits=%d", puuid, memo.hits)
    return merge_windows(puuid, season, recent)


def champion_leaderboard(
    champions: dict[str, ChampionStats],
    mode: Literal["games", "winrate"] = "games",
    limit: int = 10,
) -> list[ChampionStats]:
    """Most played champions, or best win rate among those with 2+ games."""
    pool = list(champions.values())
    if mode == "winrate":
        pool = [c for c in pool if c.games >= 2]
        pool.sort(key=lambda c: (-(c.wins / c.games), -c.games, c.name))
    else:
        pool.sort(key=lambda c: (-c.games, c.name))
    return pool[:limit]


def filter_matches(
    matches: Sequence[MatchSummary],
    puuid: str,
    outcome: Literal["all", "wins", "losses"] = "all",
) -> list[MatchSummary]:
    """Matches containing ``puuid``, optionally restricted to wins or losses."""
    selected: list[MatchSummary] = []
    for match in matches:
        participant = match.get_participant(puuid)
        if participant is None:
            continue
        if outcome == "wins" and not participant.win:
            continue
        if outcome == "losses" and participant.win:
            continue
        selected.append(match)
    return selected
