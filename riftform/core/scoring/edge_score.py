"""EdgeScore - relative, role-aware ranking of all 10 players in a match.

Absolute stats are not comparable across roles or game lengths, so nearly
every category is a share of a match-wide or team-wide total. Each category is
capped, multiplied by the player's role weight and the weighted sum is divided
by that role's maximum, so every role can reach 100.

Nine categories (cap):
1. Combat (25) - KDA, kill participation, multi-kills, solo kills, sprees
2. Damage (18) - share of match/team damage, damage per minute
3. Objectives (20) - structures, epic monsters, objective damage, steals
4. Economy (10) - gold share, CS per minute
5. Vision (8) - vision share, wards, control wards
6. Utility (12) - crowd control, heals/shields, damage absorbed
7. Clutch (12) - first blood/tower, turret pressure, survival, level
8. Impact (10) - the standalone Impact Score, not relative to the lobby
9. Win contribution (10) - carry index scaled by the result

CRITICAL: pure domain logic, zero I/O.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from riftform.contracts.analysis_results import CategoryBreakdown, PlayerScore
from riftform.contracts.common import Lane
from riftform.contracts.match import ParticipantSnapshot, TeamObjectiveTotals
from riftform.core.scoring.impact import calculate_match_impact
from riftform.core.utils.clamp import capped, clamp, floored_total, scaled_share

logger = logging.getLogger(__name__)

CATEGORIES: tuple[str, ...] = (
    "combat",
    "damage",
    "objectives",
    "economy",
    "vision",
    "utility",
    "clutch",
    "impact",
    "win_contribution",
)

CATEGORY_CAPS: Mapping[str, float] = MappingProxyType(
    {
        "combat": 25.0,
        "damage": 18.0,
        "objectives": 20.0,
        "economy": 10.0,
        "vision": 8.0,
        "utility": 12.0,
        "clutch": 12.0,
        "impact": 10.0,
        "win_contribution": 10.0,
    }
)


def _weights(*values: float) -> Mapping[str, float]:
    return MappingProxyType(dict(zip(CATEGORIES, values, strict=True)))


# Weights stay within 0.75-1.25 so no role is crushed by a single category.
#   Top: 1v1 combat, tanking, towers
#   Jungle: objectives, clutch plays, vision
#   Mid: damage, combat, roaming
#   Bottom: damage and economy
#   Support: vision and utility
#                                combat dmg   obj   eco   vis   util  clutch impact win
ROLE_WEIGHTS: Mapping[Lane, Mapping[str, float]] = MappingProxyType(
    {
        Lane.TOP: _weights(1.15, 1.00, 1.10, 1.00, 0.85, 1.15, 0.95, 1.00, 1.00),
        Lane.JUNGLE: _weights(1.00, 0.90, 1.20, 0.85, 1.10, 0.95, 1.15, 1.00, 1.00),
        Lane.MIDDLE: _weights(1.10, 1.15, 0.95, 1.00, 0.85, 0.85, 1.10, 1.00, 1.00),
        Lane.BOTTOM: _weights(1.00, 1.10, 0.95, 1.05, 0.85, 0.85, 0.95, 1.00, 1.00),
        Lane.UTILITY: _weights(0.95, 0.80, 0.90, 0.85, 1.15, 1.15, 1.05, 1.00, 1.00),
        Lane.UNKNOWN: _weights(1.00, 1.00, 1.00, 1.00, 1.00, 1.00, 1.00, 1.00, 1.00),
    }
)


def role_max(lane: Lane) -> float:
    """Highest weighted total reachable by a player in ``lane``."""
    weights = ROLE_WEIGHTS[lane]
    return sum(CATEGORY_CAPS[c] * weights[c] for c in CATEGORIES)


@dataclass(frozen=True)
class MatchTotals:
    """Denominators shared by every participant, each floored at 1."""

    minutes: float
    game_duration: float
    kills: float
    damage: float
    gold: float
    vision: float
    damage_taken: float
    objective_damage: float
    crowd_control: float
    healing: float
    team_kills: Mapping[int, float]
    team_gold: Mapping[int, float]
    team_damage: Mapping[int, float]

    @classmethod
    def from_participants(
        cls, participants: Sequence[ParticipantSnapshot], game_duration: float
    ) -> "MatchTotals":
        team_kills: dict[int, int] = defaultdict(int)
        team_gold: dict[int, int] = defaultdict(int)
        team_damage: dict[int, int] = defaultdict(int)
        for p in participants:
            team_kills[p.team_id] += p.kills
            team_gold[p.team_id] += p.gold_earned
            team_damage[p.team_id] += p.total_damage_dealt_to_champions

        def _floor(values: dict[int, int]) -> Mapping[int, float]:
            return MappingProxyType({team: max(v, 1) for team, v in values.items()})

        return cls(
            minutes=game_duration / 60,
            game_duration=game_duration,
            kills=floored_total(p.kills for p in participants),
            damage=floored_total(p.total_damage_dealt_to_champions for p in participants),
            gold=floored_total(p.gold_earned for p in participants),
            vision=floored_total(p.vision_score for p in participants),
            damage_taken=floored_total(p.total_damage_taken for p in participants),
            objective_damage=floored_total(p.damage_dealt_to_objectives for p in participants),
            crowd_control=floored_total(p.time_ccing_others for p in participants),
            healing=floored_total(p.healing_and_shielding for p in participants),
            team_kills=_floor(team_kills),
            team_gold=_floor(team_gold),
            team_damage=_floor(team_damage),
        )

    def for_team(self, team_id: int) -> tuple[float, float, float]:
        """(kills, gold, damage) of ``team_id``, floored at 1."""
        return (
            self.team_kills.get(team_id, 1),
            self.team_gold.get(team_id, 1),
            self.team_damage.get(team_id, 1),
        )


def calculate_combat(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    # A deathless game earns a 1.5x multiplier instead of dividing by zero
    if p.deaths == 0:
        kda = (p.kills + p.assists) * 1.5
    else:
        kda = (p.kills + p.assists) / p.deaths
    team_kills, _, _ = totals.for_team(p.team_id)
    kill_participation = (p.kills + p.assists) / team_kills

    kda_pts = scaled_share(kda, 5, 12)
    kp_pts = capped(kill_participation, 1.0) * 6
    multi_kill_pts = capped(
        p.double_kills * 0.5 + p.triple_kills * 1.5 + p.quadra_kills * 3 + p.penta_kills * 7, 7
    )
    solo_pts = capped(p.solo_kills * 1.2, 4)
    spree_pts = capped(p.largest_killing_spree * 0.3, 3)
    death_penalty = capped(p.deaths / totals.minutes * 2.5, 7)

    return max(kda_pts + kp_pts + multi_kill_pts + solo_pts + spree_pts - death_penalty, 0.0)


def calculate_damage(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    _, _, team_damage = totals.for_team(p.team_id)
    dealt = p.total_damage_dealt_to_champions
    return (
        scaled_share(dealt / totals.damage, 0.15, 10)
        + scaled_share(dealt / totals.minutes, 700, 5)
        + scaled_share(dealt / team_damage, 0.25, 3)
    )


def calculate_objectives(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    steals = (p.objectives_stolen + p.objectives_stolen_assists * 0.5) * 3
    return (
        capped(p.turret_kills * 1.5, 4)
        + capped(p.inhibitor_kills * 2, 3)
        + capped(p.dragon_kills * 1.5, 3)
        + capped(p.baron_kills * 2.5, 3)
        + scaled_share(p.damage_dealt_to_objectives / totals.objective_damage, 0.15, 4)
        + capped(steals, 5)
    )


def calculate_economy(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    _, team_gold, _ = totals.for_team(p.team_id)
    return (
        scaled_share(p.gold_earned / totals.gold, 0.12, 5)
        + scaled_share(p.cs / totals.minutes, 8, 3)
        + scaled_share(p.gold_earned / team_gold, 0.25, 2)
    )


def calculate_vision(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    wards_per_min = (p.wards_placed + p.wards_killed) / totals.minutes
    return (
        scaled_share(p.vision_score / totals.vision, 0.13, 4)
        + scaled_share(wards_per_min, 1.5, 2)
        + capped(p.vision_wards_bought_in_game * 0.5, 2)
    )


def calculate_utility(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    return (
        scaled_share(p.time_ccing_others / totals.crowd_control, 0.15, 4)
        + scaled_share(p.healing_and_shielding / totals.healing, 0.15, 4)
        + scaled_share(p.total_damage_taken / totals.damage_taken, 0.15, 4)
    )


def calculate_clutch(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    first_blood = (2 if p.first_blood_kill else 0) + (1 if p.first_blood_assist else 0)
    first_tower = (2 if p.first_tower_kill else 0) + (1 if p.first_tower_assist else 0)
    tower_pressure = scaled_share(p.damage_dealt_to_turrets / totals.minutes, 200, 3)
    survival = scaled_share(p.longest_time_spent_living, totals.game_duration * 0.4, 2)
    level = scaled_share(p.champion_level, 18, 2)
    return capped(first_blood + first_tower + tower_pressure + survival + level, 12)


def calculate_win_contribution(p: ParticipantSnapshot, totals: MatchTotals) -> float:
    team_kills, team_gold, team_damage = totals.for_team(p.team_id)
    carry_index = (
        (p.kills + p.assists) / (team_kills + 1) * 0.35
        + p.total_damage_dealt_to_champions / team_damage * 0.35
        + p.gold_earned / team_gold * 0.3
    )
    multiplier = 1.5 if p.win else 0.7
    return capped(carry_index * multiplier * 15, 10)


def score_breakdown(p: ParticipantSnapshot, totals: MatchTotals) -> CategoryBreakdown:
    """Raw category points for one participant, each bounded by its cap."""
    raw = {
        "combat": calculate_combat(p, totals),
        "damage": calculate_damage(p, totals),
        "objectives": calculate_objectives(p, totals),
        "economy": calculate_economy(p, totals),
        "vision": calculate_vision(p, totals),
        "utility": calculate_utility(p, totals),
        "clutch": calculate_clutch(p, totals),
        "impact": calculate_match_impact(p, totals.game_duration),
        "win_contribution": calculate_win_contribution(p, totals),
    }
    return CategoryBreakdown(**{c: capped(v, CATEGORY_CAPS[c]) for c, v in raw.items()})


def normalized_score(breakdown: CategoryBreakdown, lane: Lane) -> float:
    """Role-weighted total rescaled to 0-100 against the role's maximum."""
    weights = ROLE_WEIGHTS[lane]
    weighted = sum(getattr(breakdown, c) * weights[c] for c in CATEGORIES)
    return clamp(weighted / role_max(lane) * 100, 0.0, 100.0)


def rank_players_in_match(
    participants: Sequence[ParticipantSnapshot],
    game_duration: float,
    teams: Iterable[TeamObjectiveTotals] | None = None,
) -> dict[str, PlayerScore]:
    """Rank every participant of a match by EdgeScore.

    Args:
        participants: All 10 participant snapshots
        game_duration: Match length in seconds
        teams: Team objective totals; accepted for completeness, not scored

    Returns:
        Mapping puuid -> PlayerScore, ordered by rank. Exactly equal scores
        are ordered by puuid so ranking never depends on input order. A
        non-positive duration yields an empty mapping.
    """
    if game_duration <= 0:
        logger.debug("skipping ranking for non-positive duration %s", game_duration)
        return {}

    totals = MatchTotals.from_participants(participants, game_duration)

    scored: list[tuple[float, str, CategoryBreakdown]] = []
    for p in participants:
        breakdown = score_breakdown(p, totals)
        scored.append((normalized_score(breakdown, p.lane), p.puuid, breakdown))

    scored.sort(key=lambda item: (-item[0], item[1]))

    result = {
        puuid: PlayerScore(rank=i, score=score, breakdown=breakdown)
        for i, (score, puuid, breakdown) in enumerate(scored, start=1)
    }
    logger.debug(
        "ranked %d participants, mvp=%s",
        len(result),
        scored[0][1] if scored else None,
    )
    return result


def find_mvp(scores: Mapping[str, PlayerScore]) -> str | None:
    """PUUID holding rank 1, if any."""
    for puuid, player_score in scores.items():
        if player_score.rank == 1:
            return puuid
    return None


def team_average_scores(
    participants: Sequence[ParticipantSnapshot], scores: Mapping[str, PlayerScore]
) -> dict[int, float]:
    """Mean EdgeScore per team id."""
    by_team: dict[int, list[float]] = defaultdict(list)
    for p in participants:
        if p.puuid in scores:
            by_team[p.team_id].append(scores[p.puuid].score)
    return {team: np.mean(values).item() for team, values in by_team.items()}
