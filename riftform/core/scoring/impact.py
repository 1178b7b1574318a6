"""Impact Score - single-match 0-10 performance scalar.

Role-agnostic: the same formula applies to every position. The score sums
capped per-minute and ratio terms, adds a win bonus and subtracts a death-rate
penalty.

CRITICAL: This module MUST NOT contain any I/O. Inputs are immutable
snapshots, so results can be memoized by (match_id, puuid).
"""

import logging

from riftform.contracts.match import MatchSummary, ParticipantSnapshot
from riftform.core.utils.clamp import capped, clamp

logger = logging.getLogger(__name__)

IMPACT_MAX = 10.0

_KDA_DIVISOR, _KDA_CAP = 3.0, 2.5
_CS_PER_MIN_DIVISOR, _CS_CAP = 7.0, 1.5
_VISION_PER_MIN_DIVISOR, _VISION_CAP = 1.5, 1.0
_DAMAGE_PER_MIN_DIVISOR, _DAMAGE_CAP = 800.0, 1.5
_GOLD_PER_MIN_DIVISOR, _GOLD_CAP = 450.0, 1.0
_OBJECTIVE_KILLS_CAP = 1.5
_OBJECTIVE_DAMAGE_PER_MIN_DIVISOR, _OBJECTIVE_DAMAGE_CAP = 600.0, 1.0
_WIN_BONUS = 1.0
_DEATH_RATE_WEIGHT, _DEATH_PENALTY_CAP = 0.8, 2.0


def calculate_match_impact(participant: ParticipantSnapshot, game_duration: float) -> float:
    """Calculate the Impact Score for one participant of one match.

    Args:
        participant: End-of-game snapshot of the player
        game_duration: Match length in seconds

    Returns:
        Score in [0, 10]; exactly 0.0 when the duration is not positive.
    """
    if game_duration <= 0:
        return 0.0
    minutes = game_duration / 60

    # deaths == 0 falls back to raw kills + assists
    kda_score = capped(participant.kda_ratio / _KDA_DIVISOR, _KDA_CAP)
    cs_score = capped(participant.cs / minutes / _CS_PER_MIN_DIVISOR, _CS_CAP)
    vision_score = capped(
        participant.vision_score / minutes / _VISION_PER_MIN_DIVISOR, _VISION_CAP
    )
    damage_score = capped(
        participant.total_damage_dealt_to_champions / minutes / _DAMAGE_PER_MIN_DIVISOR,
        _DAMAGE_CAP,
    )
    gold_score = capped(participant.gold_earned / minutes / _GOLD_PER_MIN_DIVISOR, _GOLD_CAP)

    # Map impact
    objective_kills = (
        participant.turret_kills * 0.3
        + participant.inhibitor_kills * 0.5
        + participant.dragon_kills * 0.6
        + participant.baron_kills * 1.0
    )
    objective_score = capped(objective_kills, _OBJECTIVE_KILLS_CAP)
    objective_damage_score = capped(
        participant.damage_dealt_to_objectives / minutes / _OBJECTIVE_DAMAGE_PER_MIN_DIVISOR,
        _OBJECTIVE_DAMAGE_CAP,
    )

    win_bonus = _WIN_BONUS if participant.win else 0.0
    death_penalty = capped(participant.deaths / minutes * _DEATH_RATE_WEIGHT, _DEATH_PENALTY_CAP)

    total = (
        kda_score
        + cs_score
        + vision_score
        + damage_score
        + gold_score
        + objective_score
        + objective_damage_score
        + win_bonus
        - death_penalty
    )
    return clamp(total, 0.0, IMPACT_MAX)


class ImpactMemo:
    """Memoizes Impact Scores by (match_id, puuid).

    Snapshots are immutable, so entries never need invalidation.
    """

    def __init__(self) -> None:
        self._scores: dict[tuple[str, str], float] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._scores)

    def score(self, match: MatchSummary, participant: ParticipantSnapshot) -> float:
        key = (match.match_id, participant.puuid)
        cached = self._scores.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        value = calculate_match_impact(participant, match.game_duration)
        self._scores[key] = value
        logger.debug("impact computed match=%s puuid=%s score=%.3f", *key, value)
        return value
