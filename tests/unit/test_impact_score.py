"""Unit tests for the single-match Impact Score.

Covers the documented 30-minute reference game, every capped term, the death
penalty, duration edge cases and the (match_id, puuid) memo.
"""

import pytest

from riftform.core.scoring.impact import ImpactMemo, calculate_match_impact


# ============================================================================
# Happy path
# ============================================================================


def test_reference_thirty_minute_game(make_snapshot) -> None:
    """10/2/5, 200 CS, 30 vision, 18k damage, 14k gold, win, no objectives."""
    p = make_snapshot(
        kills=10,
        deaths=2,
        assists=5,
        total_minions_killed=200,
        vision_score=30,
        total_damage_dealt_to_champions=18000,
        gold_earned=14000,
        win=True,
    )

    expected = 2.5 + (200 / 30) / 7 + (30 / 30) / 1.5 + (18000 / 30) / 800 + 1.0 + 1.0 - (2 / 30) * 0.8
    assert calculate_match_impact(p, 1800) == pytest.approx(expected)
    assert calculate_match_impact(p, 1800) == pytest.approx(6.8157, abs=1e-3)


def test_neutral_minions_count_toward_cs(make_snapshot) -> None:
    lane_only = make_snapshot(total_minions_killed=140)
    split = make_snapshot(total_minions_killed=100, neutral_minions_killed=40)
    assert calculate_match_impact(lane_only, 1200) == pytest.approx(
        calculate_match_impact(split, 1200)
    )


def test_deathless_kda_uses_raw_takedowns(make_snapshot) -> None:
    # 3 takedowns, no deaths: KDA term = 3 / 3 = 1.0
    p = make_snapshot(kills=2, assists=1)
    assert calculate_match_impact(p, 1800) == pytest.approx(1.0)


# ============================================================================
# Caps and penalties
# ============================================================================


def test_every_term_caps_at_its_maximum(make_snapshot) -> None:
    """Saturated terms sum to 10 before the win bonus; the total clamps at 10."""
    p = make_snapshot(
        kills=40,
        assists=40,
        total_minions_killed=900,
        vision_score=400,
        total_damage_dealt_to_champions=300000,
        gold_earned=90000,
        turret_kills=11,
        inhibitor_kills=3,
        dragon_kills=4,
        baron_kills=2,
        damage_dealt_to_objectives=200000,
        win=True,
    )
    assert calculate_match_impact(p, 1800) == 10.0
    assert calculate_match_impact(p.model_copy(update={"win": False}), 1800) == pytest.approx(10.0)


def test_objective_kill_weights(make_snapshot) -> None:
    # 1 turret + 1 inhibitor = 0.3 + 0.5; nothing else scores
    p = make_snapshot(turret_kills=1, inhibitor_kills=1)
    assert calculate_match_impact(p, 1800) == pytest.approx(0.8)


def test_death_penalty_is_capped_and_floors_at_zero(make_snapshot) -> None:
    # 20 deaths in 5 minutes: penalty capped at 2 but total clamps to 0
    feeder = make_snapshot(deaths=20)
    assert calculate_match_impact(feeder, 300) == 0.0


@pytest.mark.parametrize("duration", [0, -60])
def test_non_positive_duration_returns_zero(make_snapshot, duration: int) -> None:
    p = make_snapshot(kills=10, assists=10, win=True)
    assert calculate_match_impact(p, duration) == 0.0


def test_result_always_within_bounds(make_match) -> None:
    match = make_match(kills=25, deaths=0, assists=30, win=True)
    for participant in match.participants:
        score = calculate_match_impact(participant, match.game_duration)
        assert 0.0 <= score <= 10.0


# ============================================================================
# Memo
# ============================================================================


def test_memo_reuses_scores_per_match_and_player(make_match, target_puuid) -> None:
    match = make_match()
    participant = match.get_participant(target_puuid)
    memo = ImpactMemo()

    first = memo.score(match, participant)
    second = memo.score(match, participant)

    assert first == second == calculate_match_impact(participant, match.game_duration)
    assert (memo.hits, memo.misses, len(memo)) == (1, 1, 1)
