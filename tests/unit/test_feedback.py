"""Unit tests for derived metrics and rule-based feedback selection."""

import pytest

from riftform.contracts.analysis_results import AverageKDA, ChampionStats, PlayerProfile
from riftform.contracts.common import StabilityClass
from riftform.core.analytics.feedback import (
    DEFAULT_IMPROVEMENT,
    DEFAULT_STRENGTH,
    FEEDBACK_RULES,
    classify_stability,
    derive_metrics,
    find_best_champion,
    generate_feedback,
)


def _profile(**overrides) -> PlayerProfile:
    fields = {
        "puuid": "player-1",
        "total_games": 20,
        "wins": 10,
        "losses": 10,
        "win_rate": 50,
        "average_kda": AverageKDA(kills=5, deaths=5, assists=7),
        "average_impact": 5.8,
        "trend": 0.0,
        "stability": 1.7,
    }
    fields.update(overrides)
    return PlayerProfile(**fields)


def _champ(name: str, games: int, wins: int) -> ChampionStats:
    return ChampionStats(name=name, games=games, wins=wins, kills=games * 5, deaths=games * 3, assists=games * 6)


@pytest.fixture
def strong_profile() -> PlayerProfile:
    return _profile(
        wins=14,
        losses=6,
        win_rate=70,
        average_kda=AverageKDA(kills=9, deaths=2, assists=9),
        average_impact=8.5,
        trend=0.6,
        stability=0.8,
        champions={"Ahri": _champ("Ahri", 10, 8)},
    )


@pytest.fixture
def weak_profile() -> PlayerProfile:
    return _profile(
        wins=7,
        losses=13,
        win_rate=35,
        average_kda=AverageKDA(kills=2, deaths=8, assists=4),
        average_impact=3.5,
        trend=-0.7,
        stability=3.0,
    )


# ============================================================================
# Derived metrics
# ============================================================================


@pytest.mark.parametrize(
    "stability,expected",
    [
        (None, StabilityClass.INSUFFICIENT_DATA),
        (0.0, StabilityClass.HIGH),
        (0.99, StabilityClass.HIGH),
        (1.0, StabilityClass.MEDIUM),
        (1.99, StabilityClass.MEDIUM),
        (2.0, StabilityClass.LOW),
        (4.5, StabilityClass.LOW),
    ],
)
def test_classify_stability_bands(stability, expected) -> None:
    assert classify_stability(stability) is expected


def test_best_champion_requires_minimum_games() -> None:
    profile = _profile(champions={"Zed": _champ("Zed", 4, 4)})
    assert find_best_champion(profile) is None


def test_best_champion_prefers_win_rate_then_games() -> None:
    profile = _profile(
        champions={
            "Ahri": _champ("Ahri", 5, 3),
            "Lux": _champ("Lux", 10, 6),
            "Zed": _champ("Zed", 4, 4),
            "Jinx": _champ("Jinx", 6, 2),
        }
    )

    best = find_best_champion(profile)

    assert best is not None
    assert (best.name, best.win_rate, best.games) == ("Lux", 60, 10)


def test_derive_metrics(strong_profile) -> None:
    derived = derive_metrics(strong_profile)

    assert derived.kda_ratio == pytest.approx(9.0)
    assert derived.kill_participation == pytest.approx(18.0)
    assert derived.stability_class is StabilityClass.HIGH
    assert derived.best_champion is not None
    assert derived.best_champion.name == "Ahri"
    assert derived.most_played_champion == "Ahri"


def test_deathless_profile_kda_is_takedowns() -> None:
    derived = derive_metrics(_profile(average_kda=AverageKDA(kills=3, deaths=0, assists=4)))
    assert derived.kda_ratio == pytest.approx(7.0)


# ============================================================================
# Feedback selection
# ============================================================================


def test_strong_profile_feedback(strong_profile) -> None:
    report = generate_feedback(strong_profile, derive_metrics(strong_profile))

    # Two priority-10 strengths; table order breaks the tie
    assert [item.text for item in report.strengths] == [
        "Dominant impact - you are the engine of your team",
        "Outstanding 70% win rate - keep it up!",
    ]
    assert report.improvements == (DEFAULT_IMPROVEMENT,)


def test_weak_profile_feedback(weak_profile) -> None:
    report = generate_feedback(weak_profile, derive_metrics(weak_profile))

    assert report.strengths == (DEFAULT_STRENGTH,)
    assert [item.priority for item in report.improvements] == [10, 10]
    assert report.improvements[0].icon == "warning"
    assert report.improvements[1].text == "35% win rate - review your lost games"


def test_top_n_limits_each_pool(weak_profile) -> None:
    report = generate_feedback(weak_profile, derive_metrics(weak_profile), top_n=1)
    assert len(report.improvements) == 1
    assert len(report.strengths) == 1


def test_middle_tier_fires_when_top_tier_misses() -> None:
    profile = _profile(average_kda=AverageKDA(kills=4, deaths=6, assists=5))
    rules = tuple(r for r in FEEDBACK_RULES if r.pool == "improvement" and r.name == "deaths")

    report = generate_feedback(profile, derive_metrics(profile), rules=rules)

    assert report.improvements[0].priority == 6
    assert report.improvements[0].text == "Too many deaths - look for patterns in your history"


def test_insufficient_data_skips_stability_rules() -> None:
    profile = _profile(stability=None)
    stability_rules = tuple(r for r in FEEDBACK_RULES if r.name == "stability")

    report = generate_feedback(profile, derive_metrics(profile), rules=stability_rules)

    assert report.strengths == (DEFAULT_STRENGTH,)
    assert report.improvements == (DEFAULT_IMPROVEMENT,)


def test_formatted_values_in_texts() -> None:
    profile = _profile(average_kda=AverageKDA(kills=8.25, deaths=2.5, assists=8.5))
    derived = derive_metrics(profile)
    rules = tuple(
        r for r in FEEDBACK_RULES if r.pool == "strength" and r.name in {"deaths", "kills", "kda"}
    )

    report = generate_feedback(profile, derived, rules=rules, top_n=2)

    # kda 6.70 (p9) then deaths 2.5 (p8); kills p6 is cut
    assert [item.text for item in report.strengths] == [
        "Excellent 6.70 KDA - you minimize mistakes",
        "Only 2.5 deaths per game - great positioning",
    ]


def test_pocket_pick_strength() -> None:
    profile = _profile(champions={"Lux": _champ("Lux", 8, 6)})
    rules = tuple(r for r in FEEDBACK_RULES if r.name == "best_champion")

    report = generate_feedback(profile, derive_metrics(profile), rules=rules)

    assert report.strengths[0].text == "Lux is your pocket pick (75% WR)"
