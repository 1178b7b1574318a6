"""Pytest configuration and fixtures for riftform tests.

Fixtures build Match-V5 shaped payloads (camelCase, as the upstream provider
returns them) so tests exercise the same ingestion path as production.
"""

from collections.abc import Callable
from typing import Any

import pytest

from riftform.contracts.match import MatchSummary, ParticipantSnapshot

TARGET_PUUID = "target-puuid-0001"

_LANES = ["TOP", "JUNGLE", "MIDDLE", "BOTTOM", "UTILITY"]


def _participant_payload(puuid: str, team_id: int, win: bool, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "puuid": puuid,
        "teamId": team_id,
        "win": win,
        "championId": 103,
        "championName": "Ahri",
        "teamPosition": "MIDDLE",
        "kills": 4,
        "deaths": 4,
        "assists": 6,
        "totalMinionsKilled": 160,
        "neutralMinionsKilled": 10,
        "visionScore": 20,
        "wardsPlaced": 10,
        "wardsKilled": 3,
        "visionWardsBoughtInGame": 2,
        "goldEarned": 11000,
        "totalDamageDealtToChampions": 16000,
        "damageDealtToObjectives": 4000,
        "damageDealtToTurrets": 2000,
        "totalDamageTaken": 18000,
        "timeCCingOthers": 15,
        "totalHealsOnTeammates": 500,
        "totalDamageShieldedOnTeammates": 300,
        "largestKillingSpree": 2,
        "longestTimeSpentLiving": 500,
        "champLevel": 15,
    }
    payload.update(overrides)
    return payload


def _match_payload(
    match_id: str = "EUW1_1000000001",
    *,
    game_duration: int = 1800,
    target: dict[str, Any] | None = None,
    target_puuid: str | None = TARGET_PUUID,
    blue_wins: bool = True,
) -> dict[str, Any]:
    """Full Match-V5 payload; the target (if any) plays slot 1 on blue side."""
    participants: list[dict[str, Any]] = []
    for slot in range(10):
        team_id = 100 if slot < 5 else 200
        win = blue_wins if team_id == 100 else not blue_wins
        lane = _LANES[slot % 5]
        if slot == 0 and target_puuid is not None:
            overrides = {"teamPosition": lane, **(target or {})}
            participants.append(_participant_payload(target_puuid, team_id, win, **overrides))
        else:
            participants.append(
                _participant_payload(
                    f"{match_id}-slot{slot}", team_id, win, teamPosition=lane
                )
            )

    teams = [
        {
            "teamId": team_id,
            "win": blue_wins if team_id == 100 else not blue_wins,
            "objectives": {
                "baron": {"first": False, "kills": 1 if team_id == 100 else 0},
                "dragon": {"first": False, "kills": 3 if team_id == 100 else 1},
                "tower": {"first": False, "kills": 8 if team_id == 100 else 3},
            },
        }
        for team_id in (100, 200)
    ]
    return {
        "metadata": {"dataVersion": "2", "matchId": match_id, "participants": []},
        "info": {
            "gameCreation": 1_700_000_000_000,
            "gameDuration": game_duration,
            "gameId": 1000000001,
            "platformId": "EUW1",
            "queueId": 420,
            "participants": participants,
            "teams": teams,
        },
    }


@pytest.fixture
def participant_payload() -> Callable[..., dict[str, Any]]:
    return _participant_payload


@pytest.fixture
def match_payload() -> Callable[..., dict[str, Any]]:
    return _match_payload


@pytest.fixture
def make_match() -> Callable[..., MatchSummary]:
    """Build a validated MatchSummary; kwargs override the target's stats.

    ``win`` sets the target's result, ``lane``/``champion`` its role and pick.
    """

    def _make(
        match_id: str = "EUW1_1000000001",
        *,
        win: bool = True,
        lane: str = "MIDDLE",
        champion: str = "Ahri",
        game_duration: int = 1800,
        include_target: bool = True,
        **stats: Any,
    ) -> MatchSummary:
        target = {"teamPosition": lane, "championName": champion, **stats}
        payload = _match_payload(
            match_id,
            game_duration=game_duration,
            target=target,
            target_puuid=TARGET_PUUID if include_target else None,
            blue_wins=win,
        )
        return MatchSummary.from_riot_match(payload)

    return _make


@pytest.fixture
def make_snapshot() -> Callable[..., ParticipantSnapshot]:
    """Bare snapshot with every counter at 0 unless overridden."""

    def _make(puuid: str = TARGET_PUUID, team_id: int = 100, **fields: Any) -> ParticipantSnapshot:
        return ParticipantSnapshot(puuid=puuid, team_id=team_id, **fields)

    return _make


@pytest.fixture
def target_puuid() -> str:
    return TARGET_PUUID
