"""
Match information data contracts built from Riot API Match-V5 payloads.

Every counter is present on the snapshot and defaults to 0, so scoring code
never has to branch on missing upstream fields.
"""

from collections import Counter
from typing import Any

from pydantic import Field, model_validator

from .common import BaseContract, Lane

# snapshot field -> Match-V5 participant key
_COUNTER_KEYS: dict[str, str] = {
    "kills": "kills",
    "deaths": "deaths",
    "assists": "assists",
    "total_minions_killed": "totalMinionsKilled",
    "neutral_minions_killed": "neutralMinionsKilled",
    "vision_score": "visionScore",
    "wards_placed": "wardsPlaced",
    "wards_killed": "wardsKilled",
    "vision_wards_bought_in_game": "visionWardsBoughtInGame",
    "gold_earned": "goldEarned",
    "total_damage_dealt_to_champions": "totalDamageDealtToChampions",
    "damage_dealt_to_objectives": "damageDealtToObjectives",
    "total_damage_taken": "totalDamageTaken",
    "time_ccing_others": "timeCCingOthers",
    "total_heals_on_teammates": "totalHealsOnTeammates",
    "total_damage_shielded_on_teammates": "totalDamageShieldedOnTeammates",
    "double_kills": "doubleKills",
    "triple_kills": "tripleKills",
    "quadra_kills": "quadraKills",
    "penta_kills": "pentaKills",
    "largest_killing_spree": "largestKillingSpree",
    "turret_kills": "turretKills",
    "inhibitor_kills": "inhibitorKills",
    "dragon_kills": "dragonKills",
    "baron_kills": "baronKills",
    "objectives_stolen": "objectivesStolen",
    "objectives_stolen_assists": "objectivesStolenAssists",
    "longest_time_spent_living": "longestTimeSpentLiving",
}

_FLAG_KEYS: dict[str, str] = {
    "first_blood_kill": "firstBloodKill",
    "first_blood_assist": "firstBloodAssist",
    "first_tower_kill": "firstTowerKill",
    "first_tower_assist": "firstTowerAssist",
}


def _count(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key)
    if value is None:
        return 0
    return int(value)


class ParticipantSnapshot(BaseContract):
    """One player's end-of-game counters for a single match."""

    # Identity
    puuid: str = Field(..., min_length=1, description="Player's PUUID")
    champion_id: int = Field(0, description="Champion ID")
    champion_name: str = Field("", description="Champion name")
    lane: Lane = Field(Lane.UNKNOWN, description="Assigned team position")
    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    win: bool = Field(False)

    # Core stats
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    double_kills: int = Field(0, ge=0)
    triple_kills: int = Field(0, ge=0)
    quadra_kills: int = Field(0, ge=0)
    penta_kills: int = Field(0, ge=0)
    solo_kills: int = Field(0, ge=0)
    largest_killing_spree: int = Field(0, ge=0)

    # Farming and economy
    total_minions_killed: int = Field(0, ge=0)
    neutral_minions_killed: int = Field(0, ge=0)
    gold_earned: int = Field(0, ge=0)
    champion_level: int = Field(0, ge=0, le=18)

    # Vision
    vision_score: int = Field(0, ge=0)
    wards_placed: int = Field(0, ge=0)
    wards_killed: int = Field(0, ge=0)
    vision_wards_bought_in_game: int = Field(0, ge=0)

    # Damage
    total_damage_dealt_to_champions: int = Field(0, ge=0)
    damage_dealt_to_objectives: int = Field(0, ge=0)
    damage_dealt_to_turrets: int = Field(
        0, ge=0, description="Turret damage, falling back to building damage"
    )
    total_damage_taken: int = Field(0, ge=0)

    # Utility
    time_ccing_others: int = Field(0, ge=0, description="Seconds")
    total_heals_on_teammates: int = Field(0, ge=0)
    total_damage_shielded_on_teammates: int = Field(0, ge=0)

    # Objectives
    turret_kills: int = Field(0, ge=0)
    inhibitor_kills: int = Field(0, ge=0)
    dragon_kills: int = Field(0, ge=0)
    baron_kills: int = Field(0, ge=0)
    objectives_stolen: int = Field(0, ge=0)
    objectives_stolen_assists: int = Field(0, ge=0)

    # First events
    first_blood_kill: bool = Field(False)
    first_blood_assist: bool = Field(False)
    first_tower_kill: bool = Field(False)
    first_tower_assist: bool = Field(False)

    # Survivability
    longest_time_spent_living: int = Field(0, ge=0, description="Seconds")

    @property
    def cs(self) -> int:
        """Lane minions plus neutral monsters."""
        return self.total_minions_killed + self.neutral_minions_killed

    @property
    def kda_ratio(self) -> float:
        """Calculate KDA ratio; a deathless game counts kills plus assists."""
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / self.deaths

    @property
    def healing_and_shielding(self) -> int:
        return self.total_heals_on_teammates + self.total_damage_shielded_on_teammates

    @classmethod
    def from_riot_participant(cls, payload: dict[str, Any]) -> "ParticipantSnapshot":
        """Normalize a Match-V5 participant dict into a snapshot."""
        counters = {field: _count(payload, key) for field, key in _COUNTER_KEYS.items()}
        flags = {field: bool(payload.get(key, False)) for field, key in _FLAG_KEYS.items()}

        # Solo kills only exist under challenges on current Match-V5 payloads
        solo_kills = payload.get("soloKills")
        if solo_kills is None:
            solo_kills = (payload.get("challenges") or {}).get("soloKills")

        turret_damage = (
            payload.get("damageDealtToTurrets") or payload.get("damageDealtToBuildings") or 0
        )

        return cls(
            puuid=str(payload["puuid"]),
            champion_id=_count(payload, "championId"),
            champion_name=str(payload.get("championName") or ""),
            lane=Lane.parse(payload.get("teamPosition")),
            team_id=int(payload["teamId"]),
            win=bool(payload.get("win", False)),
            solo_kills=int(solo_kills or 0),
            damage_dealt_to_turrets=int(turret_damage),
            champion_level=_count(payload, "champLevel"),
            **counters,
            **flags,
        )


class TeamObjectiveTotals(BaseContract):
    """Per-team objective counts for a match."""

    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    win: bool = Field(False)
    baron_kills: int = Field(0, ge=0)
    dragon_kills: int = Field(0, ge=0)
    tower_kills: int = Field(0, ge=0)

    @classmethod
    def from_riot_team(cls, payload: dict[str, Any]) -> "TeamObjectiveTotals":
        objectives = payload.get("objectives") or {}

        def _kills(name: str) -> int:
            return int((objectives.get(name) or {}).get("kills") or 0)

        return cls(
            team_id=int(payload["teamId"]),
            win=bool(payload.get("win", False)),
            baron_kills=_kills("baron"),
            dragon_kills=_kills("dragon"),
            tower_kills=_kills("tower"),
        )


class MatchSummary(BaseContract):
    """A finished 5v5 match: duration, 10 participants and both teams."""

    match_id: str = Field(..., min_length=1, description="Match ID, e.g. EUW1_1234567890")
    game_duration: int = Field(..., description="Game duration in seconds")
    game_creation: int = Field(0, description="Game creation timestamp (epoch milliseconds)")
    queue_id: int = Field(0, description="Queue ID")

    participants: tuple[ParticipantSnapshot, ...] = Field(..., min_length=10, max_length=10)
    teams: tuple[TeamObjectiveTotals, ...] = Field(..., min_length=2, max_length=2)

    @model_validator(mode="after")
    def _check_team_partition(self) -> "MatchSummary":
        sizes = Counter(p.team_id for p in self.participants)
        if len(sizes) != 2 or set(sizes.values()) != {5}:
            raise ValueError(f"expected two teams of five participants, got {dict(sizes)}")
        if {t.team_id for t in self.teams} != set(sizes):
            raise ValueError("team objective totals do not match participant team ids")
        return self

    def get_participant(self, puuid: str) -> ParticipantSnapshot | None:
        """Get participant by PUUID."""
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None

    def get_team_participants(self, team_id: int) -> list[ParticipantSnapshot]:
        """Get all participants for a team."""
        return [p for p in self.participants if p.team_id == team_id]

    @classmethod
    def from_riot_match(cls, payload: dict[str, Any]) -> "MatchSummary":
        """Build a summary from a full Match-V5 ``match`` response."""
        info = payload["info"]
        metadata = payload.get("metadata") or {}
        match_id = metadata.get("matchId") or f"{info.get('platformId', '')}_{info.get('gameId', '')}"
        return cls(
            match_id=str(match_id),
            game_duration=int(info.get("gameDuration") or 0),
            game_creation=int(info.get("gameCreation") or 0),
            queue_id=int(info.get("queueId") or 0),
            participants=tuple(
                ParticipantSnapshot.from_riot_participant(p) for p in info["participants"]
            ),
            teams=tuple(TeamObjectiveTotals.from_riot_team(t) for t in info.get("teams", [])),
        )
