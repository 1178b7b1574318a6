"""Player profile service.

Bridges the IMatchRecordSource port to the pure analytics pipeline:
fetch history once, fold both windows, derive metrics and pick feedback.
"""

from __future__ import annotations

import logging

from riftform.config.settings import Settings, get_settings
from riftform.contracts.analysis_results import PlayerScore, ProfileReport
from riftform.contracts.match import MatchSummary
from riftform.core.analytics.aggregation import build_player_profile
from riftform.core.analytics.feedback import derive_metrics, generate_feedback
from riftform.core.errors import MatchSourceError
from riftform.core.observability import analytics_trace
from riftform.core.ports.match_source_port import IMatchRecordSource
from riftform.core.scoring.edge_score import rank_players_in_match

logger = logging.getLogger(__name__)


class PlayerProfileService:
    """Builds profile reports and per-match rankings on demand."""

    def __init__(self, source: IMatchRecordSource, settings: Settings | None = None) -> None:
        self.source = source
        self.settings = settings or get_settings()

    @analytics_trace(capture_args=False, add_metadata={"layer": "service"})
    async def build_report(self, puuid: str) -> ProfileReport:
        """Fetch the season history for ``puuid`` and summarize it."""
        try:
            matches = await self.source.get_matches(puuid)
        except MatchSourceError:
            logger.warning("match source failed for puuid=%s", puuid)
            raise

        return self.report_from_matches(matches, puuid)

    def report_from_matches(self, matches: list[MatchSummary], puuid: str) -> ProfileReport:
        """Summarize an already fetched, most-recent-first history."""
        profile = build_player_profile(
            matches,
            puuid,
            window_size=self.settings.recent_window_size,
            trend_slice=self.settings.trend_slice_size,
            stability_min_samples=self.settings.stability_min_samples,
        )
        derived = derive_metrics(
            profile, best_champion_min_games=self.settings.best_champion_min_games
        )
        feedback = generate_feedback(profile, derived, top_n=self.settings.feedback_top_n)
        logger.info(
            "profile report built puuid=%s games=%d avg_impact=%.2f",
            puuid,
            profile.total_games,
            profile.average_impact,
        )
        return ProfileReport(profile=profile, derived=derived, feedback=feedback)

    @staticmethod
    def rank_match(match: MatchSummary) -> dict[str, PlayerScore]:
        """EdgeScore ranking for one displayed match."""
        return rank_players_in_match(match.participants, match.game_duration, match.teams)
