"""Port interface for match record retrieval.

Abstracts the upstream game-data provider for dependency inversion. The
analytics core never calls the network itself.
"""

from abc import ABC, abstractmethod

from riftform.contracts.match import MatchSummary


class IMatchRecordSource(ABC):
    """Port interface for retrieving a player's match records."""

    @abstractmethod
    async def get_matches(self, puuid: str, count: int | None = None) -> list[MatchSummary]:
        """Retrieve finished matches for a player.

        Args:
            puuid: Player's persistent unique ID
            count: Maximum number of matches to return (None = whole season)

        Returns:
            Match summaries, most recent first

        Raises:
            MatchSourceError: If the provider cannot deliver the history
        """
        pass
