"""Exception hierarchy for riftform."""


class RiftformError(Exception):
    """Base class for all riftform errors."""


class MatchSourceError(RiftformError):
    """The match record source failed to deliver a player's history."""

    def __init__(self, puuid: str, message: str) -> None:
        super().__init__(f"{message} (puuid={puuid})")
        self.puuid = puuid
