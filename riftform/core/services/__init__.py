"""Application services wiring ports to the analytics core."""

from riftform.core.services.player_profile_service import PlayerProfileService

__all__ = ["PlayerProfileService"]
