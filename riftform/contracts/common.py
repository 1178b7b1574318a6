"""
Common data types and base models for riftform.
All models use Pydantic V2 with strict type checking.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Lane(str, Enum):
    """Assigned team position (Match-V5 ``teamPosition``)."""

    TOP = "TOP"
    JUNGLE = "JUNGLE"
    MIDDLE = "MIDDLE"
    BOTTOM = "BOTTOM"
    UTILITY = "UTILITY"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "Lane":
        """Map an upstream position label to a Lane, UNKNOWN for anything else."""
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.upper())
        except ValueError:
            return cls.UNKNOWN


KNOWN_LANES: tuple[Lane, ...] = (
    Lane.TOP,
    Lane.JUNGLE,
    Lane.MIDDLE,
    Lane.BOTTOM,
    Lane.UTILITY,
)


class Window(str, Enum):
    """Aggregation window over a player's match history."""

    RECENT = "recent"
    SEASON = "season"


class StabilityClass(str, Enum):
    """Qualitative band for the spread of impact scores."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INSUFFICIENT_DATA = "insufficient_data"


class BaseContract(BaseModel):
    """Base model for all data contracts with common configuration."""

    model_config = ConfigDict(
        # Snapshots are value objects; never mutate after ingestion
        frozen=True,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )
