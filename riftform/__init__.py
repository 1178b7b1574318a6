"""riftform - match performance scoring and form analytics for League of Legends."""

__version__ = "0.1.0"
