"""Adapters implementing core ports."""

from riftform.adapters.json_file_source import JsonFileMatchSource

__all__ = ["JsonFileMatchSource"]
