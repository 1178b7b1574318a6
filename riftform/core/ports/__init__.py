"""Port interfaces between the analytics core and external collaborators."""

from riftform.core.ports.match_source_port import IMatchRecordSource

__all__ = ["IMatchRecordSource"]
