"""Match record source backed by a JSON dump of Match-V5 responses.

The file holds a list of full ``match`` payloads, most recent first, as the
upstream provider returns them. Used for offline analysis and fixtures.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from riftform.contracts.match import MatchSummary
from riftform.core.errors import MatchSourceError
from riftform.core.ports.match_source_port import IMatchRecordSource

logger = logging.getLogger(__name__)


class JsonFileMatchSource(IMatchRecordSource):
    """Reads and normalizes Match-V5 payloads from a local file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self, puuid: str) -> list[dict]:
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise MatchSourceError(puuid, f"cannot read {self.path}: {e}") from e
        if not isinstance(payload, list):
            raise MatchSourceError(puuid, f"{self.path} must contain a list of matches")
        return payload

    async def get_matches(self, puuid: str, count: int | None = None) -> list[MatchSummary]:
        raw_matches = self._load(puuid)
        matches: list[MatchSummary] = []
        for raw in raw_matches:
            try:
                matches.append(MatchSummary.from_riot_match(raw))
            except (KeyError, ValidationError) as e:
                raise MatchSourceError(puuid, f"malformed match record in {self.path}: {e}") from e
        if count is not None:
            matches = matches[:count]
        logger.debug("loaded %d matches from %s", len(matches), self.path)
        return matches
