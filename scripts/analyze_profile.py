#!/usr/bin/env python3
"""Print a player's profile report (and optionally one match ranking) as JSON.

Usage:
    python scripts/analyze_profile.py matches.json <puuid>
    python scripts/analyze_profile.py matches.json <puuid> --rank-match 0
"""

import argparse
import asyncio
import json
import sys

from riftform.adapters.json_file_source import JsonFileMatchSource
from riftform.config.settings import get_settings
from riftform.core.errors import MatchSourceError
from riftform.core.observability import configure_stdlib_json_logging
from riftform.core.services.player_profile_service import PlayerProfileService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize a player's form from Match-V5 dumps")
    parser.add_argument("matches", help="JSON file with a list of match payloads, newest first")
    parser.add_argument("puuid", help="Target player PUUID")
    parser.add_argument(
        "--rank-match",
        type=int,
        default=None,
        metavar="INDEX",
        help="Also print the EdgeScore ranking of the match at INDEX",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    source = JsonFileMatchSource(args.matches)
    service = PlayerProfileService(source)

    try:
        matches = await source.get_matches(args.puuid)
    except MatchSourceError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    report = service.report_from_matches(matches, args.puuid)
    output: dict = {"report": report.model_dump(mode="json")}

    if args.rank_match is not None:
        if not 0 <= args.rank_match < len(matches):
            print(f"❌ match index {args.rank_match} out of range", file=sys.stderr)
            return 1
        ranking = service.rank_match(matches[args.rank_match])
        output["ranking"] = {puuid: s.model_dump(mode="json") for puuid, s in ranking.items()}

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    settings = get_settings()
    configure_stdlib_json_logging(level=settings.app_log_level)
    sys.exit(asyncio.run(run(parse_args())))


if __name__ == "__main__":
    main()
