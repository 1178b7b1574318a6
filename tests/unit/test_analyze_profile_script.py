import json

import pytest

from riftform.adapters.json_file_source import JsonFileMatchSource
from scripts.analyze_profile import parse_args, run


@pytest.fixture
def dump(tmp_path, match_payload):
    path = tmp_path / "matches.json"
    path.write_text(json.dumps([match_payload(f"EUW1_{i}") for i in range(3)]))
    return path


@pytest.mark.asyncio
async def test_prints_report_and_ranking(dump, target_puuid, capsys) -> None:
    code = await run(parse_args([str(dump), target_puuid, "--rank-match", "0"]))

    output = json.loads(capsys.readouterr().out)
    assert code == 0
    assert output["report"]["profile"]["total_games"] == 3
    assert len(output["ranking"]) == 10


@pytest.mark.asyncio
async def test_out_of_range_match_index(dump, target_puuid, capsys) -> None:
    code = await run(parse_args([str(dump), target_puuid, "--rank-match", "7"]))

    assert code == 1
    assert "out of range" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_unreadable_dump(tmp_path, target_puuid, capsys) -> None:
    code = await run(parse_args([str(tmp_path / "missing.json"), target_puuid]))

    assert code == 1
    assert "cannot read" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_dump_is_read_once(dump, target_puuid, monkeypatch, capsys) -> None:
    reads: list[str] = []
    original_load = JsonFileMatchSource._load

    def _counting_load(self, puuid: str) -> list[dict]:
        reads.append(puuid)
        return original_load(self, puuid)

    monkeypatch.setattr(JsonFileMatchSource, "_load", _counting_load)

    code = await run(parse_args([str(dump), target_puuid, "--rank-match", "1"]))

    assert code == 0
    assert reads == [target_puuid]
    assert "ranking" in json.loads(capsys.readouterr().out)
