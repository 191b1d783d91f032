"""Tests for the challenge downloader (mocked HTTP)."""

from __future__ import annotations

from unittest.mock import MagicMock

import httpx
import pytest

from aocgen.challenges import load_challenges
from aocgen.config import Config
from aocgen.downloader import Downloader, clean_task_description
from aocgen.errors import DownloadError

PAGE = """<article class="day-desc">
    <h2>--- Day 1: Calorie Counting ---</h2>
    <p>Santa&apos;s reindeer typically eat regular reindeer food.</p>
    <p>Your puzzle answer was 12345.</p>
    <h2 id="part2">--- Part Two ---</h2>
    <p>By the time you calculate the answer to the Elves' question, they&apos;ve realized.</p>
    <p>Your puzzle answer was 67890.</p>
</article>"""
INPUT = "3120\n4127\n1830\n1283\n5021\n3569"


def _response(text: str, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    return resp


def _fake_site(pages: dict[str, MagicMock]) -> MagicMock:
    client = MagicMock()
    client.get.side_effect = lambda url, **kwargs: pages.get(url, _response("not found", 404))
    return client


def _make_config(tmp_path, **overrides) -> Config:
    defaults = {
        "cache_dir": tmp_path,
        "session": "test_session",
        "aoc_base_url": "http://fake",
        "verbose": False,
    }
    defaults.update(overrides)
    return Config(**defaults)


def test_clean_task_description():
    part_one, part_two = clean_task_description(PAGE)
    assert part_one.startswith("--- Day 1: Calorie Counting ---")
    assert "Santa's reindeer" in part_one
    assert "Your puzzle answer was" not in part_one + part_two
    assert part_two.startswith("--- Part Two ---\n")
    assert "they've realized" in part_two


def test_clean_task_description_without_article():
    assert clean_task_description("<html></html>") == ("", "")


@pytest.mark.parametrize("part,name", [(1, "day1_part1_2022"), (2, "day1_part2_2022")])
def test_download(tmp_path, part, name):
    client = _fake_site({
        "http://fake/2022/day/1": _response(PAGE),
        "http://fake/2022/day/1/input": _response(INPUT),
    })
    challenge = Downloader(_make_config(tmp_path), client=client).download(1, 2022, part)

    assert challenge.name == name
    assert challenge.input == INPUT
    assert challenge.answer == ""
    assert "--- Day 1: Calorie Counting ---" in challenge.task
    assert ("--- Part Two ---" in challenge.task) == (part == 2)

    stored = load_challenges(tmp_path / "challenges.json")
    assert stored[-1] == challenge
    for call in client.get.call_args_list:
        assert call.kwargs["headers"]["Cookie"] == "session=test_session"


def test_download_appends(tmp_path):
    client = _fake_site({
        "http://fake/2022/day/1": _response(PAGE),
        "http://fake/2022/day/1/input": _response(INPUT),
    })
    downloader = Downloader(_make_config(tmp_path), client=client)
    downloader.download(1, 2022, 1)
    downloader.download(1, 2022, 2)
    names = [c.name for c in load_challenges(tmp_path / "challenges.json")]
    assert names == ["day1_part1_2022", "day1_part2_2022"]


def test_part_defaults_to_one(tmp_path):
    client = _fake_site({
        "http://fake/2022/day/1": _response(PAGE),
        "http://fake/2022/day/1/input": _response(INPUT),
    })
    assert Downloader(_make_config(tmp_path), client=client).download(1, 2022, 0).name == "day1_part1_2022"


def test_session_required(tmp_path):
    client = MagicMock()
    with pytest.raises(DownloadError, match="session"):
        Downloader(_make_config(tmp_path, session=""), client=client).download(1, 2022)
    client.get.assert_not_called()


def test_http_status_error(tmp_path):
    client = _fake_site({"http://fake/2022/day/1": _response("Unauthorized", 401)})
    with pytest.raises(DownloadError, match="401"):
        Downloader(_make_config(tmp_path), client=client).download(1, 2022)
    assert not (tmp_path / "challenges.json").exists()


def test_transport_error(tmp_path):
    client = MagicMock()
    client.get.side_effect = httpx.ConnectError("refused")
    with pytest.raises(DownloadError, match="refused"):
        Downloader(_make_config(tmp_path), client=client).download(1, 2022)
