"""Tests for the JSON challenge store."""

import json

import pytest

from aocgen.challenges import (
    add_challenge,
    challenge_name,
    find_challenge,
    list_rows,
    load_challenges,
    save_challenges,
    write_input_file,
)
from aocgen.errors import ChallengeNotFoundError
from aocgen.models import Challenge


def test_challenge_name():
    assert challenge_name(1, 2, 2015) == "day1_part2_2015"


def test_load_challenges(tmp_path):
    path = tmp_path / "challenges.json"
    path.write_text(json.dumps([
        {"name": "day1_part1_2015", "input": "test input", "answer": "280", "task": "test task"},
    ]))
    challenges = load_challenges(path)
    assert len(challenges) == 1
    assert challenges[0].name == "day1_part1_2015"
    assert challenges[0].answer == "280"


def test_load_missing_store(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_challenges(tmp_path / "missing.json")


def test_save_creates_directory(tmp_path):
    path = tmp_path / "nested" / "challenges.json"
    save_challenges(path, [Challenge(name="day2_part1_2016", answer="7")])
    assert load_challenges(path)[0].answer == "7"


def test_add_challenge(tmp_path):
    path = tmp_path / "challenges.json"
    add_challenge(path, Challenge(name="a"))
    add_challenge(path, Challenge(name="b"))
    assert [c.name for c in load_challenges(path)] == ["a", "b"]


def test_find_challenge():
    challenges = [
        Challenge(name="day1_part1_2015", answer="280"),
        Challenge(name="day2_part1_2015", answer="123"),
    ]
    assert find_challenge(challenges, 1, 1, 2015).answer == "280"
    with pytest.raises(ChallengeNotFoundError, match="day3_part1_2015"):
        find_challenge(challenges, 3, 1, 2015)


def test_list_rows():
    challenges = [
        Challenge(name="day1_part1_2022", solution_lang="python"),
        Challenge(name="day1_part1_2022", solution_lang="go"),
        Challenge(name="day2_part1_2022", solution_lang="python"),
        Challenge(name="day3_part1_2022", solution_lang=""),
    ]
    assert list_rows(challenges) == [
        "day1_part1_2022 go",
        "day1_part1_2022 python",
        "day2_part1_2022 python",
        "day3_part1_2022 unsolved",
    ]


def test_write_input_file(tmp_path):
    path = write_input_file(Challenge(name="x", input="test input"), tmp_path)
    assert path.read_text() == "test input"
