"""Flat-file JSON store of challenge records."""

from __future__ import annotations

import json
from pathlib import Path

from aocgen.errors import ChallengeNotFoundError
from aocgen.models import Challenge

INPUT_FILE = "input.txt"


def challenge_name(day: int, part: int, year: int) -> str:
    return f"day{day}_part{part}_{year}"


def load_challenges(path: str | Path) -> list[Challenge]:
    """Load all challenges; a missing file raises FileNotFoundError."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return [Challenge.from_dict(item) for item in data or []]


def save_challenges(path: str | Path, challenges: list[Challenge]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(
        json.dumps([c.to_dict() for c in challenges], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def add_challenge(path: str | Path, challenge: Challenge) -> None:
    """Append *challenge*, creating the store if needed."""
    try:
        challenges = load_challenges(path)
    except FileNotFoundError:
        challenges = []
    challenges.append(challenge)
    save_challenges(path, challenges)


def find_challenge(challenges: list[Challenge], day: int, part: int, year: int) -> Challenge:
    name = challenge_name(day, part, year)
    for c in challenges:
        if c.name == name:
            return c
    raise ChallengeNotFoundError(name)


def list_rows(challenges: list[Challenge]) -> list[str]:
    """One ``<name> <language>`` line per record, sorted by name then language."""
    rows = [(c.name, c.solution_lang or "unsolved") for c in challenges]
    return [f"{name} {lang}" for name, lang in sorted(rows)]


def write_input_file(challenge: Challenge, directory: str | Path = ".") -> Path:
    path = Path(directory) / INPUT_FILE
    path.write_text(challenge.input, encoding="utf-8")
    return path
