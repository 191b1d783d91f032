"""Fetch a puzzle description and input from the puzzle site."""

from __future__ import annotations

import html
import re
import sys

import httpx

from aocgen.challenges import add_challenge, challenge_name
from aocgen.config import Config
from aocgen.errors import DownloadError
from aocgen.models import Challenge

_ARTICLE = re.compile(r'<article class="day-desc">(.*?)</article>', re.DOTALL)
_TAG = re.compile(r"<[^>]*>")
_ANSWER = re.compile(r"Your puzzle answer was.*")
_TITLE = re.compile(r"(--- .* ---)(.*)")
PART_TWO = "--- Part Two ---"


def strip_tags(text: str) -> str:
    return _TAG.sub("", text)


def clean_task_description(page: str) -> tuple[str, str]:
    """Return (part one, part two) plain-text task descriptions.

    Only the first ``day-desc`` article is used; once both parts are
    unlocked the site keeps them in the same article. Lines revealing
    submitted answers are removed.
    """
    match = _ARTICLE.search(page)
    if not match:
        return "", ""
    content = html.unescape(strip_tags(match.group(1)))
    content = _ANSWER.sub("", content)

    parts = content.split(PART_TWO)
    part_one = _TITLE.sub(r"\1\n\2", parts[0].strip(), count=1)
    part_two = f"{PART_TWO}\n{parts[1].strip()}" if len(parts) > 1 else ""
    return part_one, part_two


class Downloader:
    def __init__(self, config: Config, client: httpx.Client | None = None) -> None:
        self.config = config
        self._client = client

    def download(self, day: int, year: int, part: int = 1) -> Challenge:
        """Fetch the challenge and append it to the challenge store."""
        if not self.config.session:
            raise DownloadError("session token is required")
        part = part or 1
        base = self.config.aoc_base_url.rstrip("/")

        page = self._get(f"{base}/{year}/day/{day}", "challenge description")
        puzzle_input = self._get(f"{base}/{year}/day/{day}/input", "challenge input")

        part_one, part_two = clean_task_description(page)
        task = f"{part_one}\n\n{part_two}" if part == 2 else part_one
        challenge = Challenge(
            name=challenge_name(day, part, year),
            input=puzzle_input,
            task=task,
            year=year,
        )
        add_challenge(self.config.challenges_path, challenge)
        self._log(f"Saved {challenge.name} to {self.config.challenges_path}")
        return challenge

    def _get(self, url: str, what: str) -> str:
        client = self._client or httpx.Client(timeout=self.config.request_timeout)
        try:
            resp = client.get(url, headers={"Cookie": f"session={self.config.session}"})
        except httpx.HTTPError as e:
            raise DownloadError(f"failed to download {what}: {e}") from e
        finally:
            if self._client is None:
                client.close()
        if resp.status_code != 200:
            raise DownloadError(f"failed to download {what}: HTTP {resp.status_code}")
        return resp.text

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(message, file=sys.stderr)
