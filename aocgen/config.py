"""Configuration for aocgen, loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from openai import OpenAI

CHALLENGES_FILE = "challenges.json"


def _default_cache_dir() -> Path:
    return Path.home() / ".aocgen"


@dataclass
class Config:
    cache_dir: Path = field(default_factory=_default_cache_dir)
    evaluation_timeout: float = 20.0  # seconds
    max_output_bytes: int = 1024 * 1024
    max_concurrent: int | None = None  # unbounded when None
    model: str = ""
    model_api: str = ""
    openai_api_key: str = ""
    session: str = ""
    aoc_base_url: str = "https://adventofcode.com"
    request_timeout: float = 60.0  # seconds, HTTP calls
    verbose: bool = True

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir).expanduser()
        if self.evaluation_timeout <= 0:
            raise ValueError("evaluation_timeout must be positive")

    @property
    def challenges_path(self) -> Path:
        return self.cache_dir / CHALLENGES_FILE

    def create_openai_client(self) -> OpenAI:
        """Create an OpenAI client, pointed at model_api when one is set."""
        base_url = _openai_base_url(self.model_api) if self.model_api else None
        return OpenAI(api_key=self.openai_api_key or "unset", base_url=base_url)

    @classmethod
    def from_env(cls, **overrides) -> Config:
        kwargs: dict = {}
        env_map: dict[str, tuple[str, type]] = {
            "AOCGEN_CACHE_DIR": ("cache_dir", Path),
            "AOCGEN_EVAL_TIMEOUT": ("evaluation_timeout", float),
            "AOCGEN_MAX_OUTPUT_BYTES": ("max_output_bytes", int),
            "AOCGEN_MAX_CONCURRENT": ("max_concurrent", int),
            "AOCGEN_MODEL": ("model", str),
            "AOCGEN_MODEL_API": ("model_api", str),
            "OPENAI_API_KEY": ("openai_api_key", str),
            "AOC_SESSION": ("session", str),
            "AOC_BASE_URL": ("aoc_base_url", str),
            "AOCGEN_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        for env_var, (field_name, conv) in env_map.items():
            val = os.environ.get(env_var)
            if val:
                kwargs[field_name] = conv(val)
        # AOCGEN_QUIET: anything but "0"/"false"/"no" silences progress lines
        quiet = os.environ.get("AOCGEN_QUIET")
        if quiet is not None:
            kwargs["verbose"] = quiet.lower() in ("0", "false", "no")
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)


def _openai_base_url(model_api: str) -> str:
    """``--model-api`` is a full endpoint URL; the SDK wants its base."""
    url = model_api.rstrip("/")
    suffix = "/chat/completions"
    if url.endswith(suffix):
        url = url[: -len(suffix)]
    return url
