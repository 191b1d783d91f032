"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from aocgen.config import Config

ENV_VARS = [
    "AOCGEN_CACHE_DIR",
    "AOCGEN_EVAL_TIMEOUT",
    "AOCGEN_MAX_OUTPUT_BYTES",
    "AOCGEN_MAX_CONCURRENT",
    "AOCGEN_MODEL",
    "AOCGEN_MODEL_API",
    "OPENAI_API_KEY",
    "AOC_SESSION",
    "AOC_BASE_URL",
    "AOCGEN_REQUEST_TIMEOUT",
    "AOCGEN_QUIET",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    config = Config.from_env()
    assert config.cache_dir == Path.home() / ".aocgen"
    assert config.evaluation_timeout == 20
    assert config.max_concurrent is None
    assert config.challenges_path == config.cache_dir / "challenges.json"


def test_env_values(monkeypatch, tmp_path):
    monkeypatch.setenv("AOCGEN_CACHE_DIR", str(tmp_path))
    monkeypatch.setenv("AOCGEN_EVAL_TIMEOUT", "2.5")
    monkeypatch.setenv("AOCGEN_MAX_CONCURRENT", "4")
    monkeypatch.setenv("AOC_SESSION", "abc")
    monkeypatch.setenv("AOCGEN_QUIET", "1")
    config = Config.from_env()
    assert config.cache_dir == tmp_path
    assert config.evaluation_timeout == 2.5
    assert config.max_concurrent == 4
    assert config.session == "abc"
    assert config.verbose is False


def test_overrides_win_and_none_is_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("AOCGEN_MODEL", "gpt-4o")
    config = Config.from_env(model="ollama/llama3", cache_dir=str(tmp_path), session=None)
    assert config.model == "ollama/llama3"
    assert config.cache_dir == tmp_path
    assert config.session == ""


def test_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        Config(evaluation_timeout=0)
