"""Tests for EngineConfig defaults and environment overrides."""

import pytest
from pydantic import ValidationError

from models.engine_config import EngineConfig
from models.frequency_model import STORAGE_KEY


def test_defaults() -> None:
    config = EngineConfig()
    assert config.candidate_count == 6
    assert config.storage_key == STORAGE_KEY
    assert config.storage_path is None
    assert config.phrases_path is None
    assert config.terminal_chars == ".!?"


def test_from_env_overrides() -> None:
    config = EngineConfig.from_env(
        {
            "CIRCULAR_ENTRY_CANDIDATE_COUNT": "4",
            "CIRCULAR_ENTRY_STORAGE_PATH": "/tmp/counts.db",
            "CIRCULAR_ENTRY_TERMINAL_CHARS": ".",
            "UNRELATED": "ignored",
        }
    )
    assert config.candidate_count == 4
    assert config.storage_path == "/tmp/counts.db"
    assert config.terminal_chars == "."


def test_from_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CIRCULAR_ENTRY_STORAGE_KEY", "custom_key")
    monkeypatch.setenv("CIRCULAR_ENTRY_PHRASES_PATH", "  ")
    config = EngineConfig.from_env()
    assert config.storage_key == "custom_key"
    assert config.phrases_path is None


@pytest.mark.parametrize("value", ["0", "-1", "six"])
def test_invalid_candidate_count(value: str) -> None:
    with pytest.raises(ValidationError):
        EngineConfig.from_env({"CIRCULAR_ENTRY_CANDIDATE_COUNT": value})


def test_unknown_field_rejected() -> None:
    with pytest.raises(ValidationError):
        EngineConfig(colour="blue")
