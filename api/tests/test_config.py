"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.services.prompt import SYSTEM_PROMPT


def test_defaults(monkeypatch):
    for name in ("AUTORAG_NAME", "SYSTEM_PROMPT", "SYSTEM_PROMPT_PATH", "REQUIRE_USER_MESSAGE"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()

    assert settings.autorag_name == "shipment-tracking-proxy"
    assert settings.system_prompt == SYSTEM_PROMPT
    assert settings.require_user_message is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AUTORAG_NAME", "staging-proxy")
    monkeypatch.setenv("REQUIRE_USER_MESSAGE", "false")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://track.example.com, http://localhost:5173")

    settings = Settings()

    assert settings.autorag_name == "staging-proxy"
    assert settings.require_user_message is False
    assert settings.cors_origins == ["https://track.example.com", "http://localhost:5173"]


def test_system_prompt_read_from_file(tmp_path):
    prompt_file = tmp_path / "prompt.txt"
    prompt_file.write_text("Only answer about reefer containers.", encoding="utf-8")

    settings = Settings(system_prompt_path=str(prompt_file))

    assert settings.system_prompt == "Only answer about reefer containers."


def test_system_prompt_file_is_read_once(tmp_path):
    prompt_file = tmp_path / "prompt.txt"
    prompt_file.write_text("Only answer about reefer containers.", encoding="utf-8")
    settings = Settings(system_prompt_path=str(prompt_file))

    prompt_file.unlink()

    assert settings.system_prompt == "Only answer about reefer containers."


def test_missing_system_prompt_file_fails_at_load(tmp_path):
    with pytest.raises(ValidationError, match="system_prompt_path"):
        Settings(system_prompt_path=str(tmp_path / "missing.txt"))


def test_undecodable_system_prompt_file_fails_at_load(tmp_path):
    prompt_file = tmp_path / "prompt.txt"
    prompt_file.write_bytes(b"\xff\xfe\xfa not utf-8")

    with pytest.raises(ValidationError, match="system_prompt_path"):
        Settings(system_prompt_path=str(prompt_file))
