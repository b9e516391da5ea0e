from __future__ import annotations

import pytest
from pydantic import ValidationError

from callback_promisify import callbacks, promisify
from callback_promisify.config import Settings, get_settings


def _settings_with_env(monkeypatch, env: dict) -> Settings:
    for k, v in env.items():
        if v is None:
            monkeypatch.delenv(k, raising=False)
        else:
            monkeypatch.setenv(k, v)
    # Bust lru_cache so the new environment is read
    get_settings.cache_clear()
    return get_settings()


def test_defaults(monkeypatch):
    s = _settings_with_env(monkeypatch, {})
    assert s.LOG_LEVEL == "INFO"
    assert s.DEBUG is False
    assert s.CALLBACK_NAMES_EXTRA == []
    assert s.CALL_TIMEOUT_SECONDS == 30.0


def test_extra_callback_names_parsed_from_env(monkeypatch):
    s = _settings_with_env(monkeypatch, {"PROMISIFY_CALLBACK_NAMES_EXTRA": "then_, reply,,"})
    assert s.CALLBACK_NAMES_EXTRA == ["then_", "reply"]

    s = _settings_with_env(monkeypatch, {"PROMISIFY_CALLBACK_NAMES_EXTRA": "  "})
    assert s.CALLBACK_NAMES_EXTRA == []


def test_extra_callback_names_from_code():
    s = Settings(CALLBACK_NAMES_EXTRA=[" respond ", "", 3])
    assert s.CALLBACK_NAMES_EXTRA == ["respond"]


def test_timeout_must_be_positive(monkeypatch):
    monkeypatch.setenv("PROMISIFY_CALL_TIMEOUT_SECONDS", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_are_cached(monkeypatch):
    first = _settings_with_env(monkeypatch, {"PROMISIFY_LOG_LEVEL": "DEBUG"})
    monkeypatch.setenv("PROMISIFY_LOG_LEVEL", "WARNING")
    assert get_settings() is first
    assert get_settings().LOG_LEVEL == "DEBUG"


def test_extra_names_are_honoured_without_touching_shared_list(monkeypatch):
    _settings_with_env(monkeypatch, {"PROMISIFY_CALLBACK_NAMES_EXTRA": "reply"})

    def answer(question, reply):
        reply(None, question.upper())

    result = promisify({"answer": answer})

    assert result["answer"]("ok").result(timeout=1) == "OK"
    assert "reply" not in callbacks
