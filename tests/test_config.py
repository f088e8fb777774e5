from __future__ import annotations

import importlib
import json

import pytest

from signal_core import config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


def test_env_overrides(monkeypatch, reload_config):
    monkeypatch.setenv("FAST_ANSWER_MS", "1500")
    monkeypatch.setenv("AGREEMENT_BONUS", "0.1")
    monkeypatch.setenv("DEBUG_TRACE", "yes")
    monkeypatch.setenv("API_ALLOWED_ORIGINS", "https://a.example, https://b.example")
    reload_config()
    assert config.FAST_ANSWER_MS == 1500
    assert config.AGREEMENT_BONUS == pytest.approx(0.1)
    assert config.DEBUG_TRACE is True
    assert config.API_ALLOWED_ORIGINS == ("https://a.example", "https://b.example")


def test_bad_env_values_fall_back(monkeypatch, reload_config):
    monkeypatch.setenv("FAST_ANSWER_MS", "soon")
    monkeypatch.setenv("LOW_CONFIDENCE_THRESHOLD", "")
    reload_config()
    assert config.FAST_ANSWER_MS == 1000
    assert config.LOW_CONFIDENCE_THRESHOLD == pytest.approx(0.5)


def test_load_config_merges_file_and_env(monkeypatch, tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"DEFAULT_PURPOSE": "team_fit", "LOG_LEVEL": "INFO"}), encoding="utf-8")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("DEFAULT_PURPOSE", raising=False)
    cfg = config.load_config(str(path))
    assert cfg == {"DEFAULT_PURPOSE": "team_fit", "LOG_LEVEL": "DEBUG"}


def test_load_config_tolerates_broken_file(monkeypatch, tmp_path):
    for name in ("DEFAULT_PURPOSE", "DEFAULT_LOCALE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert config.load_config(str(path)) == {}
    assert config.load_config(str(tmp_path / "missing.json")) == {}


def test_trace_is_logged_when_enabled(monkeypatch, caplog):
    from signal_core.generator import merge_signals
    from tests.conftest import make_signal

    monkeypatch.setattr(config, "DEBUG_TRACE", True)
    caplog.set_level("INFO", logger="signal_core.generator")
    merge_signals([
        make_signal("risk_tolerance", 0.2, 0.5, ("disc",)),
        make_signal("risk_tolerance", 0.4, 0.5, ("holland",)),
    ])
    assert any("trace signal=risk_tolerance sources=disc+holland" in r.getMessage() for r in caplog.records)
