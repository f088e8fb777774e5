from __future__ import annotations

import json

from app_cli.analyze import main

from tests.conftest import analysis_input, disc_answers, result_payload


def _write(tmp_path, payload) -> str:
    path = tmp_path / "input.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_cli_prints_analysis(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = _write(tmp_path, analysis_input(result_payload("disc", disc_answers())))
    assert main([src, "--summary", "--describe", "--purpose", "team_fit"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["status"] == "success"
    assert "primaryTraits" in doc["summary"]
    assert doc["descriptions"]
    # team_fit puts collaboration signals first
    assert doc["signals"][0]["category"] == "collaboration"


def test_cli_error_exit(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = _write(tmp_path, {"sessionId": "s", "testResults": []})
    assert main([src]) == 2
    assert json.loads(capsys.readouterr().out)["issues"][0]["code"] == "INVALID_INPUT"


def test_cli_unreadable_file(tmp_path, capsys, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main([str(tmp_path / "missing.json")]) == 1
    assert "cannot read" in capsys.readouterr().err
