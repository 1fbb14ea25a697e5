"""CLI tests driving the store through memory and local directory bindings."""

from __future__ import annotations

import json

import pytest

from cli.main import app as cli_app
from core.store.factory import open_store, reset_memory_stores


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    monkeypatch.delenv("SATRATE_KV", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_memory_stores()
    yield
    reset_memory_stores()


def test_submit_and_results_json(tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text(json.dumps({"onboardingSmooth": 3, "onboardingLength": "long"}), encoding="utf-8")

    assert cli_app(["--store", "memory://cli", "submit", "--payload", str(payload)]) == 0
    ack = json.loads(capsys.readouterr().out)
    assert ack["ok"] is True
    assert ack["id"].startswith("submission:")

    assert cli_app(["--store", "memory://cli", "results"]) == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["totalResponses"] == 1
    assert summary["rating"]["onboardingSmooth"]["3"] == 1
    assert summary["length"]["onboardingLength"]["long"] == 1


def test_results_markdown_from_config_file(tmp_path):
    store_dir = tmp_path / "kv"
    (tmp_path / "satrate.yml").write_text(f"store_url: file://{store_dir}\n", encoding="utf-8")
    store = open_store(f"file://{store_dir}")
    store.put("submission:1:aaaaaaa", json.dumps({"docClear": 5}))

    report = tmp_path / "out" / "results.md"
    assert cli_app(["results", "--format", "md", "--output", str(report)]) == 0
    text = report.read_text(encoding="utf-8")
    assert text.startswith("totalResponses: 1")
    assert "| field | kind | 1 | 2 | 3 | 4 | 5 | answered |" in text
    assert "| docClear | rating | 0 | 0 | 0 | 0 | 1 | 1 |" in text


def test_results_table_format(capsys):
    open_store("memory://table").put("submission:1:aaaaaaa", json.dumps({"onboardingLength": "short"}))
    assert cli_app(["--store", "memory://table", "results", "--format", "table"]) == 0
    out = capsys.readouterr().out
    assert "totalResponses: 1" in out
    assert "onboardingLength" in out


def test_export_writes_json_lines(tmp_path):
    store = open_store("memory://export")
    store.put("submission:1:aaaaaaa", json.dumps({"docClear": 2}))
    store.put("submission:2:bbbbbbb", "{broken")
    store.put("submission:3:ccccccc", "7")

    target = tmp_path / "export.jsonl"
    assert cli_app(["--store", "memory://export", "export", "--output", str(target)]) == 0
    lines = [json.loads(line) for line in target.read_text(encoding="utf-8").splitlines()]
    assert lines == [
        {"_id": "submission:1:aaaaaaa", "docClear": 2},
        {"_id": "submission:3:ccccccc", "value": 7},
    ]


def test_missing_store_binding_exits_with_error(capsys):
    assert cli_app(["results"]) == 1
    assert "KV not configured" in capsys.readouterr().err


def test_invalid_payload_exits_with_error(tmp_path, capsys):
    payload = tmp_path / "payload.json"
    payload.write_text("[1, 2, 3]", encoding="utf-8")
    assert cli_app(["--store", "memory://bad", "submit", "--payload", str(payload)]) == 1
    assert "JSON object" in capsys.readouterr().err
    assert open_store("memory://bad").data == {}


def test_unreadable_payload_is_usage_error(tmp_path, capsys):
    assert cli_app(["--store", "memory://missing", "submit", "--payload", str(tmp_path / "nope.json")]) == 2
    assert "Cannot read payload" in capsys.readouterr().err


def test_export_store_key_wins_over_submission_field(tmp_path):
    open_store("memory://ids").put("submission:1:aaaaaaa", json.dumps({"_id": "spoofed", "docClear": 1}))
    target = tmp_path / "export.jsonl"
    assert cli_app(["--store", "memory://ids", "export", "--output", str(target)]) == 0
    assert json.loads(target.read_text(encoding="utf-8")) == {"_id": "submission:1:aaaaaaa", "docClear": 1}
