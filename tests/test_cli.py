from __future__ import annotations

import json
from pathlib import Path

import pytest

from spanredact.cli import main


def _write_config(tmp_path: Path, **overrides: object) -> Path:
    config = {
        "allowed_keys": ["http.method", "ssn"],
        "blocked_values": [r"\d{3}-\d{2}-\d{4}"],
        "metric_tags": ["service.name"],
        "summary": "debug",
    }
    config.update(overrides)
    path = tmp_path / "redaction.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def _write_spans(tmp_path: Path) -> Path:
    spans = [
        {
            "name": "signup",
            "attributes": {"http.method": "POST", "ssn": "123-45-6789", "user.email": "a@b.com"},
        },
        {"name": "health", "attributes": {"http.method": "GET"}},
    ]
    path = tmp_path / "spans.json"
    path.write_text(json.dumps(spans), encoding="utf-8")
    return path


def test_cli_check_prints_policy_summary(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    exit_code = main(["check", str(_write_config(tmp_path))])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Allowed keys: 8" in captured.out
    assert "Blocked patterns: 1" in captured.out
    assert "Max value length: unlimited" in captured.out
    assert "Summary: debug" in captured.out
    assert "Dry run: no" in captured.out


def test_cli_check_json_summary(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["check", str(_write_config(tmp_path, dry_run=True)), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["blocked_patterns"] == [r"\d{3}-\d{2}-\d{4}"]
    assert payload["dry_run"] is True
    assert payload["mutates_data"] is True
    assert payload["metric_tags"] == ["service.name"]


def test_cli_check_invalid_pattern(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["check", str(_write_config(tmp_path, blocked_values=["(oops"]))])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "(oops" in captured.err


def test_cli_redact_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(
        ["redact", str(_write_config(tmp_path)), str(_write_spans(tmp_path)), "--json"]
    )

    spans = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert spans[0]["attributes"] == {
        "http.method": "POST",
        "ssn": "****",
        "redacted_key_count": 1,
        "redacted_keys": ["user.email"],
        "masked_value_count": 1,
        "masked_values": ["ssn"],
    }
    assert spans[1]["attributes"] == {"http.method": "GET"}


def test_cli_redact_report_and_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_path = tmp_path / "redacted" / "spans.json"
    exit_code = main(
        [
            "redact",
            str(_write_config(tmp_path)),
            str(_write_spans(tmp_path)),
            "--output",
            str(output_path),
        ]
    )

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Redaction report" in captured.out
    assert "signup" in captured.out
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written[0]["attributes"]["ssn"] == "****"


def test_cli_redact_dry_run_leaves_spans(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    spans_file = _write_spans(tmp_path)
    exit_code = main(
        ["redact", str(_write_config(tmp_path)), str(spans_file), "--dry-run", "--json"]
    )

    spans = json.loads(capsys.readouterr().out)
    original = json.loads(spans_file.read_text(encoding="utf-8"))
    assert exit_code == 0
    assert [span["attributes"] for span in spans] == [span["attributes"] for span in original]
