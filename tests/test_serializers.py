from __future__ import annotations

import json
from pathlib import Path

import pytest

from spanredact.core import SummaryLevel
from spanredact.exceptions import SpanredactLoadError
from spanredact.models import Span
from spanredact.serializers import (
    config_from_json,
    load_config_json,
    load_spans_json,
    save_spans_json,
    spans_from_json,
    spans_to_json,
)


def test_config_from_json_reads_all_fields() -> None:
    config = config_from_json(
        json.dumps(
            {
                "allowed_keys": ["http.method"],
                "blocked_values": [r"\d{16}"],
                "dry_run": True,
                "limits": {"max_value_length": 64, "limit_exceptions": ["db.statement"]},
                "metric_tags": ["service.name"],
                "summary": "",
            }
        )
    )
    assert config.allowed_keys == ["http.method"]
    assert config.blocked_values == [r"\d{16}"]
    assert config.dry_run is True
    assert config.limits.max_value_length == 64
    assert config.limits.limit_exceptions == ["db.statement"]
    assert config.metric_tags == ["service.name"]
    assert config.summary == SummaryLevel.INFO


def test_config_from_json_rejects_bad_summary() -> None:
    with pytest.raises(SpanredactLoadError, match="Failed to parse redaction config"):
        config_from_json('{"summary": "verbose"}')


def test_config_from_json_rejects_malformed_json() -> None:
    with pytest.raises(SpanredactLoadError):
        config_from_json("{not json")


def test_load_config_json_file(tmp_path: Path) -> None:
    path = tmp_path / "redaction.json"
    path.write_text('{"allowed_keys": ["a"]}', encoding="utf-8")
    assert load_config_json(path).allowed_keys == ["a"]


def test_spans_roundtrip_through_file(tmp_path: Path) -> None:
    spans = [
        Span(name="request", attributes={"http.method": "GET", "retries": 2, "ok": True}),
        Span(name="query", attributes={"tags": ["a", "b"]}),
    ]
    path = save_spans_json(spans, tmp_path / "out" / "spans.json")

    loaded = load_spans_json(path)

    assert [span.name for span in loaded] == ["request", "query"]
    assert loaded[0].attributes == {"http.method": "GET", "retries": 2, "ok": True}
    assert loaded[1].span_id == spans[1].span_id


def test_spans_from_json_accepts_wrapped_object() -> None:
    spans = spans_from_json('{"spans": [{"name": "a", "attributes": {"k": "v"}, "kind": 1}]}')
    assert spans[0].name == "a"
    assert spans[0].attributes == {"k": "v"}


@pytest.mark.parametrize(
    "payload",
    ["{oops", '"just a string"', '{"spans": 3}', '[{"attributes": 5}]'],
)
def test_spans_from_json_rejects_bad_input(payload: str) -> None:
    with pytest.raises(SpanredactLoadError, match="Failed to parse spans JSON"):
        spans_from_json(payload)


def test_spans_to_json_is_a_list() -> None:
    payload = json.loads(spans_to_json([Span(name="a")]))
    assert isinstance(payload, list)
    assert payload[0]["name"] == "a"
