"""JSON serialization helpers for redaction configs and span batches."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from ..core import RedactionConfig
from ..exceptions import SpanredactLoadError
from ..models import Span

_SPAN_LIST = TypeAdapter(list[Span])


def config_from_json(payload: str) -> RedactionConfig:
    """Parse a JSON string into a RedactionConfig.

    Raises ``SpanredactLoadError`` on invalid or unparseable input. Blocked
    value patterns are not compiled here; that happens in ``compile_policy``.
    """
    try:
        return RedactionConfig.model_validate_json(payload)
    except ValidationError as exc:
        raise SpanredactLoadError(f"Failed to parse redaction config JSON: {exc}") from exc


def load_config_json(path: str | Path) -> RedactionConfig:
    payload = Path(path).read_text(encoding="utf-8")
    return config_from_json(payload)


def spans_from_json(payload: str) -> list[Span]:
    """Parse a JSON list of spans, or an object holding one under ``spans``."""
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise SpanredactLoadError(f"Failed to parse spans JSON: {exc}") from exc
    if isinstance(raw, dict):
        raw = raw.get("spans")
    if not isinstance(raw, list):
        raise SpanredactLoadError("Failed to parse spans JSON: expected a list of spans")
    try:
        return _SPAN_LIST.validate_python(raw)
    except ValidationError as exc:
        raise SpanredactLoadError(f"Failed to parse spans JSON: {exc}") from exc


def spans_to_json(spans: list[Span], *, indent: int | None = 2) -> str:
    return _SPAN_LIST.dump_json(spans, indent=indent).decode("utf-8")


def save_spans_json(spans: list[Span], path: str | Path, *, indent: int | None = 2) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(spans_to_json(spans, indent=indent), encoding="utf-8")
    return output_path


def load_spans_json(path: str | Path) -> list[Span]:
    """Load spans from a JSON file.

    Raises ``SpanredactLoadError`` on invalid content,
    or ``FileNotFoundError`` / ``OSError`` if the file is inaccessible.
    """
    payload = Path(path).read_text(encoding="utf-8")
    return spans_from_json(payload)
