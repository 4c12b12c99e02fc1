"""Serialization helpers."""

from .json import (
    config_from_json,
    load_config_json,
    load_spans_json,
    save_spans_json,
    spans_from_json,
    spans_to_json,
)

__all__ = [
    "config_from_json",
    "load_config_json",
    "load_spans_json",
    "save_spans_json",
    "spans_from_json",
    "spans_to_json",
]
