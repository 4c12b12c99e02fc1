"""Span model: the unit of telemetry the redaction engine works on."""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Span(BaseModel):
    """A span and its attribute map.

    Attribute values may be of any type; the engine only looks at their
    canonical string form and leaves untouched values as they are.
    """

    model_config = ConfigDict(extra="ignore")

    trace_id: str = Field(default_factory=lambda: uuid4().hex)
    span_id: str = Field(default_factory=lambda: uuid4().hex)
    parent_id: str | None = None
    name: str = ""
    attributes: dict[str, object] = Field(default_factory=dict)
