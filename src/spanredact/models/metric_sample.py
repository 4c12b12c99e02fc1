"""Metric sample model handed to the surrounding telemetry system."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MetricSample(BaseModel):
    """One count metric with its bounded set of dimensions."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: int
    tags: dict[str, str] = Field(default_factory=dict)
