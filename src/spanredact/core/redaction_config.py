"""Configuration for a redaction processor."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SummaryLevel(StrEnum):
    DEBUG = "debug"
    INFO = "info"
    SILENT = "silent"


class LimitsConfig(BaseModel):
    """Value length limiting. ``max_value_length == 0`` disables truncation."""

    model_config = ConfigDict(extra="ignore")

    max_value_length: int = Field(default=0, ge=0)
    limit_exceptions: list[str] = []


class RedactionConfig(BaseModel):
    """Validated raw configuration. Compiled into a Policy before use."""

    model_config = ConfigDict(extra="ignore")

    allowed_keys: list[str] = []
    blocked_values: list[str] = []
    dry_run: bool = False
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    metric_tags: list[str] = []
    summary: SummaryLevel = SummaryLevel.INFO

    @field_validator("summary", mode="before")
    @classmethod
    def _default_summary(cls, value: object) -> object:
        if value is None or value == "":
            return SummaryLevel.INFO
        return value
