"""Result of redacting one batch of spans."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .counters import RedactionCounters
from .span import Span

Dimensions = tuple[tuple[str, str], ...]


class BatchResult(BaseModel):
    """Processed spans plus the counters aggregated over the batch.

    ``span_counters`` lines up with ``spans``. ``dimensioned`` holds the batch
    counters split by metric dimensions.
    """

    spans: list[Span] = Field(default_factory=list)
    span_counters: list[RedactionCounters] = Field(default_factory=list)
    counters: RedactionCounters = Field(default_factory=RedactionCounters)
    dimensioned: dict[Dimensions, RedactionCounters] = Field(default_factory=dict)
    failed_spans: int = 0
