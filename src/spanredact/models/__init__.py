"""Data models for span redaction."""

from .batch_result import BatchResult, Dimensions
from .counters import (
    BOOKKEEPING_KEYS,
    MASKED_VALUE_COUNT,
    MASKED_VALUES,
    REDACTED_KEY_COUNT,
    REDACTED_KEYS,
    TRUNCATED_VALUE_COUNT,
    TRUNCATED_VALUES,
    RedactionCounters,
)
from .metric_sample import MetricSample
from .span import Span

__all__ = [
    "BOOKKEEPING_KEYS",
    "MASKED_VALUES",
    "MASKED_VALUE_COUNT",
    "REDACTED_KEYS",
    "REDACTED_KEY_COUNT",
    "TRUNCATED_VALUES",
    "TRUNCATED_VALUE_COUNT",
    "BatchResult",
    "Dimensions",
    "MetricSample",
    "RedactionCounters",
    "Span",
]
