"""Core redaction runtime."""

from .engine import MASK, canonical_string, redact_span
from .metrics import RedactionMetrics, metric_dimensions, project_metrics
from .policy import Policy, compile_policy
from .processor import ProcessorCapabilities, RedactionProcessor, process_batch
from .redaction_config import LimitsConfig, RedactionConfig, SummaryLevel

__all__ = [
    "MASK",
    "LimitsConfig",
    "Policy",
    "ProcessorCapabilities",
    "RedactionConfig",
    "RedactionMetrics",
    "RedactionProcessor",
    "SummaryLevel",
    "canonical_string",
    "compile_policy",
    "metric_dimensions",
    "process_batch",
    "project_metrics",
    "redact_span",
]
