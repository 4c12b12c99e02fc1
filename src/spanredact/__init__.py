"""spanredact — attribute redaction for distributed-trace spans.

Convenience API:
    spanredact.create_processor(...)  -> build and start a RedactionProcessor

DI API (compile your own policy):
    from spanredact.core import RedactionConfig, compile_policy, process_batch
    policy = compile_policy(RedactionConfig(allowed_keys=["http.method"]))
    result = process_batch(policy, spans)
"""

from __future__ import annotations

from opentelemetry.metrics import Meter

from .core import (
    LimitsConfig,
    Policy,
    RedactionConfig,
    RedactionMetrics,
    RedactionProcessor,
    SummaryLevel,
    compile_policy,
    process_batch,
    redact_span,
)
from .exceptions import ConfigError, ProcessingError, SpanredactError
from .models import BatchResult, RedactionCounters, Span

SummaryArg = SummaryLevel | str


def create_processor(
    *,
    allowed_keys: list[str] | None = None,
    blocked_values: list[str] | None = None,
    dry_run: bool = False,
    max_value_length: int = 0,
    limit_exceptions: list[str] | None = None,
    metric_tags: list[str] | None = None,
    summary: SummaryArg = SummaryLevel.INFO,
    meter: Meter | None = None,
) -> RedactionProcessor:
    """Build a started RedactionProcessor from keyword settings.

    Raises ``ConfigError`` when the settings do not compile.
    """
    try:
        config = RedactionConfig(
            allowed_keys=list(allowed_keys or []),
            blocked_values=list(blocked_values or []),
            dry_run=dry_run,
            limits=LimitsConfig(
                max_value_length=max_value_length,
                limit_exceptions=list(limit_exceptions or []),
            ),
            metric_tags=list(metric_tags or []),
            summary=summary,
        )
    except ValueError as exc:
        raise ConfigError(f"Invalid redaction configuration: {exc}") from exc
    processor = RedactionProcessor(config, metrics=RedactionMetrics(meter))
    processor.start()
    return processor


__all__ = [
    "BatchResult",
    "ConfigError",
    "LimitsConfig",
    "Policy",
    "ProcessingError",
    "RedactionConfig",
    "RedactionCounters",
    "RedactionMetrics",
    "RedactionProcessor",
    "Span",
    "SpanredactError",
    "SummaryLevel",
    "compile_policy",
    "create_processor",
    "process_batch",
    "redact_span",
]
