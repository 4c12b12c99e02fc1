"""Batch processing and the lifecycle adapter exposed to a host pipeline."""

from __future__ import annotations

import logging
import threading
import warnings
from collections.abc import Mapping, Sequence
from types import TracebackType

from pydantic import BaseModel, ConfigDict

from ..exceptions import ProcessingError
from ..models import BatchResult, RedactionCounters, Span
from .engine import redact_span
from .metrics import RedactionMetrics, metric_dimensions, project_metrics
from .policy import Policy, compile_policy
from .redaction_config import RedactionConfig, SummaryLevel

logger = logging.getLogger(__name__)


class ProcessorCapabilities(BaseModel):
    model_config = ConfigDict(frozen=True)

    mutates_data: bool


def process_batch(policy: Policy, batch: Sequence[Span]) -> BatchResult:
    """Redact every span in ``batch`` and aggregate the counters.

    Raises ``ProcessingError`` if ``batch`` is not a sequence of spans. A
    failure inside one span is reported as a warning and that span is passed
    through unchanged; the rest of the batch is still processed.
    """
    _validate_batch(batch)
    result = BatchResult()
    write_summary = not policy.dry_run and policy.summary_level != SummaryLevel.SILENT

    for span in batch:
        original = dict(span.attributes)
        try:
            dimensions = metric_dimensions(policy, span.attributes)
            span, counters = redact_span(policy, span)
            if write_summary:
                span.attributes.update(counters.bookkeeping_attributes(policy.summary_level))
        except Exception as exc:
            span.attributes.clear()
            span.attributes.update(original)
            warnings.warn(
                f"spanredact: failed to redact span {span.span_id}: {exc!r}. "
                "Span passed through unchanged.",
                stacklevel=2,
            )
            result.failed_spans += 1
            result.spans.append(span)
            result.span_counters.append(RedactionCounters())
            continue

        result.spans.append(span)
        result.span_counters.append(counters)
        result.counters.merge(counters)
        group = result.dimensioned.get(dimensions)
        if group is None:
            result.dimensioned[dimensions] = counters.model_copy(deep=True)
        else:
            group.merge(counters)

    return result


def _validate_batch(batch: object) -> None:
    if batch is None:
        raise ProcessingError("Cannot process a missing batch")
    if isinstance(batch, (str, bytes, Mapping)) or not isinstance(batch, Sequence):
        raise ProcessingError(f"Expected a sequence of spans, got {type(batch).__name__}")
    for index, span in enumerate(batch):
        if not isinstance(span, Span):
            raise ProcessingError(
                f"Batch item {index} is {type(span).__name__}, expected Span"
            )


class RedactionProcessor:
    """Traces processor that redacts span attributes.

    Lifecycle contract
    ------------------
    - Construction compiles the policy and raises ``ConfigError`` on an invalid
      configuration; no processor exists in that case.
    - ``start()`` and ``shutdown()`` are idempotent.
    - ``process()`` may be called repeatedly and from several threads once
      started. The policy is read-only; the running totals are merged under a
      lock.
    """

    def __init__(
        self,
        config: RedactionConfig | Mapping[str, object] | None = None,
        *,
        metrics: RedactionMetrics | None = None,
    ) -> None:
        try:
            self.policy = compile_policy(config if config is not None else RedactionConfig())
        except Exception:
            logger.error("Error creating a redaction processor", exc_info=True)
            raise
        self._metrics = metrics or RedactionMetrics()
        self._totals = RedactionCounters()
        self._lock = threading.Lock()
        self._running = False

    @property
    def capabilities(self) -> ProcessorCapabilities:
        return ProcessorCapabilities(mutates_data=self.policy.mutates_data)

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
        logger.info("Starting redaction processor")

    def shutdown(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
        logger.info("Shutting down redaction processor")

    def process(self, batch: Sequence[Span]) -> list[Span]:
        """Redact ``batch`` and return its spans in the original order."""
        return self.process_with_result(batch).spans

    def process_with_result(self, batch: Sequence[Span]) -> BatchResult:
        if not self._running:
            raise ProcessingError("Redaction processor has not been started")
        result = process_batch(self.policy, batch)
        self._metrics.record(project_metrics(result, self.policy))
        with self._lock:
            self._totals.merge(result.counters, with_keys=False)
        logger.debug(
            "Redacted batch of %d spans: %d keys, %d masked, %d truncated",
            len(result.spans),
            result.counters.redacted_key_count,
            result.counters.masked_value_count,
            result.counters.truncated_value_count,
        )
        return result

    def totals(self) -> RedactionCounters:
        """Counts accumulated over every batch processed so far, without key lists."""
        with self._lock:
            return self._totals.model_copy(deep=True)

    def __enter__(self) -> RedactionProcessor:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.shutdown()
        return False
