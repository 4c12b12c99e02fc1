"""Projection of redaction counters onto dimensioned count metrics."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from opentelemetry import metrics
from opentelemetry.metrics import Meter

from ..models import BatchResult, Dimensions, MetricSample
from .engine import MASK, canonical_string
from .policy import Policy

logger = logging.getLogger(__name__)

REDACTED_KEYS_METRIC = "redaction.redacted_keys"
MASKED_VALUES_METRIC = "redaction.masked_values"
TRUNCATED_VALUES_METRIC = "redaction.truncated_values"

_METRIC_DESCRIPTIONS = {
    REDACTED_KEYS_METRIC: "Span attributes removed because their key is not allowed",
    MASKED_VALUES_METRIC: "Span attribute values masked because they matched a blocked pattern",
    TRUNCATED_VALUES_METRIC: "Span attribute values truncated to the maximum value length",
}


def metric_dimensions(policy: Policy, attributes: Mapping[str, object]) -> Dimensions:
    """Dimensions for one span, drawn only from the configured metric tag keys.

    Tag keys the policy removes from the span are skipped, values matching a
    blocked pattern are masked and long values are capped, so a dimension
    never carries more than the span itself is allowed to.
    """
    if not policy.metric_tag_keys:
        return ()
    dimensions: list[tuple[str, str]] = []
    for key in sorted(policy.metric_tag_keys):
        if key not in attributes or not policy.is_allowed(key):
            continue
        text = canonical_string(attributes[key])
        if policy.block_matchers and policy.is_blocked(text):
            text = MASK
        if policy.max_value_length > 0:
            text = text[: policy.max_value_length]
        dimensions.append((key, text))
    return tuple(dimensions)


def project_metrics(result: BatchResult, policy: Policy) -> list[MetricSample]:
    """Turn a batch result into count samples, one per non-zero counter and dimension set.

    Samples are tagged with the dimension set only; a dry run yields the same
    samples as a live run.
    """
    samples: list[MetricSample] = []
    for dimensions, counters in result.dimensioned.items():
        tags = dict(dimensions)
        for name, value in (
            (REDACTED_KEYS_METRIC, counters.redacted_key_count),
            (MASKED_VALUES_METRIC, counters.masked_value_count),
            (TRUNCATED_VALUES_METRIC, counters.truncated_value_count),
        ):
            if value > 0:
                samples.append(MetricSample(name=name, value=value, tags=tags))
    return samples


class RedactionMetrics:
    """Records metric samples on OpenTelemetry counters.

    Without an explicit meter the global one is used, which stays a no-op
    until the host application installs a MeterProvider.
    """

    def __init__(self, meter: Meter | None = None) -> None:
        self._meter = meter or metrics.get_meter("spanredact")
        self._counters = {
            name: self._meter.create_counter(name, unit="1", description=description)
            for name, description in _METRIC_DESCRIPTIONS.items()
        }

    def record(self, samples: Iterable[MetricSample]) -> None:
        for sample in samples:
            counter = self._counters.get(sample.name)
            if counter is None:
                logger.warning("Unknown redaction metric '%s'", sample.name)
                continue
            try:
                counter.add(sample.value, attributes=sample.tags)
            except Exception as exc:
                logger.error("Failed to record metric '%s': %s", sample.name, exc)
