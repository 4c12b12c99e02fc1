from __future__ import annotations

import pytest
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from spanredact.core import RedactionMetrics


@pytest.fixture
def metric_reader() -> InMemoryMetricReader:
    return InMemoryMetricReader()


@pytest.fixture
def redaction_metrics(metric_reader: InMemoryMetricReader) -> RedactionMetrics:
    """RedactionMetrics bound to a private MeterProvider read by ``metric_reader``."""
    provider = MeterProvider(metric_readers=[metric_reader])
    return RedactionMetrics(provider.get_meter("spanredact-test"))
