from __future__ import annotations

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from spanredact.core import RedactionConfig, RedactionProcessor
from spanredact.exporters import RedactingSpanExporter


def _provider(
    config: RedactionConfig,
) -> tuple[TracerProvider, InMemorySpanExporter, RedactingSpanExporter]:
    inner = InMemorySpanExporter()
    exporter = RedactingSpanExporter(inner, RedactionProcessor(config))
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    return provider, inner, exporter


def test_exporter_redacts_before_delegating() -> None:
    provider, inner, exporter = _provider(
        RedactionConfig(
            allowed_keys=["http.method", "http.target"],
            blocked_values=[r"token=\w+"],
            summary="debug",
        )
    )
    tracer = provider.get_tracer("test")

    with tracer.start_as_current_span("request") as span:
        span.set_attribute("http.method", "GET")
        span.set_attribute("http.target", "/login?token=abc123")
        span.set_attribute("user.email", "a@b.com")

    finished = inner.get_finished_spans()
    assert len(finished) == 1
    assert finished[0].name == "request"
    assert dict(finished[0].attributes) == {
        "http.method": "GET",
        "http.target": "****",
        "redacted_key_count": 1,
        "redacted_keys": ("user.email",),
        "masked_value_count": 1,
        "masked_values": ("http.target",),
    }
    assert exporter.processor.is_running
    assert exporter.processor.totals().redacted_key_count == 1


def test_exporter_dry_run_keeps_attributes() -> None:
    provider, inner, exporter = _provider(RedactionConfig(dry_run=True))
    tracer = provider.get_tracer("test")

    with tracer.start_as_current_span("request") as span:
        span.set_attribute("user.email", "a@b.com")
        span.set_attribute("retries", 3)

    finished = inner.get_finished_spans()
    assert dict(finished[0].attributes) == {"user.email": "a@b.com", "retries": 3}
    assert exporter.processor.totals().redacted_key_count == 2


def test_exporter_shutdown_stops_processor() -> None:
    provider, _, exporter = _provider(RedactionConfig())
    provider.get_tracer("test").start_span("noop").end()

    provider.shutdown()

    assert not exporter.processor.is_running
