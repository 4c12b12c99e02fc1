"""Redact spans produced by the OpenTelemetry SDK before they are exported."""

from __future__ import annotations

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor

from spanredact.core import RedactionConfig, RedactionProcessor
from spanredact.exporters import RedactingSpanExporter


def main() -> None:
    config = RedactionConfig(
        allowed_keys=["http.method", "http.target"],
        blocked_values=[r"token=[^&]+"],
        summary="debug",
    )
    exporter = RedactingSpanExporter(ConsoleSpanExporter(), RedactionProcessor(config))
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    tracer = provider.get_tracer("example")

    with tracer.start_as_current_span("GET /login") as span:
        span.set_attribute("http.method", "GET")
        span.set_attribute("http.target", "/login?token=abc123")
        span.set_attribute("enduser.id", "alice")

    provider.shutdown()


if __name__ == "__main__":
    main()
