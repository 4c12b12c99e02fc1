"""OpenTelemetry SDK exporter that redacts span attributes before export.

Wrap any ``SpanExporter`` and install the wrapper in a span processor::

    from opentelemetry.sdk.trace.export import BatchSpanProcessor
    from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

    processor = RedactionProcessor(RedactionConfig(allowed_keys=["http.method"]))
    exporter = RedactingSpanExporter(OTLPSpanExporter(), processor)
    provider.add_span_processor(BatchSpanProcessor(exporter))
"""

from __future__ import annotations

from collections.abc import Sequence

from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export import SpanExporter, SpanExportResult
from opentelemetry.util.types import AttributeValue

from ..core import RedactionProcessor, canonical_string
from ..models import Span

_PRIMITIVES = (str, bool, int, float)


class RedactingSpanExporter(SpanExporter):
    """Runs a RedactionProcessor over every exported batch, then delegates."""

    def __init__(self, exporter: SpanExporter, processor: RedactionProcessor) -> None:
        self._exporter = exporter
        self._processor = processor

    @property
    def processor(self) -> RedactionProcessor:
        return self._processor

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        if not self._processor.is_running:
            self._processor.start()
        models = [_to_model(span) for span in spans]
        redacted = self._processor.process(models)
        adjusted = [
            _rebuild(original, model.attributes)
            for original, model in zip(spans, redacted, strict=True)
        ]
        return self._exporter.export(adjusted)

    def shutdown(self) -> None:
        self._processor.shutdown()
        self._exporter.shutdown()

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        return self._exporter.force_flush(timeout_millis)


def _to_model(span: ReadableSpan) -> Span:
    context = span.context
    return Span(
        trace_id=format(context.trace_id, "032x") if context is not None else "",
        span_id=format(context.span_id, "016x") if context is not None else "",
        parent_id=format(span.parent.span_id, "016x") if span.parent is not None else None,
        name=span.name,
        attributes=dict(span.attributes or {}),
    )


def _rebuild(span: ReadableSpan, attributes: dict[str, object]) -> ReadableSpan:
    return ReadableSpan(
        name=span.name,
        context=span.context,
        parent=span.parent,
        resource=span.resource,
        attributes={key: _attribute_value(value) for key, value in attributes.items()},
        events=span.events,
        links=span.links,
        kind=span.kind,
        status=span.status,
        start_time=span.start_time,
        end_time=span.end_time,
        instrumentation_scope=span.instrumentation_scope,
    )


def _attribute_value(value: object) -> AttributeValue:
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, (list, tuple)) and all(isinstance(item, _PRIMITIVES) for item in value):
        return tuple(value)
    return canonical_string(value)
