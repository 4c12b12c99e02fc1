"""Exporter adapters for host tracing pipelines."""

from .otel import RedactingSpanExporter

__all__ = ["RedactingSpanExporter"]
