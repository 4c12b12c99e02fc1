"""Rich-based console rendering of a batch redaction report."""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.table import Table

from ..core import Policy, SummaryLevel
from ..models import BatchResult, RedactionCounters, Span

_MAX_KEYS_LEN = 60


def render_report(result: BatchResult, policy: Policy) -> str:
    """Render the outcome of one batch as plain text, one row per span."""
    title = "Redaction report (dry run)" if policy.dry_run else "Redaction report"
    table = Table(title=title)
    table.add_column("span")
    table.add_column("redacted", justify="right")
    table.add_column("masked", justify="right")
    table.add_column("truncated", justify="right")
    show_keys = policy.summary_level == SummaryLevel.DEBUG
    if show_keys:
        table.add_column("keys")

    for span, counters in zip(result.spans, result.span_counters, strict=True):
        row = [
            _span_label(span),
            str(counters.redacted_key_count),
            str(counters.masked_value_count),
            str(counters.truncated_value_count),
        ]
        if show_keys:
            row.append(_format_keys(counters))
        table.add_row(*row)

    totals = result.counters
    console = Console(record=True, width=120, markup=False, file=StringIO())
    console.print(table)
    console.print(
        f"Spans: {len(result.spans)}  Redacted keys: {totals.redacted_key_count}  "
        f"Masked values: {totals.masked_value_count}  "
        f"Truncated values: {totals.truncated_value_count}"
    )
    if result.failed_spans:
        console.print(f"Spans passed through after errors: {result.failed_spans}")
    return console.export_text()


def _span_label(span: Span) -> str:
    return span.name or span.span_id


def _format_keys(counters: RedactionCounters) -> str:
    parts = []
    for label, keys in (
        ("-", counters.redacted_keys),
        ("*", counters.masked_values),
        ("~", counters.truncated_values),
    ):
        parts.extend(f"{label}{key}" for key in keys)
    text = " ".join(parts)
    if len(text) <= _MAX_KEYS_LEN:
        return text
    return text[:_MAX_KEYS_LEN] + "... [truncated]"
