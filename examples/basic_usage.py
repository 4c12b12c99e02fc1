"""Basic usage example using the convenience API."""

from __future__ import annotations

from pathlib import Path

from spanredact import Span, create_processor
from spanredact.core import process_batch
from spanredact.renderers import render_report
from spanredact.serializers import save_spans_json


def main() -> None:
    output_dir = Path("artifacts")
    output_dir.mkdir(exist_ok=True)
    processor = create_processor(
        allowed_keys=["http.method", "http.route", "user.ssn", "db.statement"],
        blocked_values=[r"\d{3}-\d{2}-\d{4}"],
        max_value_length=32,
        limit_exceptions=["db.statement"],
        metric_tags=["http.route"],
        summary="debug",
    )

    spans = [
        Span(
            name="POST /signup",
            attributes={
                "http.method": "POST",
                "http.route": "/signup",
                "user.ssn": "123-45-6789",
                "user.email": "someone@example.com",
                "db.statement": "INSERT INTO users (email, ssn) VALUES ($1, $2) RETURNING id",
            },
        ),
        Span(name="GET /health", attributes={"http.method": "GET", "http.route": "/health"}),
    ]

    result = process_batch(processor.policy, spans)
    print(render_report(result, processor.policy))
    path = save_spans_json(result.spans, output_dir / "redacted_spans.json")
    print(f"Redacted spans saved to: {path}")
    processor.shutdown()


if __name__ == "__main__":
    main()
