"""Command line interface for spanredact."""

from __future__ import annotations

import argparse
from pathlib import Path

from .redact_cmd import run_check, run_redact


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spanredact")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Validate a redaction config JSON file")
    check_parser.add_argument("config_file", type=Path, help="Path to redaction config JSON file")
    check_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit machine-readable policy summary JSON instead of text output",
    )

    redact_parser = subparsers.add_parser("redact", help="Redact a span JSON file")
    redact_parser.add_argument("config_file", type=Path, help="Path to redaction config JSON file")
    redact_parser.add_argument("spans_file", type=Path, help="Path to spans JSON file")
    redact_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be redacted without changing the spans",
    )
    redact_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the redacted spans as JSON instead of the report",
    )
    redact_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional output file path for the redacted spans",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "check":
        return run_check(args.config_file, as_json=args.json)
    if args.command == "redact":
        return run_redact(
            args.config_file,
            args.spans_file,
            dry_run=args.dry_run,
            as_json=args.json,
            output_path=args.output,
        )

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
