"""Check and redact subcommand implementations."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from ..core import Policy, RedactionConfig, RedactionProcessor, compile_policy
from ..exceptions import ConfigError, SpanredactLoadError
from ..renderers import render_report
from ..serializers import load_config_json, load_spans_json, save_spans_json, spans_to_json


def run_check(config_file: Path, *, as_json: bool) -> int:
    config = _load_config(config_file)
    if config is None:
        return 1
    try:
        policy = compile_policy(config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if as_json:
        print(json.dumps(_build_summary(policy), ensure_ascii=True, sort_keys=True))
        return 0

    limit = policy.max_value_length or "unlimited"
    print(f"Config: {config_file}")
    print(f"Allowed keys: {len(policy.allowed_keys)}")
    print(f"Blocked patterns: {len(policy.block_matchers)}")
    for matcher in policy.block_matchers:
        print(f"  - {matcher.pattern}")
    print(f"Max value length: {limit}")
    print(f"Limit exceptions: {len(policy.truncation_exceptions)}")
    print(f"Metric tags: {', '.join(sorted(policy.metric_tag_keys)) or '<none>'}")
    print(f"Summary: {policy.summary_level.value}")
    print(f"Dry run: {'yes' if policy.dry_run else 'no'}")
    return 0


def run_redact(
    config_file: Path,
    spans_file: Path,
    *,
    dry_run: bool,
    as_json: bool,
    output_path: Path | None,
) -> int:
    config = _load_config(config_file)
    if config is None:
        return 1
    if dry_run:
        config = config.model_copy(update={"dry_run": True})
    try:
        spans = load_spans_json(spans_file)
    except FileNotFoundError:
        print(f"Error: file not found: {spans_file}", file=sys.stderr)
        return 1
    except SpanredactLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
        return 1

    try:
        processor = RedactionProcessor(config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    with processor:
        result = processor.process_with_result(spans)

    if output_path is not None:
        save_spans_json(result.spans, output_path)
    if as_json:
        if output_path is None:
            print(spans_to_json(result.spans))
        return 0

    print(render_report(result, processor.policy))
    return 0


def _load_config(config_file: Path) -> RedactionConfig | None:
    try:
        return load_config_json(config_file)
    except FileNotFoundError:
        print(f"Error: file not found: {config_file}", file=sys.stderr)
    except SpanredactLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
    except OSError as exc:
        print(f"Error reading file: {exc}", file=sys.stderr)
    return None


def _build_summary(policy: Policy) -> dict[str, object]:
    return {
        "allowed_key_count": len(policy.allowed_keys),
        "blocked_pattern_count": len(policy.block_matchers),
        "blocked_patterns": [matcher.pattern for matcher in policy.block_matchers],
        "max_value_length": policy.max_value_length,
        "limit_exception_count": len(policy.truncation_exceptions),
        "metric_tags": sorted(policy.metric_tag_keys),
        "summary": policy.summary_level.value,
        "dry_run": policy.dry_run,
        "mutates_data": policy.mutates_data,
    }
