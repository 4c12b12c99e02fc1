"""Per-span redaction: key filtering, value masking and truncation."""

from __future__ import annotations

import base64
import json

from ..models import BOOKKEEPING_KEYS, RedactionCounters, Span
from .policy import Policy
from .redaction_config import SummaryLevel

MASK = "****"


def redact_span(policy: Policy, span: Span) -> tuple[Span, RedactionCounters]:
    """Apply ``policy`` to every attribute of ``span``.

    Each attribute goes through filter, then mask, then truncate: a removed
    attribute is never inspected further, and truncation measures the masked
    value. Bookkeeping attributes written by an earlier pass are kept as they
    are. The span is mutated in place unless the policy is a dry run, in
    which case counters are computed but the attribute map is left untouched.
    """
    counters = RedactionCounters()
    record_keys = policy.summary_level == SummaryLevel.DEBUG
    dropped: list[str] = []
    rewritten: dict[str, str] = {}

    for key, value in span.attributes.items():
        if not policy.is_allowed(key):
            dropped.append(key)
            counters.redacted_key_count += 1
            if record_keys:
                counters.redacted_keys.append(key)
            continue
        if key in BOOKKEEPING_KEYS:
            continue

        text = canonical_string(value)
        changed = False

        if policy.block_matchers and policy.is_blocked(text):
            text = MASK
            changed = True
            counters.masked_value_count += 1
            if record_keys:
                counters.masked_values.append(key)

        limit = policy.max_value_length
        if limit > 0 and not policy.is_truncation_exempt(key) and len(text) > limit:
            text = text[:limit]
            changed = True
            counters.truncated_value_count += 1
            if record_keys:
                counters.truncated_values.append(key)

        if changed:
            rewritten[key] = text

    if not policy.dry_run:
        for key in dropped:
            del span.attributes[key]
        span.attributes.update(rewritten)
    return span, counters


def canonical_string(value: object) -> str:
    """String form of an attribute value used for matching and length checks.

    Never raises: values without a sensible representation fall back to
    ``repr``.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, (list, tuple, dict)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
        except (TypeError, ValueError):
            return repr(value)
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)
