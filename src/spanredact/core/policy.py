"""Policy compilation: raw configuration to an immutable, validated policy."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import ERR_INVALID_CONFIG, ERR_REGEX_COMPILATION, ConfigError
from ..models import BOOKKEEPING_KEYS
from .redaction_config import RedactionConfig, SummaryLevel

logger = logging.getLogger(__name__)


class Policy(BaseModel):
    """Compiled redaction policy.

    Frozen after construction; every collection is immutable, so one policy
    can be shared by any number of concurrently processed batches.
    """

    model_config = ConfigDict(frozen=True)

    allowed_keys: frozenset[str]
    block_matchers: tuple[re.Pattern[str], ...] = ()
    max_value_length: int = 0
    truncation_exceptions: frozenset[str] = frozenset()
    dry_run: bool = False
    summary_level: SummaryLevel = SummaryLevel.INFO
    metric_tag_keys: frozenset[str] = frozenset()

    def is_allowed(self, key: str) -> bool:
        return key in self.allowed_keys

    def is_blocked(self, text: str) -> bool:
        return any(matcher.search(text) is not None for matcher in self.block_matchers)

    def is_truncation_exempt(self, key: str) -> bool:
        return key in self.truncation_exceptions

    @property
    def mutates_data(self) -> bool:
        """False only for a dry-run policy that also never writes a summary."""
        return not (self.dry_run and self.summary_level == SummaryLevel.SILENT)


def compile_policy(config: RedactionConfig | Mapping[str, object]) -> Policy:
    """Compile ``config`` into a Policy.

    Raises ``ConfigError`` if the configuration is invalid or any blocked
    value pattern fails to compile. No partial policy is ever returned.
    """
    if not isinstance(config, RedactionConfig):
        try:
            config = RedactionConfig.model_validate(config)
        except ValidationError as exc:
            logger.error("Invalid redaction configuration: %s", exc)
            raise ConfigError(
                f"Invalid redaction configuration: {exc}", ERR_INVALID_CONFIG
            ) from exc

    if config.dry_run:
        logger.info("Redaction processor is configured for dry run mode.")

    return Policy(
        allowed_keys=frozenset(config.allowed_keys) | BOOKKEEPING_KEYS,
        block_matchers=_compile_block_matchers(config.blocked_values),
        max_value_length=config.limits.max_value_length,
        truncation_exceptions=frozenset(config.limits.limit_exceptions),
        dry_run=config.dry_run,
        summary_level=config.summary,
        metric_tag_keys=frozenset(config.metric_tags),
    )


def _compile_block_matchers(patterns: list[str]) -> tuple[re.Pattern[str], ...]:
    compiled: dict[str, re.Pattern[str]] = {}
    for pattern in patterns:
        if pattern in compiled:
            continue
        try:
            compiled[pattern] = re.compile(pattern)
        except re.error as exc:
            logger.error("Error compiling regex in block list: %r: %s", pattern, exc)
            raise ConfigError(
                f"Invalid blocked value pattern {pattern!r}: {exc}", ERR_REGEX_COMPILATION
            ) from exc
    return tuple(compiled[pattern] for pattern in sorted(compiled))
