"""Redaction counters and the bookkeeping attribute keys written onto spans."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from ..core.redaction_config import SummaryLevel

REDACTED_KEYS = "redacted_keys"
REDACTED_KEY_COUNT = "redacted_key_count"
MASKED_VALUES = "masked_values"
MASKED_VALUE_COUNT = "masked_value_count"
TRUNCATED_VALUES = "truncated_values"
TRUNCATED_VALUE_COUNT = "truncated_value_count"

BOOKKEEPING_KEYS: frozenset[str] = frozenset(
    {
        REDACTED_KEYS,
        REDACTED_KEY_COUNT,
        MASKED_VALUES,
        MASKED_VALUE_COUNT,
        TRUNCATED_VALUES,
        TRUNCATED_VALUE_COUNT,
    }
)


class RedactionCounters(BaseModel):
    """What the engine did to one span, or to a whole batch once merged.

    Key lists are only filled at the ``debug`` summary level.
    """

    redacted_keys: list[str] = Field(default_factory=list)
    redacted_key_count: int = 0
    masked_values: list[str] = Field(default_factory=list)
    masked_value_count: int = 0
    truncated_values: list[str] = Field(default_factory=list)
    truncated_value_count: int = 0

    @property
    def total(self) -> int:
        return self.redacted_key_count + self.masked_value_count + self.truncated_value_count

    @property
    def has_changes(self) -> bool:
        return self.total > 0

    def merge(self, other: RedactionCounters, *, with_keys: bool = True) -> RedactionCounters:
        """Add ``other`` into this record in place and return it.

        With ``with_keys=False`` only the counts are summed.
        """
        self.redacted_key_count += other.redacted_key_count
        self.masked_value_count += other.masked_value_count
        self.truncated_value_count += other.truncated_value_count
        if with_keys:
            self.redacted_keys.extend(other.redacted_keys)
            self.masked_values.extend(other.masked_values)
            self.truncated_values.extend(other.truncated_values)
        return self

    def bookkeeping_attributes(self, summary: SummaryLevel) -> dict[str, object]:
        """Attributes describing this record, as written onto a processed span.

        Nothing at ``silent``. Non-zero counts at ``info``. Non-zero counts and
        the non-empty key lists at ``debug``.
        """
        if summary == "silent":
            return {}
        attributes: dict[str, object] = {}
        debug = summary == "debug"
        for count_key, count, list_key, keys in (
            (REDACTED_KEY_COUNT, self.redacted_key_count, REDACTED_KEYS, self.redacted_keys),
            (MASKED_VALUE_COUNT, self.masked_value_count, MASKED_VALUES, self.masked_values),
            (
                TRUNCATED_VALUE_COUNT,
                self.truncated_value_count,
                TRUNCATED_VALUES,
                self.truncated_values,
            ),
        ):
            if count > 0:
                attributes[count_key] = count
            if debug and keys:
                attributes[list_key] = list(keys)
        return attributes
