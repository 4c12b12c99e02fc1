"""Public exception types for spanredact."""

from __future__ import annotations

ERR_REGEX_COMPILATION = "error_regex_compilation"
ERR_INVALID_CONFIG = "error_invalid_config"


class SpanredactError(Exception):
    """Base class for all spanredact exceptions."""


class ConfigError(SpanredactError):
    """Raised when a redaction configuration cannot be compiled into a policy."""

    def __init__(self, message: str, code: str = ERR_INVALID_CONFIG) -> None:
        super().__init__(message)
        self.code = code


class ProcessingError(SpanredactError):
    """Raised when a batch is structurally invalid or the processor is not running."""


class SpanredactLoadError(SpanredactError):
    """Raised when a config or span file cannot be loaded or parsed."""
