"""
Unified error handling for prom2grafana.

Every failure during a conversion is raised as a Prom2GrafanaError subclass.
Errors are never recovered internally: the first one aborts the conversion
and the CLI maps it to an exit code.

Exit Codes:
- 0: Success
- 10: Configuration error (input file cannot be opened, output cannot be written)
- 12: Validation error (malformed or unsupported rules, invalid resources)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    CONFIG_ERROR = 10
    VALIDATION_ERROR = 12
    UNKNOWN_ERROR = 127


class Prom2GrafanaError(Exception):
    """Base exception for prom2grafana errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def with_context(self, context: str, **details: Any) -> Prom2GrafanaError:
        """
        Return a copy of this error with a context prefix on its message.

        The copy keeps the concrete error class so callers can still match
        on it after it crossed a rule or group boundary.
        """
        merged = {**details, **self.details}
        return type(self)(f"{context}: {self.message}", details=merged)


class InputError(Prom2GrafanaError):
    """Raised when the input rules file cannot be opened."""

    exit_code = ExitCode.CONFIG_ERROR


class ConversionError(Prom2GrafanaError):
    """Base class for errors raised while converting rules."""

    exit_code = ExitCode.VALIDATION_ERROR


class ParseError(ConversionError):
    """Raised for malformed YAML or an unexpected document shape."""


class UnsupportedRuleError(ConversionError):
    """Raised when a rule uses a feature that cannot be converted."""


class DurationError(ConversionError):
    """Raised when a rule 'for' value is not a Prometheus duration."""


class EmptyInputError(ConversionError):
    """Raised when the rules file contains no groups."""


class EnvelopeError(ConversionError):
    """Raised when a resource envelope fails its structural checks."""


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - Prom2GrafanaError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except Prom2GrafanaError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: Prom2GrafanaError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
