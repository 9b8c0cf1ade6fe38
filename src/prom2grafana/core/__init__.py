"""Core modules for prom2grafana - centralized definitions and utilities."""

from prom2grafana.core.errors import (
    ConversionError,
    DurationError,
    EmptyInputError,
    EnvelopeError,
    ExitCode,
    InputError,
    ParseError,
    Prom2GrafanaError,
    UnsupportedRuleError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "Prom2GrafanaError",
    "InputError",
    "ConversionError",
    "ParseError",
    "UnsupportedRuleError",
    "DurationError",
    "EmptyInputError",
    "EnvelopeError",
    "main_with_error_handling",
    "format_error_message",
]
