"""
Prometheus duration handling.

Prometheus durations are a sequence of ``<number><unit>`` terms with units
in descending order (``1h30m``, ``5m``, ``1d``). Grafana's provisioning API
reports durations in Go ``time.Duration`` form (``1h30m0s``), so both
directions live here.
"""

from __future__ import annotations

import re
from datetime import timedelta

from prom2grafana.core.errors import DurationError

DURATION_PATTERN = re.compile(
    r"^(?:(?P<y>\d+)y)?(?:(?P<w>\d+)w)?(?:(?P<d>\d+)d)?(?:(?P<h>\d+)h)?"
    r"(?:(?P<m>\d+)m)?(?:(?P<s>\d+)s)?(?:(?P<ms>\d+)ms)?$"
)

UNIT_MILLISECONDS = {
    "y": 365 * 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "h": 60 * 60 * 1000,
    "m": 60 * 1000,
    "s": 1000,
    "ms": 1,
}

# Largest duration Grafana accepts (Go time.Duration, int64 nanoseconds)
MAX_DURATION_MS = (2**63 - 1) // 1_000_000


def parse_duration(value: str) -> timedelta:
    """
    Parse a Prometheus duration string.

    Args:
        value: Duration such as "5m", "1h30m" or "0"

    Returns:
        The duration as a timedelta

    Raises:
        DurationError: If the value is not a valid Prometheus duration or is
            longer than Grafana can store
    """
    if value == "0":
        return timedelta(0)

    match = DURATION_PATTERN.match(value)
    if not value or match is None:
        raise DurationError(f"invalid duration '{value}'", details={"duration": value})

    total_ms = 0
    for unit, amount in match.groupdict().items():
        if amount is not None:
            total_ms += int(amount) * UNIT_MILLISECONDS[unit]

    if total_ms > MAX_DURATION_MS:
        raise DurationError(
            f"invalid duration '{value}': duration out of range", details={"duration": value}
        )

    return timedelta(milliseconds=total_ms)


def format_duration(duration: timedelta) -> str:
    """
    Format a duration the way Go's time.Duration prints it.

    Examples:
        timedelta(minutes=5) -> "5m0s"
        timedelta(hours=1, minutes=30) -> "1h30m0s"
        timedelta(milliseconds=500) -> "500ms"
        timedelta(0) -> "0s"
    """
    total_ms = duration // timedelta(milliseconds=1)
    if total_ms == 0:
        return "0s"

    sign = "-" if total_ms < 0 else ""
    total_ms = abs(total_ms)

    if total_ms < 1000:
        return f"{sign}{total_ms}ms"

    seconds, millis = divmod(total_ms, 1000)
    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    secs = str(seconds)
    if millis:
        secs += f".{millis:03d}".rstrip("0")

    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"
