"""Time and duration utilities.

Durations are always written as strings such as ``"10m"`` or ``"7d"``.
Bare numbers are refused: a signing library that reads ``600`` as seconds
while the caller meant minutes silently produces tokens with the wrong
lifetime.
"""

import re
from datetime import datetime, timedelta, timezone

from authkit_core.exceptions import ConfigurationError

DURATION_PATTERN = re.compile(
    r"^\s*(?P<amount>\d+(?:\.\d+)?)\s*(?P<unit>ms|s|m|h|d|w|y)\s*$",
)

_UNIT_DELTAS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
    "w": timedelta(weeks=1),
    "y": timedelta(days=365.25),
}


def utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


def ensure_tz_aware(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC if naive)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_duration(value: str) -> timedelta:
    """Parse a duration string like ``"15m"`` into a timedelta.

    Parameters
    ----------
    value
        A number followed by one of ``ms``, ``s``, ``m``, ``h``, ``d``,
        ``w`` or ``y``.

    Returns
    -------
    The parsed duration

    Raises
    ------
    ConfigurationError
        If ``value`` is numeric, not a valid duration string, or too
        large to compute an expiry from
    """
    if not isinstance(value, str):
        msg = (
            f"Duration must be a string like '10m' or '1h', got "
            f"{type(value).__name__} {value!r}. A bare number would be read "
            "as seconds, which may not be what you intended."
        )
        raise ConfigurationError(msg)

    match = DURATION_PATTERN.match(value)
    if match is None:
        msg = f"Invalid duration string: {value!r}"
        raise ConfigurationError(msg)

    amount = float(match.group("amount"))
    try:
        delta = amount * _UNIT_DELTAS[match.group("unit")]
        # An expiry computed from it must be representable
        utc_now() + delta
    except (OverflowError, ValueError) as e:
        msg = f"Invalid duration string: {value!r} is out of range"
        raise ConfigurationError(msg) from e
    return delta


def generate_expired_date(value: str, now: datetime | None = None) -> datetime:
    """Return the absolute expiry ``now + value``."""
    return (now or utc_now()) + parse_duration(value)
