"""Date and duration helpers shared by the decay functions and the data point generator."""

import logging
import math
import re
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Elasticsearch time units, lowercase only
DURATION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h|d|w)")
DURATION_UNIT_MILLISECONDS = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
}

# Lenient float prefix: "10x" -> 10, "  -2.5e3abc" -> -2500
LEADING_NUMBER_PATTERN = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class DateParseError(ValueError):
    """Raised when a string cannot be read as an ISO-8601 date."""


def parse_leading_number(text: str) -> Optional[float]:
    """Extracts the number at the start of a string.

    Args:
        text (str): The string to read.

    Returns:
        Optional[float]: The leading number, or None if the string does not start with one
        or the number is not finite.
    """
    match = LEADING_NUMBER_PATTERN.match(text)
    if not match:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def parse_duration(duration: Union[str, float, int, None]) -> float:
    """Converts an Elasticsearch duration string (e.g. "30d", "2h", "15m") to milliseconds.

    Numbers are assumed to already be milliseconds and are returned unchanged. Strings that
    do not match the duration format fall back to their leading number, or 0.

    Args:
        duration: A duration string or a number of milliseconds.

    Returns:
        float: The duration in milliseconds. Always finite.
    """
    if duration is None:
        return 0
    if isinstance(duration, (int, float)) and not isinstance(duration, bool):
        return duration

    text = str(duration)
    match = DURATION_PATTERN.fullmatch(text)
    if not match:
        value = parse_leading_number(text)
        if value is None:
            logger.debug("Could not parse duration %r, using 0", text)
            return 0
        return value

    value = float(match.group(1))
    return value * DURATION_UNIT_MILLISECONDS[match.group(2)]


def date_to_timestamp(date_string: str) -> int:
    """Converts an ISO-8601 date string to a millisecond epoch timestamp.

    Strings without a UTC offset, including bare dates, are read as UTC.

    Args:
        date_string (str): ISO-8601 date or datetime, e.g. "2024-06-15T08:30:00.000Z".

    Returns:
        int: Milliseconds since the Unix epoch.

    Raises:
        DateParseError: If the string is not a valid ISO-8601 date.
    """
    try:
        parsed = datetime.fromisoformat(date_string.strip())
    except (AttributeError, ValueError) as e:
        raise DateParseError(f"Invalid ISO-8601 date: {date_string!r}") from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    delta = parsed - EPOCH
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000


def timestamp_to_date(timestamp: float) -> str:
    """Converts a millisecond epoch timestamp to an ISO-8601 UTC string.

    Args:
        timestamp (float): Milliseconds since the Unix epoch.

    Returns:
        str: The date formatted as YYYY-MM-DDTHH:mm:ss.sssZ.
    """
    moment = EPOCH + timedelta(milliseconds=timestamp)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
