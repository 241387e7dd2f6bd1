"""
timestamps.py — Resolve a caller-supplied instant to Unix seconds and a
TOTP counter.

Accepted forms:
- int with exactly 10 decimal digits: epoch seconds
- int with exactly 13 decimal digits: epoch milliseconds (// 1000)
- datetime: calendar value (naive datetimes are read as UTC)
- EpochSeconds / EpochMillis: explicit unit, no digit-length check

Any other int length is rejected even when numerically plausible.
"""

import re
import time
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Union

from .errors import InvalidTimestampError

SECONDS_DIGITS = 10
MILLIS_DIGITS = 13

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_SECOND = timedelta(seconds=1)
_INT_RE = re.compile(r"-?[0-9]+")


class EpochSeconds(NamedTuple):
    value: int


class EpochMillis(NamedTuple):
    value: int


Timestamp = Union[int, datetime, EpochSeconds, EpochMillis]


def current_timestamp() -> int:
    """Current time in whole epoch seconds."""
    return int(time.time())


def is_plain_int(value) -> bool:
    # bool is an int subclass but never a timestamp
    return isinstance(value, int) and not isinstance(value, bool)


def _datetime_to_seconds(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    # floor division keeps pre-epoch fractions flooring toward -inf
    return (value - EPOCH) // _ONE_SECOND


def to_unix_seconds(timestamp: Timestamp) -> int:
    """
    Resolve a timestamp to whole Unix seconds.

    Raises:
        InvalidTimestampError: unsupported type, or a plain int whose digit
        length is neither 10 nor 13.
    """
    if isinstance(timestamp, datetime):
        return _datetime_to_seconds(timestamp)
    if isinstance(timestamp, EpochSeconds):
        return int(timestamp.value)
    if isinstance(timestamp, EpochMillis):
        return int(timestamp.value) // 1000
    if is_plain_int(timestamp):
        length = len(str(timestamp))
        if length == MILLIS_DIGITS:
            return timestamp // 1000
        if length == SECONDS_DIGITS:
            return timestamp
    raise InvalidTimestampError()


def parse_timestamp(text: str) -> Union[int, datetime]:
    """
    Parse textual input (CLI argument, JSON string) into a timestamp.

    Digit strings become ints (still subject to the 10/13 digit rule);
    anything else must be an ISO-8601 date-time, 'Z' accepted for UTC.
    """
    text = text.strip()
    if _INT_RE.fullmatch(text):
        return int(text)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidTimestampError() from None


def time_counter(timestamp: Timestamp, period: int) -> int:
    """
    Number of whole periods elapsed since the epoch: floor(seconds / period).

    An instant before the epoch has no unsigned counter and raises
    InvalidTimestampError.
    """
    seconds = to_unix_seconds(timestamp)
    if seconds < 0:
        raise InvalidTimestampError()
    return seconds // period


def seconds_remaining(timestamp: Timestamp, period: int) -> int:
    """Seconds left before the counter for `timestamp` advances."""
    return period - (to_unix_seconds(timestamp) % period)
