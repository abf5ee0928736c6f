"""
Timeout normalization for signed URLs.

Accepted inputs:

- ``int``: a unix timestamp, used as is
- ``datetime`` / ``date``: converted to epoch seconds (naive values are
  local time, a bare date means local midnight)
- ``str``: ``@<timestamp>``, ``now``/``today``/``tomorrow``/``yesterday``,
  relative offsets such as ``+1 hour``, ``in 2 days``, ``3 weeks ago`` or
  ``tomorrow +2 hours``, and anything ``dateutil`` can parse as an absolute
  date
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ..core.clock import Clock
from ..core.errors import (
    TimeoutInPastError,
    TimeoutNotParsableError,
    TimeoutUnknownFormatError,
)

TimeoutInput = int | str | datetime | date

_TERM = re.compile(
    r"\s*([+-]?)\s*(\d+)\s*"
    r"(seconds?|secs?|minutes?|mins?|hours?|days?|weeks?|fortnights?|months?|years?)\b",
    re.IGNORECASE,
)

_UNIT_KWARGS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}

_KEYWORD_DAYS = {"today": 0, "midnight": 0, "tomorrow": 1, "yesterday": -1}


def _parse_terms(text: str) -> relativedelta | None:
    """Parse a run of ``[+-]N unit`` terms; ``None`` if ``text`` is anything else."""
    delta = relativedelta()
    pos = 0
    while pos < len(text):
        match = _TERM.match(text, pos)
        if match is None:
            return None
        sign, count, unit = match.groups()
        amount = -int(count) if sign == "-" else int(count)
        unit = unit.lower().rstrip("s")
        if unit == "fortnight":
            delta += relativedelta(weeks=2 * amount)
        else:
            delta += relativedelta(**{_UNIT_KWARGS[unit]: amount})
        pos = match.end()
        while pos < len(text) and text[pos].isspace():
            pos += 1
    return delta


def _parse_relative(text: str, now: int) -> int | None:
    base = datetime.fromtimestamp(now)
    words = text.split(None, 1)
    head = words[0] if words else ""
    rest = words[1] if len(words) > 1 else ""

    if head == "now":
        text = rest
    elif head in _KEYWORD_DAYS:
        day = base.date() + timedelta(days=_KEYWORD_DAYS[head])
        base = datetime.combine(day, time())
        text = rest
    elif head == "in":
        text = rest

    negate = False
    if text.endswith(" ago") or text == "ago":
        negate = True
        text = text[: -len("ago")].strip()

    if not text:
        return None if negate else int(base.timestamp())
    delta = _parse_terms(text)
    if delta is None:
        return None
    if negate:
        delta = -delta
    return int((base + delta).timestamp())


def parse_timeout_string(value: str, now: int) -> int:
    """Resolve a natural-language date expression to a unix timestamp.

    Raises:
        TimeoutNotParsableError: ``value`` is neither relative nor absolute,
            or it resolves to a date outside the supported range.
    """
    text = value.strip().lower()
    if not text:
        raise TimeoutNotParsableError(value)
    if text.startswith("@"):
        try:
            return int(text[1:])
        except ValueError as e:
            raise TimeoutNotParsableError(value, cause=e) from e

    try:
        relative = _parse_relative(text, now)
    except (ValueError, OverflowError) as e:
        raise TimeoutNotParsableError(value, cause=e) from e
    if relative is not None:
        return relative

    try:
        parsed = date_parser.parse(value, default=datetime.fromtimestamp(now))
        return int(parsed.timestamp())
    except (date_parser.ParserError, ValueError, OverflowError) as e:
        raise TimeoutNotParsableError(value, cause=e) from e


def timeout_to_timestamp(timeout: object, now: int) -> int:
    """Convert any supported timeout input to a unix timestamp."""
    if isinstance(timeout, bool):
        raise TimeoutUnknownFormatError(timeout)
    if isinstance(timeout, int):
        return timeout
    if isinstance(timeout, datetime):
        return int(timeout.timestamp())
    if isinstance(timeout, date):
        return int(datetime.combine(timeout, time()).timestamp())
    if isinstance(timeout, str):
        return parse_timeout_string(timeout, now)
    raise TimeoutUnknownFormatError(timeout)


def resolve_timeout(timeout: object, clock: Clock) -> int:
    """Normalize ``timeout`` and reject instants before ``clock()``."""
    now = clock()
    timestamp = timeout_to_timestamp(timeout, now)
    if timestamp < now:
        raise TimeoutInPastError(timestamp, now)
    return timestamp
