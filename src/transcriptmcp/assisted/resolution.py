"""Parsing of resolved values attached to date/time entities.

Resolved values are ISO-like strings: ``2019-01-07``, ``15:00:00`` or
``2019-01-07 15:00:00``. A date without a time resolves to midnight.
A time without a date has no calendar day; by default the day
components stay unset (zero) and ``full_date`` is ``None``. With
``legacy_min_value_dates`` the day becomes year 1, January 1st and a
full date is built from it.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from datetime import datetime
from datetime import time

from transcriptmcp.models.results import DateInfo

logger = logging.getLogger(__name__)

_RESOLVED_RE = re.compile(
    r"^\s*(?P<date>\d{4}-\d{2}-\d{2})?"
    r"(?:(?:\s+|T)?(?P<time>\d{1,2}:\d{2}(?::\d{2}(?:\.\d+)?)?))?\s*$"
)

_MIN_VALUE_DATE = date(1, 1, 1)


def split_resolved_value(text: str) -> tuple[date | None, time | None]:
    """Return the (date, time) parts of *text*.

    Raises ``ValueError`` when the text is empty, not ISO-like, or names
    an impossible date or time.
    """
    match = _RESOLVED_RE.match(text)
    if match is None or not (match.group("date") or match.group("time")):
        raise ValueError(f"Unrecognized resolved value: {text!r}")
    day_part = date.fromisoformat(match.group("date")) if match.group("date") else None
    time_part = None
    if match.group("time"):
        raw_time = match.group("time")
        if len(raw_time.split(":")[0]) == 1:
            raw_time = f"0{raw_time}"
        time_part = time.fromisoformat(raw_time)
    return day_part, time_part


def date_info_from_resolved(text: str, *, legacy_min_value_dates: bool = False) -> DateInfo:
    """Build a ``DateInfo`` from resolved-value text.

    Unparseable text yields the empty ``DateInfo`` rather than raising.
    """
    try:
        day_part, time_part = split_resolved_value(text)
    except ValueError:
        logger.debug("Could not parse resolved value %r", text)
        return DateInfo()

    if day_part is not None:
        return DateInfo.from_datetime(datetime.combine(day_part, time_part or time()))

    # Only a time is known from here on.
    if legacy_min_value_dates:
        return DateInfo.from_datetime(datetime.combine(_MIN_VALUE_DATE, time_part))
    return DateInfo(hour=time_part.hour, minute=time_part.minute)
