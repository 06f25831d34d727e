"""Explicit date-time formats for transcript date segments.

Formats are written as literal text with ``{token}`` placeholders and
compiled to anchored regular expressions. Literal text must match
exactly (after whitespace is collapsed and a run of commas such as
", ," is folded to one); tokens are:

    {month}     a month name from the configured month list
    {day}       day of month, 1-2 digits
    {ordinal}   day of month with an ordinal suffix (13th, 1st, 22nd)
    {year}      four digit year
    {hour}      12-hour clock hour, 1-2 digits
    {minute}    minute, 1-2 digits
    {meridiem}  am / pm

A format without ``{year}`` takes the caller's reference year, one
without ``{day}``/``{ordinal}`` takes the first of the month, and one
without ``{minute}`` takes minute 0.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

_TOKEN_RE = re.compile(r"\{(\w+)\}")
_COMMA_RUN_RE = re.compile(r",(?:\s*,)+")

_TOKEN_PATTERNS: dict[str, str] = {
    "day": r"(?P<day>\d{1,2})",
    "ordinal": r"(?P<day>\d{1,2})(?:st|nd|rd|th)",
    "year": r"(?P<year>\d{4})",
    "hour": r"(?P<hour>\d{1,2})",
    "minute": r"(?P<minute>\d{1,2})",
    "meridiem": r"(?P<meridiem>am|pm)",
}


@dataclass(frozen=True)
class DateTimeFormat:
    """One compiled date-time format."""

    template: str
    pattern: re.Pattern[str]

    @classmethod
    def compile(cls, template: str, month_names: Sequence[str]) -> DateTimeFormat:
        parts: list[str] = []
        position = 0
        for match in _TOKEN_RE.finditer(template):
            parts.append(re.escape(template[position : match.start()]))
            token = match.group(1)
            if token == "month":
                months = "|".join(re.escape(name.lower()) for name in month_names)
                parts.append(rf"(?P<month>{months})")
            elif token in _TOKEN_PATTERNS:
                parts.append(_TOKEN_PATTERNS[token])
            else:
                raise ValueError(f"Unknown format token '{{{token}}}' in {template!r}")
            position = match.end()
        parts.append(re.escape(template[position:]))
        return cls(template=template, pattern=re.compile("".join(parts)))

    def parse(
        self,
        text: str,
        *,
        month_names: Sequence[str],
        reference_year: int,
    ) -> datetime | None:
        """Return the datetime described by *text*, or ``None``.

        Out-of-range values (hour 13, day 32, February 30th) fail the
        match instead of raising.
        """
        collapsed = _COMMA_RUN_RE.sub(",", " ".join(text.split()).lower())
        match = self.pattern.fullmatch(collapsed)
        if match is None:
            return None
        fields = match.groupdict()
        lowered_months = [name.lower() for name in month_names]
        month = lowered_months.index(fields["month"]) + 1
        year = int(fields["year"]) if fields.get("year") else reference_year
        day = int(fields["day"]) if fields.get("day") else 1
        minute = int(fields["minute"]) if fields.get("minute") else 0
        hour = int(fields["hour"]) if fields.get("hour") else 0
        meridiem = fields.get("meridiem")
        if meridiem is not None:
            if not 1 <= hour <= 12:
                return None
            hour = hour % 12 + (12 if meridiem == "pm" else 0)
        try:
            return datetime(year, month, day, hour, minute)
        except ValueError:
            return None


# Tried in order against every candidate segment.
DATE_TIME_TEMPLATES: tuple[str, ...] = (
    "{month} {ordinal} {year} at {hour} {meridiem}",
    "{month} {ordinal} at {hour} {meridiem}",
    "{month} , {year} at {hour} {meridiem}",
    "{month}, {ordinal} {year}.at {hour} {meridiem}",
    "{month}, {ordinal} {year}. at {hour} {meridiem}",
    "{month}, {ordinal} {year} at {hour} {meridiem}",
    "{month} {day} , {year} at {hour}:{minute} {meridiem}",
    "{month} {ordinal} , {year} at {hour}:{minute} {meridiem}",
    "{month} {ordinal} , {year} at {hour} {meridiem}",
    "{month} {ordinal} {year} at {hour}:{minute} {meridiem}",
    "{month} {ordinal}, {year} at {hour}:{minute} {meridiem}",
    "{month} {ordinal}, {year} at {hour} {meridiem}",
    "{month} {day}, {year} at {hour}:{minute} {meridiem}",
    "{month} {day}, {year} at {hour} {meridiem}",
)


def compile_formats(
    month_names: Sequence[str],
    templates: Sequence[str] = DATE_TIME_TEMPLATES,
) -> tuple[DateTimeFormat, ...]:
    return tuple(DateTimeFormat.compile(template, month_names) for template in templates)
