"""Candidate segment search for date/time phrases.

A candidate starts at a month name and ends at the first following
meridiem marker ("am", "pm", "a.m.", "p.m."). The pattern sits inside a
zero-width lookahead so the scan restarts at every position and
overlapping candidates are all reported:

    '31 may st new york on april 3rd, 2017 at 1:30 p.m.'

yields both 'may st new york on april 3rd, 2017 at 1:30 pm' and
'april 3rd, 2017 at 1:30 pm'. Results are ordered longest first.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from transcriptmcp.config import ENGLISH_MONTH_NAMES

logger = logging.getLogger(__name__)

_MERIDIEM_RE = re.compile(r"\b([ap])\.m\.", re.IGNORECASE)


def normalize_meridiem(text: str) -> str:
    """Collapse 'a.m.' / 'p.m.' spellings to 'am' / 'pm'."""
    return _MERIDIEM_RE.sub(lambda m: f"{m.group(1).lower()}m", text)


class CandidateSegmentFinder:
    """Finds substrings that plausibly hold a month-to-meridiem phrase."""

    def __init__(self, month_names: Sequence[str] = ENGLISH_MONTH_NAMES) -> None:
        self._month_names = tuple(name.lower() for name in month_names)
        months = "|".join(re.escape(name) for name in self._month_names)
        self._pattern = re.compile(
            rf"(?=(\b(?:{months})(?:,| ).*? (?:a\.m\.|p\.m\.|am\b|pm\b)))"
        )

    @property
    def month_names(self) -> tuple[str, ...]:
        return self._month_names

    def find(self, text: str) -> list[str]:
        """Return every candidate segment of *text*, longest first.

        The text is lowercased before matching. Without any month name
        the result is empty; relative phrases ("next tuesday") are not
        candidates.
        """
        lowered = text.lower()
        candidates = [match.group(1) for match in self._pattern.finditer(lowered)]
        # sorted() is stable: equal lengths keep their order of appearance.
        ordered = sorted(candidates, key=len, reverse=True)
        logger.debug("Found %d candidate date segment(s)", len(ordered))
        return [normalize_meridiem(candidate) for candidate in ordered]
