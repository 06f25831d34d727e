"""Multi-pass date/time extraction from raw transcript text.

Passes, first success wins:

1. ``direct``: candidate segments of the untouched text.
2. ``normalized``: the same after number/ordinal/year/hour normalization.
3. ``homonyms``: homonym correction, then pass 2.

Within a pass, candidates are tried longest first against every format
in order. A transcript without any parseable candidate yields ``None``;
that is an expected outcome, never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from transcriptmcp.config import ExtractorConfig
from transcriptmcp.lexical.formats import compile_formats
from transcriptmcp.lexical.formats import DateTimeFormat
from transcriptmcp.lexical.normalizer import LexicalNormalizer
from transcriptmcp.lexical.segments import CandidateSegmentFinder
from transcriptmcp.models.results import DateInfo
from transcriptmcp.observability import record_date_pass

logger = logging.getLogger(__name__)


class DateParser:
    """Finds the first date/time phrase in a transcript."""

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        *,
        normalizer: LexicalNormalizer | None = None,
        segment_finder: CandidateSegmentFinder | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or ExtractorConfig()
        self._normalizer = normalizer or LexicalNormalizer()
        self._segment_finder = segment_finder or CandidateSegmentFinder(
            self._config.month_names
        )
        self._formats = compile_formats(self._config.month_names)
        self._clock = clock or datetime.now

    @property
    def formats(self) -> tuple[DateTimeFormat, ...]:
        return self._formats

    def _reference_year(self) -> int:
        if self._config.reference_year is not None:
            return self._config.reference_year
        return self._clock().year

    def possible_date_times(self, text: str, *, words_to_numbers: bool = False) -> list[str]:
        """Return candidate segments, optionally after normalization."""
        lowered = text.lower()
        if words_to_numbers:
            lowered = self._normalizer.create_digits_for_date_parsing(lowered)
        return self._segment_finder.find(lowered)

    def parse_candidates(self, candidates: list[str]) -> DateInfo | None:
        """Return the first candidate that matches any format."""
        reference_year = self._reference_year()
        for candidate in candidates:
            for fmt in self._formats:
                parsed = fmt.parse(
                    candidate,
                    month_names=self._config.month_names,
                    reference_year=reference_year,
                )
                if parsed is not None:
                    logger.debug("Parsed %r with format %r", candidate, fmt.template)
                    return DateInfo.from_datetime(parsed)
        return None

    def extract_base(self, text: str, *, words_to_numbers: bool = False) -> DateInfo | None:
        return self.parse_candidates(
            self.possible_date_times(text, words_to_numbers=words_to_numbers)
        )

    def parse(self, text: str) -> DateInfo | None:
        """Run the three passes and return the first success."""
        passes = (
            ("direct", lambda: self.extract_base(text)),
            ("normalized", lambda: self.extract_base(text, words_to_numbers=True)),
            (
                "homonyms",
                lambda: self.extract_base(
                    self._normalizer.replace_homonyms(text.lower()),
                    words_to_numbers=True,
                ),
            ),
        )
        for pass_name, run in passes:
            result = run()
            if result is not None:
                logger.info("Date found by the %s pass", pass_name)
                record_date_pass(pass_name)
                return result
        logger.info("No date found in transcript")
        record_date_pass("none")
        return None
