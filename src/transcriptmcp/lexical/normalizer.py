"""Spoken-language number, date and time normalization.

Each pass is a pure ``str -> str`` function over lowercased text. The
default pipeline (``create_digits_for_date_parsing``) runs the passes in
a fixed order: years, ordinals, hour+minute, then plain numbers. Hour
and minute phrases must be collapsed before plain numbers, otherwise
"four thirty" would become "4 30" instead of "4:30".

Homonym correction is not part of the pipeline. It turns ordinary words
("to", "for") into numbers; the date parser only runs it as a last resort.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from transcriptmcp.lexical.lexicon import HOMONYMS
from transcriptmcp.lexical.lexicon import HOUR_MINUTES
from transcriptmcp.lexical.lexicon import NUMBERS
from transcriptmcp.lexical.lexicon import ORDINALS
from transcriptmcp.lexical.lexicon import YEAR_VALUES

logger = logging.getLogger(__name__)


class PhraseTable:
    """Whole-word phrase substitution driven by an ordered mapping.

    Phrases are tried in mapping order at every position, so a longer
    phrase listed before a shorter one sharing its prefix wins. Words
    inside a phrase may be separated by any run of whitespace.
    """

    def __init__(self, phrases: Mapping[str, str], *, prefix: str = "") -> None:
        self._phrases = phrases
        self._prefix = prefix
        alternation = "|".join(
            r"\s+".join(re.escape(word) for word in phrase.split())
            for phrase in phrases
        )
        self._pattern = re.compile(rf"\b(?:{alternation})\b")

    def _replace(self, match: re.Match[str]) -> str:
        phrase = " ".join(match.group(0).split())
        return f"{self._prefix}{self._phrases[phrase]}"

    def substitute(self, text: str) -> str:
        return self._pattern.sub(self._replace, text)


# Compiled once at import; shared read-only by every normalizer instance.
_YEARS = PhraseTable(YEAR_VALUES, prefix=", ")
_ORDINALS = PhraseTable(ORDINALS)
_NUMBERS = PhraseTable(NUMBERS)
_HOUR_MINUTES = PhraseTable(HOUR_MINUTES)


class LexicalNormalizer:
    """Turns number words in a transcript into canonical digit forms.

    Stateless; one instance can serve any number of concurrent callers.
    """

    def years_to_digits(self, value: str) -> str:
        """'two thousand (and) seventeen' -> ', 2017' (2016 to 2030)."""
        return _YEARS.substitute(value)

    def ordinals_to_ordinals(self, value: str) -> str:
        """'third' -> '3rd' (up to 31st, intended for days of month)."""
        return _ORDINALS.substitute(value)

    def wordnums_to_nums(self, value: str) -> str:
        """'fourteen' / 'four teen' -> '14' (0 to 31)."""
        return _NUMBERS.substitute(value)

    def hour_with_minute_to_time(self, value: str) -> str:
        """'one forty five' -> '1:45' (quarter hours only)."""
        return _HOUR_MINUTES.substitute(value)

    def replace_homonyms(self, value: str) -> str:
        """Replace words commonly transcribed in place of numbers.

        'ate' -> 'eight', 'for' -> 'four', 'forth' -> 'fourth'.
        Only exact space-separated words are replaced.
        """
        return " ".join(HOMONYMS.get(part, part) for part in value.split(" ")).strip()

    def create_digits_for_date_parsing(self, value: str) -> str:
        """Run the default pipeline.

        'april thirteenth two thousand sixteen at two thirty pm'
        -> 'april 13th , 2016 at 2:30 pm'
        """
        logger.debug("Attempting to create digits for date parsing")
        return self.wordnums_to_nums(
            self.hour_with_minute_to_time(
                self.ordinals_to_ordinals(self.years_to_digits(value))
            )
        )
