"""Read-only lookup tables for spoken number, date and time phrases.

All tables are built once at import time and exposed as immutable
mappings/tuples, so concurrent extraction calls can share them without
locking. Iteration order matters: longer phrases that share a prefix
with shorter ones come first.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Years (2016-2030)
# ---------------------------------------------------------------------------

_YEAR_TAILS: tuple[tuple[str, int], ...] = (
    ("sixteen", 2016),
    ("seventeen", 2017),
    ("eighteen", 2018),
    ("nineteen", 2019),
    ("twenty one", 2021),
    ("twenty two", 2022),
    ("twenty three", 2023),
    ("twenty four", 2024),
    ("twenty five", 2025),
    ("twenty six", 2026),
    ("twenty seven", 2027),
    ("twenty eight", 2028),
    ("twenty nine", 2029),
    ("twenty", 2020),
    ("thirty", 2030),
)


def _build_year_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for prefix in ("two thousand", "two thousand and"):
        for tail, year in _YEAR_TAILS:
            values[f"{prefix} {tail}"] = str(year)
    return values


YEAR_VALUES: Mapping[str, str] = MappingProxyType(_build_year_values())

# ---------------------------------------------------------------------------
# Ordinals (1st-31st)
# ---------------------------------------------------------------------------

ORDINALS: Mapping[str, str] = MappingProxyType(
    {
        "thirty first": "31st",
        "thirtieth": "30th",
        "twenty ninth": "29th",
        "twenty eighth": "28th",
        "twenty eigth": "28th",
        "twenty seventh": "27th",
        "twenty sixth": "26th",
        "twenty fifth": "25th",
        "twenty fourth": "24th",
        "twenty third": "23rd",
        "twenty second": "22nd",
        "twenty first": "21st",
        "twentieth": "20th",
        "nineteenth": "19th",
        "eighteenth": "18th",
        "seventeenth": "17th",
        "sixteenth": "16th",
        "fifteenth": "15th",
        "fourteenth": "14th",
        "thirteenth": "13th",
        "twelfth": "12th",
        "eleventh": "11th",
        "tenth": "10th",
        "ninth": "9th",
        "nineth": "9th",
        "eighth": "8th",
        "seventh": "7th",
        "sixth": "6th",
        "fifth": "5th",
        "fourth": "4th",
        "third": "3rd",
        "second": "2nd",
        "first": "1st",
    }
)

# ---------------------------------------------------------------------------
# Cardinal numbers (0-31, including split "teen" forms)
# ---------------------------------------------------------------------------

NUMBERS: Mapping[str, str] = MappingProxyType(
    {
        "thirty one": "31",
        "thirty": "30",
        "twenty nine": "29",
        "twenty eight": "28",
        "twenty seven": "27",
        "twenty six": "26",
        "twenty five": "25",
        "twenty four": "24",
        "twenty three": "23",
        "twenty two": "22",
        "twenty one": "21",
        "twenty": "20",
        "nineteen": "19",
        "nine teen": "19",
        "eighteen": "18",
        "eight teen": "18",
        "seventeen": "17",
        "seven teen": "17",
        "sixteen": "16",
        "six teen": "16",
        "fifteen": "15",
        "fourteen": "14",
        "four teen": "14",
        "thirteen": "13",
        "twelve": "12",
        "eleven": "11",
        "ten": "10",
        "nine": "9",
        "eight": "8",
        "seven": "7",
        "six": "6",
        "five": "5",
        "four": "4",
        "three": "3",
        "two": "2",
        "one": "1",
        "zero": "0",
        "oh": "0",
    }
)

# ---------------------------------------------------------------------------
# Hour + minute phrases ("one forty five" -> "1:45")
# ---------------------------------------------------------------------------

HOURS: tuple[str, ...] = (
    "one",
    "two",
    "three",
    "four",
    "five",
    "six",
    "seven",
    "eight",
    "nine",
    "ten",
    "eleven",
    "twelve",
)

# Quarter-hour granularity only.
MINUTES: tuple[tuple[str, int], ...] = (
    ("fifteen", 15),
    ("thirty", 30),
    ("forty five", 45),
)


def _build_hour_minutes() -> dict[str, str]:
    table: dict[str, str] = {}
    for hour, hour_word in enumerate(HOURS, start=1):
        for minute_word, minute in MINUTES:
            table[f"{hour_word} {minute_word}"] = f"{hour}:{minute}"
    return table


HOUR_MINUTES: Mapping[str, str] = MappingProxyType(_build_hour_minutes())

# ---------------------------------------------------------------------------
# Homonyms of number words
# ---------------------------------------------------------------------------

HOMONYMS: Mapping[str, str] = MappingProxyType(
    {
        "won": "one",
        "too": "two",
        "to": "two",
        "tree": "three",
        "for": "four",
        "ate": "eight",
        "fort": "fourth",
        "forth": "fourth",
        "fit": "fifth",
        "tent": "tenth",
    }
)

# ---------------------------------------------------------------------------
# US state abbreviations
# ---------------------------------------------------------------------------

STATE_ABBREVIATIONS: Mapping[str, str] = MappingProxyType(
    {
        "Alabama": "AL",
        "Alaska": "AK",
        "Arizona": "AZ",
        "Arkansas": "AR",
        "California": "CA",
        "Colorado": "CO",
        "Connecticut": "CT",
        "Delaware": "DE",
        "Florida": "FL",
        "Georgia": "GA",
        "Hawaii": "HI",
        "Idaho": "ID",
        "Illinois": "IL",
        "Indiana": "IN",
        "Iowa": "IA",
        "Kansas": "KS",
        "Kentucky": "KY",
        "Louisiana": "LA",
        "Maine": "ME",
        "Maryland": "MD",
        "Massachusetts": "MA",
        "Michigan": "MI",
        "Minnesota": "MN",
        "Mississippi": "MS",
        "Missouri": "MO",
        "Montana": "MT",
        "Nebraska": "NE",
        "Nevada": "NV",
        "New Hampshire": "NH",
        "New Jersey": "NJ",
        "New Mexico": "NM",
        "New York": "NY",
        "North Carolina": "NC",
        "North Dakota": "ND",
        "Ohio": "OH",
        "Oklahoma": "OK",
        "Oregon": "OR",
        "Pennsylvania": "PA",
        "Rhode Island": "RI",
        "South Carolina": "SC",
        "South Dakota": "SD",
        "Tennessee": "TN",
        "Texas": "TX",
        "Utah": "UT",
        "Vermont": "VT",
        "Virginia": "VA",
        "Washington": "WA",
        "Washington DC": "DC",
        "West Virginia": "WV",
        "Wisconsin": "WI",
        "Wyoming": "WY",
    }
)

_STATE_ABBREVIATIONS_LOWER: Mapping[str, str] = MappingProxyType(
    {name.lower(): abbreviation for name, abbreviation in STATE_ABBREVIATIONS.items()}
)
_KNOWN_ABBREVIATIONS = frozenset(STATE_ABBREVIATIONS.values())


def state_abbreviation(state: str | None) -> str | None:
    """Return the two-letter code for a state name or code, if known."""
    if not state:
        return None
    text = " ".join(state.replace(".", "").split())
    if text.upper() in _KNOWN_ABBREVIATIONS:
        return text.upper()
    return _STATE_ABBREVIATIONS_LOWER.get(text.lower())
