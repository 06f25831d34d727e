"""Extraction result models.

Pydantic schemas shared by the lexical and assisted strategies. Every
instance is created per extraction call; nothing here is cached.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel
from pydantic import Field
from pydantic import model_validator


class DateInfo(BaseModel):
    """A date/time value broken into its components.

    ``full_date`` is ``None`` when no complete timestamp is known; the
    components then keep whatever was recognized (zeros otherwise).
    """

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    full_date: datetime | None = Field(
        default=None,
        description="Combined timestamp; components always agree with it.",
    )

    @model_validator(mode="after")
    def _components_match_full_date(self) -> DateInfo:
        full = self.full_date
        if full is None:
            return self
        components = (self.year, self.month, self.day, self.hour, self.minute)
        if components != (full.year, full.month, full.day, full.hour, full.minute):
            raise ValueError("date components must match full_date")
        return self

    @classmethod
    def from_datetime(cls, value: datetime) -> DateInfo:
        return cls(
            year=value.year,
            month=value.month,
            day=value.day,
            hour=value.hour,
            minute=value.minute,
            full_date=value,
        )

    @property
    def is_empty(self) -> bool:
        return self.full_date is None and not any(
            (self.year, self.month, self.day, self.hour, self.minute)
        )


class LocationInfo(BaseModel):
    """Location recognized in the transcript.

    ``city``, ``state`` and ``zipcode`` are only set when a composite
    location entity supplied them.
    """

    location: str | None = None
    city: str | None = None
    state: str | None = None
    state_abbreviation: str | None = None
    zipcode: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.location is None


class PersonInfo(BaseModel):
    """Person recognized in the transcript and their caller role."""

    name: str | None = None
    type: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.name is None


class ExtractionResult(BaseModel):
    """Aggregate output of one extraction call.

    Missing information leaves the corresponding field at its empty
    default; only collaborator failures are raised.
    """

    intent: str | None = Field(
        default=None,
        description="Top scoring intent (assisted strategy only).",
    )
    intent_confidence: float | None = Field(
        default=None,
        description="Score of the top scoring intent.",
    )
    transcription: str | None = Field(
        default=None,
        description="Original transcript as received from the caller.",
    )
    evaluated_transcription: str | None = Field(
        default=None,
        description="Transcript text the extraction actually ran on.",
    )
    date: DateInfo = Field(default_factory=DateInfo)
    dates: list[DateInfo] = Field(
        default_factory=list,
        description="Every date/time value found, in output order.",
    )
    location: LocationInfo = Field(default_factory=LocationInfo)
    person: PersonInfo = Field(default_factory=PersonInfo)
    additional_data: dict[str, str] = Field(
        default_factory=dict,
        description="Recognized but unmapped entities keyed by label.",
    )
