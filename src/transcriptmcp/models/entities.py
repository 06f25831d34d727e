"""Typed entities consumed by the assisted strategy.

These are the service-independent shapes the pairer and selectors work
on. ``transcriptmcp.assisted.annotations`` converts the raw annotation
payload into them.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel
from pydantic import Field


class EntityKind(str, Enum):
    """Logical role of an annotated entity."""

    datetime = "datetime"
    date = "date"
    time = "time"
    person = "person"
    location = "location"
    city = "city"
    state = "state"
    zipcode = "zipcode"
    other = "other"


class ResolvedValue(BaseModel):
    """One normalized value attached to an entity by the service."""

    timex: str | None = None
    type: str | None = None
    value: str | None = None


class AnnotatedEntity(BaseModel):
    """An entity recognized in the transcript by the annotation service."""

    kind: EntityKind = Field(description="Logical role resolved from the label.")
    label: str = Field(description="Label string exactly as the service sent it.")
    raw_text: str = Field(default="", description="Matched transcript text.")
    start_index: int = Field(default=0, description="Start offset in the query.")
    end_index: int = Field(default=0, description="End offset in the query.")
    resolved_values: list[ResolvedValue] = Field(
        default_factory=list,
        description="Ordered resolution values (timex/value pairs).",
    )
    confidence: float | None = Field(default=None, description="Service score.")

    def first_resolved_value(self) -> str | None:
        """Return the first non-empty resolved value, if any."""
        if not self.resolved_values:
            return None
        return self.resolved_values[0].value or None


class CompositeEntity(BaseModel):
    """A multi-field entity such as an address built from typed children."""

    parent_kind: EntityKind
    parent_label: str
    value: str = ""
    children: list[AnnotatedEntity] = Field(default_factory=list)

    def first_child(self, kind: EntityKind) -> AnnotatedEntity | None:
        return next((child for child in self.children if child.kind is kind), None)
