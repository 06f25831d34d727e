"""Application configuration dataclasses.

Frozen dataclasses with sensible defaults for each subsystem.
No env-var loading here; the server builds these from its environment
and hands them to the components that own them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from types import MappingProxyType

from transcriptmcp.models.entities import EntityKind

# Month names are passed explicitly instead of being read from the process
# locale, so segment finding behaves the same on every host.
ENGLISH_MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

DEFAULT_PERSON_INTENT_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "CourtHearingNameEntity": "Judge",
        "CaseDecisionNameEntity": "Judge",
        "None": "Unknown",
    }
)

UNKNOWN_PERSON_TYPE = "Unknown"


@dataclass(frozen=True)
class EntityNames:
    """Label strings the annotation service uses for each entity role."""

    datetime: str = "builtin.datetimeV2.datetime"
    date: str = "builtin.datetimeV2.date"
    time: str = "builtin.datetimeV2.time"
    person: str = "Person"
    location: str = "Location"
    city: str = "City"
    state: str = "State"
    zipcode: str = "Zipcode"

    @classmethod
    def from_mapping(cls, data: Mapping[str, str]) -> EntityNames:
        """Build from a role -> label mapping; unknown roles are rejected."""
        roles = {kind.value for kind in EntityKind if kind is not EntityKind.other}
        unknown = sorted(set(data) - roles)
        if unknown:
            raise ValueError(f"Unknown entity roles: {', '.join(unknown)}")
        return cls(**{role: str(label) for role, label in data.items()})

    def label_for(self, kind: EntityKind) -> str:
        if kind is EntityKind.other:
            raise ValueError("EntityKind.other has no configured label")
        return getattr(self, kind.value)

    def expected(self) -> frozenset[str]:
        """Return the labels of every recognized entity role."""
        return frozenset(
            self.label_for(kind) for kind in EntityKind if kind is not EntityKind.other
        )

    def kind_of(self, label: str | None) -> EntityKind:
        """Map a service label to its ``EntityKind`` (``other`` if unmapped)."""
        for kind in EntityKind:
            if kind is EntityKind.other:
                continue
            if self.label_for(kind) == label:
                return kind
        return EntityKind.other


@dataclass(frozen=True)
class ExtractorConfig:
    """Settings shared by both extraction strategies.

    ``person_intent_types`` is copied into a read-only mapping on
    construction, so a config can be shared across concurrent calls.
    """

    entity_names: EntityNames = field(default_factory=EntityNames)
    person_intent_types: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_PERSON_INTENT_TYPES
    )
    month_names: tuple[str, ...] = ENGLISH_MONTH_NAMES
    reference_year: int | None = None
    # Reproduce the year 1 / January / day 1 placeholder for time-only values.
    legacy_min_value_dates: bool = False

    def __post_init__(self) -> None:
        if len(self.month_names) != 12:
            raise ValueError("month_names must list exactly 12 months")
        object.__setattr__(
            self,
            "person_intent_types",
            MappingProxyType(dict(self.person_intent_types)),
        )
        object.__setattr__(self, "month_names", tuple(self.month_names))

    def person_type_for(self, intent: str | None) -> str:
        if intent is None:
            return UNKNOWN_PERSON_TYPE
        return self.person_intent_types.get(intent, UNKNOWN_PERSON_TYPE)


@dataclass(frozen=True)
class AnnotationServiceConfig:
    """Connection settings for the external NLP annotation service."""

    provider: str = "luis"
    endpoint: str | None = None
    subscription_key: str | None = None
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class ServerConfig:
    """Request defaults applied by the MCP tools."""

    default_min_date: datetime = datetime(1900, 1, 1)
    max_transcript_length: int = 500
