"""Merging of separately recognized date and time entities.

The annotation service may tag "january 7th" as a date and "3 pm" as a
time instead of one combined date-time. ``EntityPairer`` walks the date
and time entities in position order and joins a date with the time that
directly follows it:

    ============  ==========  ===========================  ==========
    state         entity      action                       next state
    ============  ==========  ===========================  ==========
    none          date        append                       seen_date
    none          time        append                       seen_time
    seen_date     date        flush, append                seen_date
    seen_date     time        append                       seen_time
    seen_time     date        flush, append                seen_date
    seen_time     time        flush, append                seen_time
    ============  ==========  ===========================  ==========

Whatever is buffered at the end of the stream is flushed too. A flush
whose text does not parse still emits an (empty) ``DateInfo``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from transcriptmcp.assisted.resolution import date_info_from_resolved
from transcriptmcp.models.entities import AnnotatedEntity
from transcriptmcp.models.entities import EntityKind
from transcriptmcp.models.results import DateInfo

logger = logging.getLogger(__name__)


class PairingError(RuntimeError):
    """Raised when the pairer receives an entity that is neither date nor time."""


class PairingState(str, Enum):
    none = "none"
    seen_date = "seen_date"
    seen_time = "seen_time"


@dataclass(frozen=True)
class Transition:
    flush: bool
    next_state: PairingState


TRANSITIONS: Mapping[tuple[PairingState, EntityKind], Transition] = MappingProxyType(
    {
        (PairingState.none, EntityKind.date): Transition(False, PairingState.seen_date),
        (PairingState.none, EntityKind.time): Transition(False, PairingState.seen_time),
        (PairingState.seen_date, EntityKind.date): Transition(True, PairingState.seen_date),
        (PairingState.seen_date, EntityKind.time): Transition(False, PairingState.seen_time),
        (PairingState.seen_time, EntityKind.date): Transition(True, PairingState.seen_date),
        (PairingState.seen_time, EntityKind.time): Transition(True, PairingState.seen_time),
    }
)


def entity_text(entity: AnnotatedEntity) -> str:
    """Text an entity contributes: its first resolved value, else the raw text."""
    return entity.first_resolved_value() or entity.raw_text


class EntityPairer:
    """Stateless driver; every ``pair`` call runs its own state machine."""

    def __init__(self, *, legacy_min_value_dates: bool = False) -> None:
        self._legacy_min_value_dates = legacy_min_value_dates

    def step(self, state: PairingState, entity: AnnotatedEntity) -> Transition:
        """Return the transition for *entity* seen in *state*."""
        try:
            return TRANSITIONS[(state, entity.kind)]
        except KeyError:
            raise PairingError(
                f"Entity kind '{entity.kind.value}' cannot be paired "
                f"(label {entity.label!r}); only date and time entities are accepted"
            ) from None

    def _flush(self, buffer: list[str]) -> DateInfo:
        text = " ".join(part for part in buffer if part)
        return date_info_from_resolved(
            text, legacy_min_value_dates=self._legacy_min_value_dates
        )

    def pair(self, entities: Iterable[AnnotatedEntity]) -> list[DateInfo]:
        """Merge date/time entities into ``DateInfo`` values, in position order."""
        ordered = sorted(entities, key=lambda entity: entity.start_index)
        results: list[DateInfo] = []
        buffer: list[str] = []
        state = PairingState.none

        for entity in ordered:
            transition = self.step(state, entity)
            if transition.flush:
                results.append(self._flush(buffer))
                buffer = []
            buffer.append(entity_text(entity))
            state = transition.next_state

        if buffer:
            results.append(self._flush(buffer))

        logger.debug("Paired %d date/time entities into %d value(s)", len(ordered), len(results))
        return results
