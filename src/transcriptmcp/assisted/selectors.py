"""Selection of dates, location, person and leftover entities.

Pure functions over already-converted entities. Selection is by
``EntityKind``, which the caller's ``EntityNames`` resolved from the
service's label strings.
"""

from __future__ import annotations

from collections.abc import Sequence

from transcriptmcp.assisted.pairing import EntityPairer
from transcriptmcp.assisted.resolution import date_info_from_resolved
from transcriptmcp.config import ExtractorConfig
from transcriptmcp.lexical.lexicon import state_abbreviation
from transcriptmcp.models.entities import AnnotatedEntity
from transcriptmcp.models.entities import CompositeEntity
from transcriptmcp.models.entities import EntityKind
from transcriptmcp.models.results import DateInfo
from transcriptmcp.models.results import LocationInfo
from transcriptmcp.models.results import PersonInfo

_PAIRED_KINDS = frozenset({EntityKind.date, EntityKind.time})


def first_of_kind(
    entities: Sequence[AnnotatedEntity], kind: EntityKind
) -> AnnotatedEntity | None:
    return next((entity for entity in entities if entity.kind is kind), None)


def select_dates(
    entities: Sequence[AnnotatedEntity], config: ExtractorConfig
) -> list[DateInfo]:
    """Return combined date-time values first, then paired date/time values.

    Combined entities resolve on their own from their first resolved
    value; one without a resolved value contributes nothing.
    """
    legacy = config.legacy_min_value_dates
    dates: list[DateInfo] = []
    for entity in entities:
        if entity.kind is not EntityKind.datetime:
            continue
        value = entity.first_resolved_value()
        if value is not None:
            dates.append(date_info_from_resolved(value, legacy_min_value_dates=legacy))

    paired = [entity for entity in entities if entity.kind in _PAIRED_KINDS]
    dates.extend(EntityPairer(legacy_min_value_dates=legacy).pair(paired))
    return dates


def select_location(
    entities: Sequence[AnnotatedEntity],
    composites: Sequence[CompositeEntity],
) -> LocationInfo:
    """Return the first location, detailed from a location composite if any."""
    location_entity = first_of_kind(entities, EntityKind.location)
    if location_entity is None:
        return LocationInfo()

    info = LocationInfo(location=location_entity.raw_text)
    composite = next(
        (
            candidate
            for candidate in composites
            if candidate.parent_kind is EntityKind.location and candidate.children
        ),
        None,
    )
    if composite is None:
        return info

    city = composite.first_child(EntityKind.city)
    state = composite.first_child(EntityKind.state)
    zipcode = composite.first_child(EntityKind.zipcode)
    if city is not None:
        info.city = city.raw_text
    if state is not None:
        info.state = state.raw_text
        info.state_abbreviation = state_abbreviation(state.raw_text)
    if zipcode is not None:
        info.zipcode = zipcode.raw_text
    return info


def select_person(
    entities: Sequence[AnnotatedEntity],
    intent: str | None,
    config: ExtractorConfig,
) -> PersonInfo:
    """Return the first person, typed by the top scoring intent."""
    person_entity = first_of_kind(entities, EntityKind.person)
    if person_entity is None:
        return PersonInfo()
    return PersonInfo(name=person_entity.raw_text, type=config.person_type_for(intent))


def additional_entities(entities: Sequence[AnnotatedEntity]) -> dict[str, str]:
    """Map every unrecognized entity to its raw text, keyed by label.

    Repeated labels get numbered keys: ``label``, ``label-2``,
    ``label-3``... in encounter order.
    """
    extra: dict[str, str] = {}
    seen: dict[str, int] = {}
    for entity in entities:
        if entity.kind is not EntityKind.other:
            continue
        occurrence = seen.get(entity.label, 0) + 1
        seen[entity.label] = occurrence
        key = entity.label if occurrence == 1 else f"{entity.label}-{occurrence}"
        while key in extra:
            # Skip keys already taken by a literal "label-N" entity.
            occurrence += 1
            seen[entity.label] = occurrence
            key = f"{entity.label}-{occurrence}"
        extra[key] = entity.raw_text
    return extra
