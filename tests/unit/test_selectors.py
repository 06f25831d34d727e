"""Unit tests for date, location, person and additional-data selection."""

from __future__ import annotations

from datetime import datetime

from transcriptmcp.assisted.selectors import additional_entities
from transcriptmcp.assisted.selectors import select_dates
from transcriptmcp.assisted.selectors import select_location
from transcriptmcp.assisted.selectors import select_person
from transcriptmcp.config import ExtractorConfig
from transcriptmcp.models.entities import AnnotatedEntity
from transcriptmcp.models.entities import CompositeEntity
from transcriptmcp.models.entities import EntityKind
from transcriptmcp.models.entities import ResolvedValue


def _entity(
    kind: EntityKind,
    raw_text: str,
    *,
    label: str | None = None,
    start: int = 0,
    value: str | None = None,
) -> AnnotatedEntity:
    return AnnotatedEntity(
        kind=kind,
        label=label or kind.value,
        raw_text=raw_text,
        start_index=start,
        resolved_values=[ResolvedValue(value=value)] if value is not None else [],
    )


class TestSelectDates:
    def test_combined_datetimes_come_before_paired_values(self):
        entities = [
            _entity(EntityKind.date, "june 3rd", start=0, value="2019-06-03"),
            _entity(EntityKind.datetime, "may 10th at 3 pm", start=40, value="2019-05-10 15:00:00"),
            _entity(EntityKind.time, "4 pm", start=12, value="16:00:00"),
        ]
        dates = select_dates(entities, ExtractorConfig())
        assert [d.full_date for d in dates] == [
            datetime(2019, 5, 10, 15, 0),
            datetime(2019, 6, 3, 16, 0),
        ]

    def test_datetime_without_resolved_value_contributes_nothing(self):
        entities = [_entity(EntityKind.datetime, "sometime")]
        assert select_dates(entities, ExtractorConfig()) == []

    def test_no_temporal_entities(self):
        assert select_dates([_entity(EntityKind.person, "may smith")], ExtractorConfig()) == []


class TestSelectLocation:
    def test_no_location(self):
        location = select_location([], [])
        assert location.is_empty
        assert location.city is None

    def test_bare_location_without_composite(self):
        location = select_location([_entity(EntityKind.location, "100 montgomery st")], [])
        assert location.location == "100 montgomery st"
        assert (location.city, location.state, location.zipcode) == (None, None, None)

    def test_composite_children_fill_details(self):
        entities = [
            _entity(EntityKind.location, "100 montgomery st san francisco ca 94105"),
            _entity(EntityKind.location, "second location"),
        ]
        composites = [
            CompositeEntity(parent_kind=EntityKind.location, parent_label="Location", children=[]),
            CompositeEntity(
                parent_kind=EntityKind.location,
                parent_label="Location",
                value="100 montgomery st san francisco ca 94105",
                children=[
                    _entity(EntityKind.city, "san francisco"),
                    _entity(EntityKind.state, "ca"),
                    _entity(EntityKind.zipcode, "94105"),
                ],
            ),
        ]
        location = select_location(entities, composites)
        assert location.location == "100 montgomery st san francisco ca 94105"
        assert location.city == "san francisco"
        assert location.state == "ca"
        assert location.state_abbreviation == "CA"
        assert location.zipcode == "94105"

    def test_non_location_composites_ignored(self):
        composites = [
            CompositeEntity(
                parent_kind=EntityKind.other,
                parent_label="Address",
                children=[_entity(EntityKind.city, "oakland")],
            )
        ]
        location = select_location([_entity(EntityKind.location, "downtown")], composites)
        assert location.city is None


class TestSelectPerson:
    def test_person_typed_by_intent(self):
        entities = [_entity(EntityKind.person, "jeremiah johnson"), _entity(EntityKind.person, "x")]
        person = select_person(entities, "CourtHearingNameEntity", ExtractorConfig())
        assert person.name == "jeremiah johnson"
        assert person.type == "Judge"

    def test_unmapped_or_missing_intent_is_unknown(self):
        entities = [_entity(EntityKind.person, "jeremiah johnson")]
        assert select_person(entities, "Weather", ExtractorConfig()).type == "Unknown"
        assert select_person(entities, None, ExtractorConfig()).type == "Unknown"

    def test_no_person(self):
        assert select_person([], "CourtHearingNameEntity", ExtractorConfig()).is_empty


class TestAdditionalEntities:
    def test_recognized_kinds_are_not_additional(self):
        entities = [
            _entity(EntityKind.person, "judge"),
            _entity(EntityKind.city, "oakland"),
        ]
        assert additional_entities(entities) == {}

    def test_repeated_labels_get_numbered_keys(self):
        entities = [
            _entity(EntityKind.other, f"value-{n}", label="caseNumber") for n in range(1, 5)
        ]
        assert additional_entities(entities) == {
            "caseNumber": "value-1",
            "caseNumber-2": "value-2",
            "caseNumber-3": "value-3",
            "caseNumber-4": "value-4",
        }

    def test_labels_are_counted_independently(self):
        entities = [
            _entity(EntityKind.other, "a1", label="a"),
            _entity(EntityKind.other, "b1", label="b"),
            _entity(EntityKind.other, "a2", label="a"),
        ]
        assert additional_entities(entities) == {"a": "a1", "b": "b1", "a-2": "a2"}

    def test_literal_suffixed_label_does_not_lose_data(self):
        entities = [
            _entity(EntityKind.other, "first", label="a"),
            _entity(EntityKind.other, "literal", label="a-2"),
            _entity(EntityKind.other, "second", label="a"),
        ]
        extra = additional_entities(entities)
        assert len(extra) == 3
        assert extra["a"] == "first"
        assert extra["a-2"] == "literal"
        assert extra["a-3"] == "second"
