"""Pydantic models for the NLP annotation service payload.

The service answers with camelCase JSON::

    {
      "query": "...",
      "topScoringIntent": {"intent": "...", "score": 0.93},
      "entities": [{"entity": "...", "type": "...", "startIndex": 0,
                    "endIndex": 4, "score": 0.8,
                    "resolution": {"values": [{"timex": "...",
                                               "type": "...",
                                               "value": "..."}]}}],
      "compositeEntities": [{"parentType": "...", "value": "...",
                             "children": [...]}]
    }

``AnnotationResponse.to_entities`` / ``to_composites`` convert it into
the service-independent ``AnnotatedEntity`` / ``CompositeEntity`` types.
"""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic.alias_generators import to_camel

from transcriptmcp.config import EntityNames
from transcriptmcp.models.entities import AnnotatedEntity
from transcriptmcp.models.entities import CompositeEntity
from transcriptmcp.models.entities import ResolvedValue


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AnnotationIntent(_CamelModel):
    intent: str
    score: float | None = None


class AnnotationResolutionValue(_CamelModel):
    timex: str | None = None
    type: str | None = None
    value: str | None = None


class AnnotationResolution(_CamelModel):
    values: list[AnnotationResolutionValue] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def null_values_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class AnnotationEntity(_CamelModel):
    entity: str | None = None
    type: str
    value: str | None = None
    start_index: int = 0
    end_index: int = 0
    resolution: AnnotationResolution | None = None
    score: float | None = None

    def to_entity(self, names: EntityNames) -> AnnotatedEntity:
        values = self.resolution.values if self.resolution is not None else []
        return AnnotatedEntity(
            kind=names.kind_of(self.type),
            label=self.type,
            raw_text=self.entity if self.entity is not None else (self.value or ""),
            start_index=self.start_index,
            end_index=self.end_index,
            resolved_values=[
                ResolvedValue(timex=v.timex, type=v.type, value=v.value) for v in values
            ],
            confidence=self.score,
        )


class AnnotationCompositeEntity(_CamelModel):
    parent_type: str
    value: str = ""
    children: list[AnnotationEntity] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def null_children_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def to_composite(self, names: EntityNames) -> CompositeEntity:
        return CompositeEntity(
            parent_kind=names.kind_of(self.parent_type),
            parent_label=self.parent_type,
            value=self.value,
            children=[child.to_entity(names) for child in self.children],
        )


class AnnotationResponse(_CamelModel):
    """Top-level annotation payload."""

    query: str | None = None
    top_scoring_intent: AnnotationIntent | None = None
    entities: list[AnnotationEntity] = Field(default_factory=list)
    composite_entities: list[AnnotationCompositeEntity] = Field(default_factory=list)

    @field_validator("entities", "composite_entities", mode="before")
    @classmethod
    def null_lists_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    def to_entities(self, names: EntityNames) -> list[AnnotatedEntity]:
        return [entity.to_entity(names) for entity in self.entities]

    def to_composites(self, names: EntityNames) -> list[CompositeEntity]:
        return [composite.to_composite(names) for composite in self.composite_entities]
