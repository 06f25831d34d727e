"""Models domain: shared data models."""

from transcriptmcp.models.entities import AnnotatedEntity
from transcriptmcp.models.entities import CompositeEntity
from transcriptmcp.models.entities import EntityKind
from transcriptmcp.models.entities import ResolvedValue
from transcriptmcp.models.results import DateInfo
from transcriptmcp.models.results import ExtractionResult
from transcriptmcp.models.results import LocationInfo
from transcriptmcp.models.results import PersonInfo

__all__ = [
    # Entities
    "AnnotatedEntity",
    "CompositeEntity",
    "EntityKind",
    "ResolvedValue",
    # Results
    "DateInfo",
    "ExtractionResult",
    "LocationInfo",
    "PersonInfo",
]
