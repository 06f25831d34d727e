"""Assisted strategy: extraction from NLP annotation service output."""

from transcriptmcp.assisted.annotations import AnnotationCompositeEntity
from transcriptmcp.assisted.annotations import AnnotationEntity
from transcriptmcp.assisted.annotations import AnnotationIntent
from transcriptmcp.assisted.annotations import AnnotationResponse
from transcriptmcp.assisted.pairing import EntityPairer
from transcriptmcp.assisted.pairing import PairingError
from transcriptmcp.assisted.pairing import PairingState
from transcriptmcp.assisted.resolution import date_info_from_resolved
from transcriptmcp.assisted.selectors import additional_entities
from transcriptmcp.assisted.selectors import select_dates
from transcriptmcp.assisted.selectors import select_location
from transcriptmcp.assisted.selectors import select_person
from transcriptmcp.assisted.service import AnnotationService
from transcriptmcp.assisted.service import build_annotation_service
from transcriptmcp.assisted.service import DataExtractorError
from transcriptmcp.assisted.service import HttpAnnotationService
from transcriptmcp.assisted.service import NoopAnnotationService

__all__ = [
    # Payload
    "AnnotationCompositeEntity",
    "AnnotationEntity",
    "AnnotationIntent",
    "AnnotationResponse",
    # Pairing and selection
    "EntityPairer",
    "PairingError",
    "PairingState",
    "additional_entities",
    "date_info_from_resolved",
    "select_dates",
    "select_location",
    "select_person",
    # Service
    "AnnotationService",
    "DataExtractorError",
    "HttpAnnotationService",
    "NoopAnnotationService",
    "build_annotation_service",
]
