"""Lexical strategy: date extraction straight from transcript text."""

from transcriptmcp.lexical.date_parser import DateParser
from transcriptmcp.lexical.formats import compile_formats
from transcriptmcp.lexical.formats import DATE_TIME_TEMPLATES
from transcriptmcp.lexical.formats import DateTimeFormat
from transcriptmcp.lexical.normalizer import LexicalNormalizer
from transcriptmcp.lexical.normalizer import PhraseTable
from transcriptmcp.lexical.segments import CandidateSegmentFinder
from transcriptmcp.lexical.segments import normalize_meridiem
from transcriptmcp.lexical.transformations import apply_transformations
from transcriptmcp.lexical.transformations import default_transformations
from transcriptmcp.lexical.transformations import TransformationKind
from transcriptmcp.lexical.transformations import TransformationSpec

__all__ = [
    "CandidateSegmentFinder",
    "DATE_TIME_TEMPLATES",
    "DateParser",
    "DateTimeFormat",
    "LexicalNormalizer",
    "PhraseTable",
    "TransformationKind",
    "TransformationSpec",
    "apply_transformations",
    "compile_formats",
    "default_transformations",
    "normalize_meridiem",
]
