"""Pydantic models for the MCP interface (extract_info, normalize_transcript).

Input models validate tool arguments; output models shape responses.
FastMCP serializes Pydantic models automatically.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel
from pydantic import Field

from transcriptmcp.engine.orchestrator import ExtractionStrategy
from transcriptmcp.lexical.transformations import TransformationSpec
from transcriptmcp.models.results import ExtractionResult

# ---------------------------------------------------------------------------
# Enums and constants
# ---------------------------------------------------------------------------


class ExtractInfoStatus(int, Enum):
    """Status codes reported by extract_info."""

    ok = 0
    missing_entities = 1


STATUS_DESCRIPTIONS: dict[ExtractInfoStatus, str] = {
    ExtractInfoStatus.ok: "Ok",
    ExtractInfoStatus.missing_entities: "MissingEntities",
}


class ExtractInfoFlag(str, Enum):
    """Flags attached to an extract_info response."""

    date_rejected = "dateRejected"


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------


class ExtractInfoInput(BaseModel):
    """Input for extract_info tool."""

    text: str = Field(
        min_length=1,
        description="Transcript text to extract data from.",
    )
    call_sid: str | None = Field(
        default=None,
        description="Identifier of the call the transcript belongs to.",
    )
    strategy: ExtractionStrategy = Field(
        default=ExtractionStrategy.lexical,
        description="Extraction strategy: lexical or assisted.",
    )
    transformations: list[TransformationSpec] | None = Field(
        default=None,
        description="Transformations applied before extraction, in order.",
    )
    min_date_time: datetime | None = Field(
        default=None,
        description="Dates earlier than this are rejected (default 1900-01-01).",
    )


# ---------------------------------------------------------------------------
# Output models
# ---------------------------------------------------------------------------


class ExtractInfoResult(BaseModel):
    """Response from extract_info."""

    call_sid: str | None = None
    status: str = Field(
        default="ok",
        description="Call status (ok, error).",
    )
    status_code: int | None = Field(
        default=None,
        description="0 when date, location and person were all found, else 1.",
    )
    status_desc: str | None = None
    data: ExtractionResult | None = None
    flags: list[ExtractInfoFlag] = Field(default_factory=list)
    error_code: str | None = None
    message: str | None = None


class NormalizeResult(BaseModel):
    """Response from normalize_transcript."""

    text: str = Field(description="Transcript text as received.")
    normalized: str = Field(description="Transcript after digit normalization.")
