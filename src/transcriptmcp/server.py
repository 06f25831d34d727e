"""TranscriptMCP: FastMCP server exposing transcript extraction tools.

Tools delegate to an ``ExtractionOrchestrator``. Call ``configure(...)``
(or ``configure_from_env()``) before using the server.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from collections.abc import Mapping
from datetime import datetime
from time import perf_counter

from dotenv import load_dotenv
from fastmcp import FastMCP
from pydantic import ValidationError

from transcriptmcp.assisted.service import AnnotationService
from transcriptmcp.assisted.service import build_annotation_service
from transcriptmcp.assisted.service import DataExtractorError
from transcriptmcp.config import AnnotationServiceConfig
from transcriptmcp.config import EntityNames
from transcriptmcp.config import ExtractorConfig
from transcriptmcp.config import ServerConfig
from transcriptmcp.engine.orchestrator import ExtractionOrchestrator
from transcriptmcp.engine.orchestrator import ExtractionStrategy
from transcriptmcp.engine.orchestrator import reject_dates_before
from transcriptmcp.lexical.normalizer import LexicalNormalizer
from transcriptmcp.lexical.transformations import apply_transformations
from transcriptmcp.lexical.transformations import default_transformations
from transcriptmcp.models.results import ExtractionResult
from transcriptmcp.models.schemas import ExtractInfoFlag
from transcriptmcp.models.schemas import ExtractInfoInput
from transcriptmcp.models.schemas import ExtractInfoResult
from transcriptmcp.models.schemas import ExtractInfoStatus
from transcriptmcp.models.schemas import NormalizeResult
from transcriptmcp.models.schemas import STATUS_DESCRIPTIONS
from transcriptmcp.observability import extraction_metrics_snapshot
from transcriptmcp.observability import record_latency

logger = logging.getLogger(__name__)

mcp = FastMCP("TranscriptMCP")

# ---------------------------------------------------------------------------
# Extractor instance (set via configure())
# ---------------------------------------------------------------------------

_orchestrator: ExtractionOrchestrator | None = None
_server_config = ServerConfig()
_normalizer = LexicalNormalizer()


def configure(
    *,
    extractor_config: ExtractorConfig | None = None,
    annotation_config: AnnotationServiceConfig | None = None,
    annotation_service: AnnotationService | None = None,
    server_config: ServerConfig | None = None,
    clock: Callable[[], datetime] | None = None,
) -> None:
    """Initialize the extractor used by the MCP tools.

    Without an annotation service (explicit or built from
    ``annotation_config``) only the lexical strategy is available.
    """
    global _orchestrator, _server_config
    service = annotation_service
    if service is None and annotation_config is not None:
        service = build_annotation_service(annotation_config)
    _orchestrator = ExtractionOrchestrator(extractor_config, service, clock=clock)
    _server_config = server_config or ServerConfig()


def _json_object_env(environ: Mapping[str, str], name: str) -> dict[str, str] | None:
    raw = environ.get(name)
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{name} must be a JSON object") from exc
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a JSON object")
    return {str(key): str(item) for key, item in value.items()}


def configure_from_env(environ: Mapping[str, str] | None = None) -> None:
    """Configure the server from ``TRANSCRIPTMCP_*`` environment variables.

    A ``.env`` file in the working directory is loaded first; variables
    already set in the process environment stay authoritative.
    """
    if environ is None:
        load_dotenv(override=False)
        environ = os.environ

    annotation_config = None
    provider = environ.get("TRANSCRIPTMCP_NLP_PROVIDER")
    if provider:
        annotation_config = AnnotationServiceConfig(
            provider=provider,
            endpoint=environ.get("TRANSCRIPTMCP_NLP_ENDPOINT"),
            subscription_key=environ.get("TRANSCRIPTMCP_NLP_SUBSCRIPTION_KEY"),
        )

    entity_names = _json_object_env(environ, "TRANSCRIPTMCP_ENTITY_NAMES")
    intent_types = _json_object_env(environ, "TRANSCRIPTMCP_PERSON_INTENT_TYPES")
    extractor_kwargs: dict = {}
    if entity_names is not None:
        extractor_kwargs["entity_names"] = EntityNames.from_mapping(entity_names)
    if intent_types is not None:
        extractor_kwargs["person_intent_types"] = intent_types

    configure(
        extractor_config=ExtractorConfig(**extractor_kwargs),
        annotation_config=annotation_config,
    )
    logger.info(
        "Configured TranscriptMCP (annotation provider: %s)", provider or "none"
    )


def shutdown() -> None:
    """Release server state."""
    global _orchestrator, _server_config
    _orchestrator = None
    _server_config = ServerConfig()


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


def _validation_message(exc: ValidationError) -> str:
    err = exc.errors()[0] if exc.errors() else {}
    return str(err.get("msg", "Invalid input"))


def _extract_error(
    call_sid: str | None, *, error_code: str, message: str
) -> ExtractInfoResult:
    return ExtractInfoResult(
        call_sid=call_sid,
        status="error",
        error_code=error_code,
        message=message,
    )


def _status_for(result: ExtractionResult) -> ExtractInfoStatus:
    if result.date.is_empty or result.location.is_empty or result.person.is_empty:
        return ExtractInfoStatus.missing_entities
    return ExtractInfoStatus.ok


@mcp.tool
async def extract_info(
    text: str,
    call_sid: str | None = None,
    strategy: str = "lexical",
    transformations: list[dict] | None = None,
    min_date_time: str | None = None,
) -> ExtractInfoResult:
    """Extract a date, location and person from a call transcript.

    Args:
        text: Transcript text.
        call_sid: Identifier of the call, echoed back in the response.
        strategy: "lexical" (no external service) or "assisted"
                  (NLP annotation service).
        transformations: Ordered transformations, each
                  {"name": ..., "parameters": {...}}. Defaults to
                  remove_punctuation + trim_end for the assisted strategy.
        min_date_time: ISO timestamp; earlier dates are rejected.
    """
    start = perf_counter()
    ok = False
    try:
        try:
            validated = ExtractInfoInput.model_validate(
                {
                    "text": text,
                    "call_sid": call_sid,
                    "strategy": strategy,
                    "transformations": transformations,
                    "min_date_time": min_date_time,
                }
            )
        except ValidationError as exc:
            return _extract_error(
                call_sid,
                error_code="validation_error",
                message=_validation_message(exc),
            )

        orchestrator = _orchestrator
        if orchestrator is None:
            return _extract_error(
                validated.call_sid,
                error_code="not_configured",
                message="Extractor not configured. Call configure() first.",
            )
        assisted = validated.strategy is ExtractionStrategy.assisted
        if assisted and not orchestrator.has_annotation_service:
            return _extract_error(
                validated.call_sid,
                error_code="not_configured",
                message="Annotation service not configured for the assisted strategy.",
            )

        specs = validated.transformations
        if specs is None:
            specs = (
                default_transformations(_server_config.max_transcript_length)
                if assisted
                else []
            )
        try:
            evaluated = apply_transformations(validated.text, specs)
        except ValueError as exc:
            return _extract_error(
                validated.call_sid, error_code="validation_error", message=str(exc)
            )

        try:
            result = await orchestrator.extract(
                validated.text, validated.strategy, evaluated_text=evaluated
            )
        except DataExtractorError as exc:
            logger.warning("Annotation service failure: %s", exc)
            return _extract_error(
                validated.call_sid,
                error_code="data_extractor_failure",
                message=str(exc),
            )

        flags: list[ExtractInfoFlag] = []
        min_date = validated.min_date_time or _server_config.default_min_date
        if min_date.tzinfo is not None:
            min_date = min_date.replace(tzinfo=None)
        if reject_dates_before(result, min_date):
            flags.append(ExtractInfoFlag.date_rejected)

        status = _status_for(result)
        ok = True
        return ExtractInfoResult(
            call_sid=validated.call_sid,
            status_code=status.value,
            status_desc=STATUS_DESCRIPTIONS[status],
            data=result,
            flags=flags,
        )
    finally:
        record_latency(
            operation="mcp.extract_info",
            duration_ms=(perf_counter() - start) * 1000,
            ok=ok,
        )


@mcp.tool
async def normalize_transcript(text: str, homonyms: bool = False) -> NormalizeResult:
    """Show the digit-normalized form the date parser works on.

    Args:
        text: Transcript text.
        homonyms: Apply homonym correction ("ate" -> "eight") first.
    """
    lowered = text.lower()
    if homonyms:
        lowered = _normalizer.replace_homonyms(lowered)
    return NormalizeResult(
        text=text,
        normalized=_normalizer.create_digits_for_date_parsing(lowered),
    )


@mcp.tool
async def extraction_metrics() -> dict:
    """Return in-process latency aggregates and date parser pass counters."""
    return extraction_metrics_snapshot()


def main() -> None:
    configure_from_env()
    mcp.run()


if __name__ == "__main__":
    main()
