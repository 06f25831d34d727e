"""Extraction orchestration.

``ExtractionOrchestrator`` composes either strategy into one
``ExtractionResult``:

- lexical: ``DateParser`` over the transcript text, no collaborator.
- assisted: the annotation service tags the text, then the pairer and
  selectors build dates, location, person and additional data.

The orchestrator holds only immutable configuration and stateless
helpers, so one instance can serve concurrent calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from enum import Enum
from time import perf_counter

from transcriptmcp.assisted.annotations import AnnotationResponse
from transcriptmcp.assisted.selectors import additional_entities
from transcriptmcp.assisted.selectors import select_dates
from transcriptmcp.assisted.selectors import select_location
from transcriptmcp.assisted.selectors import select_person
from transcriptmcp.assisted.service import AnnotationService
from transcriptmcp.config import ExtractorConfig
from transcriptmcp.lexical.date_parser import DateParser
from transcriptmcp.models.results import DateInfo
from transcriptmcp.models.results import ExtractionResult
from transcriptmcp.observability import record_latency

logger = logging.getLogger(__name__)


class ExtractionStrategy(str, Enum):
    """Strategies an extraction call can run."""

    lexical = "lexical"
    assisted = "assisted"


class ExtractionOrchestrator:
    """Runs the lexical or assisted strategy and builds ``ExtractionResult``."""

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        annotation_service: AnnotationService | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or ExtractorConfig()
        self._annotation_service = annotation_service
        self._date_parser = DateParser(self._config, clock=clock)

    @property
    def config(self) -> ExtractorConfig:
        return self._config

    @property
    def has_annotation_service(self) -> bool:
        return self._annotation_service is not None

    # ------------------------------------------------------------------
    # Lexical strategy
    # ------------------------------------------------------------------

    def extract_lexical(
        self, transcript: str, *, evaluated_text: str | None = None
    ) -> ExtractionResult:
        """Extract a date from *transcript* without any collaborator.

        *evaluated_text* is the (transformed) text to parse; it defaults
        to the transcript itself.
        """
        start = perf_counter()
        ok = False
        text = transcript if evaluated_text is None else evaluated_text
        try:
            result = ExtractionResult(
                transcription=transcript,
                evaluated_transcription=text,
            )
            date = self._date_parser.parse(text)
            if date is not None:
                result.date = date
                result.dates = [date]
            ok = True
            return result
        finally:
            record_latency(
                operation="extract.lexical",
                duration_ms=(perf_counter() - start) * 1000,
                ok=ok,
            )

    # ------------------------------------------------------------------
    # Assisted strategy
    # ------------------------------------------------------------------

    def extract_from_annotations(
        self,
        response: AnnotationResponse,
        *,
        transcript: str | None = None,
    ) -> ExtractionResult:
        """Build a result from an annotation payload already in hand."""
        names = self._config.entity_names
        entities = response.to_entities(names)
        composites = response.to_composites(names)

        intent = None
        intent_confidence = None
        if response.top_scoring_intent is not None:
            intent = response.top_scoring_intent.intent
            intent_confidence = response.top_scoring_intent.score

        dates = select_dates(entities, self._config)
        logger.debug(
            "Annotation payload: %d entities, %d composites, %d date value(s)",
            len(entities),
            len(composites),
            len(dates),
        )
        return ExtractionResult(
            intent=intent,
            intent_confidence=intent_confidence,
            transcription=transcript if transcript is not None else response.query,
            evaluated_transcription=response.query,
            date=dates[0] if dates else DateInfo(),
            dates=dates,
            location=select_location(entities, composites),
            person=select_person(entities, intent, self._config),
            additional_data=additional_entities(entities),
        )

    async def extract_assisted(
        self, transcript: str, *, evaluated_text: str | None = None
    ) -> ExtractionResult:
        """Send the text to the annotation service and extract from its answer.

        Raises ``RuntimeError`` when no service is configured and lets
        ``DataExtractorError`` from the service propagate.
        """
        if self._annotation_service is None:
            raise RuntimeError("Annotation service not configured.")

        start = perf_counter()
        ok = False
        text = transcript if evaluated_text is None else evaluated_text
        try:
            response = await self._annotation_service.annotate(text)
            result = self.extract_from_annotations(response, transcript=transcript)
            result.evaluated_transcription = text
            ok = True
            return result
        finally:
            record_latency(
                operation="extract.assisted",
                duration_ms=(perf_counter() - start) * 1000,
                ok=ok,
            )

    async def extract(
        self,
        transcript: str,
        strategy: ExtractionStrategy = ExtractionStrategy.lexical,
        *,
        evaluated_text: str | None = None,
    ) -> ExtractionResult:
        logger.info("Extracting transcript data with the %s strategy", strategy.value)
        if strategy is ExtractionStrategy.assisted:
            return await self.extract_assisted(transcript, evaluated_text=evaluated_text)
        return self.extract_lexical(transcript, evaluated_text=evaluated_text)


def reject_dates_before(result: ExtractionResult, min_date: datetime) -> bool:
    """Reset every date earlier than *min_date*; return whether any was reset.

    Dates without a full timestamp are left alone.
    """
    rejected = False
    kept: list[DateInfo] = []
    for value in result.dates:
        if value.full_date is not None and value.full_date < min_date:
            rejected = True
            kept.append(DateInfo())
        else:
            kept.append(value)
    if result.date.full_date is not None and result.date.full_date < min_date:
        rejected = True
        result.date = DateInfo()
    result.dates = kept
    if kept:
        result.date = kept[0]
    if rejected:
        logger.warning("Rejected date(s) earlier than %s", min_date.isoformat())
    return rejected
