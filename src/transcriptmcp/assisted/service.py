"""Client side of the external NLP annotation service.

The service is a collaborator: this module only sends the transcript
and validates the JSON it gets back. Transport failures, non-success
statuses and malformed payloads all surface as ``DataExtractorError``;
nothing is retried here.
"""

from __future__ import annotations

import asyncio
import json
import logging
from http.client import HTTPException
from time import perf_counter
from typing import Protocol
from typing import runtime_checkable
from urllib.error import HTTPError
from urllib.error import URLError
from urllib.parse import parse_qsl
from urllib.parse import urlencode
from urllib.parse import urlsplit
from urllib.parse import urlunsplit
from urllib.request import Request
from urllib.request import urlopen

from pydantic import ValidationError

from transcriptmcp.assisted.annotations import AnnotationResponse
from transcriptmcp.config import AnnotationServiceConfig
from transcriptmcp.observability import record_latency

logger = logging.getLogger(__name__)


class DataExtractorError(Exception):
    """Raised when the annotation service cannot produce a usable response."""


@runtime_checkable
class AnnotationService(Protocol):
    """Protocol for annotation service clients."""

    async def annotate(self, text: str) -> AnnotationResponse: ...


class NoopAnnotationService(AnnotationService):
    """Deterministic service that recognizes nothing."""

    async def annotate(self, text: str) -> AnnotationResponse:
        return AnnotationResponse(query=text)


class HttpAnnotationService(AnnotationService):
    """Annotation service reached over HTTP (LUIS-style prediction endpoint).

    The transcript is POSTed as a JSON string; the subscription key is
    passed as the ``subscription-key`` query parameter.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        subscription_key: str,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._endpoint = endpoint
        self._subscription_key = subscription_key
        self._timeout_seconds = timeout_seconds

    def request_url(self) -> str:
        parts = urlsplit(self._endpoint)
        query = parse_qsl(parts.query, keep_blank_values=True)
        query.append(("subscription-key", self._subscription_key))
        return urlunsplit(parts._replace(query=urlencode(query)))

    async def annotate(self, text: str) -> AnnotationResponse:
        start = perf_counter()
        ok = False
        try:
            response = await asyncio.to_thread(self._annotate_sync, text)
            ok = True
            return response
        finally:
            record_latency(
                operation="nlp.annotate",
                duration_ms=(perf_counter() - start) * 1000,
                ok=ok,
            )

    def _annotate_sync(self, text: str) -> AnnotationResponse:
        request = Request(
            url=self.request_url(),
            data=json.dumps(text).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urlopen(request, timeout=self._timeout_seconds) as response:
                status = getattr(response, "status", 200)
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise DataExtractorError(
                f"annotation service HTTP {exc.code}: {detail[:200]}"
            ) from exc
        except URLError as exc:
            raise DataExtractorError(
                f"annotation service network error: {exc.reason}"
            ) from exc
        except OSError as exc:
            raise DataExtractorError(f"annotation service IO error: {exc}") from exc
        except HTTPException as exc:
            raise DataExtractorError(
                f"annotation service sent a broken response: {exc!r}"
            ) from exc

        logger.debug("annotation service answered %d bytes", len(raw))

        if status != 200:
            raise DataExtractorError(f"annotation service returned status {status}")

        try:
            return AnnotationResponse.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as exc:
            raise DataExtractorError(
                "annotation service returned a malformed payload"
            ) from exc


def build_annotation_service(config: AnnotationServiceConfig) -> AnnotationService:
    """Create a concrete service client from ``AnnotationServiceConfig``."""

    provider = config.provider.strip().lower()
    if provider == "luis":
        if not config.endpoint:
            raise ValueError("annotation endpoint is required when provider='luis'")
        if not config.subscription_key:
            raise ValueError(
                "annotation subscription_key is required when provider='luis'"
            )
        return HttpAnnotationService(
            endpoint=config.endpoint,
            subscription_key=config.subscription_key,
            timeout_seconds=config.timeout_seconds,
        )
    if provider == "noop":
        return NoopAnnotationService()
    raise ValueError(
        f"Unsupported annotation provider '{config.provider}'. "
        "Supported providers: luis, noop."
    )
