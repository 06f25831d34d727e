"""Unit tests for annotation service clients and provider factory."""

from __future__ import annotations

import io
import json
from http.client import IncompleteRead
from urllib.error import HTTPError
from urllib.error import URLError
from urllib.parse import parse_qs
from urllib.parse import urlsplit

import pytest

from transcriptmcp.assisted import service as service_module
from transcriptmcp.assisted.annotations import AnnotationResponse
from transcriptmcp.assisted.service import build_annotation_service
from transcriptmcp.assisted.service import DataExtractorError
from transcriptmcp.assisted.service import HttpAnnotationService
from transcriptmcp.assisted.service import NoopAnnotationService
from transcriptmcp.config import AnnotationServiceConfig
from transcriptmcp.observability import extraction_metrics_snapshot


class _FakeResponse:
    def __init__(self, body: str | bytes, status: int = 200) -> None:
        self._body = body if isinstance(body, bytes) else body.encode("utf-8")
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc_info) -> None:
        return None


def _service() -> HttpAnnotationService:
    return HttpAnnotationService(
        endpoint="https://nlp.example.com/apps/abc?verbose=true",
        subscription_key="secret",
        timeout_seconds=7.0,
    )


class TestBuildAnnotationService:
    def test_luis_provider_requires_endpoint(self) -> None:
        with pytest.raises(ValueError, match="endpoint is required"):
            build_annotation_service(AnnotationServiceConfig(subscription_key="k"))

    def test_luis_provider_requires_subscription_key(self) -> None:
        with pytest.raises(ValueError, match="subscription_key is required"):
            build_annotation_service(
                AnnotationServiceConfig(endpoint="https://nlp.example.com/apps/abc")
            )

    def test_luis_provider_builds_http_client(self) -> None:
        service = build_annotation_service(
            AnnotationServiceConfig(
                endpoint="https://nlp.example.com/apps/abc", subscription_key="k"
            )
        )
        assert isinstance(service, HttpAnnotationService)

    def test_noop_provider_is_supported(self) -> None:
        service = build_annotation_service(AnnotationServiceConfig(provider=" NOOP "))
        assert isinstance(service, NoopAnnotationService)

    def test_unsupported_provider_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported annotation provider"):
            build_annotation_service(AnnotationServiceConfig(provider="watson"))


class TestNoopAnnotationService:
    async def test_returns_empty_payload(self) -> None:
        response = await NoopAnnotationService().annotate("hello")
        assert response.query == "hello"
        assert response.entities == []
        assert response.top_scoring_intent is None


class TestHttpAnnotationService:
    def test_request_url_appends_subscription_key(self) -> None:
        url = _service().request_url()
        query = parse_qs(urlsplit(url).query)
        assert query == {"verbose": ["true"], "subscription-key": ["secret"]}

    async def test_posts_transcript_as_json_string(self, monkeypatch) -> None:
        captured = {}

        def _fake_urlopen(request, timeout):
            captured["data"] = request.data
            captured["method"] = request.get_method()
            captured["content_type"] = request.get_header("Content-type")
            captured["timeout"] = timeout
            return _FakeResponse(json.dumps({"query": "hi there", "entities": []}))

        monkeypatch.setattr(service_module, "urlopen", _fake_urlopen)

        response = await _service().annotate("hi there")

        assert isinstance(response, AnnotationResponse)
        assert response.query == "hi there"
        assert json.loads(captured["data"]) == "hi there"
        assert captured["method"] == "POST"
        assert captured["content_type"] == "application/json"
        assert captured["timeout"] == 7.0
        latency = extraction_metrics_snapshot()["latency"]["nlp.annotate"]
        assert latency["count"] == 1
        assert latency["error_count"] == 0

    async def test_http_error_is_wrapped(self, monkeypatch) -> None:
        def _fake_urlopen(request, timeout):
            raise HTTPError(
                request.full_url, 401, "Unauthorized", {}, io.BytesIO(b"bad key")
            )

        monkeypatch.setattr(service_module, "urlopen", _fake_urlopen)

        with pytest.raises(DataExtractorError, match="HTTP 401") as exc_info:
            await _service().annotate("hi")
        assert isinstance(exc_info.value.__cause__, HTTPError)
        latency = extraction_metrics_snapshot()["latency"]["nlp.annotate"]
        assert latency["error_count"] == 1

    async def test_network_error_is_wrapped(self, monkeypatch) -> None:
        def _fake_urlopen(request, timeout):
            raise URLError("connection refused")

        monkeypatch.setattr(service_module, "urlopen", _fake_urlopen)

        with pytest.raises(DataExtractorError, match="network error"):
            await _service().annotate("hi")

    async def test_timeout_is_wrapped(self, monkeypatch) -> None:
        def _fake_urlopen(request, timeout):
            raise TimeoutError("timed out")

        monkeypatch.setattr(service_module, "urlopen", _fake_urlopen)

        with pytest.raises(DataExtractorError, match="IO error"):
            await _service().annotate("hi")

    async def test_non_success_status_is_rejected(self, monkeypatch) -> None:
        monkeypatch.setattr(
            service_module,
            "urlopen",
            lambda request, timeout: _FakeResponse("{}", status=202),
        )

        with pytest.raises(DataExtractorError, match="status 202"):
            await _service().annotate("hi")

    @pytest.mark.parametrize("body", ["not json", '{"entities": "nope"}', "[]"])
    async def test_malformed_payload_is_wrapped(self, monkeypatch, body) -> None:
        monkeypatch.setattr(
            service_module, "urlopen", lambda request, timeout: _FakeResponse(body)
        )

        with pytest.raises(DataExtractorError, match="malformed payload"):
            await _service().annotate("hi")

    async def test_undecodable_payload_is_wrapped(self, monkeypatch) -> None:
        monkeypatch.setattr(
            service_module,
            "urlopen",
            lambda request, timeout: _FakeResponse(b'{"query": "\xff\xfe"}'),
        )

        with pytest.raises(DataExtractorError, match="malformed payload"):
            await _service().annotate("hi")

    async def test_truncated_response_is_wrapped(self, monkeypatch) -> None:
        class _TruncatedResponse(_FakeResponse):
            def read(self) -> bytes:
                raise IncompleteRead(b"{\"qu", 100)

        monkeypatch.setattr(
            service_module,
            "urlopen",
            lambda request, timeout: _TruncatedResponse(""),
        )

        with pytest.raises(DataExtractorError, match="broken response") as exc_info:
            await _service().annotate("hi")
        assert isinstance(exc_info.value.__cause__, IncompleteRead)
        latency = extraction_metrics_snapshot()["latency"]["nlp.annotate"]
        assert latency["error_count"] == 1
