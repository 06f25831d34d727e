"""Unit test fixtures: FastMCP client and server state cleanup."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastmcp import Client

from transcriptmcp.assisted.annotations import AnnotationResponse


class StaticAnnotationService:
    """Annotation service double answering with a fixed payload."""

    def __init__(self, payload: dict) -> None:
        self.payload = payload
        self.calls: list[str] = []

    async def annotate(self, text: str) -> AnnotationResponse:
        self.calls.append(text)
        return AnnotationResponse.model_validate({"query": text, **self.payload})


def fixed_clock() -> datetime:
    return datetime(2019, 6, 1, 12, 0)


@pytest.fixture()
def static_annotation_service():
    """Return a factory for annotation service doubles."""
    return StaticAnnotationService


@pytest.fixture()
async def mcp_client():
    """Yield a FastMCP Client wired to the TranscriptMCP server."""
    from transcriptmcp.server import configure
    from transcriptmcp.server import mcp

    configure(clock=fixed_clock)

    async with Client(mcp) as client:
        yield client


@pytest.fixture(autouse=True)
def reset_server_state():
    """Drop server configuration between tests."""
    from transcriptmcp.server import shutdown

    shutdown()
    yield
    shutdown()
