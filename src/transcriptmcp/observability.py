"""Lightweight in-process observability for extraction calls.

Two kinds of aggregates are kept: latency per operation
(``extract.lexical``, ``nlp.annotate``, ``mcp.extract_info``...) and a
hit counter per date parser pass, showing how often the normalization
and homonym fallbacks are what finds a date.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import Lock

logger = logging.getLogger(__name__)


@dataclass
class LatencySummary:
    """Aggregated latency metrics for one operation."""

    count: int = 0
    error_count: int = 0
    total_ms: float = 0.0
    min_ms: float = 0.0
    max_ms: float = 0.0


class _ExtractionRecorder:
    def __init__(self) -> None:
        self._lock = Lock()
        self._latency: dict[str, LatencySummary] = {}
        self._date_passes: dict[str, int] = {}

    def record_latency(self, *, operation: str, duration_ms: float, ok: bool) -> None:
        duration = max(float(duration_ms), 0.0)
        with self._lock:
            summary = self._latency.setdefault(operation, LatencySummary())
            if summary.count == 0:
                summary.min_ms = summary.max_ms = duration
            else:
                summary.min_ms = min(summary.min_ms, duration)
                summary.max_ms = max(summary.max_ms, duration)
            summary.count += 1
            summary.total_ms += duration
            if not ok:
                summary.error_count += 1

        logger.debug(
            "latency operation=%s duration_ms=%.3f ok=%s", operation, duration, ok
        )

    def record_date_pass(self, pass_name: str) -> None:
        with self._lock:
            self._date_passes[pass_name] = self._date_passes.get(pass_name, 0) + 1

    def snapshot(self) -> dict[str, dict]:
        with self._lock:
            latency = {
                operation: {
                    "count": summary.count,
                    "error_count": summary.error_count,
                    "avg_ms": round(summary.total_ms / summary.count, 3),
                    "min_ms": round(summary.min_ms, 3),
                    "max_ms": round(summary.max_ms, 3),
                }
                for operation, summary in sorted(self._latency.items())
            }
            return {"latency": latency, "date_passes": dict(sorted(self._date_passes.items()))}

    def reset(self) -> None:
        with self._lock:
            self._latency.clear()
            self._date_passes.clear()


_RECORDER = _ExtractionRecorder()


def record_latency(*, operation: str, duration_ms: float, ok: bool = True) -> None:
    """Record one latency sample."""
    _RECORDER.record_latency(operation=operation, duration_ms=duration_ms, ok=ok)


def record_date_pass(pass_name: str) -> None:
    """Count which date parser pass produced a result (or ``none``)."""
    _RECORDER.record_date_pass(pass_name)


def extraction_metrics_snapshot() -> dict[str, dict]:
    """Return current in-process aggregates."""
    return _RECORDER.snapshot()


def reset_extraction_metrics() -> None:
    """Clear all aggregates (test helper)."""
    _RECORDER.reset()
