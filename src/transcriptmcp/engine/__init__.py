"""Engine domain: strategy orchestration."""

from transcriptmcp.engine.orchestrator import ExtractionOrchestrator
from transcriptmcp.engine.orchestrator import ExtractionStrategy
from transcriptmcp.engine.orchestrator import reject_dates_before

__all__ = [
    "ExtractionOrchestrator",
    "ExtractionStrategy",
    "reject_dates_before",
]
