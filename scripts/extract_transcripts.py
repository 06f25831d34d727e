"""Run lexical extraction over a transcript file and write JSONL results.

Usage:
    uv run python scripts/extract_transcripts.py \
      --input transcripts.txt \
      --output reports/extractions.jsonl

The input holds one transcript per line; blank lines are skipped.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from transcriptmcp.config import ExtractorConfig
from transcriptmcp.engine.orchestrator import ExtractionOrchestrator
from transcriptmcp.observability import extraction_metrics_snapshot

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("--input", required=True)
    parser.add_argument("--output", default="reports/extractions.jsonl")
    parser.add_argument(
        "--reference-year",
        type=int,
        default=None,
        help="Year used for dates spoken without one (default: current year).",
    )
    return parser.parse_args()


def _load_transcripts(path: Path) -> list[tuple[int, str]]:
    rows: list[tuple[int, str]] = []
    with path.open("r", encoding="utf-8") as handle:
        for number, line in enumerate(handle, start=1):
            line = line.strip()
            if not line:
                continue
            rows.append((number, line))
    return rows


def main() -> int:
    args = _parse_args()
    input_path = Path(args.input)
    output_path = Path(args.output)
    if not input_path.exists():
        logger.error("Input file not found: %s", input_path)
        return 2

    orchestrator = ExtractionOrchestrator(
        ExtractorConfig(reference_year=args.reference_year)
    )
    transcripts = _load_transcripts(input_path)

    found = 0
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        for number, transcript in transcripts:
            result = orchestrator.extract_lexical(transcript)
            if not result.date.is_empty:
                found += 1
            row = {"line": number, "data": result.model_dump(mode="json")}
            handle.write(json.dumps(row, sort_keys=True, ensure_ascii=True))
            handle.write("\n")

    summary = {
        "input": str(input_path),
        "output": str(output_path),
        "transcripts": len(transcripts),
        "dates_found": found,
        "date_passes": extraction_metrics_snapshot()["date_passes"],
    }
    print(json.dumps(summary, indent=2, sort_keys=True, ensure_ascii=True))
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    raise SystemExit(main())
