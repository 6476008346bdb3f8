from pathlib import Path
from typing import List, Sequence

import pandas as pd

from .models import ComparisonResult, DetectionResult

PAIR_WIDTH = 50
COUNT_WIDTH = 8
COLUMNS = ["doc_a", "doc_b", "overlap_count", "similarity"]


def format_row(result: ComparisonResult) -> str:
    pair = f"{result.doc_ids[0]}, {result.doc_ids[1]}"
    return (
        pair.ljust(PAIR_WIDTH)
        + str(result.overlap_count).ljust(COUNT_WIDTH)
        + f"{result.similarity:.4f}"
    )


def format_table(results: Sequence[ComparisonResult]) -> str:
    lines = ["Documents".ljust(PAIR_WIDTH) + "Shared".ljust(COUNT_WIDTH) + "Similarity"]
    lines.extend(format_row(result) for result in results)
    return "\n".join(lines)


def format_exclusions(detection: DetectionResult) -> str:
    lines: List[str] = []
    for doc_id in detection.degenerate_ids:
        lines.append(f"too short to compare: {doc_id}")
    for skipped in detection.skipped:
        lines.append(f"skipped: {skipped.identifier} ({skipped.reason})")
    return "\n".join(lines)


def results_to_frame(results: Sequence[ComparisonResult]) -> pd.DataFrame:
    rows = [
        {
            "doc_a": result.doc_ids[0],
            "doc_b": result.doc_ids[1],
            "overlap_count": result.overlap_count,
            "similarity": result.similarity,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def write_csv(results: Sequence[ComparisonResult], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    results_to_frame(results).to_csv(output_path, index=False)
