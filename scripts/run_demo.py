#!/usr/bin/env python3
import argparse
import os
import sys
from pathlib import Path
from typing import List

import requests


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plagiarism detection API demo")
    parser.add_argument(
        "files", nargs="+", type=Path, help="Text files to compare against each other"
    )
    parser.add_argument("-n", type=int, default=4, help="Chunk length in words")
    parser.add_argument(
        "--threshold", type=float, default=0.5, help="Minimum similarity to report",
    )
    parser.add_argument(
        "--top", type=int, default=10, help="Number of top pairs to display",
    )
    parser.add_argument(
        "--api-url",
        default=os.environ.get("PLAGIARISM_API_URL", "http://localhost:8000"),
        help="Base URL of the plagiarism detection API",
    )
    return parser.parse_args()


def call_compare(api_url: str, files: List[Path], n: int, threshold: float, top: int) -> dict:
    documents = [
        {"doc_id": path.name, "text": path.read_text(encoding="utf-8", errors="replace")}
        for path in files
    ]
    response = requests.post(
        f"{api_url}/plagiarism/compare",
        json={"documents": documents, "n": n, "threshold": threshold, "max_results": top},
        timeout=120,
    )
    response.raise_for_status()
    return response.json()


def main() -> None:
    args = parse_args()

    if len(args.files) < 2:
        print("Provide at least two files to compare.")
        sys.exit(1)

    result = call_compare(args.api_url, args.files, args.n, args.threshold, args.top)

    pairs = result.get("results", [])
    if not pairs:
        print("No similar pairs found.")
    for idx, pair in enumerate(pairs, start=1):
        print("-" * 80)
        print(f"Pair {idx}: {pair['doc_a']} <-> {pair['doc_b']}")
        print(f"  Shared chunks: {pair['overlap_count']}")
        print(f"  Similarity: {pair['similarity']:.3f}")
    if pairs:
        print("-" * 80)
    for doc_id in result.get("degenerate_ids", []):
        print(f"Too short to compare: {doc_id}")


if __name__ == "__main__":
    main()
