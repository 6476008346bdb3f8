import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import InvalidParameterError, NotAFileError
from .loader import load_text_directory
from .models import DetectionConfig
from .report import format_exclusions, format_table, write_csv
from .service import PlagiarismDetectionService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catch-plagiarists",
        description=(
            "Compare every pair of plaintext files in a directory by the "
            "n-word chunks they share and list the most similar pairs"
        ),
    )
    parser.add_argument(
        "path", nargs="?", type=Path, help="Directory to search (overrides -d)"
    )
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=Path.cwd(),
        help="Directory to search through (default: current directory)",
    )
    parser.add_argument(
        "-r", "--recursive", action="store_true", help="Search directory recursively"
    )
    parser.add_argument(
        "-n", type=int, default=4, help="Chunk length in words (default: 4)"
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=0.5,
        help="Minimum similarity in [0, 1] for a pair to be listed (default: 0.5)",
    )
    parser.add_argument(
        "-m", "--max-results", type=int, help="Show at most this many pairs"
    )
    parser.add_argument(
        "--pattern", default="*", help="Only compare files matching this glob"
    )
    parser.add_argument(
        "--encoding", default="utf-8", help="Text encoding of the documents"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes used for pairwise comparison",
    )
    parser.add_argument("--csv", type=Path, help="Also write the results to a CSV file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Run in verbose mode"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else getattr(logging, args.log_level.upper())
    logging.basicConfig(level=level, format="[%(asctime)s] %(levelname)s %(message)s")

    try:
        config = DetectionConfig(
            n=args.n,
            threshold=args.threshold,
            max_results=args.max_results,
            encoding=args.encoding,
            workers=args.workers,
        ).validate()
    except InvalidParameterError as exc:
        parser.error(str(exc))

    directory: Path = args.path or args.directory
    if not directory.is_dir():
        print(f"ERROR: invalid directory: {directory}", file=sys.stderr)
        return 1

    try:
        sources = load_text_directory(
            directory, pattern=args.pattern, recursive=args.recursive
        )
    except NotAFileError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    detection = PlagiarismDetectionService(sources, config=config).run()

    print(format_table(detection.results))
    exclusions = format_exclusions(detection)
    if exclusions:
        print()
        print(exclusions)
    if args.csv:
        write_csv(detection.results, args.csv)
        logging.info("Wrote %d rows to %s", len(detection.results), args.csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
