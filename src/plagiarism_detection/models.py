from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple, Union

from .errors import InvalidParameterError

SourceContent = Union[str, bytes, Path]


@dataclass(frozen=True)
class TextSource:
    identifier: str
    content: SourceContent


@dataclass(frozen=True)
class Document:
    doc_id: str
    shingles: FrozenSet[str]
    token_count: int = 0

    @property
    def is_degenerate(self) -> bool:
        return not self.shingles


@dataclass(frozen=True)
class ComparisonResult:
    doc_ids: Tuple[str, str]
    overlap_count: int
    similarity: float


@dataclass(frozen=True)
class SkippedSource:
    identifier: str
    reason: str


@dataclass
class DetectionResult:
    results: List[ComparisonResult]
    degenerate_ids: List[str] = field(default_factory=list)
    skipped: List[SkippedSource] = field(default_factory=list)
    document_count: int = 0
    pair_count: int = 0


@dataclass(frozen=True)
class DetectionConfig:
    n: int = 4
    threshold: float = 0.5
    max_results: Optional[int] = None
    encoding: str = "utf-8"
    workers: int = 1

    def validate(self) -> "DetectionConfig":
        validate_shingle_length(self.n)
        validate_ranking(self.threshold, self.max_results)
        validate_workers(self.workers)
        return self


def validate_shingle_length(n: int) -> None:
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidParameterError("n", f"expected an integer, got {n!r}")
    if n < 1:
        raise InvalidParameterError("n", f"shingle length must be at least 1, got {n}")


def validate_ranking(threshold: float, max_results: Optional[int]) -> None:
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidParameterError("threshold", f"expected a number, got {threshold!r}")
    # NaN fails both comparisons
    if not 0.0 <= threshold <= 1.0:
        raise InvalidParameterError(
            "threshold", f"similarity threshold must lie in [0, 1], got {threshold}"
        )
    if max_results is None:
        return
    if isinstance(max_results, bool) or not isinstance(max_results, int):
        raise InvalidParameterError("max_results", f"expected an integer, got {max_results!r}")
    if max_results < 0:
        raise InvalidParameterError("max_results", f"must not be negative, got {max_results}")


def validate_workers(workers: int) -> None:
    if isinstance(workers, bool) or not isinstance(workers, int):
        raise InvalidParameterError("workers", f"expected an integer, got {workers!r}")
    if workers < 1:
        raise InvalidParameterError("workers", f"must be at least 1, got {workers}")
