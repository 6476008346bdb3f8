import itertools
import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .comparator import compare
from .errors import InvalidParameterError
from .models import ComparisonResult, Document, validate_ranking, validate_workers

# Documents shared with pool workers through the initializer so each
# comparison task only ships a pair of indices.
_WORKER_DOCUMENTS: Sequence[Document] = ()


def _init_worker(documents: Sequence[Document]) -> None:
    global _WORKER_DOCUMENTS
    _WORKER_DOCUMENTS = documents


def _compare_indices(indices: Tuple[int, int]) -> ComparisonResult:
    left, right = indices
    return compare(_WORKER_DOCUMENTS[left], _WORKER_DOCUMENTS[right])


def ensure_unique_ids(identifiers: Iterable[str]) -> None:
    seen: Set[str] = set()
    for identifier in identifiers:
        if identifier in seen:
            raise InvalidParameterError(
                "documents", f"duplicate document id {identifier!r}"
            )
        seen.add(identifier)


def _ordered(documents: Sequence[Document]) -> List[Document]:
    ensure_unique_ids(doc.doc_id for doc in documents)
    return sorted(documents, key=lambda doc: doc.doc_id)


def split_degenerate(
    documents: Sequence[Document],
) -> Tuple[List[Document], List[str]]:
    """Separate comparable documents from those with no shingles."""
    comparable: List[Document] = []
    degenerate_ids: List[str] = []
    for document in documents:
        if document.is_degenerate:
            degenerate_ids.append(document.doc_id)
        else:
            comparable.append(document)
    return comparable, sorted(degenerate_ids)


def iter_pairs(documents: Sequence[Document]) -> Iterator[Tuple[Document, Document]]:
    """Yield every unordered pair of distinct documents exactly once."""
    return itertools.combinations(_ordered(documents), 2)


def compare_all(
    documents: Sequence[Document], workers: int = 1
) -> List[ComparisonResult]:
    ordered = _ordered(documents)
    if workers <= 1 or len(ordered) < 3:
        return [compare(doc_a, doc_b) for doc_a, doc_b in itertools.combinations(ordered, 2)]

    index_pairs = list(itertools.combinations(range(len(ordered)), 2))
    chunksize = max(1, len(index_pairs) // (workers * 4))
    logging.debug(
        "Comparing %d pairs across %d worker processes", len(index_pairs), workers
    )
    with ProcessPoolExecutor(
        max_workers=workers, initializer=_init_worker, initargs=(ordered,)
    ) as executor:
        return list(executor.map(_compare_indices, index_pairs, chunksize=chunksize))


def sort_key(result: ComparisonResult) -> Tuple[float, int, Tuple[str, str]]:
    return -result.similarity, -result.overlap_count, result.doc_ids


def filter_and_rank(
    comparisons: Sequence[ComparisonResult],
    threshold: float,
    max_results: Optional[int] = None,
) -> List[ComparisonResult]:
    validate_ranking(threshold, max_results)
    kept = [result for result in comparisons if result.similarity >= threshold]
    kept.sort(key=sort_key)
    if max_results is not None:
        kept = kept[:max_results]
    return kept


def rank(
    documents: Sequence[Document],
    threshold: float,
    max_results: Optional[int] = None,
    workers: int = 1,
) -> List[ComparisonResult]:
    """Compare every pair of documents and return the ranked survivors.

    A pair survives when its similarity is at least ``threshold``. Survivors
    are ordered by descending similarity, then descending overlap count, then
    by identifier pair, and only afterwards capped at ``max_results``.
    Documents without shingles are left out of the comparison.
    """
    validate_ranking(threshold, max_results)
    validate_workers(workers)
    ensure_unique_ids(doc.doc_id for doc in documents)
    comparable, degenerate_ids = split_degenerate(documents)
    if degenerate_ids:
        logging.info("Too short to compare: %s", ", ".join(degenerate_ids))
    comparisons = compare_all(comparable, workers=workers)
    ranked = filter_and_rank(comparisons, threshold, max_results)
    logging.info(
        "Keeping %d of %d pairs (threshold %.3f)",
        len(ranked),
        len(comparisons),
        threshold,
    )
    return ranked
