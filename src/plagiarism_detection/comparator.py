from typing import Tuple

from .errors import DegenerateDocumentError
from .models import ComparisonResult, Document


def pair_key(doc_a: Document, doc_b: Document) -> Tuple[str, str]:
    if doc_b.doc_id < doc_a.doc_id:
        return doc_b.doc_id, doc_a.doc_id
    return doc_a.doc_id, doc_b.doc_id


def compare(doc_a: Document, doc_b: Document) -> ComparisonResult:
    """Count shared shingles and normalise by the smaller shingle set.

    Raises DegenerateDocumentError when either document has no shingles,
    since the similarity would otherwise divide by zero.
    """
    for doc in (doc_a, doc_b):
        if doc.is_degenerate:
            raise DegenerateDocumentError(doc.doc_id)

    overlap = len(doc_a.shingles & doc_b.shingles)
    smallest = min(len(doc_a.shingles), len(doc_b.shingles))
    return ComparisonResult(
        doc_ids=pair_key(doc_a, doc_b),
        overlap_count=overlap,
        similarity=overlap / smallest,
    )
