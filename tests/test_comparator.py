import pytest

from plagiarism_detection.comparator import compare
from plagiarism_detection.errors import DegenerateDocumentError
from plagiarism_detection.models import Document


def make_document(doc_id, *shingles):
    return Document(doc_id=doc_id, shingles=frozenset(shingles))


def test_worked_example():
    doc_a = make_document("A", "a b", "b c", "c d")
    doc_b = make_document("B", "b c", "c d", "d e")
    result = compare(doc_a, doc_b)
    assert result.overlap_count == 2
    assert result.similarity == pytest.approx(2 / 3)
    assert result.doc_ids == ("A", "B")


def test_similarity_uses_smaller_set():
    small = make_document("small", "x y", "y z")
    large = make_document("large", "x y", "y z", "z w", "w v")
    result = compare(large, small)
    assert result.overlap_count == 2
    assert result.similarity == 1.0


def test_compare_is_symmetric():
    doc_a = make_document("zeta", "a b", "b c", "c d", "d e")
    doc_b = make_document("alpha", "b c", "q r")
    forward = compare(doc_a, doc_b)
    backward = compare(doc_b, doc_a)
    assert forward == backward
    assert forward.doc_ids == ("alpha", "zeta")


def test_self_similarity():
    doc = make_document("self", "a b", "b c", "c d")
    result = compare(doc, doc)
    assert result.overlap_count == len(doc.shingles)
    assert result.similarity == 1.0


def test_disjoint_documents():
    result = compare(make_document("A", "a b"), make_document("B", "c d"))
    assert result.overlap_count == 0
    assert result.similarity == 0.0


def test_degenerate_document_raises():
    empty = make_document("empty")
    with pytest.raises(DegenerateDocumentError) as excinfo:
        compare(make_document("full", "a b"), empty)
    assert excinfo.value.doc_id == "empty"
