import os
from pathlib import Path
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from plagiarism_detection.errors import InvalidParameterError, NotAFileError
from plagiarism_detection.loader import load_text_directory
from plagiarism_detection.models import DetectionConfig, DetectionResult, TextSource
from plagiarism_detection.service import PlagiarismDetectionService

DEFAULT_DATASET_DIR = os.environ.get("PLAGIARISM_DATASET_DIR")
DEFAULT_N = int(os.environ.get("PLAGIARISM_N", "4"))
DEFAULT_THRESHOLD = float(os.environ.get("PLAGIARISM_THRESHOLD", "0.5"))
DEFAULT_MAX_RESULTS = os.environ.get("PLAGIARISM_MAX_RESULTS")
DEFAULT_RECURSIVE = os.environ.get("PLAGIARISM_RECURSIVE", "false").lower() in {
    "1",
    "true",
    "yes",
}

app = FastAPI(title="Plagiarism Detection Service")


class DocumentPayload(BaseModel):
    doc_id: str
    text: str


class CompareRequest(BaseModel):
    documents: List[DocumentPayload]
    n: int = DEFAULT_N
    threshold: float = DEFAULT_THRESHOLD
    max_results: Optional[int] = None


class ComparisonResponse(BaseModel):
    doc_a: str
    doc_b: str
    overlap_count: int
    similarity: float


class SkippedResponse(BaseModel):
    identifier: str
    reason: str


class DetectionResponse(BaseModel):
    results: List[ComparisonResponse]
    degenerate_ids: List[str]
    skipped: List[SkippedResponse]


def _to_response(detection: DetectionResult) -> DetectionResponse:
    return DetectionResponse(
        results=[
            ComparisonResponse(
                doc_a=result.doc_ids[0],
                doc_b=result.doc_ids[1],
                overlap_count=result.overlap_count,
                similarity=result.similarity,
            )
            for result in detection.results
        ],
        degenerate_ids=detection.degenerate_ids,
        skipped=[
            SkippedResponse(identifier=item.identifier, reason=item.reason)
            for item in detection.skipped
        ],
    )


def _run(sources: List[TextSource], config: DetectionConfig) -> DetectionResponse:
    try:
        service = PlagiarismDetectionService(sources, config=config)
        return _to_response(service.run())
    except InvalidParameterError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/plagiarism/compare", response_model=DetectionResponse)
async def compare_documents(req: CompareRequest) -> DetectionResponse:
    sources = [
        TextSource(identifier=doc.doc_id, content=doc.text) for doc in req.documents
    ]
    config = DetectionConfig(
        n=req.n, threshold=req.threshold, max_results=req.max_results
    )
    return _run(sources, config)


@app.get("/plagiarism/report", response_model=DetectionResponse)
async def dataset_report() -> DetectionResponse:
    if not DEFAULT_DATASET_DIR:
        raise HTTPException(status_code=503, detail="No dataset directory configured")
    try:
        sources = load_text_directory(
            Path(DEFAULT_DATASET_DIR), recursive=DEFAULT_RECURSIVE
        )
    except (FileNotFoundError, NotADirectoryError, NotAFileError) as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    config = DetectionConfig(
        n=DEFAULT_N,
        threshold=DEFAULT_THRESHOLD,
        max_results=int(DEFAULT_MAX_RESULTS) if DEFAULT_MAX_RESULTS else None,
    )
    return _run(sources, config)
