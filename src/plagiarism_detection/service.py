import logging
from typing import Iterable, List, Optional, Tuple

from .errors import InvalidSourceError
from .models import DetectionConfig, DetectionResult, Document, SkippedSource, TextSource
from .preprocess import Preprocessor
from .ranking import compare_all, ensure_unique_ids, filter_and_rank, split_degenerate


class PlagiarismDetectionService:
    """Shingle overlap detection: tokenize → shingle → compare → rank."""

    def __init__(
        self,
        sources: Iterable[TextSource],
        config: Optional[DetectionConfig] = None,
    ) -> None:
        self.config = (config or DetectionConfig()).validate()
        self.preprocessor = Preprocessor(self.config)
        self.sources: List[TextSource] = list(sources)

    def build_documents(self) -> Tuple[List[Document], List[SkippedSource]]:
        documents: List[Document] = []
        skipped: List[SkippedSource] = []
        for index, source in enumerate(self.sources, start=1):
            try:
                documents.append(self.preprocessor.build(source))
            except InvalidSourceError as exc:
                logging.warning("Skipping %s: %s", source.identifier, exc.reason)
                skipped.append(SkippedSource(identifier=source.identifier, reason=exc.reason))
            if index % 100 == 0:
                logging.debug("Built %d/%d documents", index, len(self.sources))
        return documents, skipped

    def run(self) -> DetectionResult:
        logging.info(
            "Building %d documents with shingle length %d",
            len(self.sources),
            self.config.n,
        )
        documents, skipped = self.build_documents()
        ensure_unique_ids(
            [doc.doc_id for doc in documents] + [item.identifier for item in skipped]
        )

        comparable, degenerate_ids = split_degenerate(documents)
        for doc_id in degenerate_ids:
            logging.info(
                "Excluding %s: too short for n=%d", doc_id, self.config.n
            )

        comparisons = compare_all(comparable, workers=self.config.workers)
        results = filter_and_rank(
            comparisons, self.config.threshold, self.config.max_results
        )
        logging.info(
            "Compared %d pairs from %d documents; %d reported",
            len(comparisons),
            len(comparable),
            len(results),
        )
        return DetectionResult(
            results=results,
            degenerate_ids=degenerate_ids,
            skipped=skipped,
            document_count=len(comparable),
            pair_count=len(comparisons),
        )


def detect(
    sources: Iterable[TextSource], config: Optional[DetectionConfig] = None
) -> DetectionResult:
    return PlagiarismDetectionService(sources, config=config).run()
