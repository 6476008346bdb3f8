import logging
import string
import unicodedata
from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, List, Sequence, Tuple

from nltk.util import ngrams

from .errors import InvalidSourceError, SourceUnavailableError
from .models import (
    DetectionConfig,
    Document,
    SourceContent,
    TextSource,
    validate_shingle_length,
)


_ASCII_PUNCTUATION = frozenset(string.punctuation)


@lru_cache(maxsize=4096)
def _is_punctuation(char: str) -> bool:
    return char in _ASCII_PUNCTUATION or unicodedata.category(char).startswith("P")


class Preprocessor:
    """Turns raw source text into tokens, shingles and finally a Document."""

    def __init__(self, config: DetectionConfig) -> None:
        validate_shingle_length(config.n)
        self.config = config

    def decode(self, identifier: str, content: SourceContent) -> str:
        """Return the text of a source, reading a path at most once.

        Malformed byte sequences are replaced rather than raised so a
        partially corrupt file still yields a best-effort token sequence.
        """
        if isinstance(content, str):
            return content
        if isinstance(content, Path):
            try:
                content = content.read_bytes()
            except OSError as exc:
                raise SourceUnavailableError(
                    identifier, exc.strerror or exc.__class__.__name__
                ) from exc
        if isinstance(content, (bytes, bytearray)):
            return bytes(content).decode(self.config.encoding, errors="replace")
        raise InvalidSourceError(
            identifier, f"unsupported content type {type(content).__name__}"
        )

    def normalize(self, text: str) -> str:
        lowered = text.lower()
        return "".join(char for char in lowered if not _is_punctuation(char))

    def tokenize(self, text: str) -> List[str]:
        # str.split() with no separator collapses whitespace runs and
        # never yields empty strings
        return text.split()

    def prepare(self, identifier: str, content: SourceContent) -> Tuple[str, List[str]]:
        normalized = self.normalize(self.decode(identifier, content))
        return normalized, self.tokenize(normalized)

    def shingle(self, tokens: Sequence[str]) -> FrozenSet[str]:
        n = self.config.n
        if len(tokens) < n:
            return frozenset()
        return frozenset(" ".join(window) for window in ngrams(tokens, n))

    def build(self, source: TextSource) -> Document:
        _, tokens = self.prepare(source.identifier, source.content)
        shingles = self.shingle(tokens)
        logging.debug(
            "Built document %s: %d tokens, %d shingles",
            source.identifier,
            len(tokens),
            len(shingles),
        )
        return Document(
            doc_id=source.identifier, shingles=shingles, token_count=len(tokens)
        )


def tokenize(text: str) -> List[str]:
    preprocessor = Preprocessor(DetectionConfig())
    return preprocessor.tokenize(preprocessor.normalize(text))


def shingle(tokens: Sequence[str], n: int) -> FrozenSet[str]:
    return Preprocessor(DetectionConfig(n=n)).shingle(tokens)


def build_document(
    identifier: str, content: SourceContent, n: int, encoding: str = "utf-8"
) -> Document:
    preprocessor = Preprocessor(DetectionConfig(n=n, encoding=encoding))
    return preprocessor.build(TextSource(identifier=identifier, content=content))
