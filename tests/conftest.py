from pathlib import Path
from typing import Dict

import pytest

from plagiarism_detection.models import TextSource


ESSAY = (
    "The quick brown fox jumps over the lazy dog while the farmer sleeps "
    "soundly in the old red barn beside the river."
)
COPIED_ESSAY = (
    "Everyone knows the quick brown fox jumps over the lazy dog while the "
    "farmer sleeps soundly in the old red barn."
)
UNRELATED = (
    "Photosynthesis converts light energy into chemical energy stored in "
    "glucose molecules inside plant cells."
)


@pytest.fixture
def corpus_texts() -> Dict[str, str]:
    return {"essay.txt": ESSAY, "copied.txt": COPIED_ESSAY, "biology.txt": UNRELATED}


@pytest.fixture
def corpus_sources(corpus_texts):
    return [TextSource(identifier=name, content=text) for name, text in corpus_texts.items()]


@pytest.fixture
def corpus_dir(tmp_path: Path, corpus_texts) -> Path:
    for name, text in corpus_texts.items():
        (tmp_path / name).write_text(text, encoding="utf-8")
    return tmp_path
