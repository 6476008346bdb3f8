import fnmatch
import json
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .errors import NotAFileError
from .models import TextSource


def load_jsonl(
    path: Path, id_field: str = "doc_id", text_field: str = "text"
) -> List[TextSource]:
    sources: List[TextSource] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if not line.strip():
                continue
            payload = json.loads(line)
            sources.append(
                TextSource(
                    identifier=str(payload.get(id_field)),
                    content=payload.get(text_field) or "",
                )
            )
    return sources


def load_csv(path: Path, text_column: str, id_column: str) -> List[TextSource]:
    frame = pd.read_csv(path)
    sources: List[TextSource] = []
    for _, row in frame.iterrows():
        text = str(row[text_column]) if not pd.isna(row[text_column]) else ""
        sources.append(TextSource(identifier=str(row[id_column]), content=text))
    return sources


def load_text_directory(
    directory: Path,
    pattern: str = "*",
    recursive: bool = False,
    limit: Optional[int] = None,
) -> List[TextSource]:
    """Collect the files under ``directory`` as lazily-read text sources.

    Identifiers are paths relative to ``directory`` so results stay stable no
    matter where the process runs from. Files are not read here; a file that
    disappears before it is built surfaces as a skipped source.
    """
    if not directory.exists():
        raise FileNotFoundError(f"Directory {directory} not found")
    if not directory.is_dir():
        raise NotADirectoryError(f"{directory} is not a directory")

    sources: List[TextSource] = []
    _collect(directory, directory, pattern, recursive, limit, sources)
    logging.info("Found %d files under %s", len(sources), directory)
    return sources


def _collect(
    root: Path,
    directory: Path,
    pattern: str,
    recursive: bool,
    limit: Optional[int],
    sources: List[TextSource],
) -> bool:
    logging.debug("Fetching documents from %s", directory)
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if limit is not None and len(sources) >= limit:
            logging.info("Reached limit of %d files", limit)
            return False
        if entry.name.startswith("."):
            continue
        if entry.is_dir():
            if entry.is_symlink():
                logging.debug("Not following symlinked directory %s", entry)
                continue
            if recursive and not _collect(root, entry, pattern, recursive, limit, sources):
                return False
        elif entry.is_file():
            if fnmatch.fnmatch(entry.name, pattern):
                identifier = entry.relative_to(root).as_posix()
                logging.debug("Adding %s to document list", identifier)
                sources.append(TextSource(identifier=identifier, content=entry))
        else:
            raise NotAFileError(str(entry), "neither file nor directory")
    return True
