import json
import os
from pathlib import Path

import pytest

from plagiarism_detection.errors import NotAFileError
from plagiarism_detection.loader import load_csv, load_jsonl, load_text_directory


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadTextDirectory:
    def test_lists_files_sorted_with_relative_ids(self, corpus_dir):
        sources = load_text_directory(corpus_dir)
        assert [source.identifier for source in sources] == [
            "biology.txt",
            "copied.txt",
            "essay.txt",
        ]
        assert all(isinstance(source.content, Path) for source in sources)

    def test_does_not_read_files(self, tmp_path):
        path = write(tmp_path / "later.txt", "one two")
        sources = load_text_directory(tmp_path)
        path.unlink()
        assert sources[0].content == path

    def test_subdirectories_need_recursive(self, tmp_path):
        write(tmp_path / "top.txt", "top")
        write(tmp_path / "nested" / "deep.txt", "deep")
        flat = load_text_directory(tmp_path)
        assert [source.identifier for source in flat] == ["top.txt"]
        deep = load_text_directory(tmp_path, recursive=True)
        assert [source.identifier for source in deep] == ["nested/deep.txt", "top.txt"]

    def test_hidden_files_are_skipped(self, tmp_path):
        write(tmp_path / ".hidden", "secret")
        write(tmp_path / "shown.txt", "visible")
        assert [s.identifier for s in load_text_directory(tmp_path)] == ["shown.txt"]

    def test_pattern_filters_names(self, tmp_path):
        write(tmp_path / "a.txt", "a")
        write(tmp_path / "b.md", "b")
        sources = load_text_directory(tmp_path, pattern="*.txt")
        assert [source.identifier for source in sources] == ["a.txt"]

    def test_limit(self, corpus_dir):
        assert len(load_text_directory(corpus_dir, limit=2)) == 2

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_text_directory(tmp_path / "absent")

    def test_file_is_not_a_directory(self, tmp_path):
        path = write(tmp_path / "file.txt", "text")
        with pytest.raises(NotADirectoryError):
            load_text_directory(path)

    def test_broken_symlink_is_neither_file_nor_directory(self, tmp_path):
        write(tmp_path / "fine.txt", "text")
        os.symlink(tmp_path / "nowhere", tmp_path / "dangling")
        with pytest.raises(NotAFileError) as excinfo:
            load_text_directory(tmp_path)
        assert excinfo.value.identifier.endswith("dangling")

    def test_symlinked_directories_are_not_followed(self, tmp_path):
        write(tmp_path / "top.txt", "top")
        write(tmp_path / "nested" / "deep.txt", "deep")
        os.symlink(tmp_path, tmp_path / "nested" / "loop")
        sources = load_text_directory(tmp_path, recursive=True)
        assert [s.identifier for s in sources] == ["nested/deep.txt", "top.txt"]

    def test_working_directory_is_unchanged(self, corpus_dir):
        before = os.getcwd()
        load_text_directory(corpus_dir, recursive=True)
        assert os.getcwd() == before


def test_load_jsonl(tmp_path):
    path = tmp_path / "docs.jsonl"
    rows = [{"doc_id": 1, "text": "first text"}, {"doc_id": "two", "text": None}]
    path.write_text(
        "\n".join(json.dumps(row) for row in rows) + "\n\n", encoding="utf-8"
    )
    sources = load_jsonl(path)
    assert [(s.identifier, s.content) for s in sources] == [
        ("1", "first text"),
        ("two", ""),
    ]


def test_load_csv(tmp_path):
    path = tmp_path / "docs.csv"
    path.write_text("name,body\nx,hello world\ny,\n", encoding="utf-8")
    sources = load_csv(path, text_column="body", id_column="name")
    assert [(s.identifier, s.content) for s in sources] == [
        ("x", "hello world"),
        ("y", ""),
    ]
