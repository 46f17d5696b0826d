"""Tests for manuscript loading."""

import json
from pathlib import Path

import pytest

from bookflow.models import Chapter, Footnote, Manuscript, load_manuscript


def test_load_project_file(project_file: Path):
    manuscript = load_manuscript(project_file)

    assert manuscript.title == "Sample"
    assert manuscript.author == "Someone"
    assert [chapter.title for chapter in manuscript.chapters] == ["One", "Two"]
    assert manuscript.chapters[0].body == "First line.\nSecond line."
    assert manuscript.chapters[0].footnotes == [Footnote("*", "A note.")]
    assert manuscript.chapters[1].body_lines() == []


def test_flat_document():
    manuscript = Manuscript.from_dict(
        {"title": "Flat", "chapters": [{"title": "C", "body": "x\ny", "footnotes": [{"marker": 1, "content": "n"}]}]}
    )

    assert manuscript.author == ""
    assert manuscript.chapters == [Chapter("C", "x\ny", [Footnote("1", "n")])]


def test_invalid_json(tmp_path: Path):
    path = tmp_path / "bad.hype"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid project file"):
        load_manuscript(path)


def test_wrong_shape(tmp_path: Path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps(["a"]), encoding="utf-8")

    with pytest.raises(ValueError):
        load_manuscript(path)


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_manuscript(tmp_path / "missing.hype")


def test_body_lines_follow_newlines_only():
    assert Chapter("C", "").body_lines() == []
    assert Chapter("C", "a\r\nb\n").body_lines() == ["a", "b"]
    assert Chapter("C", "a\n\n").body_lines() == ["a", ""]
    assert Chapter("C", "page\x0cbreak kept").body_lines() == ["page\x0cbreak kept"]


@pytest.mark.parametrize(
    "document",
    [
        {"metadata": "Title", "chapters": []},
        {"title": "T", "chapters": [{"title": "C", "footnotes": ["not an object"]}]},
    ],
)
def test_malformed_entries_raise_value_error(tmp_path: Path, document):
    path = tmp_path / "malformed.hype"
    path.write_text(json.dumps(document), encoding="utf-8")

    with pytest.raises(ValueError):
        load_manuscript(path)
