"""Shared pytest fixtures."""

import json
from pathlib import Path

import pytest
import reportlab

from bookflow.config import ExportConfig, FontPolicy
from bookflow.models import Chapter, Footnote, Manuscript


@pytest.fixture
def vera_path() -> Path:
    """Bitstream Vera, shipped inside the reportlab distribution."""
    path = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"
    if not path.exists():
        pytest.skip("reportlab was installed without its bundled TrueType fonts")
    return path


@pytest.fixture
def builtin_config() -> ExportConfig:
    """Config whose fallback chain goes straight to the built-in fonts."""
    return ExportConfig(fonts=FontPolicy(families=[], paths=[], google_families=[]))


@pytest.fixture
def manuscript() -> Manuscript:
    return Manuscript(
        title="The Long Road",
        author="A. Writer",
        chapters=[
            Chapter(
                title="Departure",
                body="It was early.\n\nThe road was long, and the sky was grey.",
                footnotes=[Footnote("1", "First note."), Footnote("2", "Second note.")],
            ),
            Chapter(title="Arrival", body="We arrived."),
        ],
    )


@pytest.fixture
def project_file(tmp_path: Path) -> Path:
    """A project file in the editor's .hype layout."""
    data = {
        "version": "1.0",
        "metadata": {"title": "Sample", "author": "Someone", "created": "", "modified": ""},
        "settings": {"font": "Pretendard", "fontSize": 16, "lineHeight": 1.8},
        "chapters": [
            {
                "id": "c1",
                "title": "One",
                "content": "First line.\nSecond line.",
                "footnotes": [{"id": "f1", "marker": "*", "content": "A note."}],
                "createdAt": "",
                "modifiedAt": "",
            },
            {"id": "c2", "title": "Two", "content": "", "footnotes": []},
        ],
    }
    path = tmp_path / "sample.hype"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
