"""Tests for the export pipeline."""

from pathlib import Path

import pytest

from bookflow.config import ExportConfig, LayoutConfig
from bookflow.errors import ExportAborted, OutputWriteError
from bookflow.export import export_pdf, paginate
from bookflow.fonts import FontCatalog
from bookflow.models import Chapter, Manuscript
from bookflow.render.base import MemorySink


def test_paginate_places_blocks_in_order(manuscript: Manuscript):
    sink = MemorySink()

    state = paginate(manuscript, sink, LayoutConfig(), 45)

    assert state.page_count == 1
    assert sink.texts == [
        "The Long Road",
        "A. Writer",
        "Departure",
        "It was early.",
        "The road was long, and the sky was grey.",
        "─────────",
        "1 First note.",
        "2 Second note.",
        "Arrival",
        "We arrived.",
    ]
    assert sink.closed is False


def test_paginate_vertical_positions(manuscript: Manuscript):
    sink = MemorySink()

    paginate(manuscript, sink, LayoutConfig(), 45)

    ys = {p.text: p.y for p in sink.placements}
    assert ys["The Long Road"] == pytest.approx(270.0)
    assert ys["A. Writer"] == pytest.approx(258.0)
    assert ys["Departure"] == pytest.approx(235.0)
    assert ys["It was early."] == pytest.approx(225.0)
    # blank line advances half a line
    assert ys["The road was long, and the sky was grey."] == pytest.approx(216.0)
    assert ys["─────────"] == pytest.approx(205.0)
    assert ys["1 First note."] == pytest.approx(199.0)
    assert ys["2 Second note."] == pytest.approx(194.2)
    assert ys["Arrival"] == pytest.approx(174.4)


def test_long_manuscript_spans_pages_in_order():
    chapters = [Chapter(title=f"Chapter {i}", body="\n".join(f"{i}-{n} 가나다라 마바사" for n in range(30))) for i in range(5)]
    sink = MemorySink()

    state = paginate(Manuscript(title="Long", chapters=chapters), sink, LayoutConfig(), 45)

    assert state.page_count == sink.page_count > 1
    headings = [p for p in sink.placements if p.text.startswith("Chapter")]
    assert [p.text for p in headings] == [f"Chapter {i}" for i in range(5)]
    for index in range(sink.page_count):
        ys = [p.y for p in sink.page(index)]
        assert ys == sorted(ys, reverse=True)
        assert min(ys) >= 25.0


def test_abort_hook_is_checked_per_block(manuscript: Manuscript):
    calls = []

    def should_abort() -> bool:
        calls.append(1)
        return len(calls) > 3

    sink = MemorySink()
    with pytest.raises(ExportAborted):
        paginate(manuscript, sink, LayoutConfig(), 45, should_abort=should_abort)

    assert len(sink.placements) == 3


def test_export_pdf_with_builtin_font(tmp_path: Path, manuscript: Manuscript, builtin_config: ExportConfig):
    output = tmp_path / "book.pdf"

    result = export_pdf(manuscript, output, builtin_config, catalog=FontCatalog([]))

    assert result.path == output
    assert result.pages == 1
    assert result.budget == 45
    assert result.font.is_builtin
    assert output.read_bytes().startswith(b"%PDF")


def test_export_pdf_with_font_file(tmp_path: Path, vera_path: Path, manuscript: Manuscript, builtin_config: ExportConfig):
    output = tmp_path / "vera.pdf"

    result = export_pdf(manuscript, output, builtin_config, font_path=vera_path, catalog=FontCatalog([]))

    assert result.font.path == vera_path
    assert output.stat().st_size > 0


def test_export_pdf_measured_budget(tmp_path: Path, manuscript: Manuscript, builtin_config: ExportConfig):
    layout = builtin_config.layout.model_copy(update={"measure_budget": True})
    config = builtin_config.model_copy(update={"layout": layout})

    result = export_pdf(manuscript, tmp_path / "m.pdf", config, catalog=FontCatalog([]))

    assert result.budget != 45
    assert result.budget > 1


def test_export_pdf_many_pages(tmp_path: Path, builtin_config: ExportConfig):
    body = "\n".join(f"Line {n} of a fairly long chapter body" for n in range(200))
    manuscript = Manuscript(title="Big", chapters=[Chapter(title="Only", body=body)])

    result = export_pdf(manuscript, tmp_path / "big.pdf", builtin_config, catalog=FontCatalog([]))

    assert result.pages == 6


def test_unwritable_output(tmp_path: Path, manuscript: Manuscript, builtin_config: ExportConfig):
    output = tmp_path / "missing-dir" / "book.pdf"

    with pytest.raises(OutputWriteError) as excinfo:
        export_pdf(manuscript, output, builtin_config, catalog=FontCatalog([]))

    assert excinfo.value.path == output


def test_aborted_export_writes_nothing(tmp_path: Path, manuscript: Manuscript, builtin_config: ExportConfig):
    output = tmp_path / "aborted.pdf"

    with pytest.raises(ExportAborted):
        export_pdf(manuscript, output, builtin_config, should_abort=lambda: True, catalog=FontCatalog([]))

    assert not output.exists()
