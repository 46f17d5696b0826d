"""CLI interface for bookflow."""

import logging
from pathlib import Path

import click

from bookflow.config import PAGE_SIZES, load_config, sanitize_filename
from bookflow.errors import ExportError
from bookflow.export import export_pdf, paginate
from bookflow.fonts import resolve_font
from bookflow.fonts.catalog import FontCatalog, platform_font_dirs
from bookflow.fonts.metrics import LATIN_PROBE, char_budget
from bookflow.layout.flow import LayoutState
from bookflow.models import load_manuscript
from bookflow.render.base import MemorySink


@click.group()
@click.version_option(package_name="bookflow")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Export manuscripts to paginated PDF documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _layout_options(func):
    func = click.option(
        "--measure",
        is_flag=True,
        help="Derive the character budget from measured glyph widths.",
    )(func)
    func = click.option(
        "--budget",
        type=click.IntRange(min=1),
        help="Maximum characters per line. Uses config default if not specified.",
    )(func)
    func = click.option(
        "--page-size",
        type=click.Choice(list(PAGE_SIZES.keys()), case_sensitive=False),
        help="Page size. Uses config default (A4) if not specified.",
    )(func)
    func = click.option(
        "--config",
        type=click.Path(exists=True, path_type=Path),
        help="Path to a TOML config file. Defaults to ./bookflow.toml when present.",
    )(func)
    return func


def _load(config: Path | None, page_size: str | None, budget: int | None, measure: bool):
    cfg = load_config(config)
    layout = cfg.layout
    if page_size:
        layout = layout.with_page_size(page_size)
    updates = {}
    if budget:
        updates["char_budget"] = budget
    if measure:
        updates["measure_budget"] = True
    if updates:
        layout = layout.model_copy(update=updates)
    return cfg.model_copy(update={"layout": layout})


@main.command()
@click.argument("project", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    help="Output PDF file path. Defaults to '<title>.pdf'.",
)
@click.option(
    "--font-path",
    type=click.Path(path_type=Path),
    help="Font file (.ttf/.otf) to use before the fallback chain.",
)
@click.option("--font-family", type=str, help="Installed font family to try before the fallback chain.")
@_layout_options
def export(
    project: Path,
    output: Path | None,
    font_path: Path | None,
    font_family: str | None,
    config: Path | None,
    page_size: str | None,
    budget: int | None,
    measure: bool,
) -> None:
    """
    Export a project file to PDF.

    PROJECT is an editor project file (.hype) or an equivalent JSON document.
    """
    try:
        cfg = _load(config, page_size, budget, measure)
        manuscript = load_manuscript(project)

        if output is None:
            output = Path(f"{sanitize_filename(manuscript.title) or project.stem}.pdf")

        click.echo(f"Exporting '{manuscript.title}' ({len(manuscript.chapters)} chapter(s))...")
        result = export_pdf(manuscript, output, cfg, font_path=font_path, font_family=font_family)

        if not result.font.supports_script:
            click.echo(f"Warning: font '{result.font.family}' may not render all characters.", err=True)
        click.echo(f"✓ {result.pages} page(s) saved to: {result.path}")

    except (ExportError, FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("project", type=click.Path(path_type=Path))
@_layout_options
def preview(project: Path, config: Path | None, page_size: str | None, budget: int | None, measure: bool) -> None:
    """
    Paginate a project without writing a file.

    Prints the page count and the first line of every page.
    """
    try:
        cfg = _load(config, page_size, budget, measure)
        manuscript = load_manuscript(project)
        line_budget = cfg.layout.char_budget
        if cfg.layout.measure_budget:
            font = resolve_font(cfg.fonts)
            probe = cfg.fonts.script_probe if font.supports_script else LATIN_PROBE
            line_budget = char_budget(cfg.layout, font.regular, probe)
        sink = MemorySink()
        state: LayoutState = paginate(manuscript, sink, cfg.layout, line_budget)
        sink.close()
    except (ExportError, FileNotFoundError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"{state.page_count} page(s), budget {line_budget} chars/line")
    for index in range(sink.page_count):
        placements = sink.page(index)
        first = placements[0].text if placements else ""
        click.echo(f"  p.{index + 1:<4} {len(placements):>3} line(s)  {first}")


@main.command()
@click.option("--family", "pattern", type=str, help="Only list families containing this text.")
@click.option(
    "--dir",
    "directories",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Scan this directory instead of the platform font directories (repeatable).",
)
def fonts(pattern: str | None, directories: tuple[Path, ...]) -> None:
    """List installed font families usable for export."""
    catalog = FontCatalog(list(directories) or platform_font_dirs())
    found = 0
    for info in catalog.families():
        if pattern and pattern.lower() not in info.family.lower():
            continue
        click.echo(f"{info.family}\t{info.path}")
        found += 1
    if not found:
        click.echo("No matching fonts found.", err=True)


if __name__ == "__main__":
    main()
