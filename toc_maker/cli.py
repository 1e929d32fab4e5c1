"""
CLI entry point: add a table of contents to a PDF from the shell.

    toc-maker generate book.pdf outline.json -o book_with_toc.pdf
    toc-maker generate book.pdf -o out.pdf            # use the PDF's own bookmarks
    toc-maker outline book.pdf --json > outline.json  # export bookmarks as an outline
    toc-maker config show
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from toc_maker import config as config_module
from toc_maker.api import add_toc_to_pdf
from toc_maker.backends.base import ResourceLoadError
from toc_maker.backends.pymupdf_backend import open_document
from toc_maker.models import TocConfig
from toc_maker.outline import format_outline, outline_from_document, outline_to_rows

app = typer.Typer(
    name="toc-maker",
    help="Generate table-of-contents pages with clickable links and insert them into PDFs.",
)
config_app = typer.Typer(help="Show or create the .toc_maker.json config file.")
app.add_typer(config_app, name="config")


def _load_config_or_exit(path: Optional[Path]):
    try:
        return config_module.load_config(path)
    except config_module.ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("generate")
def generate(
    pdf: Path = typer.Argument(..., help="Path to the source PDF", path_type=Path),
    outline: Optional[Path] = typer.Argument(
        None,
        help="Outline JSON: flat rows with 'level' or a nested 'children' tree. Omit to use the PDF's bookmarks",
        path_type=Path,
    ),
    output: Path = typer.Option(..., "-o", "--output", help="Path of the PDF to write", path_type=Path),
    insert_at: Optional[int] = typer.Option(
        None,
        "--insert-at",
        "-i",
        help="1-based page the ToC is inserted before (default from config: 2)",
    ),
    offset: Optional[int] = typer.Option(
        None,
        "--offset",
        help="Added to every entry's page number for its link target (default from config: 0)",
    ),
    title: Optional[str] = typer.Option(None, "--title", help="Heading of the first ToC page"),
    no_numbers: bool = typer.Option(False, "--no-numbers", help="Do not prefix titles with 1, 1.1, ..."),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to use", path_type=Path),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Print diagnostic info"),
) -> None:
    """Insert generated ToC pages into a PDF."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(message)s")
    if not pdf.is_file():
        typer.echo(f"Error: PDF not found: {pdf}", err=True)
        raise typer.Exit(1)
    if outline is not None and not outline.is_file():
        typer.echo(f"Error: outline not found: {outline}", err=True)
        raise typer.Exit(1)
    if output.resolve() == pdf.resolve():
        typer.echo("Error: output must differ from the source PDF", err=True)
        raise typer.Exit(1)

    result = add_toc_to_pdf(
        pdf,
        outline,
        output,
        insert_at=insert_at,
        page_offset=offset,
        title=title,
        numbering=False if no_numbers else None,
        config=_load_config_or_exit(config_path),
    )
    if not result.success:
        typer.echo(f"Error: {result.message}", err=True)
        raise typer.Exit(1)

    typer.echo(result.message)
    typer.echo(f"  links  → {result.link_count}")
    typer.echo(f"  output → {result.output_path}")


@app.command("outline")
def outline_cmd(
    pdf: Path = typer.Argument(..., help="Path to the PDF", path_type=Path),
    depth: int = typer.Option(2, "--depth", "-d", help="Max depth to display"),
    as_json: bool = typer.Option(False, "--json", help="Print flat outline rows as JSON (input for generate)"),
) -> None:
    """Show the PDF's own outline (bookmarks)."""
    try:
        doc = open_document(pdf)
    except ResourceLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    items = outline_from_document(doc)
    doc.close()

    if as_json:
        typer.echo(json.dumps(outline_to_rows(items), indent=2, ensure_ascii=False))
        return
    if not items:
        typer.echo("No outline found.")
        return
    for line in format_outline(items, max_depth=depth):
        typer.echo(line)


@config_app.command("show")
def _show(config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file to use")) -> None:
    """Show the effective config (file values over defaults)."""
    path = config_path or config_module.get_config_path()
    typer.echo(f"Config file: {path} (exists: {path.exists()})")
    config = _load_config_or_exit(config_path)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False))


@config_app.command("path")
def _path() -> None:
    """Print the config file path in use."""
    typer.echo(config_module.get_config_path())


@config_app.command("init")
def _init(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Where to write (default: ./.toc_maker.json)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the default settings."""
    path = config_path or Path.cwd() / config_module.CONFIG_FILENAME
    if path.exists() and not force:
        typer.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        raise typer.Exit(1)
    written = config_module.save_config(TocConfig(), path)
    typer.echo(f"Wrote {written}")


def main() -> None:
    """Entry point for the toc-maker console script."""
    app()


if __name__ == "__main__":
    main()
