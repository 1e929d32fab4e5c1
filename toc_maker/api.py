"""
Public API: add a table of contents to a PDF file from code.

    from toc_maker import add_toc_to_pdf
    result = add_toc_to_pdf("book.pdf", "outline.json", "book_with_toc.pdf", insert_at=3)
"""

import logging
from pathlib import Path
from typing import Any

from toc_maker.backends.base import ResourceLoadError
from toc_maker.backends.pymupdf_backend import open_document
from toc_maker.core import synthesize
from toc_maker.models import TocConfig, TocResult
from toc_maker.outline import OutlineLoadError, outline_from_document, to_outline_items

log = logging.getLogger(__name__)


def add_toc_to_pdf(
    pdf_path: str | Path,
    outline: Any,
    output_path: str | Path,
    *,
    insert_at: int | None = None,
    page_offset: int | None = None,
    title: str | None = None,
    numbering: bool | None = None,
    config: TocConfig | None = None,
) -> TocResult:
    """
    Add generated ToC pages to a PDF and save the result (library entry point).

    Args:
        pdf_path: Source PDF.
        outline: OutlineItem list, list of dicts (flat rows with 'level' or nested
            'children'), a path to a JSON outline file, or None to use the PDF's
            own bookmarks.
        output_path: Where to write the new PDF.
        insert_at: 1-based page the ToC goes before (overrides config).
        page_offset: Added to entry pages when resolving links (overrides config).
        title: Heading of the first ToC page (overrides config).
        numbering: Whether to prefix titles with labels (overrides config).
        config: Base options; defaults to TocConfig().

    Returns:
        TocResult with page counts and the output path. Fatal problems (missing
        PDF, unreadable outline, font errors) give success=False and nothing is written.
    """
    overrides = {
        k: v
        for k, v in {
            "insert_at": insert_at,
            "page_offset": page_offset,
            "title": title,
            "numbering": numbering,
        }.items()
        if v is not None
    }
    config = (config or TocConfig()).model_copy(update=overrides)
    output_path = Path(output_path)

    try:
        source = open_document(pdf_path)
    except ResourceLoadError as e:
        return TocResult(success=False, errors=[str(e)], message=str(e))

    try:
        source_page_count = source.page_count
        try:
            items = outline_from_document(source) if outline is None else to_outline_items(outline)
            synthesis = synthesize(source, items, config)
        except (ResourceLoadError, OutlineLoadError, KeyError) as e:
            return TocResult(success=False, errors=[str(e)], message=str(e))

        final_doc = synthesis.document
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            final_doc.save(output_path, garbage=3, deflate=True)
            page_count = final_doc.page_count
        finally:
            final_doc.close()
    finally:
        source.close()

    toc_page_count = synthesis.toc_page_count

    message = f"Inserted {toc_page_count} ToC page(s): {source_page_count} -> {page_count} pages"
    log.info("%s (%s)", message, output_path)
    return TocResult(
        success=True,
        output_path=output_path,
        source_page_count=source_page_count,
        toc_page_count=toc_page_count,
        page_count=page_count,
        link_count=synthesis.link_count,
        message=message,
    )
