"""
The ToC pipeline on open documents: numbering -> layout -> splice -> resolve.

No file I/O here; see toc_maker.api for the path-based entry point.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import fitz  # PyMuPDF

from toc_maker.backends import get_backend
from toc_maker.backends.base import ResourceLoadError
from toc_maker.layout import layout_toc
from toc_maker.models import OutlineItem, TocConfig
from toc_maker.numbering import apply_numbering
from toc_maker.resolve import resolve_links
from toc_maker.splice import PageIndexMap, splice_document

log = logging.getLogger(__name__)


@dataclass
class Synthesis:
    document: fitz.Document
    toc_page_count: int
    link_count: int
    index_map: PageIndexMap


def reference_page_size(source: fitz.Document) -> tuple[float, float]:
    """Size for ToC pages: the second source page (first is often a cover), else the first."""
    if source.page_count == 0:
        raise ResourceLoadError("Source document has no pages")
    rect = source[1 if source.page_count > 1 else 0].rect
    return rect.width, rect.height


def synthesize(
    source: fitz.Document,
    outline: Sequence[OutlineItem],
    config: TocConfig | None = None,
) -> Synthesis:
    """
    Run the whole pipeline and return the new document with its bookkeeping.

    Fonts are loaded before layout starts; a ResourceLoadError (fonts, empty
    source) aborts with nothing produced. Range problems are clamped, not raised.
    """
    config = config or TocConfig()
    page_size = reference_page_size(source)
    canvas = get_backend(config.backend)(regular_font=config.regular_font, bold_font=config.bold_font)

    try:
        items = apply_numbering(outline, config.levels) if config.numbering else list(outline)
        layout = layout_toc(canvas, items, config, page_size)
        spliced = splice_document(source, canvas.document, config.insert_at)
    finally:
        canvas.document.close()

    try:
        link_count = resolve_links(spliced.document, layout.links, spliced.index_map)
    except Exception:
        spliced.document.close()
        raise
    return Synthesis(
        document=spliced.document,
        toc_page_count=spliced.toc_page_count,
        link_count=link_count,
        index_map=spliced.index_map,
    )


def synthesize_toc(
    source: fitz.Document,
    outline: Sequence[OutlineItem],
    config: TocConfig | None = None,
) -> tuple[fitz.Document, int]:
    """
    Build a new document with generated ToC pages inserted into source.

    Returns (final_document, toc_page_count). Neither the source document nor
    the outline is modified.
    """
    result = synthesize(source, outline, config)
    return result.document, result.toc_page_count
