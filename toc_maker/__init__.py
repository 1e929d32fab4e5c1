"""
toc-maker: add a generated, clickable table of contents to a PDF.

Use as a library:

    from toc_maker import add_toc_to_pdf
    result = add_toc_to_pdf("book.pdf", "outline.json", "book_with_toc.pdf", insert_at=2)

Or on open documents:

    from toc_maker import OutlineItem, TocConfig, synthesize_toc
    new_doc, toc_pages = synthesize_toc(doc, [OutlineItem(title="Intro", target_page=1)], TocConfig())

Or run the CLI:

    toc-maker generate book.pdf outline.json -o book_with_toc.pdf
"""

from toc_maker.api import add_toc_to_pdf
from toc_maker.core import synthesize_toc
from toc_maker.models import LevelStyle, NumeralStyle, OutlineItem, TocConfig, TocResult
from toc_maker.numbering import apply_numbering, generate_label

__all__ = [
    "add_toc_to_pdf",
    "synthesize_toc",
    "apply_numbering",
    "generate_label",
    "LevelStyle",
    "NumeralStyle",
    "OutlineItem",
    "TocConfig",
    "TocResult",
]
