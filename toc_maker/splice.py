"""Splice generated ToC pages into the source page sequence."""

import logging
from dataclasses import dataclass

import fitz  # PyMuPDF

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageIndexMap:
    """Maps a 0-based original page index to its index in the spliced document."""
    insert_index: int
    toc_page_count: int

    def __call__(self, original_index: int) -> int:
        if original_index < self.insert_index:
            return original_index
        return original_index + self.toc_page_count


@dataclass
class SpliceResult:
    document: fitz.Document
    toc_page_count: int
    index_map: PageIndexMap


def clamp_insertion(insert_at: int, page_count: int) -> int:
    """
    Turn a 1-based "insert before this page" number into a 0-based cut.

    Clamped to [1, page_count + 1], so the ToC can also go after the last page.
    """
    clamped = min(max(insert_at, 1), page_count + 1)
    if clamped != insert_at:
        log.debug("Insertion page %d clamped to %d (document has %d pages)", insert_at, clamped, page_count)
    return clamped - 1


def splice_document(source: fitz.Document, toc_doc: fitz.Document, insert_at: int) -> SpliceResult:
    """
    Build a new document: source pages before the cut, every ToC page, then the rest.

    The source is copied in one piece so its internal links survive, then the
    ToC pages go in at the cut. Source bookmarks are carried over with their
    pages remapped. Neither input is modified.
    """
    source_count = source.page_count
    insert_index = clamp_insertion(insert_at, source_count)
    toc_page_count = toc_doc.page_count
    index_map = PageIndexMap(insert_index=insert_index, toc_page_count=toc_page_count)

    out = fitz.open()
    out.insert_pdf(source)
    if toc_page_count > 0:
        out.insert_pdf(toc_doc, start_at=insert_index if insert_index < source_count else -1)
    _copy_bookmarks(source, out, index_map)

    log.info(
        "Inserted %d ToC page(s) before original page %d (%d -> %d pages)",
        toc_page_count,
        insert_index + 1,
        source_count,
        out.page_count,
    )
    return SpliceResult(document=out, toc_page_count=toc_page_count, index_map=index_map)


def _copy_bookmarks(source: fitz.Document, out: fitz.Document, index_map: PageIndexMap) -> None:
    """Re-create source bookmarks in out; entries without a target page point at page 1."""
    toc = source.get_toc(simple=True)
    if not toc:
        return
    remapped = [
        [level, title, index_map(page - 1) + 1 if page >= 1 else 1]
        for level, title, page in toc
    ]
    out.set_toc(remapped)
    log.debug("Copied %d bookmark(s) from the source", len(remapped))
