"""Bind pending ToC links to pages of the spliced document."""

import logging
from typing import Iterable

import fitz  # PyMuPDF

from toc_maker.layout import PendingLink
from toc_maker.splice import PageIndexMap

log = logging.getLogger(__name__)


def resolve_target_index(link: PendingLink, index_map: PageIndexMap, final_page_count: int) -> int:
    """Final 0-based page index for a link, clamped into the document."""
    mapped = index_map(link.target_page - 1)
    bounded = min(max(0, mapped), final_page_count - 1)
    if bounded != mapped:
        log.debug("Link target page %d out of range; clamped to final page %d", link.target_page, bounded + 1)
    return bounded


def resolve_links(document: fitz.Document, links: Iterable[PendingLink], index_map: PageIndexMap) -> int:
    """
    Write one GOTO link annotation per pending link. Returns the number written.

    Must run after splicing: the ToC page of a link sits at
    index_map.insert_index + link.toc_page in the final document.
    """
    final_count = document.page_count
    written = 0
    for link in links:
        target = resolve_target_index(link, index_map, final_count)
        page = document[index_map.insert_index + link.toc_page]
        page.insert_link(
            {
                "kind": fitz.LINK_GOTO,
                "from": fitz.Rect(link.rect),
                "page": target,
                "to": fitz.Point(0, 0),
                "zoom": 0,
            }
        )
        written += 1
    log.info("Resolved %d ToC link(s)", written)
    return written
