"""
ToC pagination: lay out an outline tree over as many pages as it needs.

The walk is pre-order (item, then its children). Each call takes a Cursor and
returns the cursor it finished at, so children continue exactly where their
parent left off, across page breaks if one happened. Links are only recorded
here (PendingLink); they are bound to real pages after splicing.
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence

from toc_maker.backends.base import TocCanvas
from toc_maker.models import OutlineItem, TocConfig

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Layout constants (points)
# ---------------------------------------------------------------------------

# Left margin; also the gap between the right edge and page numbers
MARGIN_X = 50
# Items starting below page_height - MARGIN_BOTTOM go to a new page; continuation pages start at this y
MARGIN_BOTTOM = 60
TITLE_FONT_SIZE = 23
# Heading baseline as a fraction of page height, measured from the top
TITLE_Y_RATIO = 1 / 3
# Gap between the heading and the first entry
TITLE_MARGIN_BOTTOM = 38
INDENT_PER_LEVEL = 20
# Extra space above each top-level entry
FIRST_LEVEL_NUDGE = 8
# Horizontal room reserved on the right when clipping titles
TITLE_RIGHT_RESERVE = 100

DOT_SIZE_RATIO = 0.6
DOT_STEP = 5
DOT_GAP_TITLE = 10
DOT_RIGHT_PADDING = 15

ANNOT_Y_PADDING = 2


@dataclass(frozen=True)
class Cursor:
    """Where the next entry goes: ToC page index and baseline y."""
    page: int
    y: float


@dataclass(frozen=True)
class PendingLink:
    """
    A link whose destination is not bound yet.

    toc_page is the index within the generated ToC pages; target_page is the
    1-based page in the original document with the page offset applied.
    """
    toc_page: int
    rect: tuple[float, float, float, float]
    target_page: int


@dataclass
class LayoutResult:
    page_count: int
    links: list[PendingLink] = field(default_factory=list)


@dataclass(frozen=True)
class _Frame:
    canvas: TocCanvas
    config: TocConfig
    width: float
    height: float


def layout_toc(
    canvas: TocCanvas,
    items: Sequence[OutlineItem],
    config: TocConfig,
    page_size: tuple[float, float],
) -> LayoutResult:
    """
    Draw the heading and all entries onto canvas, creating pages on demand.

    Always produces at least one page. Items are drawn with their
    rendered_title, so numbering must already have been applied.
    """
    width, height = page_size
    frame = _Frame(canvas, config, width, height)
    first = canvas.new_page(width, height)
    y = height * TITLE_Y_RATIO
    canvas.draw_text(first, config.title, MARGIN_X, y, size=TITLE_FONT_SIZE, bold=True)
    y += TITLE_MARGIN_BOTTOM

    _, links = _layout_items(items, 0, Cursor(first, y), frame)
    log.info("Laid out %d entries on %d ToC page(s)", len(links), canvas.page_count)
    return LayoutResult(page_count=canvas.page_count, links=links)


def _layout_items(
    items: Sequence[OutlineItem],
    depth: int,
    cursor: Cursor,
    frame: _Frame,
) -> tuple[Cursor, list[PendingLink]]:
    links: list[PendingLink] = []
    for item in items:
        cursor, link = _layout_item(item, depth, cursor, frame)
        links.append(link)
        if item.children:
            cursor, child_links = _layout_items(item.children, depth + 1, cursor, frame)
            links.extend(child_links)
    return cursor, links


def _layout_item(
    item: OutlineItem,
    depth: int,
    cursor: Cursor,
    frame: _Frame,
) -> tuple[Cursor, PendingLink]:
    """Place one entry (title, leader, page number) on a single page."""
    canvas, width, height = frame.canvas, frame.width, frame.height
    page, y = cursor.page, cursor.y

    if y > height - MARGIN_BOTTOM:
        page = canvas.new_page(width, height)
        y = MARGIN_BOTTOM
        log.debug("Page break before %r -> ToC page %d", item.title, page)

    style = frame.config.style_for_depth(depth)
    font_size = style.font_size
    color = style.rgb
    indentation = depth * INDENT_PER_LEVEL
    title_x = MARGIN_X + indentation
    if depth == 0:
        y += FIRST_LEVEL_NUDGE

    page_text = str(item.target_page)
    page_text_width = canvas.text_width(page_text, font_size, bold=style.bold)

    # clipped titles stop DOT_GAP_TITLE short of the page number
    title = item.rendered_title
    canvas.draw_text(
        page,
        title,
        title_x,
        y,
        size=font_size,
        bold=style.bold,
        color=color,
        max_width=width - TITLE_RIGHT_RESERVE - indentation - page_text_width - DOT_GAP_TITLE,
    )

    if style.dot_leader:
        title_width = canvas.text_width(title, font_size, bold=style.bold)
        x = title_x + title_width + DOT_GAP_TITLE
        dots_end = width - MARGIN_X - DOT_RIGHT_PADDING
        while x < dots_end:
            canvas.draw_text(page, style.dot_leader, x, y, size=font_size * DOT_SIZE_RATIO, color=color)
            x += DOT_STEP

    canvas.draw_text(
        page,
        page_text,
        width - MARGIN_X - page_text_width,
        y,
        size=font_size,
        bold=style.bold,
        color=color,
    )

    link = PendingLink(
        toc_page=page,
        rect=(title_x, y - font_size, width - MARGIN_X, y + ANNOT_Y_PADDING),
        target_page=item.target_page + frame.config.page_offset,
    )
    return Cursor(page, y + font_size * style.line_spacing), link
