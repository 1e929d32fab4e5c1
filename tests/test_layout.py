import pytest

from conftest import A4
from toc_maker.layout import (
    DOT_GAP_TITLE,
    DOT_RIGHT_PADDING,
    FIRST_LEVEL_NUDGE,
    INDENT_PER_LEVEL,
    MARGIN_BOTTOM,
    MARGIN_X,
    TITLE_MARGIN_BOTTOM,
    TITLE_RIGHT_RESERVE,
    TITLE_Y_RATIO,
    layout_toc,
)
from toc_maker.models import LevelStyle, OutlineItem, TocConfig

WIDTH, HEIGHT = A4


def _flat(n: int) -> list[OutlineItem]:
    return [OutlineItem(title=f"Entry {i}", target_page=i + 1) for i in range(n)]


def _segments(runs: list[dict], titles: set[str]) -> list[list[dict]]:
    """Split recorded runs into one group per entry (title run + what follows)."""
    groups: list[list[dict]] = []
    for run in runs:
        if run["text"] in titles:
            groups.append([run])
        elif groups:
            groups[-1].append(run)
    return groups


def test_empty_outline_still_produces_heading_page(canvas) -> None:
    result = layout_toc(canvas, [], TocConfig(), A4)
    assert result.page_count == 1
    assert result.links == []
    heading = canvas.runs[0]
    assert heading["text"] == "Table of Contents"
    assert heading["bold"] is True
    assert heading["y"] == pytest.approx(HEIGHT * TITLE_Y_RATIO)


def test_small_outline_fits_on_one_page(canvas) -> None:
    items = [
        OutlineItem(title="Intro", target_page=1),
        OutlineItem(title="Body", target_page=3, children=[OutlineItem(title="Detail", target_page=4)]),
    ]
    result = layout_toc(canvas, items, TocConfig(), A4)
    assert result.page_count == 1
    assert [link.toc_page for link in result.links] == [0, 0, 0]
    assert [link.target_page for link in result.links] == [1, 3, 4]


def test_first_entry_position_and_link_rect(canvas) -> None:
    config = TocConfig()
    result = layout_toc(canvas, [OutlineItem(title="Intro", target_page=1)], config, A4)
    style = config.style_for_depth(0)
    y = HEIGHT * TITLE_Y_RATIO + TITLE_MARGIN_BOTTOM + FIRST_LEVEL_NUDGE
    title = next(r for r in canvas.runs if r["text"] == "Intro")
    assert title["x"] == MARGIN_X
    assert title["y"] == pytest.approx(y)
    number_width = canvas.text_width("1", style.font_size, bold=True)
    assert title["max_width"] == pytest.approx(WIDTH - TITLE_RIGHT_RESERVE - number_width - DOT_GAP_TITLE)
    x0, y0, x1, y1 = result.links[0].rect
    assert x0 == MARGIN_X
    assert x1 == WIDTH - MARGIN_X
    assert y0 == pytest.approx(y - style.font_size)
    assert y1 == pytest.approx(y + 2)


def test_children_are_indented_and_not_bold(canvas) -> None:
    items = [OutlineItem(title="Body", target_page=3, children=[OutlineItem(title="Detail", target_page=4)])]
    layout_toc(canvas, items, TocConfig(), A4)
    parent = next(r for r in canvas.runs if r["text"] == "Body")
    child = next(r for r in canvas.runs if r["text"] == "Detail")
    assert parent["bold"] is True
    assert child["bold"] is False
    assert child["x"] == MARGIN_X + INDENT_PER_LEVEL
    number_width = canvas.text_width("4", child["size"])
    assert child["max_width"] == pytest.approx(WIDTH - TITLE_RIGHT_RESERVE - INDENT_PER_LEVEL - number_width - DOT_GAP_TITLE)
    assert child["y"] > parent["y"]


def test_page_number_is_right_aligned(canvas) -> None:
    layout_toc(canvas, [OutlineItem(title="Intro", target_page=123)], TocConfig(), A4)
    number = next(r for r in canvas.runs if r["text"] == "123")
    assert number["x"] + canvas.text_width("123", number["size"]) == pytest.approx(WIDTH - MARGIN_X)


def test_dot_leader_fills_gap_before_page_number(canvas) -> None:
    layout_toc(canvas, [OutlineItem(title="Intro", target_page=1)], TocConfig(), A4)
    dots = [r for r in canvas.runs if r["text"] == "."]
    assert dots
    assert max(d["x"] for d in dots) < WIDTH - MARGIN_X - DOT_RIGHT_PADDING
    title = next(r for r in canvas.runs if r["text"] == "Intro")
    assert min(d["x"] for d in dots) > title["x"] + canvas.text_width("Intro", title["size"])


def test_empty_dot_leader_disables_leader(canvas) -> None:
    config = TocConfig(levels=[LevelStyle(dot_leader="")])
    layout_toc(canvas, _flat(3), config, A4)
    assert not [r for r in canvas.runs if r["text"] == "."]


def test_page_offset_shifts_link_target_not_printed_number(canvas) -> None:
    result = layout_toc(canvas, [OutlineItem(title="Intro", target_page=1)], TocConfig(page_offset=10), A4)
    assert result.links[0].target_page == 11
    assert any(r["text"] == "1" for r in canvas.runs)
    assert not any(r["text"] == "11" for r in canvas.runs)


def test_overflow_creates_continuation_pages(canvas) -> None:
    items = _flat(80)
    result = layout_toc(canvas, items, TocConfig(), A4)
    assert result.page_count > 1
    assert canvas.pages == [A4] * result.page_count
    pages = [link.toc_page for link in result.links]
    assert pages[0] == 0
    assert pages[-1] == result.page_count - 1
    assert pages == sorted(pages)
    first_break = pages.index(1)
    continued = next(r for r in canvas.runs if r["text"] == items[first_break].title)
    assert continued["page"] == 1
    assert continued["y"] == pytest.approx(MARGIN_BOTTOM + FIRST_LEVEL_NUDGE)


def test_entries_never_split_across_pages(canvas) -> None:
    items = _flat(80)
    result = layout_toc(canvas, items, TocConfig(), A4)
    groups = _segments(canvas.runs, {i.title for i in items})
    assert len(groups) == len(items)
    for group, link in zip(groups, result.links):
        assert {run["page"] for run in group} == {link.toc_page}


def test_children_continue_after_page_break(canvas) -> None:
    children = [OutlineItem(title=f"Section {i}", target_page=i + 2) for i in range(60)]
    items = [OutlineItem(title="Part", target_page=1, children=children), OutlineItem(title="Tail", target_page=90)]
    result = layout_toc(canvas, items, TocConfig(), A4)
    assert result.page_count > 1
    child_pages = [link.toc_page for link in result.links[1:-1]]
    assert child_pages == sorted(child_pages)
    assert child_pages[-1] > 0
    assert result.links[-1].toc_page >= child_pages[-1]


def test_degenerate_items_are_rendered_as_is(canvas) -> None:
    items = [OutlineItem(title="", target_page=-3)]
    result = layout_toc(canvas, items, TocConfig(), A4)
    assert result.links[0].target_page == -3
    assert any(r["text"] == "-3" for r in canvas.runs)


def test_clipped_title_stops_before_page_number(canvas) -> None:
    title = "A very long chapter title " * 10
    layout_toc(canvas, [OutlineItem(title=title, target_page=1234)], TocConfig(), A4)
    title_run = next(r for r in canvas.runs if r["text"] == title)
    number = next(r for r in canvas.runs if r["text"] == "1234")
    assert title_run["x"] + title_run["max_width"] <= number["x"] - DOT_GAP_TITLE + 1e-6
