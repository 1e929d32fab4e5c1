"""
Outline sources: flat level/title/page rows, JSON outline files and the PDF's
own bookmarks, all turned into an OutlineItem tree.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Sequence

import fitz  # PyMuPDF
from pydantic import ValidationError

from toc_maker.models import OutlineItem

log = logging.getLogger(__name__)


class OutlineLoadError(Exception):
    """Raised when an outline file cannot be read or does not describe an outline."""


def build_tree(entries: Iterable[dict[str, Any]]) -> list[OutlineItem]:
    """
    Nest flat rows ({"title", "level", "page"}) by level.

    A row becomes a child of the nearest preceding row with a smaller level.
    Missing levels and missing pages count as 1.
    """
    root: list[dict] = []
    stack: list[tuple[int, dict]] = []
    for entry in entries:
        level = int(entry.get("level") or 1)
        page = entry.get("page", entry.get("to"))
        node = {
            "title": entry.get("title"),
            "target_page": 1 if page is None else int(page),
            "children": [],
        }
        while stack and stack[-1][0] >= level:
            stack.pop()
        if stack:
            stack[-1][1]["children"].append(node)
        else:
            root.append(node)
        stack.append((level, node))
    return [OutlineItem.model_validate(node) for node in root]


def outline_from_document(doc: fitz.Document) -> list[OutlineItem]:
    """Import the document's native outline (bookmarks). Unresolved destinations point at page 1."""
    rows = []
    for level, title, page in doc.get_toc(simple=True):
        if page < 1:
            log.warning("Outline entry %r has no resolvable page; using page 1", title)
            page = 1
        rows.append({"title": title, "level": level, "page": page})
    return build_tree(rows)


def _is_flat(rows: Sequence[Any]) -> bool:
    return all(isinstance(r, dict) and "children" not in r for r in rows) and any(
        isinstance(r, dict) and "level" in r for r in rows
    )


def parse_outline(data: Any) -> list[OutlineItem]:
    """Accept a list (flat rows or nested items) or {"items": [...]} and return a tree."""
    if isinstance(data, dict) and "items" in data:
        data = data["items"]
    if not isinstance(data, list):
        raise OutlineLoadError("Outline must be a list of entries or an object with an 'items' list")
    try:
        if _is_flat(data):
            return build_tree(data)
        return [OutlineItem.model_validate(item) for item in data]
    except (ValidationError, TypeError, ValueError) as e:
        raise OutlineLoadError(f"Invalid outline entry: {e}") from e


def load_outline(path: str | Path) -> list[OutlineItem]:
    """Load an outline JSON file (flat rows with 'level' or a nested 'children' tree)."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise OutlineLoadError(f"Could not read outline {path}: {e}") from e
    return parse_outline(data)


def to_outline_items(outline: Any) -> list[OutlineItem]:
    """Normalize the outline argument of the public API: items, dicts or a JSON file path."""
    if isinstance(outline, (str, Path)):
        return load_outline(outline)
    items = list(outline)
    if all(isinstance(i, OutlineItem) for i in items):
        return items
    return parse_outline([i.model_dump() if isinstance(i, OutlineItem) else i for i in items])


def outline_to_rows(items: Sequence[OutlineItem], level: int = 1) -> List[dict]:
    """Flatten a tree back to {"title", "level", "page"} rows (pre-order)."""
    rows = []
    for item in items:
        rows.append({"title": item.title, "level": level, "page": item.target_page})
        rows.extend(outline_to_rows(item.children, level + 1))
    return rows


def format_outline(items: Sequence[OutlineItem], max_depth: int = 2) -> List[str]:
    """Return indented outline lines for display."""
    lines = []

    def _recurse(nodes, current_depth):
        if current_depth > max_depth:
            return
        for node in nodes:
            indent = "  " * (current_depth - 1)
            lines.append(f"{indent}- {node.rendered_title or 'Untitled'} (p. {node.target_page})")
            _recurse(node.children, current_depth + 1)

    _recurse(items, 1)
    return lines
