from pathlib import Path

import fitz  # PyMuPDF
import pytest

from toc_maker.backends.base import TocCanvas

A4 = (595, 842)


def make_pdf(page_count: int, size: tuple[float, float] = A4, label: str = "Original") -> fitz.Document:
    """In-memory PDF whose page i carries the text '<label> i' (1-based)."""
    doc = fitz.open()
    for i in range(page_count):
        page = doc.new_page(width=size[0], height=size[1])
        page.insert_text(fitz.Point(72, 72), f"{label} {i + 1}", fontsize=12)
    return doc


def page_texts(doc: fitz.Document) -> list[str]:
    return [page.get_text().strip() for page in doc]


class RecordingCanvas(TocCanvas):
    """Canvas that records text runs; every character is half the font size wide."""

    def __init__(self, regular_font=None, bold_font=None):
        self.pages: list[tuple[float, float]] = []
        self.runs: list[dict] = []

    def new_page(self, width, height):
        self.pages.append((width, height))
        return len(self.pages) - 1

    def draw_text(self, page, text, x, y, *, size, bold=False, color=(0, 0, 0), max_width=None):
        self.runs.append(
            {"page": page, "text": text, "x": x, "y": y, "size": size, "bold": bold, "max_width": max_width}
        )

    def text_width(self, text, size, *, bold=False):
        return len(text) * size * 0.5

    @property
    def page_count(self):
        return len(self.pages)

    @property
    def document(self):
        return None

    @property
    def name(self):
        return "recording"


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def source_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "source.pdf"
    doc = make_pdf(5)
    doc.save(path)
    doc.close()
    return path
