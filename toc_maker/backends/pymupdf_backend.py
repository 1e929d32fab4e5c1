"""PyMuPDF-based ToC canvas, font loading and source document loading."""

import logging
from pathlib import Path

import fitz  # PyMuPDF

from toc_maker.backends.base import ResourceLoadError, TocCanvas

log = logging.getLogger(__name__)

# Base-14 fonts used when no font file is configured
BUILTIN_REGULAR = "helv"
BUILTIN_BOLD = "hebo"
# Resource names under which configured font files are registered on each page
FILE_FONT_REGULAR = "tocreg"
FILE_FONT_BOLD = "tocbold"

REPLACEMENT_GLYPH = "?"


def open_document(pdf_path: str | Path) -> fitz.Document:
    """Open a source PDF. Raises ResourceLoadError when it is missing, unreadable or empty."""
    pdf_path = Path(pdf_path)
    if not pdf_path.is_file():
        raise ResourceLoadError(f"PDF not found: {pdf_path}")
    try:
        doc = fitz.open(pdf_path)
    except Exception as e:
        raise ResourceLoadError(f"Could not open {pdf_path}: {e}") from e
    if not doc.is_pdf:
        doc.close()
        raise ResourceLoadError(f"Not a PDF document: {pdf_path}")
    if doc.page_count == 0:
        doc.close()
        raise ResourceLoadError(f"PDF has no pages: {pdf_path}")
    return doc


class _FontSlot:
    """A font used for both measuring (fitz.Font) and drawing (insert_text arguments)."""

    def __init__(self, builtin: str, file_alias: str, fontfile: Path | None):
        self.fontfile = str(fontfile) if fontfile else None
        self.fontname = file_alias if fontfile else builtin
        try:
            if self.fontfile:
                self.font = fitz.Font(fontfile=self.fontfile)
            else:
                self.font = fitz.Font(fontname=builtin)
        except Exception as e:
            raise ResourceLoadError(f"Font could not be loaded ({self.fontfile or builtin}): {e}") from e

    def sanitize(self, text: str) -> str:
        """Replace characters the font cannot render."""
        return "".join(c if c.isspace() or self.font.has_glyph(ord(c)) else REPLACEMENT_GLYPH for c in text)


class PyMuPDFCanvas(TocCanvas):
    """ToC pages held in a standalone fitz.Document, later spliced into the output."""

    def __init__(self, regular_font: Path | None = None, bold_font: Path | None = None):
        self._regular = _FontSlot(BUILTIN_REGULAR, FILE_FONT_REGULAR, regular_font)
        self._bold = _FontSlot(BUILTIN_BOLD, FILE_FONT_BOLD, bold_font)
        self._document = fitz.open()

    def _slot(self, bold: bool) -> _FontSlot:
        return self._bold if bold else self._regular

    def new_page(self, width: float, height: float) -> int:
        self._document.new_page(width=width, height=height)
        return self._document.page_count - 1

    def text_width(self, text: str, size: float, *, bold: bool = False) -> float:
        slot = self._slot(bold)
        return slot.font.text_length(slot.sanitize(text), fontsize=size)

    def _clip(self, text: str, size: float, bold: bool, max_width: float) -> str:
        while text and self.text_width(text, size, bold=bold) > max_width:
            text = text[:-1]
        return text

    def draw_text(
        self,
        page: int,
        text: str,
        x: float,
        y: float,
        *,
        size: float,
        bold: bool = False,
        color: tuple[float, float, float] = (0, 0, 0),
        max_width: float | None = None,
    ) -> None:
        slot = self._slot(bold)
        text = slot.sanitize(text)
        if max_width is not None:
            text = self._clip(text, size, bold, max_width)
        if not text:
            return
        self._document[page].insert_text(
            fitz.Point(x, y),
            text,
            fontsize=size,
            fontname=slot.fontname,
            fontfile=slot.fontfile,
            color=color,
        )

    @property
    def page_count(self) -> int:
        return self._document.page_count

    @property
    def document(self) -> fitz.Document:
        return self._document

    @property
    def name(self) -> str:
        return "pymupdf"
