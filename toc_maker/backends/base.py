"""Abstract drawing surface the ToC layout engine writes to."""

from abc import ABC, abstractmethod


class ResourceLoadError(Exception):
    """Raised when a font or the source document cannot be loaded. Aborts the pipeline."""


class TocCanvas(ABC):
    """
    Sequence of ToC pages plus the text primitives layout needs.

    Pages are addressed by their 0-based position in the ToC sequence.
    Coordinates follow PyMuPDF: origin top-left, y grows downward, text is
    placed by its baseline start point.
    """

    @abstractmethod
    def new_page(self, width: float, height: float) -> int:
        """Append a blank page and return its index."""
        ...

    @abstractmethod
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
        """Draw a single line of text; clip it to max_width when given."""
        ...

    @abstractmethod
    def text_width(self, text: str, size: float, *, bold: bool = False) -> float:
        """Rendered width of text at size (points)."""
        ...

    @property
    @abstractmethod
    def page_count(self) -> int:
        ...

    @property
    @abstractmethod
    def document(self):
        """The document holding the ToC pages, in the backend's own document type."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (e.g. 'pymupdf')."""
        ...
