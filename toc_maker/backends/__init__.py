"""Drawing backends: each implements the ToC canvas over a document model."""

from toc_maker.backends.base import ResourceLoadError, TocCanvas
from toc_maker.backends.pymupdf_backend import PyMuPDFCanvas

__all__ = ["ResourceLoadError", "TocCanvas", "PyMuPDFCanvas"]

REGISTRY: dict[str, type[TocCanvas]] = {
    "pymupdf": PyMuPDFCanvas,
}


def get_backend(name: str) -> type[TocCanvas]:
    """Return canvas class for the given name. Raises KeyError if unknown."""
    if name not in REGISTRY:
        raise KeyError(f"Unknown backend: {name}. Available: {list(REGISTRY)}")
    return REGISTRY[name]
