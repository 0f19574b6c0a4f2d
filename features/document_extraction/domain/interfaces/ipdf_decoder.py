"""
Interface for structural PDF decoding.

One decoded document must serve both text-layer access (positioned glyph runs)
and rendering access (page rasterization). Adapters are constructed with
whatever they need; nothing is installed into global state before use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from PIL import Image

from ..entities import PositionedGlyphRun


class IPdfDocument(ABC):
    """An open PDF. Owned by exactly one extraction; always closed on exit."""

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def glyph_runs(self, page_index: int) -> List[PositionedGlyphRun]:
        """
        Positioned text fragments of one page (0-based index).

        Coordinates follow PDF user space (y grows upward) regardless of how the
        underlying library reports them.
        """
        raise NotImplementedError

    @abstractmethod
    def rasterize(self, page_index: int, scale: float) -> Image.Image:
        """Render one page to an RGB bitmap, ``scale`` x the page's point size."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "IPdfDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class IPdfDecoder(ABC):
    """Port for opening PDFs from raw bytes."""

    @abstractmethod
    def open(self, data: bytes) -> IPdfDocument:
        """
        Decode ``data``.

        Raises:
            DocumentDecodeError: the bytes are not a readable PDF.
        """
        raise NotImplementedError
