"""
Interface for DOCX raw-text extraction.
"""

from abc import ABC, abstractmethod


class IDocxExtractor(ABC):
    """Port for pulling raw text out of a DOCX container."""

    @abstractmethod
    def extract_text(self, data: bytes) -> str:
        """
        Raises:
            DocumentDecodeError: the bytes are not a readable DOCX package.
        """
        raise NotImplementedError
