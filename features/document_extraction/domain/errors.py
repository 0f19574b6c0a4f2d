"""
Error taxonomy for document extraction.

Every failure of a single extraction surfaces as one of these; none of them is
retried inside the pipeline.
"""


class ExtractionError(Exception):
    """Base class for all extraction failures."""


class UnsupportedFormatError(ExtractionError):
    """File matches none of TXT / PDF / DOCX by extension or media type."""


class DocumentTooLargeError(ExtractionError):
    """Upload exceeds the configured size limit."""


class DocumentDecodeError(ExtractionError):
    """PDF/DOCX structural decode failed (corrupt or not what it claims to be)."""


class OcrFailedError(ExtractionError):
    """Rasterization or recognition failed for a page."""


class ExtractionTimeoutError(ExtractionError):
    """Deadline exceeded or extraction cancelled between pages."""
