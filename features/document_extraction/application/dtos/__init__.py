"""
DTOs (Data Transfer Objects) used by the document extraction use case and API.

Following clean architecture principles:
- DTOs are organized by feature/domain
- Each DTO is in its own file for better organization
- Easy to find and maintain specific DTOs
"""

from .extract_document_request_dto import ExtractDocumentRequestDTO
from .extract_document_response_dto import ExtractDocumentResponseDTO, ExtractionSource
from .ocr_options_dto import OcrOptionsDTO

__all__ = [
    "ExtractDocumentRequestDTO",
    "ExtractDocumentResponseDTO",
    "ExtractionSource",
    "OcrOptionsDTO",
]
