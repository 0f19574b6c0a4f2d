"""
Domain interfaces (ports) for the document extraction feature.

Following clean architecture principles:
- Domain defines interfaces (ports)
- Infrastructure implements interfaces (adapters)
- Application orchestrates via interfaces

Each interface is defined in its own file for better organization.
"""

from .ipdf_decoder import IPdfDecoder, IPdfDocument
from .idocx_extractor import IDocxExtractor
from .irecognition_engine import IRecognitionEngine, RecognitionProgressCallback

__all__ = [
    "IPdfDecoder",
    "IPdfDocument",
    "IDocxExtractor",
    "IRecognitionEngine",
    "RecognitionProgressCallback",
]
