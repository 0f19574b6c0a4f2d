"""
Entry point for the FastAPI application.

Run with (from project root):

    uvicorn main:app --reload

Currently exposes the \"extract document\" feature via:

    POST /api/v1/documents/extract
    POST /api/v1/documents/extract/stream
"""

import logging
import sys

from fastapi import FastAPI

from features.document_extraction.presentation.api import router as document_extraction_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,  # Set to DEBUG for more verbose output
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler('document_extraction.log', encoding='utf-8')
    ]
)

# Set specific log levels for modules
logging.getLogger("features.document_extraction.application.use_cases").setLevel(logging.DEBUG)
logging.getLogger("features.document_extraction.application.ocr_fallback").setLevel(logging.DEBUG)

logger = logging.getLogger(__name__)
logger.info("Starting Document Extraction API")

app = FastAPI(title="Document Extraction API", version="0.1.0")

app.include_router(document_extraction_router)


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}
