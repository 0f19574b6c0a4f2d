"""
OCR Utilities Module

Common helper functions for OCR processing:
- Image preprocessing optimized for Arabic text with diacritics
- Tesseract language pair selection from the detected script
"""

from __future__ import annotations

import cv2
import numpy as np
from PIL import Image

from features.document_extraction.domain.entities import ScriptLang


def ocr_languages(script_hint: ScriptLang) -> str:
    """
    Tesseract language pair biased toward the detected script.

    Both languages are always loaded so mixed-script pages still recognize;
    the first one drives layout analysis.
    """
    return "ara+eng" if script_hint == "ar" else "eng+ara"


def preprocess_for_ocr(pil_img: Image.Image) -> Image.Image:
    """
    OCR pre-processing tuned for documents with Arabic diacritics/dots.

    Processing steps:
    1. Convert to grayscale
    2. Apply bilateral filter for denoising while preserving edges
    3. Adaptive thresholding (preserves small Arabic dots better than global threshold)
    4. Mild morphology to remove speckles without destroying dots

    Args:
        pil_img: PIL Image to preprocess

    Returns:
        Binarized PIL Image (mode "L") ready for OCR
    """
    img = np.array(pil_img.convert("RGB"))
    gray = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)

    # Denoise while preserving edges (important for diacritics)
    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=35, sigmaSpace=35)

    thr = cv2.adaptiveThreshold(
        gray, 255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY,
        35, 11
    )

    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (2, 2))
    thr = cv2.morphologyEx(thr, cv2.MORPH_OPEN, kernel, iterations=1)

    return Image.fromarray(thr)
