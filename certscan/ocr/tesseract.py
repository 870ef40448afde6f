"""Tesseract OCR engine adapter."""

from __future__ import annotations

import pytesseract


def ocr_text(preprocessed_im, *, lang: str = "eng", psm: int = 6) -> str:
    """Run OCR and return the recognized text with its line breaks."""
    cfg = f"--oem 3 --psm {psm}"
    return pytesseract.image_to_string(preprocessed_im, lang=lang, config=cfg)
