"""OCR for certificate photos and PDFs.

This module provides `analyze_bytes`, which:
- loads an image or every PDF page,
- preprocesses each page and runs Tesseract on it,
- returns the recognized text with line structure preserved.

Anything that goes wrong while loading or recognizing is raised as
`OcrError`, so callers can fall back to manual entry.
"""

#=== Imports =============================================================
import logging
from dataclasses import dataclass, field
from typing import List, Sequence

import pytesseract
from pdf2image.exceptions import PDFInfoNotInstalledError, PDFPageCountError, PDFSyntaxError

from .postprocess import normalize_text, preprocess_image
from .tesseract import ocr_text
from ..io.loaders import load_images_from_bytes

LOGGER = logging.getLogger("certscan.ocr")

_OCR_FAILURES = (
    pytesseract.TesseractError,
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFSyntaxError,
    ValueError,
    OSError,
)


class OcrError(RuntimeError):
    """Text could not be recognized from the supplied document."""


#=== Helpers =============================================================

def _ocr_text(preprocessed_im, lang: str = "eng", psm: int = 6) -> str:
    """Indirection kept so tests can swap out the Tesseract call."""
    return ocr_text(preprocessed_im, lang=lang, psm=psm)


#=== Public API ==========================================================

@dataclass
class OcrResult:
    """Recognized text for a whole document plus the per-page texts."""
    ocr_text: str
    page_texts: List[str] = field(default_factory=list)


def analyze_pages(pages: Sequence, *, lang: str = "eng", psm: int = 6, binarize: bool = False) -> OcrResult:
    page_texts: List[str] = []
    for page in pages:
        try:
            raw = _ocr_text(preprocess_image(page.image, binarize=binarize), lang=lang, psm=psm)
        except _OCR_FAILURES as exc:
            raise OcrError(f"OCR failed on page {page.page}: {exc}") from exc
        text = normalize_text(raw)
        LOGGER.debug("Page %s: %d characters recognized", page.page, len(text))
        page_texts.append(text)
    return OcrResult(ocr_text="\n".join(t for t in page_texts if t), page_texts=page_texts)


def analyze_bytes(
    file_bytes: bytes,
    *,
    lang: str = "eng",
    dpi: int = 300,
    psm: int = 6,
    binarize: bool = False,
) -> OcrResult:
    """Run OCR on PDF/image bytes."""
    try:
        pages = load_images_from_bytes(file_bytes, dpi=dpi)
    except _OCR_FAILURES as exc:
        raise OcrError(f"Could not load document: {exc}") from exc
    return analyze_pages(pages, lang=lang, psm=psm, binarize=binarize)
