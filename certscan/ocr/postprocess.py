"""Image preprocessing and OCR text cleanup."""

from __future__ import annotations

import re

import cv2
import numpy as np
from PIL import Image

_SPACES_RE = re.compile(r"[ \t\f\v]+")


def normalize_text(text: str) -> str:
    """Collapse whitespace inside lines and drop blank lines, keeping line breaks."""
    lines = (_SPACES_RE.sub(" ", line).strip() for line in (text or "").splitlines())
    return "\n".join(line for line in lines if line)


def _to_cv(im: Image.Image) -> np.ndarray:
    """Convert PIL image to OpenCV BGR array."""
    return cv2.cvtColor(np.array(im.convert("RGB")), cv2.COLOR_RGB2BGR)


def preprocess_image(im: Image.Image, *, binarize: bool = False) -> np.ndarray:
    """Preprocess a certificate photo to improve OCR quality.

    Returns a grayscale, denoised image array suitable for Tesseract. With
    ``binarize`` an Otsu threshold is applied on top, which helps with glossy
    cards photographed under uneven light.
    """
    gray = cv2.cvtColor(_to_cv(im), cv2.COLOR_BGR2GRAY)

    # Light denoising reduces speckle without destroying glyphs.
    denoised = cv2.fastNlMeansDenoising(gray, h=8)
    if not binarize:
        return denoised

    _, binary = cv2.threshold(denoised, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return binary
