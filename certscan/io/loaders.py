"""Turn an uploaded certificate (PDF or phone photo) into page images."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import List

from pdf2image import convert_from_bytes
from PIL import Image, ImageOps


@dataclass
class PageImage:
    page: int
    image: Image.Image


def _open_photo(file_bytes: bytes) -> Image.Image:
    im = ImageOps.exif_transpose(Image.open(io.BytesIO(file_bytes)))
    return im if im.mode in ("RGB", "L") else im.convert("RGB")


def load_images_from_bytes(file_bytes: bytes, *, dpi: int = 300) -> List[PageImage]:
    """Every PDF page at ``dpi``, or the single photo upright per its EXIF tag."""
    if not file_bytes:
        raise ValueError("Empty document payload")
    if not file_bytes.startswith(b"%PDF"):
        return [PageImage(page=1, image=_open_photo(file_bytes))]

    pages = convert_from_bytes(file_bytes, dpi=dpi)
    if not pages:
        raise ValueError("Empty PDF")
    return [PageImage(page=idx, image=page.convert("RGB")) for idx, page in enumerate(pages, start=1)]
