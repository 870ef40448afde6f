"""IO helpers (loaders and writers)."""

from .loaders import PageImage, load_images_from_bytes
from .writers import dumps, write_json, write_jsonl

__all__ = [
    "PageImage",
    "dumps",
    "load_images_from_bytes",
    "write_json",
    "write_jsonl",
]
