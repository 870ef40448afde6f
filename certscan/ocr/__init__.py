"""OCR package (engine + helpers)."""

from .engine import OcrError, OcrResult, analyze_bytes

__all__ = ["OcrError", "OcrResult", "analyze_bytes"]
