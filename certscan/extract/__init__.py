"""Certificate field extraction (schemas + heuristics)."""

from .schemas import Confidence, ExtractionResult, FieldConfidence, RecognizedDate
from .fields import CertificateExtractor, extract_certificate_fields

__all__ = [
    "CertificateExtractor",
    "Confidence",
    "ExtractionResult",
    "FieldConfidence",
    "RecognizedDate",
    "extract_certificate_fields",
]
