from .extract.fields import CertificateExtractor, extract_certificate_fields
from .extract.schemas import Confidence, ExtractionResult, FieldConfidence, RecognizedDate
from .lifecycle.status import Qualification, QualificationStatus, confirm_qualification, qualification_status
from .pipeline.scan import scan_certificate_bytes, scan_certificate_text
from .pipeline.schemas import ScanResult
from .regex.dates import recognize_dates

__version__ = "0.1.0"

__all__ = [
    "CertificateExtractor",
    "Confidence",
    "ExtractionResult",
    "FieldConfidence",
    "Qualification",
    "QualificationStatus",
    "RecognizedDate",
    "ScanResult",
    "confirm_qualification",
    "extract_certificate_fields",
    "qualification_status",
    "recognize_dates",
    "scan_certificate_bytes",
    "scan_certificate_text",
]
