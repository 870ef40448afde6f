"""Pipeline package (end-to-end certificate scans)."""

from .scan import scan_certificate_bytes, scan_certificate_text
from .schemas import ScanResult

__all__ = ["ScanResult", "scan_certificate_bytes", "scan_certificate_text"]
