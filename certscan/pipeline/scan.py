"""Certificate scan entry points (OCR -> field extraction -> form pre-fill)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..config import ExtractionConfig
from ..extract.fields import CertificateExtractor
from ..extract.schemas import ExtractionResult
from ..ocr.engine import OcrError, analyze_bytes
from ..regex.classify import infer_schemes
from ..regex.engine import load_rules, run_rules
from .schemas import ScanResult

LOGGER = logging.getLogger("certscan.pipeline")


def scan_certificate_text(
    text: str,
    *,
    fallback_name: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
    regex_rules_path: Optional[str] = None,
    regex_debug: bool = False,
) -> ScanResult:
    """Extract certificate fields from already-recognized text."""
    text = text or ""
    extraction = CertificateExtractor(config).extract(text, fallback_name)
    fields = {}
    if regex_rules_path:
        rules = load_rules(Path(regex_rules_path))
        fields = run_rules(text, rules, debug=regex_debug)
    return ScanResult(
        extraction=extraction,
        ocr_text=text,
        schemes=sorted(infer_schemes(text)),
        fields=fields,
    )


def scan_certificate_bytes(
    file_bytes: bytes,
    *,
    fallback_name: Optional[str] = None,
    lang: str = "eng",
    dpi: int = 300,
    psm: int = 6,
    binarize: bool = False,
    config: Optional[ExtractionConfig] = None,
    regex_rules_path: Optional[str] = None,
    regex_debug: bool = False,
) -> ScanResult:
    """OCR a certificate photo/PDF and pre-fill the confirmation form.

    When OCR fails the extractor is not run; the result is an empty
    manual-entry form carrying the OCR error message.
    """
    try:
        ocr_result = analyze_bytes(file_bytes, lang=lang, dpi=dpi, psm=psm, binarize=binarize)
    except OcrError as exc:
        LOGGER.warning("OCR failed, falling back to manual entry: %s", exc)
        return ScanResult(extraction=ExtractionResult.empty(), ocr_error=str(exc))

    return scan_certificate_text(
        ocr_result.ocr_text,
        fallback_name=fallback_name,
        config=config,
        regex_rules_path=regex_rules_path,
        regex_debug=regex_debug,
    )
