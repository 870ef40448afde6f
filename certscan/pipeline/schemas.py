"""Output schema for a certificate scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..extract.schemas import ExtractionResult


@dataclass
class ScanResult:
    extraction: ExtractionResult
    ocr_text: str = ""
    schemes: List[str] = field(default_factory=list)
    fields: Dict[str, Any] = field(default_factory=dict)
    ocr_error: Optional[str] = None

    @property
    def manual_entry(self) -> bool:
        """True when OCR failed and the form starts out empty."""
        return self.ocr_error is not None

    def to_dict(self) -> dict:
        return {
            "extraction": self.extraction.to_dict(),
            "ocr_text": self.ocr_text,
            "schemes": list(self.schemes),
            "fields": dict(self.fields),
            "ocr_error": self.ocr_error,
            "manual_entry": self.manual_entry,
        }
