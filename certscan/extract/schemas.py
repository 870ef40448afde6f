"""Value objects produced by date recognition and certificate field extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from ..regex.dates import RecognizedDate


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class FieldConfidence:
    name: Confidence = Confidence.LOW
    title: Confidence = Confidence.LOW
    valid_from: Confidence = Confidence.LOW
    expiry: Confidence = Confidence.LOW


@dataclass(frozen=True)
class ExtractionResult:
    """Pre-filled certificate form handed to a human for confirmation.

    Dates are ISO ``YYYY-MM-DD`` strings. An empty string means the field could
    not be determined and must carry ``Confidence.LOW``.
    """
    employee_name: str = ""
    qualification_title: str = ""
    valid_from: str = ""
    expiry_date: str = ""
    confidence: FieldConfidence = field(default_factory=FieldConfidence)

    def __post_init__(self) -> None:
        pairs = (
            ("employee_name", self.employee_name, self.confidence.name),
            ("qualification_title", self.qualification_title, self.confidence.title),
            ("valid_from", self.valid_from, self.confidence.valid_from),
            ("expiry_date", self.expiry_date, self.confidence.expiry),
        )
        for name, value, level in pairs:
            if not value and level is not Confidence.LOW:
                raise ValueError(f"Empty field {name} must have low confidence, got {level.value}")

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employee_name": self.employee_name,
            "qualification_title": self.qualification_title,
            "valid_from": self.valid_from,
            "expiry_date": self.expiry_date,
            "confidence": {
                "name": self.confidence.name.value,
                "title": self.confidence.title.value,
                "valid_from": self.confidence.valid_from.value,
                "expiry": self.confidence.expiry.value,
            },
        }


__all__ = ["Confidence", "ExtractionResult", "FieldConfidence", "RecognizedDate"]
