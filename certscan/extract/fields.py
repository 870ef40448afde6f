"""Certificate field extraction from OCR text.

Infers holder name, qualification title and validity window from the raw
lines of a scanned certificate, each tagged with a confidence level:

- high: explicit keyword/label match or a strong pattern,
- medium: positional fallback (first/last date, caller-supplied name),
- low: nothing found (the field is empty).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence

from ..config import ExtractionConfig, load_extraction_config
from ..regex.dates import recognize_dates
from .schemas import Confidence, ExtractionResult, FieldConfidence, RecognizedDate

LOGGER = logging.getLogger("certscan.extract")

_NAME_WORD = r"[A-Z][a-z]+"
NAME_WORD_RE = re.compile(_NAME_WORD)
# A line holding nothing but two or three capitalized words.
BARE_NAME_RE = re.compile(rf"{_NAME_WORD}(?:\s+{_NAME_WORD}){{1,2}}")


def split_lines(text: str) -> List[str]:
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def labelled_name_pattern(labels: Iterable[str]) -> re.Pattern:
    """Label token, then colon or whitespace, then 2-4 whole capitalized words."""
    alternatives = "|".join(re.escape(label) for label in sorted(labels, key=len, reverse=True))
    return re.compile(
        rf"\b(?i:{alternatives})\b\s*[:\s]\s*({_NAME_WORD}(?:\s+{_NAME_WORD}){{1,3}})(?![\w'-])"
    )


def is_valid_name(candidate: str) -> bool:
    words = candidate.split()
    if not 2 <= len(words) <= 4:
        return False
    return all(NAME_WORD_RE.fullmatch(word) for word in words)


def extract_title(lines: Sequence[str], keywords: Iterable[str]) -> Optional[str]:
    """Return the longest line containing any keyword (case-insensitive)."""
    needles = [kw.lower() for kw in keywords if kw]
    best: Optional[str] = None
    for line in lines:
        lower = line.lower()
        if not any(needle in lower for needle in needles):
            continue
        if best is None or len(line) > len(best):
            best = line
    return best


def extract_name(lines: Sequence[str], name_labels: Iterable[str]) -> Optional[str]:
    """Return the first labelled or bare name found, scanning lines in order."""
    labelled_re = labelled_name_pattern(name_labels)
    for line in lines:
        match = labelled_re.search(line)
        if match and is_valid_name(match.group(1)):
            return " ".join(match.group(1).split())
        if BARE_NAME_RE.fullmatch(line) and is_valid_name(line):
            return " ".join(line.split())
    return None


@dataclass(frozen=True)
class DateAssignment:
    valid_from: Optional[date] = None
    expiry: Optional[date] = None
    valid_from_confidence: Confidence = Confidence.LOW
    expiry_confidence: Confidence = Confidence.LOW


def _line_mentions(line: str, phrases: Iterable[str]) -> bool:
    lower = line.lower()
    return any(phrase.lower() in lower for phrase in phrases)


def assign_dates(
    dates: Sequence[RecognizedDate],
    *,
    expiry_phrases: Iterable[str],
    issue_phrases: Iterable[str],
) -> DateAssignment:
    """Assign valid-from and expiry dates from labels, then by position.

    Labelled assignment is a straight overwrite during the scan, so the last
    labelled line of each kind wins. When no expiry label is found, the first
    and last dates become valid-from and expiry, replacing any labelled
    valid-from.
    """
    expiry_phrases = tuple(expiry_phrases)
    issue_phrases = tuple(issue_phrases)
    valid_from: Optional[date] = None
    expiry: Optional[date] = None
    valid_from_conf = Confidence.LOW
    expiry_conf = Confidence.LOW

    for item in dates:
        if _line_mentions(item.source_line, expiry_phrases):
            expiry, expiry_conf = item.value, Confidence.HIGH
        if _line_mentions(item.source_line, issue_phrases):
            valid_from, valid_from_conf = item.value, Confidence.HIGH

    if expiry is None and len(dates) >= 2:
        valid_from, valid_from_conf = dates[0].value, Confidence.MEDIUM
        expiry, expiry_conf = dates[-1].value, Confidence.MEDIUM
    elif expiry is None and len(dates) == 1:
        expiry, expiry_conf = dates[0].value, Confidence.MEDIUM

    return DateAssignment(
        valid_from=valid_from,
        expiry=expiry,
        valid_from_confidence=valid_from_conf,
        expiry_confidence=expiry_conf,
    )


@lru_cache(maxsize=1)
def default_extraction_config() -> ExtractionConfig:
    return load_extraction_config()


class CertificateExtractor:
    """Turns certificate OCR text into an ``ExtractionResult``."""

    def __init__(self, config: Optional[ExtractionConfig] = None) -> None:
        self.config = config or default_extraction_config()

    def extract(self, text: str, fallback_name: Optional[str] = None) -> ExtractionResult:
        cfg = self.config
        lines = split_lines(text)
        dates = list(recognize_dates(text, year_min=cfg.year_min, year_max=cfg.year_max))

        title = extract_title(lines, cfg.title_keywords) or ""
        title_conf = Confidence.HIGH if title else Confidence.LOW

        name = extract_name(lines, cfg.name_labels) or ""
        name_conf = Confidence.HIGH if name else Confidence.LOW
        if not name and fallback_name and fallback_name.strip():
            name, name_conf = fallback_name.strip(), Confidence.MEDIUM

        assigned = assign_dates(dates, expiry_phrases=cfg.expiry_phrases, issue_phrases=cfg.issue_phrases)

        LOGGER.debug(
            "Extracted name=%r title=%r from %d lines, %d dates",
            name,
            title,
            len(lines),
            len(dates),
        )
        return ExtractionResult(
            employee_name=name,
            qualification_title=title,
            valid_from=assigned.valid_from.isoformat() if assigned.valid_from else "",
            expiry_date=assigned.expiry.isoformat() if assigned.expiry else "",
            confidence=FieldConfidence(
                name=name_conf,
                title=title_conf,
                valid_from=assigned.valid_from_confidence,
                expiry=assigned.expiry_confidence,
            ),
        )


def extract_certificate_fields(
    text: str,
    fallback_name: Optional[str] = None,
    *,
    config: Optional[ExtractionConfig] = None,
) -> ExtractionResult:
    """Extract holder name, title and validity dates from certificate text."""
    return CertificateExtractor(config).extract(text, fallback_name)
