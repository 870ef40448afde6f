"""Evaluate extracted certificate fields against a JSONL manifest.

Each manifest line is ``{"text": ...}`` or ``{"path": ...}`` plus an
optional ``employee_name`` fallback and an ``expected`` mapping of field
name to value.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import ExtractionConfig
from .pipeline.scan import scan_certificate_bytes, scan_certificate_text

EVALUATED_FIELDS = ("employee_name", "qualification_title", "valid_from", "expiry_date")
_CASE_INSENSITIVE_FIELDS = {"employee_name", "qualification_title"}


@dataclass
class FieldStats:
    tp: int = 0
    fp: int = 0
    fn: int = 0

    def precision(self) -> float:
        return self.tp / (self.tp + self.fp) if (self.tp + self.fp) else 0.0

    def recall(self) -> float:
        return self.tp / (self.tp + self.fn) if (self.tp + self.fn) else 0.0

    def f1(self) -> float:
        p = self.precision()
        r = self.recall()
        return (2 * p * r / (p + r)) if (p + r) else 0.0


def _normalize_value(value: Any, *, field: Optional[str] = None) -> str:
    if value is None:
        return ""
    text = " ".join(str(value).split())
    if field in _CASE_INSENSITIVE_FIELDS:
        return text.lower()
    return text


def iter_manifest(path: Path) -> Iterable[Dict[str, Any]]:
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        yield json.loads(line)


def eval_fields(expected: Dict[str, Any], predicted: Dict[str, Any], stats: Dict[str, FieldStats]) -> None:
    """Count a predicted value as a false positive only when it is wrong or unexpected."""
    for field in EVALUATED_FIELDS:
        want = _normalize_value(expected.get(field), field=field)
        got = _normalize_value(predicted.get(field), field=field)
        stat = stats.setdefault(field, FieldStats())
        if want and got == want:
            stat.tp += 1
            continue
        if want:
            stat.fn += 1
        if got:
            stat.fp += 1


def evaluate_manifest(
    manifest: Path,
    *,
    config: Optional[ExtractionConfig] = None,
    lang: str = "eng",
) -> Tuple[Dict[str, Dict[str, float]], List[Dict[str, Any]]]:
    """Return (per-field summary, per-document rows)."""
    stats: Dict[str, FieldStats] = {}
    rows: List[Dict[str, Any]] = []
    for item in iter_manifest(manifest):
        fallback = item.get("employee_name")
        if "text" in item:
            result = scan_certificate_text(item["text"], fallback_name=fallback, config=config)
        else:
            payload = Path(item["path"]).read_bytes()
            result = scan_certificate_bytes(payload, fallback_name=fallback, config=config, lang=lang)
        predicted = result.extraction.to_dict()
        expected = item.get("expected", {})
        eval_fields(expected, predicted, stats)
        rows.append(
            {
                "path": item.get("path"),
                "expected": expected,
                "predicted": predicted,
                "ocr_error": result.ocr_error,
            }
        )

    summary = {}
    for field, stat in sorted(stats.items()):
        summary[field] = {
            "tp": stat.tp,
            "fp": stat.fp,
            "fn": stat.fn,
            "precision": stat.precision(),
            "recall": stat.recall(),
            "f1": stat.f1(),
        }
    return summary, rows
