"""Configuration loading (packaged YAML defaults + optional override file)."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


def _read_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load defaults and merge an optional override file section by section."""
    config = copy.deepcopy(_read_yaml(DEFAULTS_PATH))
    if path is None:
        return config
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    for section, values in _read_yaml(path).items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


@dataclass(frozen=True)
class OcrSettings:
    lang: str = "eng"
    dpi: int = 300
    psm: int = 6
    # Otsu threshold applied on top of denoising.
    binarize: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OcrSettings":
        base = cls()
        return cls(
            lang=str(data.get("lang", base.lang)),
            dpi=int(data.get("dpi", base.dpi)),
            psm=int(data.get("psm", base.psm)),
            binarize=bool(data.get("binarize", base.binarize)),
        )


@dataclass(frozen=True)
class ExtractionConfig:
    """Vocabulary and bounds used by the certificate field extractor.

    The defaults match the packaged ``defaults.yaml``.
    """
    title_keywords: Tuple[str, ...] = (
        "CSCS", "CPCS", "IPAF", "PASMA", "SMSTS", "SSSTS", "NPORS", "ECS", "CITB",
        "Certificate", "Certification", "Licence", "License", "Card", "Safety",
        "First Aid", "Training", "Qualification", "Award", "Diploma",
    )
    name_labels: Tuple[str, ...] = ("Cardholder", "Holder", "Employee", "Name")
    expiry_phrases: Tuple[str, ...] = ("expir", "valid to", "valid until")
    issue_phrases: Tuple[str, ...] = ("issue", "valid from", "date of issue")
    year_min: int = 1990
    year_max: int = 2050

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractionConfig":
        base = cls()
        return cls(
            title_keywords=tuple(data.get("title_keywords", base.title_keywords)),
            name_labels=tuple(data.get("name_labels", base.name_labels)),
            expiry_phrases=tuple(data.get("expiry_phrases", base.expiry_phrases)),
            issue_phrases=tuple(data.get("issue_phrases", base.issue_phrases)),
            year_min=int(data.get("year_min", base.year_min)),
            year_max=int(data.get("year_max", base.year_max)),
        )


@dataclass(frozen=True)
class LifecycleConfig:
    notification_days: int = 30
    recently_expired_days: int = 7


def load_ocr_settings(path: Optional[Path] = None) -> OcrSettings:
    return OcrSettings.from_dict(load_config(path).get("ocr") or {})


def load_extraction_config(path: Optional[Path] = None) -> ExtractionConfig:
    return ExtractionConfig.from_dict(load_config(path).get("extraction") or {})


def load_lifecycle_config(path: Optional[Path] = None) -> LifecycleConfig:
    data = load_config(path).get("lifecycle") or {}
    return LifecycleConfig(
        notification_days=int(data.get("notification_days", 30)),
        recently_expired_days=int(data.get("recently_expired_days", 7)),
    )


__all__ = [
    "DEFAULTS_PATH",
    "ExtractionConfig",
    "LifecycleConfig",
    "OcrSettings",
    "load_config",
    "load_extraction_config",
    "load_lifecycle_config",
    "load_ocr_settings",
]
