"""Keyword hints for the certification scheme a scanned card belongs to."""

from __future__ import annotations

import re
from typing import Dict, List, Set


CANONICAL_SCHEMES: Dict[str, List[str]] = {
    "cscs": ["cscs", "construction skills certification"],
    "cpcs": ["cpcs", "construction plant competence"],
    "ipaf": ["ipaf", "pal card", "powered access"],
    "pasma": ["pasma", "mobile access tower"],
    "smsts": ["smsts", "site management safety"],
    "sssts": ["sssts", "site supervisor safety"],
    "npors": ["npors"],
    "ecs": ["ecs card", "electrotechnical certification"],
    "first_aid": ["first aid", "efaw", "faw"],
    "fire_safety": ["fire safety", "fire marshal", "fire warden"],
    "forklift": ["forklift", "counterbalance", "reach truck"],
    "asbestos": ["asbestos"],
}


def infer_schemes(text: str) -> Set[str]:
    """Infer which certification schemes are mentioned in OCR text."""
    present = set()
    lower_text = text.lower()
    for canon, keywords in CANONICAL_SCHEMES.items():
        for kw in keywords:
            if re.search(rf"\b{re.escape(kw)}\b", lower_text):
                present.add(canon)
                break
    return present
