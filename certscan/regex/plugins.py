"""Built-in plugins and validators for certificate regex rules."""

from __future__ import annotations

import re
from typing import Dict

CARD_NUMBER_RE = re.compile(
    r"\b(?:card|registration|reg|certificate|licence|license)\s*(?:no\.?|number|#)\s*[:\-]?\s*([A-Z0-9][A-Z0-9\-/]{3,})",
    re.I,
)


def card_number(text: str, _results: Dict[str, object]) -> Dict[str, object]:
    """Pull a labelled card or registration number."""
    match = CARD_NUMBER_RE.search(text)
    if not match:
        return {}
    return {"card_number": match.group(1).upper()}


def is_card_number(value: str, _ctx: Dict[str, object]) -> bool:
    """Card numbers hold at least one digit plus letters, digits, dashes or slashes."""
    value = value.upper()
    return re.fullmatch(r"[A-Z0-9][A-Z0-9\-/]{3,}", value) is not None and any(ch.isdigit() for ch in value)


PLUGINS = {
    "card_number": card_number,
}

VALIDATORS = {
    "is_card_number": is_card_number,
}
