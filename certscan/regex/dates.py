"""Date recognition for noisy certificate OCR text.

Three day-month-year shaped formats are supported:

- numeric day-first (``01/03/2023``, ``1.3.23``, ``01-03-2023``),
- numeric year-first (``2023-03-01``, ``2023.3.1``),
- day + English month name + year (``1 March 2023``, ``01 Mar 2023``).

Every accepted match is a real calendar date with a plausible year.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

LOGGER = logging.getLogger("certscan.dates")


@dataclass(frozen=True)
class RecognizedDate:
    """A date found in OCR text, with the line it came from for label context."""
    original_text: str
    value: date
    source_line: str

    @property
    def iso(self) -> str:
        return self.value.isoformat()


YEAR_MIN = 1990
YEAR_MAX = 2050

_MONTH_ABBREVIATIONS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

# Guards sit on the digit side only; letters may touch a date.
DAY_FIRST_RE = re.compile(r"(?<!\d)(\d{1,2})[./-](\d{1,2})[./-](\d{4}|\d{2})(?!\d)")
YEAR_FIRST_RE = re.compile(r"(?<!\d)(\d{4})[./-](\d{1,2})[./-](\d{1,2})(?!\d)")
MONTH_NAME_RE = re.compile(r"(?<!\d)(\d{1,2})(?:st|nd|rd|th)?\s+([A-Za-z]{3,})\.?,?\s+(\d{4}|\d{2})(?!\d)", re.I)


def normalize_year(raw: str) -> int:
    """Two-digit years are read as 20YY."""
    year = int(raw)
    if len(raw.strip()) <= 2:
        return 2000 + year
    return year


def month_from_name(token: str) -> Optional[int]:
    """Resolve a month token by its first three letters (``"Sept"`` -> 9)."""
    prefix = token[:3].lower()
    if prefix in _MONTH_ABBREVIATIONS:
        return _MONTH_ABBREVIATIONS.index(prefix) + 1
    return None


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _build_day_first(match: re.Match) -> Optional[date]:
    day, month, year = match.groups()
    return _safe_date(normalize_year(year), int(month), int(day))


def _build_year_first(match: re.Match) -> Optional[date]:
    year, month, day = match.groups()
    return _safe_date(int(year), int(month), int(day))


def _build_month_name(match: re.Match) -> Optional[date]:
    day, month_token, year = match.groups()
    month = month_from_name(month_token)
    if month is None:
        return None
    return _safe_date(normalize_year(year), month, int(day))


@dataclass(frozen=True)
class DateMatcher:
    """A date format: pattern plus a normalizer turning a match into a date."""
    name: str
    pattern: re.Pattern
    build: Callable[[re.Match], Optional[date]]

    def parse(self, text: str, *, year_min: int = YEAR_MIN, year_max: int = YEAR_MAX) -> Optional[date]:
        match = self.pattern.fullmatch(text.strip())
        if not match:
            return None
        value = self.build(match)
        if value is None or not year_min <= value.year <= year_max:
            return None
        return value


DAY_FIRST = DateMatcher("day_first", DAY_FIRST_RE, _build_day_first)
YEAR_FIRST = DateMatcher("year_first", YEAR_FIRST_RE, _build_year_first)
MONTH_NAME = DateMatcher("month_name", MONTH_NAME_RE, _build_month_name)

# Priority order when two formats start at the same position.
DATE_MATCHERS: Tuple[DateMatcher, ...] = (DAY_FIRST, YEAR_FIRST, MONTH_NAME)


def parse_day_first(text: str) -> Optional[date]:
    return DAY_FIRST.parse(text)


def parse_year_first(text: str) -> Optional[date]:
    return YEAR_FIRST.parse(text)


def parse_month_name(text: str) -> Optional[date]:
    return MONTH_NAME.parse(text)


def parse_date(text: str, *, matchers: Sequence[DateMatcher] = DATE_MATCHERS) -> Optional[date]:
    """Parse a single date substring; the first format that accepts it wins."""
    for matcher in matchers:
        value = matcher.parse(text)
        if value is not None:
            return value
    return None


def _overlaps(span: Tuple[int, int], claimed: List[Tuple[int, int]]) -> bool:
    start, end = span
    return any(start < c_end and c_start < end for c_start, c_end in claimed)


def _recognize_line(
    line: str,
    matchers: Sequence[DateMatcher],
    year_min: int,
    year_max: int,
) -> Iterator[RecognizedDate]:
    candidates = []
    for priority, matcher in enumerate(matchers):
        for match in matcher.pattern.finditer(line):
            candidates.append((match.start(), priority, match, matcher))
    candidates.sort(key=lambda c: (c[0], c[1]))

    claimed: List[Tuple[int, int]] = []
    for _, _, match, matcher in candidates:
        if _overlaps(match.span(), claimed):
            continue
        value = matcher.build(match)
        if value is None:
            LOGGER.debug("Rejected invalid %s date %r", matcher.name, match.group(0))
            continue
        if not year_min <= value.year <= year_max:
            LOGGER.debug("Rejected out-of-range year in %r", match.group(0))
            continue
        claimed.append(match.span())
        yield RecognizedDate(original_text=match.group(0), value=value, source_line=line)


def recognize_dates(
    text: str,
    *,
    year_min: int = YEAR_MIN,
    year_max: int = YEAR_MAX,
    matchers: Sequence[DateMatcher] = DATE_MATCHERS,
) -> Iterator[RecognizedDate]:
    """Yield every plausible date in text, in line order then left to right."""
    if not text:
        return
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        yield from _recognize_line(line, matchers, year_min, year_max)
