"""Qualification expiry lifecycle: status, confirmation and reminders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from ..extract.schemas import ExtractionResult
from ..regex.dates import parse_date

DateLike = Union[date, str]

DEFAULT_NOTIFICATION_DAYS = 30
RECENTLY_EXPIRED_DAYS = 7


class QualificationError(ValueError):
    """A qualification record failed validation on confirmation."""


class QualificationStatus(str, Enum):
    VALID = "valid"
    EXPIRING = "expiring"
    EXPIRED = "expired"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    QualificationStatus.VALID: "Valid",
    QualificationStatus.EXPIRING: "Expiring Soon",
    QualificationStatus.EXPIRED: "Expired",
}


def _as_date(value: DateLike, field_name: str) -> date:
    if isinstance(value, date):
        return value
    text = (value or "").strip()
    if not text:
        raise QualificationError(f"{field_name} is required")
    try:
        return date.fromisoformat(text)
    except ValueError:
        parsed = parse_date(text)
    if parsed is None:
        raise QualificationError(f"{field_name} is not a valid date: {text!r}")
    return parsed


def days_until_expiry(expiry: DateLike, *, today: Optional[date] = None) -> int:
    """Whole days from today until expiry; negative once expired."""
    today = today or date.today()
    return (_as_date(expiry, "expiry_date") - today).days


def qualification_status(
    expiry: DateLike,
    notification_days: int = DEFAULT_NOTIFICATION_DAYS,
    *,
    today: Optional[date] = None,
) -> QualificationStatus:
    days = days_until_expiry(expiry, today=today)
    if days < 0:
        return QualificationStatus.EXPIRED
    if days <= notification_days:
        return QualificationStatus.EXPIRING
    return QualificationStatus.VALID


@dataclass(frozen=True)
class Qualification:
    """A confirmed qualification record, ready for storage."""
    title: str
    valid_from: date
    expiry_date: date
    notification_days: int = DEFAULT_NOTIFICATION_DAYS

    def days_until_expiry(self, *, today: Optional[date] = None) -> int:
        return days_until_expiry(self.expiry_date, today=today)

    def status(self, *, today: Optional[date] = None) -> QualificationStatus:
        return qualification_status(self.expiry_date, self.notification_days, today=today)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "valid_from": self.valid_from.isoformat(),
            "expiry_date": self.expiry_date.isoformat(),
            "notification_days": self.notification_days,
        }


def confirm_qualification(
    result: ExtractionResult,
    *,
    title: Optional[str] = None,
    valid_from: Optional[DateLike] = None,
    expiry_date: Optional[DateLike] = None,
    notification_days: int = DEFAULT_NOTIFICATION_DAYS,
) -> Qualification:
    """Build a qualification from a pre-filled form plus the reviewer's edits.

    Edited values take precedence over extracted ones. Every field is required
    and the expiry date must fall after the valid-from date.
    """
    final_title = (title if title is not None else result.qualification_title).strip()
    if not final_title:
        raise QualificationError("title is required")
    start = _as_date(valid_from if valid_from is not None else result.valid_from, "valid_from")
    end = _as_date(expiry_date if expiry_date is not None else result.expiry_date, "expiry_date")
    if end <= start:
        raise QualificationError("Expiry date must be after valid from date")
    if notification_days < 0:
        raise QualificationError("notification_days must not be negative")
    return Qualification(
        title=final_title,
        valid_from=start,
        expiry_date=end,
        notification_days=notification_days,
    )


@dataclass(frozen=True)
class ExpiryAlert:
    holder: str
    title: str
    days: int
    status: QualificationStatus

    @property
    def subject(self) -> str:
        if self.status is QualificationStatus.EXPIRED:
            return "Qualification Expired"
        return "Qualification Expiring Soon"

    @property
    def message(self) -> str:
        if self.status is QualificationStatus.EXPIRED:
            return f"{self.holder}'s {self.title} expired {abs(self.days)} days ago"
        return f"{self.holder}'s {self.title} expires in {self.days} days"

    def to_dict(self) -> dict:
        return {
            "holder": self.holder,
            "title": self.title,
            "days": self.days,
            "status": self.status.value,
            "subject": self.subject,
            "message": self.message,
        }


def expiry_alerts(
    records: Iterable[Tuple[str, Qualification]],
    *,
    today: Optional[date] = None,
    recently_expired_days: int = RECENTLY_EXPIRED_DAYS,
) -> List[ExpiryAlert]:
    """Reminders for qualifications expiring soon or expired within the last week."""
    today = today or date.today()
    alerts: List[ExpiryAlert] = []
    for holder, qual in records:
        days = qual.days_until_expiry(today=today)
        status = qual.status(today=today)
        if status is QualificationStatus.EXPIRING and 0 < days <= qual.notification_days:
            alerts.append(ExpiryAlert(holder=holder, title=qual.title, days=days, status=status))
        elif status is QualificationStatus.EXPIRED and days >= -recently_expired_days:
            alerts.append(ExpiryAlert(holder=holder, title=qual.title, days=days, status=status))
    return alerts
