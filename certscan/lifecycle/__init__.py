"""Qualification lifecycle (status, confirmation, expiry reminders)."""

from .status import (
    ExpiryAlert,
    Qualification,
    QualificationError,
    QualificationStatus,
    confirm_qualification,
    days_until_expiry,
    expiry_alerts,
    qualification_status,
)

__all__ = [
    "ExpiryAlert",
    "Qualification",
    "QualificationError",
    "QualificationStatus",
    "confirm_qualification",
    "days_until_expiry",
    "expiry_alerts",
    "qualification_status",
]
