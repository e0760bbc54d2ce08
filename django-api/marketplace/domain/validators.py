"""Field-level checks shared by every entity family."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

from marketplace.domain.errors import ValidationError

PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15

_DIGITS = re.compile(r"[0-9]+")
_CONTACT_PHONE = re.compile(r"^(\+62|62|0)[0-9]{9,13}$")
_CONTACT_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_INSTAGRAM = re.compile(
    r"^(?:https?://)?(?:www\.)?instagram\.com/(?P<url_handle>[A-Za-z0-9._]{1,30})/?$"
    r"|^@?(?P<handle>[A-Za-z0-9._]{1,30})$"
)


def validate_phone(value: Any) -> bool:
    """Return True for 10-15 character all-digit values.

    No country-code normalization is applied.
    """
    if value is None or isinstance(value, bool):
        return False
    text = str(value)
    if not PHONE_MIN_DIGITS <= len(text) <= PHONE_MAX_DIGITS:
        return False
    return _DIGITS.fullmatch(text) is not None


def validate_contact(value: Any) -> bool:
    """Return True for an Indonesian-style phone number or an email address."""
    if not isinstance(value, str):
        return False
    return bool(_CONTACT_PHONE.fullmatch(value) or _CONTACT_EMAIL.fullmatch(value))


def validate_email(value: Any) -> bool:
    return isinstance(value, str) and _CONTACT_EMAIL.fullmatch(value) is not None


def validate_instagram(value: Any) -> bool:
    """Return True for a bare handle (optionally ``@``-prefixed) or a profile URL."""
    if not isinstance(value, str) or not value:
        return False
    return _INSTAGRAM.fullmatch(value) is not None


def normalize_instagram(value: str) -> str:
    """Reduce a handle or profile URL to the bare handle.

    Raises:
        ValidationError: If the value is neither a handle nor a profile URL.
    """
    match = _INSTAGRAM.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise ValidationError("Invalid Instagram username or URL")
    return match.group("url_handle") or match.group("handle")


def parse_moment(value: Any) -> datetime | None:
    """Parse a date or datetime into an aware UTC datetime.

    Bare dates map to midnight UTC and naive datetimes are read as UTC.
    Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        try:
            moment = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class DateCheck:
    """Outcome of a start/end date validation."""

    valid: bool
    message: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def raise_for_invalid(self) -> None:
        if not self.valid:
            raise ValidationError(self.message or "Invalid date format")


def validate_dates(start: Any, end: Any, now: datetime) -> DateCheck:
    """Check that both dates parse, start is not before today and end >= start."""
    start_at = parse_moment(start)
    end_at = parse_moment(end)
    if start_at is None or end_at is None:
        return DateCheck(valid=False, message="Invalid date format")

    start_of_today = now.astimezone(timezone.utc).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    if start_at < start_of_today:
        return DateCheck(valid=False, message="Start date cannot be in the past")
    if end_at < start_at:
        return DateCheck(valid=False, message="End date must be after start date")
    return DateCheck(valid=True, start=start_at, end=end_at)
