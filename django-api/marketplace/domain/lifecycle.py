"""Event lifecycle rules.

Covers creation and patch validation plus the read-time fields derived
from an event's start and end dates. Reference checks (category, area,
vendor) need the store and live in the event service.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from marketplace.domain.errors import ValidationError
from marketplace.domain.models import Event
from marketplace.domain.validators import parse_moment, validate_contact, validate_dates
from marketplace.domain.value_objects import (
    AreaId,
    BoothSlot,
    CategoryId,
    Price,
    VendorId,
)

DAY = timedelta(days=1)

REQUIRED_FIELDS = (
    "name",
    "price",
    "description",
    "category",
    "event_category_id",
    "location",
    "booth_slot",
    "contact",
    "start_date",
    "end_date",
)
TEXT_FIELDS = ("name", "description", "category", "location")
PATCH_FIELDS = REQUIRED_FIELDS + ("area_id", "vendor_id")


class EventStatus(str, Enum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Timeline:
    """Fields derived from an event's dates at a given moment."""

    status: EventStatus
    duration_days: int
    days_until_start: int
    days_until_end: int
    is_registration_open: bool

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "duration_days": self.duration_days,
            "days_until_start": self.days_until_start,
            "days_until_end": self.days_until_end,
            "is_registration_open": self.is_registration_open,
        }


@dataclass(frozen=True)
class EventDraft:
    """Validated values for a new event."""

    name: str
    price: int
    description: str
    category: str
    category_id: CategoryId
    location: str
    contact: str
    start_date: datetime
    end_date: datetime
    booth_slot: int
    area_id: AreaId | None = None
    vendor_id: VendorId | None = None


def _ceil_days(delta: timedelta) -> int:
    return math.ceil(delta / DAY)


def event_status(start: datetime, end: datetime, now: datetime) -> EventStatus:
    if now > end:
        return EventStatus.COMPLETED
    if now >= start:
        return EventStatus.ONGOING
    return EventStatus.UPCOMING


def derive_timeline(start: datetime, end: datetime, now: datetime) -> Timeline:
    """Compute status, inclusive duration and day countdowns."""
    return Timeline(
        status=event_status(start, end, now),
        duration_days=_ceil_days(end - start) + 1,
        days_until_start=_ceil_days(start - now),
        days_until_end=_ceil_days(end - now),
        is_registration_open=start > now,
    )


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _price(value: Any) -> int:
    try:
        return Price.parse(value).amount
    except ValueError as exc:
        raise ValidationError(str(exc), received_price=str(value)) from None


def _booth_slot(value: Any) -> int:
    try:
        return BoothSlot.parse(value).value
    except ValueError as exc:
        raise ValidationError(str(exc)) from None


def _contact(value: Any) -> str:
    contact = str(value).strip()
    if not validate_contact(contact):
        raise ValidationError("Contact must be a valid phone number or email")
    return contact


def _optional_id(id_type: type[AreaId] | type[VendorId], value: Any) -> Any:
    return id_type.parse(value) if _is_present(value) else None


def validate_new_event(data: Mapping[str, Any], now: datetime) -> EventDraft:
    """Validate a creation payload.

    ``booth_slot`` defaults to BoothSlot.DEFAULT when absent.

    Raises:
        ValidationError: Naming every missing field, or the first invalid value.
        InvalidIdError: If a reference is not a valid identifier.
    """
    values = dict(data)
    if not _is_present(values.get("booth_slot")):
        values["booth_slot"] = BoothSlot.DEFAULT
    missing = [name for name in REQUIRED_FIELDS if not _is_present(values.get(name))]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )

    price = _price(values["price"])
    dates = validate_dates(values["start_date"], values["end_date"], now)
    dates.raise_for_invalid()
    contact = _contact(values["contact"])

    return EventDraft(
        name=str(values["name"]).strip(),
        price=price,
        description=str(values["description"]).strip(),
        category=str(values["category"]).strip(),
        category_id=CategoryId.parse(values["event_category_id"]),
        location=str(values["location"]).strip(),
        contact=contact,
        start_date=dates.start,
        end_date=dates.end,
        booth_slot=_booth_slot(values["booth_slot"]),
        area_id=_optional_id(AreaId, values.get("area_id")),
        vendor_id=_optional_id(VendorId, values.get("vendor_id")),
    )


def validate_event_patch(
    data: Mapping[str, Any],
    existing: Event,
    now: datetime,
    extra_changes: bool = False,
) -> dict[str, Any]:
    """Validate a partial update and return the changed fields.

    Only supplied fields are checked. When one date is supplied the pair is
    re-validated against the stored value of the other. ``extra_changes``
    signals asset changes handled by the caller, so an otherwise empty
    patch is still accepted.

    Raises:
        ValidationError: If no field is supplied or a supplied value is invalid.
    """
    supplied = {key: data[key] for key in PATCH_FIELDS if data.get(key) is not None}
    changes: dict[str, Any] = {}

    for name in TEXT_FIELDS:
        if name in supplied:
            text = str(supplied[name]).strip()
            if not text:
                raise ValidationError(f"{name.capitalize()} cannot be empty")
            changes[name] = text
    if "price" in supplied:
        changes["price"] = _price(supplied["price"])
    if "booth_slot" in supplied:
        changes["booth_slot"] = _booth_slot(supplied["booth_slot"])
    if "contact" in supplied:
        changes["contact"] = _contact(supplied["contact"])
    if "start_date" in supplied or "end_date" in supplied:
        dates = validate_dates(
            supplied.get("start_date", existing.start_date),
            supplied.get("end_date", existing.end_date),
            now,
        )
        dates.raise_for_invalid()
        if "start_date" in supplied:
            changes["start_date"] = dates.start
        if "end_date" in supplied:
            changes["end_date"] = dates.end
    if "event_category_id" in supplied:
        changes["category_id"] = CategoryId.parse(supplied["event_category_id"])
    if "area_id" in supplied:
        changes["area_id"] = _optional_id(AreaId, supplied["area_id"])
    if "vendor_id" in supplied:
        changes["vendor_id"] = _optional_id(VendorId, supplied["vendor_id"])

    if not changes and not extra_changes:
        raise ValidationError("At least one field is required to update")
    return changes


def event_statistics(
    events: Iterable[Event],
    booth_counts: Mapping[Any, int],
    now: datetime,
) -> dict[str, Any]:
    """Summarize events by status, price and projected booth revenue.

    ``booth_counts`` maps event ids to their number of booth applications.
    """
    events = list(events)
    by_status = {status: 0 for status in EventStatus}
    revenue = 0
    for event in events:
        status = event_status(event.start_date, event.end_date, now)
        by_status[status] += 1
        if status == EventStatus.UPCOMING:
            revenue += event.price * booth_counts.get(event.id, 0)
    prices = [event.price for event in events]
    return {
        "total_events": len(events),
        "upcoming_events": by_status[EventStatus.UPCOMING],
        "ongoing_events": by_status[EventStatus.ONGOING],
        "completed_events": by_status[EventStatus.COMPLETED],
        "total_booths": sum(booth_counts.get(event.id, 0) for event in events),
        "price_stats": {
            "min_price": min(prices) if prices else 0,
            "max_price": max(prices) if prices else 0,
            "avg_price": round(sum(prices) / len(prices)) if prices else 0,
        },
        "revenue_projection": revenue,
    }


def parse_date_filter(value: Any) -> datetime | None:
    """Parse an optional date query parameter.

    Raises:
        ValidationError: If the value is present but not a date.
    """
    if not _is_present(value):
        return None
    moment = parse_moment(value)
    if moment is None:
        raise ValidationError("Invalid date format")
    return moment
