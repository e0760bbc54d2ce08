"""Unit tests for event lifecycle rules.

The clock is pinned so derived fields are deterministic.
Run with: pytest tests/test_lifecycle.py -v
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from marketplace.domain import CategoryId, Event, EventId
from marketplace.domain.errors import InvalidIdError, ValidationError
from marketplace.domain.lifecycle import (
    EventStatus,
    derive_timeline,
    event_statistics,
    parse_date_filter,
    validate_event_patch,
    validate_new_event,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def _payload(**overrides):
    payload = {
        "name": "Night Bazaar",
        "price": "50000",
        "description": "Weekend market",
        "category": "Food",
        "event_category_id": str(uuid.uuid4()),
        "location": "Senayan",
        "contact": "081234567890",
        "start_date": "2025-07-01",
        "end_date": "2025-07-03",
    }
    payload.update(overrides)
    return payload


def _event(start: datetime, end: datetime, price: int = 100) -> Event:
    return Event(
        id=EventId(uuid.uuid4()),
        name="Night Bazaar",
        price=price,
        description="Weekend market",
        category="Food",
        category_id=CategoryId(uuid.uuid4()),
        location="Senayan",
        contact="081234567890",
        start_date=start,
        end_date=end,
        booth_slot=10,
        area_id=None,
        vendor_id=None,
        banner=None,
        permit_img=None,
        created_at=NOW,
    )


class TestTimeline:
    """Tests for derived status and durations."""

    def test_ongoing(self):
        """An event that started two days ago and ends in two days is ongoing."""
        timeline = derive_timeline(NOW - timedelta(days=2), NOW + timedelta(days=2), NOW)
        assert timeline.status == EventStatus.ONGOING
        assert not timeline.is_registration_open

    def test_completed(self):
        """An event that ended yesterday is completed."""
        timeline = derive_timeline(NOW - timedelta(days=3), NOW - timedelta(days=1), NOW)
        assert timeline.status == EventStatus.COMPLETED

    def test_upcoming(self):
        """An event starting tomorrow is upcoming with registration open."""
        timeline = derive_timeline(NOW + timedelta(days=1), NOW + timedelta(days=3), NOW)
        assert timeline.status == EventStatus.UPCOMING
        assert timeline.is_registration_open
        assert timeline.days_until_start == 1

    def test_duration_is_inclusive(self):
        """A two-day span counts both ends."""
        timeline = derive_timeline(NOW, NOW + timedelta(days=2), NOW)
        assert timeline.duration_days == 3

    def test_derivation_is_repeatable(self):
        """The same inputs and clock always yield the same fields."""
        start, end = NOW + timedelta(hours=5), NOW + timedelta(days=1, hours=2)
        assert derive_timeline(start, end, NOW) == derive_timeline(start, end, NOW)
        assert derive_timeline(start, end, NOW).as_dict()["status"] == "upcoming"


class TestValidateNewEvent:
    """Tests for event creation validation."""

    def test_valid_payload(self):
        """A complete payload produces a draft with the default booth slot."""
        draft = validate_new_event(_payload(), NOW)
        assert draft.price == 50000
        assert draft.booth_slot == 10
        assert draft.start_date == datetime(2025, 7, 1, tzinfo=timezone.utc)
        assert draft.area_id is None

    def test_missing_fields_are_all_named(self):
        """Every missing required field is listed."""
        with pytest.raises(ValidationError) as exc_info:
            validate_new_event(_payload(name="", location=None), NOW)
        assert exc_info.value.details["missing_fields"] == ["name", "location"]

    def test_price_zero_allowed(self):
        """Free events are allowed."""
        assert validate_new_event(_payload(price="0"), NOW).price == 0

    def test_negative_price_rejected(self):
        """A negative price is rejected and echoed back."""
        with pytest.raises(ValidationError) as exc_info:
            validate_new_event(_payload(price="-5"), NOW)
        assert exc_info.value.details["received_price"] == "-5"

    def test_past_start_rejected(self):
        """Events cannot start in the past."""
        with pytest.raises(ValidationError, match="Start date cannot be in the past"):
            validate_new_event(_payload(start_date="2025-06-01"), NOW)

    def test_invalid_contact_rejected(self):
        """The contact must be a phone number or email."""
        with pytest.raises(ValidationError, match="Contact"):
            validate_new_event(_payload(contact="call me"), NOW)

    def test_malformed_category_id(self):
        """A malformed category reference is an invalid id."""
        with pytest.raises(InvalidIdError):
            validate_new_event(_payload(event_category_id="abc"), NOW)


class TestValidateEventPatch:
    """Tests for partial event updates."""

    def test_only_supplied_fields_change(self):
        """Unsupplied fields are left out of the changes."""
        existing = _event(NOW + timedelta(days=5), NOW + timedelta(days=6))
        changes = validate_event_patch({"name": " Renamed ", "price": None}, existing, NOW)
        assert changes == {"name": "Renamed"}

    def test_empty_patch_rejected(self):
        """A patch with nothing to change is refused."""
        existing = _event(NOW + timedelta(days=5), NOW + timedelta(days=6))
        with pytest.raises(ValidationError, match="At least one field"):
            validate_event_patch({}, existing, NOW)

    def test_asset_only_patch_allowed(self):
        """Asset changes alone make a valid patch."""
        existing = _event(NOW + timedelta(days=5), NOW + timedelta(days=6))
        assert validate_event_patch({}, existing, NOW, extra_changes=True) == {}

    def test_single_date_checked_against_stored_pair(self):
        """A new end date before the stored start is rejected."""
        existing = _event(NOW + timedelta(days=5), NOW + timedelta(days=6))
        with pytest.raises(ValidationError, match="End date must be after start date"):
            validate_event_patch({"end_date": "2025-06-16"}, existing, NOW)


class TestEventStatistics:
    """Tests for event statistics."""

    def test_counts_and_revenue(self):
        """Statuses are counted and revenue is projected for upcoming events only."""
        upcoming = _event(NOW + timedelta(days=1), NOW + timedelta(days=2), price=100)
        completed = _event(NOW - timedelta(days=5), NOW - timedelta(days=4), price=300)
        stats = event_statistics(
            [upcoming, completed], {upcoming.id: 3, completed.id: 2}, NOW
        )
        assert stats["total_events"] == 2
        assert stats["upcoming_events"] == 1
        assert stats["completed_events"] == 1
        assert stats["total_booths"] == 5
        assert stats["revenue_projection"] == 300
        assert stats["price_stats"] == {"min_price": 100, "max_price": 300, "avg_price": 200}

    def test_empty(self):
        """No events yield zeroed statistics."""
        stats = event_statistics([], {}, NOW)
        assert stats["total_events"] == 0
        assert stats["price_stats"]["avg_price"] == 0


class TestParseDateFilter:
    """Tests for date query parameters."""

    def test_absent_is_none(self):
        """Blank values mean no filter."""
        assert parse_date_filter("") is None

    def test_invalid_raises(self):
        """Garbage dates are rejected."""
        with pytest.raises(ValidationError):
            parse_date_filter("yesterday")
