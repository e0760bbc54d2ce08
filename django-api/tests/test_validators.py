"""Unit tests for the shared field validators.

Run with: pytest tests/test_validators.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from marketplace.domain.errors import ValidationError
from marketplace.domain.validators import (
    normalize_instagram,
    parse_moment,
    validate_contact,
    validate_dates,
    validate_email,
    validate_instagram,
    validate_phone,
)


class TestValidatePhone:
    """Tests for validate_phone."""

    @pytest.mark.parametrize("value", ["081234567890", "0812345678", "123456789012345", 6281234567890])
    def test_accepts_ten_to_fifteen_digits(self, value):
        """All-digit values of 10-15 characters are valid."""
        assert validate_phone(value)

    @pytest.mark.parametrize(
        "value", ["123", "08123abc", "1234567890123456", "+6281234567", "", None, "0812 345 678"]
    )
    def test_rejects_other_values(self, value):
        """Short, long, non-digit or missing values are invalid."""
        assert not validate_phone(value)


class TestValidateContact:
    """Tests for validate_contact."""

    @pytest.mark.parametrize(
        "value", ["081234567890", "+6281234567890", "6281234567890", "info@bazaar.id"]
    )
    def test_accepts_phone_or_email(self, value):
        """Indonesian-style numbers and email addresses are accepted."""
        assert validate_contact(value)

    @pytest.mark.parametrize("value", ["12345", "18001234567", "not-an-email", "a@b", 81234567890])
    def test_rejects_other_values(self, value):
        """Anything else is rejected."""
        assert not validate_contact(value)

    def test_validate_email(self):
        """validate_email only accepts the email form."""
        assert validate_email("someone@example.com")
        assert not validate_email("081234567890")


class TestInstagram:
    """Tests for Instagram handle validation and normalization."""

    @pytest.mark.parametrize(
        "value",
        [
            "https://instagram.com/foo.bar/",
            "http://www.instagram.com/foo.bar",
            "instagram.com/foo.bar",
            "@foo.bar",
            "foo.bar",
        ],
    )
    def test_normalizes_to_bare_handle(self, value):
        """Every accepted form reduces to the bare handle."""
        assert validate_instagram(value)
        assert normalize_instagram(value) == "foo.bar"

    @pytest.mark.parametrize("value", ["", "foo bar", "a" * 31, "https://example.com/foo"])
    def test_rejects_invalid(self, value):
        """Invalid handles fail validation and normalization."""
        assert not validate_instagram(value)
        with pytest.raises(ValidationError):
            normalize_instagram(value)


class TestValidateDates:
    """Tests for validate_dates."""

    NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)

    def test_past_start_is_invalid(self):
        """A start date before today is rejected."""
        check = validate_dates("2020-01-01", "2020-01-05", self.NOW)
        assert not check.valid
        assert check.message == "Start date cannot be in the past"

    def test_future_range_is_valid(self):
        """Tomorrow to the day after is accepted."""
        tomorrow = (self.NOW + timedelta(days=1)).date().isoformat()
        day_after = (self.NOW + timedelta(days=2)).date().isoformat()
        check = validate_dates(tomorrow, day_after, self.NOW)
        assert check.valid
        assert check.start < check.end

    def test_end_before_start_is_invalid(self):
        """An end date before the start date is rejected."""
        tomorrow = (self.NOW + timedelta(days=1)).date().isoformat()
        today = self.NOW.date().isoformat()
        check = validate_dates(tomorrow, today, self.NOW)
        assert not check.valid
        assert check.message == "End date must be after start date"

    def test_today_counts_as_not_past(self):
        """Earlier today is still allowed as a start."""
        check = validate_dates("2025-06-15T08:00:00", "2025-06-15T20:00:00", self.NOW)
        assert check.valid

    def test_unparseable_dates(self):
        """Garbage input reports an invalid date format."""
        check = validate_dates("soon", "later", self.NOW)
        assert not check.valid
        with pytest.raises(ValidationError, match="Invalid date format"):
            check.raise_for_invalid()

    def test_parse_moment_reads_naive_values_as_utc(self):
        """Naive datetimes and bare dates are interpreted in UTC."""
        assert parse_moment("2025-06-15") == datetime(2025, 6, 15, tzinfo=timezone.utc)
        assert parse_moment("2025-06-15T10:30:00+07:00") == datetime(
            2025, 6, 15, 3, 30, tzinfo=timezone.utc
        )
