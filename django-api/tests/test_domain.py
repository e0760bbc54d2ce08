"""Unit tests for domain primitives.

These test invariants that must hold at construction time.
Run with: pytest tests/test_domain.py -v
"""

import uuid

import pytest

from marketplace.domain import BoothSlot, EventId, Price, Role, StarRating, VendorId
from marketplace.domain.access import (
    ADMIN_ONLY,
    AUTHENTICATED,
    VENDOR_OR_ADMIN,
    describe,
    is_allowed,
    parse_role,
)
from marketplace.domain.bulk import require_valid_batch, validate_batch
from marketplace.domain.deletion import DeleteMode, evaluate_delete, parse_force
from marketplace.domain.errors import (
    DependentsExistError,
    ErrorCode,
    InvalidIdError,
    StoreError,
    ValidationError,
)


class TestPrice:
    """Tests for Price value object."""

    def test_price_accepts_zero(self):
        """Price can be created with zero."""
        assert Price(0).amount == 0

    def test_price_rejects_negative_amount(self):
        """Price raises ValueError for negative amount."""
        with pytest.raises(ValueError):
            Price(-1)

    def test_parse_numeric_string(self):
        """Price.parse reads whole numbers from strings."""
        assert Price.parse(" 75000 ").amount == 75000

    @pytest.mark.parametrize("value", ["abc", None, True, "12.5"])
    def test_parse_rejects_non_integers(self, value):
        """Price.parse rejects values that are not whole numbers."""
        with pytest.raises(ValueError):
            Price.parse(value)

    def test_price_rejects_values_beyond_column_range(self):
        """Prices above the integer column limit are rejected."""
        assert Price(2147483647).amount == 2147483647
        with pytest.raises(ValueError, match="cannot exceed"):
            Price.parse("99999999999999999999")


class TestBoothSlotAndStars:
    """Tests for BoothSlot and StarRating."""

    def test_booth_slot_must_be_positive(self):
        """BoothSlot rejects zero."""
        with pytest.raises(ValueError):
            BoothSlot(0)

    def test_booth_slot_parse(self):
        """BoothSlot.parse reads numeric strings."""
        assert BoothSlot.parse("12").value == 12

    def test_booth_slot_rejects_values_beyond_column_range(self):
        """BoothSlot rejects values above the integer column limit."""
        with pytest.raises(ValueError, match="cannot exceed"):
            BoothSlot.parse("2147483648")

    @pytest.mark.parametrize("value", [0, 6])
    def test_star_rating_range(self, value):
        """StarRating only accepts 1 through 5."""
        with pytest.raises(ValueError):
            StarRating(value)


class TestEntityId:
    """Tests for EntityId subclasses."""

    def test_parse_valid_uuid(self):
        """A UUID string parses into the typed id."""
        raw = uuid.uuid4()
        assert EventId.parse(str(raw)).value == raw

    def test_parse_invalid_uuid_raises_invalid_id(self):
        """A malformed id raises InvalidIdError naming the entity."""
        with pytest.raises(InvalidIdError) as exc_info:
            EventId.parse("not-a-uuid")
        assert exc_info.value.code == ErrorCode.INVALID_ID
        assert exc_info.value.message == "Valid event ID is required"

    def test_ids_of_different_kinds_are_not_equal(self):
        """The same UUID under two entity types compares unequal."""
        raw = uuid.uuid4()
        assert EventId(raw) != VendorId(raw)
        assert EventId(raw) == EventId(raw)


class TestRoles:
    """Tests for the role predicate."""

    def test_empty_requirement_allows_any_role(self):
        """Authentication-only checks accept every role, known or not."""
        assert is_allowed(Role.USER, AUTHENTICATED)
        assert is_allowed("mystery", AUTHENTICATED)

    def test_membership(self):
        """A role passes only when it is in the required set."""
        assert is_allowed(Role.ADMIN, ADMIN_ONLY)
        assert not is_allowed(Role.VENDOR, ADMIN_ONLY)
        assert is_allowed("vendor", VENDOR_OR_ADMIN)

    def test_unknown_role_fails_role_checks(self):
        """Unknown or missing roles never satisfy a role requirement."""
        assert not is_allowed("superuser", ADMIN_ONLY)
        assert not is_allowed(None, VENDOR_OR_ADMIN)

    def test_parse_role_rejects_unknown(self):
        """parse_role raises ValidationError listing the allowed roles."""
        with pytest.raises(ValidationError) as exc_info:
            parse_role("owner")
        assert exc_info.value.details["allowed_roles"] == ["admin", "vendor", "user"]

    def test_describe(self):
        """describe joins role names for messages."""
        assert describe(VENDOR_OR_ADMIN) == "admin or vendor"


class TestGuardedDelete:
    """Tests for the delete decision."""

    def test_refused_with_dependents(self):
        """An unforced delete with dependents is refused with count and sample."""
        sample = [{"id": str(i)} for i in range(7)]
        with pytest.raises(DependentsExistError) as exc_info:
            evaluate_delete("area", "events", 3, sample, force=False)
        details = exc_info.value.details
        assert details["associated_events_count"] == 3
        assert len(details["sample_events"]) == 5
        assert "force=true" in details["suggestion"]

    def test_forced_delete_allowed(self):
        """A forced delete reports the dependent count."""
        decision = evaluate_delete("area", "events", 3, [], force=True)
        assert decision.allowed
        assert decision.dependent_count == 3

    def test_no_dependents_allowed_without_force(self):
        """Nothing references the record, so no force is needed."""
        assert evaluate_delete("area", "events", 0, [], force=False).allowed

    def test_orphan_mode_leaves_dependents(self):
        """Only nullify and cascade touch the dependents."""
        assert not evaluate_delete("area", "events", 2, [], True).touches_dependents
        assert evaluate_delete(
            "area", "events", 2, [], True, DeleteMode.CASCADE
        ).touches_dependents

    @pytest.mark.parametrize(
        "value,expected",
        [("true", True), ("TRUE", True), (True, True), ("1", False), ("yes", False), (None, False)],
    )
    def test_parse_force(self, value, expected):
        """Only an explicit true flag forces."""
        assert parse_force(value) is expected

    def test_delete_mode_parse(self):
        """DeleteMode.parse is case-insensitive and rejects unknown modes."""
        assert DeleteMode.parse(" Cascade ") == DeleteMode.CASCADE
        with pytest.raises(ValidationError):
            DeleteMode.parse("explode")


def _clean_name(index, item):
    name = str(item.get("name") or "").strip()
    if not name:
        raise ValidationError("Name is required")
    return name


class TestBulkValidation:
    """Tests for all-or-nothing batch validation."""

    def test_reports_errors_by_index(self):
        """A blank name at index 1 is reported against that index."""
        result = validate_batch([{"name": "A"}, {"name": ""}], _clean_name, "Area")
        assert not result.ok
        assert result.errors == ["Area at index 1: Name is required"]

    def test_all_valid(self):
        """A clean batch returns every cleaned item."""
        result = validate_batch([{"name": "A"}, {"name": "B"}], _clean_name, "Area")
        assert result.ok
        assert result.items == ["A", "B"]

    @pytest.mark.parametrize("items", [[], None, "A"])
    def test_require_valid_batch_needs_a_list(self, items):
        """Empty or non-list input is refused outright."""
        with pytest.raises(ValidationError) as exc_info:
            require_valid_batch(items, _clean_name, "Area", "Areas")
        assert exc_info.value.message == "Areas array is required"

    def test_require_valid_batch_raises_with_errors(self):
        """Any invalid item fails the whole batch."""
        with pytest.raises(ValidationError) as exc_info:
            require_valid_batch([{"name": "A"}, {}], _clean_name, "Area", "Areas")
        assert exc_info.value.details["errors"] == ["Area at index 1: Name is required"]

    def test_store_failures_propagate(self):
        """A store failure aborts the batch instead of being reported per item."""

        def failing(index, item):
            raise StoreError("Failed to fetch areas", "connection lost")

        with pytest.raises(StoreError):
            validate_batch([{"name": "A"}], failing, "Area")
