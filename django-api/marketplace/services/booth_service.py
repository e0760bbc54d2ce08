"""Booth application service.

Applicants create and edit their own pending applications. Admins decide
them one at a time or in bulk.
"""

import logging
from collections.abc import Mapping
from typing import Any

from marketplace.domain import BoothApplication, BoothId, BoothStatus, EventId, Page
from marketplace.domain.booth_status import (
    booth_statistics,
    ensure_editable,
    ensure_transition,
    parse_status,
)
from marketplace.domain.bulk import require_valid_batch
from marketplace.domain.errors import (
    ConflictError,
    NotFoundError,
    ReferenceNotFoundError,
    ValidationError,
)
from marketplace.domain.validators import validate_phone
from marketplace.services.base import (
    Clock,
    is_present,
    normalize_listing,
    require_fields,
    require_found,
    supplied,
    utc_now,
)
from marketplace.stores.interfaces import BoothStore, EventStore, Listing

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("event_id", "name", "phone", "description")
EDITABLE_FIELDS = ("name", "phone", "description")
SORT_FIELDS = ("created_at", "name", "status")


def _phone(value: Any) -> str:
    phone = str(value).strip()
    if not validate_phone(phone):
        raise ValidationError("Phone number must be 10-15 digits")
    return phone


class BoothService:
    """Service for booth applications and their approval states."""

    def __init__(
        self,
        booths: BoothStore,
        events: EventStore,
        clock: Clock = utc_now,
        strict_transitions: bool = False,
        reject_duplicates: bool = True,
    ) -> None:
        self._booths = booths
        self._events = events
        self._clock = clock
        self._strict_transitions = strict_transitions
        self._reject_duplicates = reject_duplicates

    def create_booth(self, data: Mapping[str, Any]) -> BoothApplication:
        """Submit a new PENDING application.

        Raises:
            ValidationError: If a field is missing or invalid, or the event has started.
            InvalidIdError: If event_id is not a valid UUID.
            ReferenceNotFoundError: If the event does not exist.
            ConflictError: If this phone already applied to the event.
        """
        require_fields(data, REQUIRED_FIELDS)
        event_id = EventId.parse(data["event_id"])
        phone = _phone(data["phone"])
        event = self._events.get_event(event_id)
        if event is None:
            raise ReferenceNotFoundError("Event")
        if event.start_date < self._clock():
            raise ValidationError("Cannot apply for a booth at an event that has already started")
        if self._reject_duplicates:
            existing = self._booths.find_application(event_id, phone)
            if existing is not None:
                raise ConflictError(
                    "An application for this event already exists for this phone number",
                    existing_booth_id=str(existing.id),
                )
        booth = self._booths.create_booth(
            event_id,
            str(data["name"]).strip(),
            phone,
            str(data["description"]).strip(),
        )
        logger.info("Booth application %s submitted for event %s", booth.id, event_id)
        return booth

    def list_booths(
        self,
        listing: Listing,
        event_id: str | None = None,
        status: str | None = None,
    ) -> Page[BoothApplication]:
        listing = normalize_listing(listing, SORT_FIELDS, "created_at")
        return self._booths.list_booths(
            EventId.parse(event_id) if is_present(event_id) else None,
            parse_status(status) if is_present(status) else None,
            listing,
        )

    def list_event_booths(
        self, event_id: str, include_pending: bool = False
    ) -> list[BoothApplication]:
        """Return an event's approved applications, plus pending ones on request.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            NotFoundError: If the event does not exist.
        """
        parsed = EventId.parse(event_id)
        if not self._events.event_exists(parsed):
            raise NotFoundError("Event")
        statuses = [BoothStatus.APPROVED]
        if include_pending:
            statuses.append(BoothStatus.PENDING)
        return self._booths.list_for_event(parsed, statuses)

    def get_booth(self, booth_id: str) -> BoothApplication:
        """Raises InvalidIdError for malformed ids and NotFoundError for unknown ones."""
        return require_found(self._booths.get_booth(BoothId.parse(booth_id)), "Booth application")

    def update_booth(self, booth_id: str, data: Mapping[str, Any]) -> BoothApplication:
        """Edit an application while it is still pending.

        Raises:
            ValidationError: If the application was already decided, the
                patch is empty or a value is invalid.
        """
        booth = self.get_booth(booth_id)
        ensure_editable(booth.status)
        changes = supplied(data, EDITABLE_FIELDS)
        if not changes:
            raise ValidationError("At least one field is required to update")
        for name in ("name", "description"):
            if name in changes:
                text = str(changes[name]).strip()
                if not text:
                    raise ValidationError(f"{name.capitalize()} cannot be empty")
                changes[name] = text
        if "phone" in changes:
            changes["phone"] = _phone(changes["phone"])
        return self._booths.update_booth(booth.id, changes)

    def update_status(
        self, booth_id: str, status: Any, admin_notes: str | None = None
    ) -> BoothApplication:
        """Admin decision on one application.

        Raises:
            ValidationError: If the status is unknown, or the change is not
                allowed under strict transitions.
        """
        target = parse_status(status)
        booth = self.get_booth(booth_id)
        ensure_transition(booth.status, target, self._strict_transitions)
        changes: dict[str, Any] = {"status": target}
        if admin_notes is not None:
            changes["admin_notes"] = admin_notes
        updated = self._booths.update_booth(booth.id, changes)
        logger.info(
            "Booth application %s status %s -> %s",
            booth.id,
            booth.status.value,
            target.value,
        )
        return updated

    def bulk_update_status(
        self, booth_ids: Any, status: Any, admin_notes: str | None = None
    ) -> list[BoothApplication]:
        """Set one status on many applications as a single write.

        Every id is checked first; any failure rejects the whole batch.

        Raises:
            ValidationError: If the list is empty, the status is unknown or
                any id is invalid, unknown or not allowed to change.
        """
        target = parse_status(status)

        def clean(index: int, value: Any) -> BoothId:
            booth = self.get_booth(value)
            ensure_transition(booth.status, target, self._strict_transitions)
            return booth.id

        ids = require_valid_batch(booth_ids, clean, "Booth", "Booth IDs")
        updated = self._booths.update_statuses(ids, target, admin_notes)
        logger.info("Bulk status update to %s for %d booth applications", target.value, len(ids))
        return updated

    def delete_booth(self, booth_id: str) -> BoothApplication:
        booth = self.get_booth(booth_id)
        self._booths.delete_booth(booth.id)
        logger.info("Deleted booth application %s", booth.id)
        return booth

    def get_statistics(self, event_id: str | None = None) -> dict[str, int]:
        if is_present(event_id):
            parsed = EventId.parse(event_id)
            statuses = self._booths.statuses_by_event([parsed]).get(parsed, [])
        else:
            statuses = [
                status
                for found in self._booths.statuses_by_event().values()
                for status in found
            ]
        return booth_statistics(statuses)
