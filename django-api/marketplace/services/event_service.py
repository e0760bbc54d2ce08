"""Event service - all event business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from marketplace.domain import AssetUpload, Event, EventId, Page, VendorId
from marketplace.domain.booth_status import booth_statistics
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.errors import ReferenceNotFoundError
from marketplace.domain.lifecycle import (
    Timeline,
    derive_timeline,
    event_statistics,
    validate_event_patch,
    validate_new_event,
)
from marketplace.domain.ratings import RatingStats, aggregate_ratings
from marketplace.services.base import (
    DOCUMENT_TYPES,
    Clock,
    DeleteOutcome,
    check_upload,
    guarded_delete,
    normalize_listing,
    require_found,
    utc_now,
)
from marketplace.stores.assets import UploadBatch, discard_asset
from marketplace.stores.interfaces import (
    AssetStorage,
    BoothStore,
    DependentStore,
    EventFilters,
    EventStore,
    Listing,
    NamedRecordStore,
    RatingStore,
    VendorStore,
)

logger = logging.getLogger(__name__)

BANNER_FOLDER = "events/banners"
PERMIT_FOLDER = "events/permits"
SORT_FIELDS = ("id", "name", "price", "start_date", "end_date")


@dataclass(frozen=True)
class EventDetails:
    """An event with the fields derived from its dates, booths and ratings."""

    event: Event
    timeline: Timeline
    booth_stats: dict[str, int]
    rating_stats: RatingStats


class EventService:
    """Service for event lifecycle operations."""

    def __init__(
        self,
        events: EventStore,
        booths: BoothStore,
        ratings: RatingStore,
        areas: NamedRecordStore,
        categories: NamedRecordStore,
        vendors: VendorStore,
        booth_dependents: DependentStore,
        storage: AssetStorage,
        clock: Clock = utc_now,
        delete_mode: DeleteMode = DeleteMode.ORPHAN,
    ) -> None:
        self._events = events
        self._booths = booths
        self._ratings = ratings
        self._areas = areas
        self._categories = categories
        self._vendors = vendors
        self._booth_dependents = booth_dependents
        self._storage = storage
        self._clock = clock
        self._delete_mode = delete_mode

    def create_event(
        self,
        data: Mapping[str, Any],
        banner: AssetUpload | None,
        permit: AssetUpload | None,
    ) -> EventDetails:
        """Validate, upload both assets, then insert.

        Uploaded assets are removed again if the insert fails.

        Raises:
            ValidationError: If a field is missing or invalid, or an asset is missing.
            InvalidIdError: If a reference is not a valid identifier.
            ReferenceNotFoundError: If the category, area or vendor does not exist.
            StoreError: If an upload or the insert fails.
        """
        draft = validate_new_event(data, self._clock())
        check_upload(banner, "Banner image", required=True)
        check_upload(permit, "Permit document", DOCUMENT_TYPES, required=True)
        self._check_references(draft.category_id, draft.area_id, draft.vendor_id)

        batch = UploadBatch(self._storage)
        with batch.guard():
            banner_asset = batch.upload(BANNER_FOLDER, banner, "banner image")
            permit_asset = batch.upload(PERMIT_FOLDER, permit, "permit document")
            event = self._events.create_event(draft, banner_asset.url, permit_asset.url)
        logger.info("Created event %s (%s)", event.id, event.name)
        return self._details(event)

    def list_events(
        self,
        filters: EventFilters,
        listing: Listing,
    ) -> Page[EventDetails]:
        listing = normalize_listing(listing, SORT_FIELDS, "start_date")
        page = self._events.list_events(filters, listing)
        return Page(items=self._details_for(page.items), total=page.total)

    def get_event(self, event_id: str) -> EventDetails:
        """Return an event with its derived fields.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            NotFoundError: If the event does not exist.
        """
        return self._details(self._load(event_id))

    def list_vendor_events(self, vendor_id: str, listing: Listing) -> Page[EventDetails]:
        """Return a vendor's events.

        Raises:
            InvalidIdError: If the vendor_id is not a valid UUID.
            NotFoundError: If the vendor does not exist.
        """
        vendor = require_found(self._vendors.get_vendor(VendorId.parse(vendor_id)), "Vendor")
        return self.list_events(EventFilters(vendor_id=vendor.id), listing)

    def update_event(
        self,
        event_id: str,
        data: Mapping[str, Any],
        banner: AssetUpload | None = None,
        permit: AssetUpload | None = None,
        remove_banner: bool = False,
        remove_permit: bool = False,
    ) -> EventDetails:
        """Apply a partial update.

        Replaced or removed assets are deleted best effort once the row is
        written.

        Raises:
            InvalidIdError: If an id is not a valid UUID.
            NotFoundError: If the event does not exist.
            ValidationError: If the patch is empty or a supplied value is invalid.
            ReferenceNotFoundError: If a supplied reference does not exist.
            StoreError: If an upload or the update fails.
        """
        existing = self._load(event_id)
        asset_changes = any((banner, permit, remove_banner, remove_permit))
        changes = validate_event_patch(
            data, existing, self._clock(), extra_changes=asset_changes
        )
        check_upload(banner, "Banner image")
        check_upload(permit, "Permit document", DOCUMENT_TYPES)
        self._check_references(
            changes.get("category_id"), changes.get("area_id"), changes.get("vendor_id")
        )

        stale: list[str | None] = []
        batch = UploadBatch(self._storage)
        with batch.guard():
            if banner is not None:
                changes["banner"] = batch.upload(BANNER_FOLDER, banner, "banner image").url
            elif remove_banner:
                changes["banner"] = None
            if permit is not None:
                changes["permit_img"] = batch.upload(PERMIT_FOLDER, permit, "permit document").url
            elif remove_permit:
                changes["permit_img"] = None
            updated = self._events.update_event(existing.id, changes)

        if "banner" in changes:
            stale.append(existing.banner)
        if "permit_img" in changes:
            stale.append(existing.permit_img)
        for url in stale:
            discard_asset(self._storage, url)
        logger.info("Updated event %s fields=%s", existing.id, sorted(changes))
        return self._details(updated)

    def delete_event(self, event_id: str, force: bool = False) -> tuple[Event, DeleteOutcome]:
        """Delete an event unless booth applications reference it.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            NotFoundError: If the event does not exist.
            DependentsExistError: If applications exist and force is not set.
            StoreError: If a store call fails.
        """
        event = self._load(event_id)
        outcome = guarded_delete(
            "event",
            "booths",
            event.id,
            self._booth_dependents,
            force,
            self._delete_mode,
            lambda: self._events.delete_event(event.id),
        )
        return event, outcome

    def get_statistics(self, filters: EventFilters | None = None) -> dict[str, Any]:
        events = self._events.all_events(filters or EventFilters())
        statuses = self._booths.statuses_by_event([event.id for event in events])
        booth_counts = {event_id: len(found) for event_id, found in statuses.items()}
        return event_statistics(events, booth_counts, self._clock())

    def _load(self, event_id: str) -> Event:
        return require_found(self._events.get_event(EventId.parse(event_id)), "Event")

    def _check_references(self, category_id, area_id, vendor_id) -> None:
        if category_id is not None and self._categories.get_record(category_id) is None:
            raise ReferenceNotFoundError("Event category")
        if area_id is not None and self._areas.get_record(area_id) is None:
            raise ReferenceNotFoundError("Area")
        if vendor_id is not None and self._vendors.get_vendor(vendor_id) is None:
            raise ReferenceNotFoundError("Vendor")

    def _details(self, event: Event) -> EventDetails:
        return self._details_for([event])[0]

    def _details_for(self, events: list[Event]) -> list[EventDetails]:
        ids = [event.id for event in events]
        statuses = self._booths.statuses_by_event(ids) if ids else {}
        stars = self._ratings.stars_by_event(ids) if ids else {}
        now = self._clock()
        return [
            EventDetails(
                event=event,
                timeline=derive_timeline(event.start_date, event.end_date, now),
                booth_stats=_booth_summary(statuses.get(event.id, [])),
                rating_stats=aggregate_ratings(stars.get(event.id, [])),
            )
            for event in events
        ]


def _booth_summary(statuses) -> dict[str, int]:
    stats = booth_statistics(statuses)
    return {
        "total": stats["total_applications"],
        "pending": stats["pending"],
        "approved": stats["approved"],
        "rejected": stats["rejected"],
    }
