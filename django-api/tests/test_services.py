"""Unit tests for the services.

Stores are mocked, so these test orchestration and domain error mapping.
Run with: pytest tests/test_services.py -v
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from marketplace.domain import (
    Account,
    AreaId,
    AssetUpload,
    BoothApplication,
    BoothId,
    BoothStatus,
    CategoryId,
    Event,
    EventId,
    NamedRecord,
    Rental,
    RentalId,
    Role,
    StoredAsset,
    UserId,
    Vendor,
    VendorId,
)
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.errors import (
    ConflictError,
    DependentsExistError,
    InvalidIdError,
    NotFoundError,
    PermissionDeniedError,
    ReferenceNotFoundError,
    StoreError,
    ValidationError,
)
from marketplace.services import (
    AREA,
    EVENT_CATEGORY,
    AccountService,
    BoothService,
    CatalogService,
    EventService,
    RatingService,
    RentalService,
    VendorService,
)
from marketplace.stores.interfaces import (
    AccountStore,
    AssetStorage,
    BoothStore,
    DependentStore,
    EventStore,
    NamedRecordStore,
    RatingStore,
    RentalStore,
    VendorStore,
)

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)
PNG = AssetUpload("banner.png", b"\x89PNG", "image/png")
PDF = AssetUpload("permit.pdf", b"%PDF-1.4", "application/pdf")


def clock() -> datetime:
    return NOW


def make_event(days_ahead: int = 5, **fields) -> Event:
    start = NOW + timedelta(days=days_ahead)
    values = {
        "id": EventId(uuid.uuid4()),
        "name": "Night Bazaar",
        "price": 50000,
        "description": "Weekend market",
        "category": "Food",
        "category_id": CategoryId(uuid.uuid4()),
        "location": "Senayan",
        "contact": "081234567890",
        "start_date": start,
        "end_date": start + timedelta(days=2),
        "booth_slot": 10,
        "area_id": None,
        "vendor_id": None,
        "banner": "/media/events/banners/old.png",
        "permit_img": "/media/events/permits/old.pdf",
        "created_at": NOW,
    }
    values.update(fields)
    return Event(**values)


def make_booth(status: BoothStatus = BoothStatus.PENDING) -> BoothApplication:
    return BoothApplication(
        id=BoothId(uuid.uuid4()),
        event_id=EventId(uuid.uuid4()),
        name="Kopi Kita",
        phone="081234567890",
        description="Coffee stall",
        status=status,
        admin_notes=None,
        created_at=NOW,
    )


def make_account(role: Role = Role.VENDOR) -> Account:
    return Account(
        id=UserId(uuid.uuid4()),
        email="someone@example.com",
        first_name="Some",
        last_name="One",
        role=role,
    )


@pytest.fixture
def storage():
    storage = Mock(spec=AssetStorage)
    storage.save.side_effect = lambda folder, upload: StoredAsset(
        path=f"{folder}/{upload.filename}", url=f"/media/{folder}/{upload.filename}"
    )
    storage.path_for_url.side_effect = lambda url: url.removeprefix("/media/")
    return storage


@pytest.fixture
def stores():
    events = Mock(spec=EventStore)
    booths = Mock(spec=BoothStore)
    ratings = Mock(spec=RatingStore)
    booths.statuses_by_event.return_value = {}
    ratings.stars_by_event.return_value = {}
    return {
        "events": events,
        "booths": booths,
        "ratings": ratings,
        "areas": Mock(spec=NamedRecordStore),
        "categories": Mock(spec=NamedRecordStore),
        "vendors": Mock(spec=VendorStore),
        "booth_dependents": Mock(spec=DependentStore),
    }


@pytest.fixture
def event_service(stores, storage) -> EventService:
    return EventService(**stores, storage=storage, clock=clock)


class TestEventService:
    """Tests for EventService."""

    def test_get_event_invalid_id_raises_error(self, event_service):
        """get_event raises InvalidIdError for malformed UUID."""
        with pytest.raises(InvalidIdError):
            event_service.get_event("not-a-uuid")

    def test_get_event_not_found_raises_error(self, event_service, stores):
        """get_event raises NotFoundError when store returns None."""
        stores["events"].get_event.return_value = None
        with pytest.raises(NotFoundError, match="Event not found"):
            event_service.get_event(str(uuid.uuid4()))

    def test_get_event_derives_fields_deterministically(self, event_service, stores):
        """Repeated reads under a pinned clock return identical derived fields."""
        event = make_event(days_ahead=-1)
        stores["events"].get_event.return_value = event
        stores["booths"].statuses_by_event.return_value = {
            event.id: [BoothStatus.PENDING, BoothStatus.APPROVED]
        }
        stores["ratings"].stars_by_event.return_value = {event.id: [5, 4, 5, 3]}

        first = event_service.get_event(str(event.id))
        second = event_service.get_event(str(event.id))

        assert first == second
        assert first.timeline.status.value == "ongoing"
        assert first.timeline.duration_days == 3
        assert first.booth_stats == {"total": 2, "pending": 1, "approved": 1, "rejected": 0}
        assert first.rating_stats.average_rating == 4.25

    def _payload(self, **overrides):
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

    def test_create_event_unknown_category(self, event_service, stores, storage):
        """A missing category is a reference error and nothing is uploaded."""
        stores["categories"].get_record.return_value = None
        with pytest.raises(ReferenceNotFoundError, match="Event category not found"):
            event_service.create_event(self._payload(), PNG, PDF)
        storage.save.assert_not_called()

    def test_create_event_requires_both_assets(self, event_service):
        """The permit document is mandatory."""
        with pytest.raises(ValidationError, match="Permit document is required"):
            event_service.create_event(self._payload(), PNG, None)

    def test_create_event_rejects_unsupported_banner(self, event_service):
        """A banner must be an image."""
        with pytest.raises(ValidationError, match="unsupported file type"):
            event_service.create_event(self._payload(), PDF, PDF)

    def test_create_event_rolls_back_uploads_when_insert_fails(
        self, event_service, stores, storage
    ):
        """Both uploaded assets are removed if the insert fails."""
        stores["categories"].get_record.return_value = NamedRecord(
            CategoryId(uuid.uuid4()), "Culinary"
        )
        stores["events"].create_event.side_effect = StoreError(
            "Failed to create event", "insert failed"
        )
        with pytest.raises(StoreError):
            event_service.create_event(self._payload(), PNG, PDF)
        deleted = sorted(call.args[0] for call in storage.delete.call_args_list)
        assert deleted == ["events/banners/banner.png", "events/permits/permit.pdf"]

    def test_failed_cleanup_keeps_insert_error(self, event_service, stores, storage, caplog):
        """Cleanup failures are logged as warnings and the insert error still propagates."""
        stores["categories"].get_record.return_value = NamedRecord(
            CategoryId(uuid.uuid4()), "Culinary"
        )
        stores["events"].create_event.side_effect = StoreError(
            "Failed to create event", "insert failed"
        )
        storage.delete.side_effect = OSError("storage unavailable")
        with caplog.at_level(logging.WARNING, logger="marketplace.stores.assets"):
            with pytest.raises(StoreError, match="Failed to create event"):
                event_service.create_event(self._payload(), PNG, PDF)
        assert storage.delete.call_count == 2
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2

    def test_failed_discard_of_replaced_banner_is_ignored(
        self, event_service, stores, storage, caplog
    ):
        """The update succeeds when the old banner cannot be deleted."""
        event = make_event()
        stores["events"].get_event.return_value = event
        stores["events"].update_event.return_value = event
        storage.delete.side_effect = OSError("storage unavailable")
        with caplog.at_level(logging.WARNING, logger="marketplace.stores.assets"):
            details = event_service.update_event(str(event.id), {}, banner=PNG)
        assert details.event == event
        assert "Failed to delete asset events/banners/old.png" in caplog.text

    def test_update_event_replaces_banner(self, event_service, stores, storage):
        """A new banner is uploaded and the old one discarded after the write."""
        event = make_event()
        stores["events"].get_event.return_value = event
        stores["events"].update_event.return_value = event
        event_service.update_event(str(event.id), {}, banner=PNG)
        changes = stores["events"].update_event.call_args.args[1]
        assert changes == {"banner": "/media/events/banners/banner.png"}
        storage.delete.assert_called_once_with("events/banners/old.png")

    def test_delete_event_refused_with_booths(self, event_service, stores):
        """An event with booth applications is not deleted without force."""
        event = make_event()
        stores["events"].get_event.return_value = event
        stores["booth_dependents"].count.return_value = 2
        stores["booth_dependents"].sample.return_value = [{"id": "b1"}, {"id": "b2"}]
        with pytest.raises(DependentsExistError) as exc_info:
            event_service.delete_event(str(event.id))
        assert exc_info.value.details["associated_booths_count"] == 2
        stores["events"].delete_event.assert_not_called()

    def test_delete_event_forced(self, event_service, stores):
        """A forced delete proceeds and reports the affected booths."""
        event = make_event()
        stores["events"].get_event.return_value = event
        stores["booth_dependents"].count.return_value = 2
        stores["booth_dependents"].sample.return_value = []
        _, outcome = event_service.delete_event(str(event.id), force=True)
        assert outcome.affected == 2
        assert outcome.mode == DeleteMode.ORPHAN
        stores["booth_dependents"].release.assert_not_called()
        stores["events"].delete_event.assert_called_once_with(event.id)


@pytest.fixture
def booth_stores():
    return Mock(spec=BoothStore), Mock(spec=EventStore)


class TestBoothService:
    """Tests for BoothService."""

    def _payload(self, event_id):
        return {
            "event_id": str(event_id),
            "name": "Kopi Kita",
            "phone": "081234567890",
            "description": "Coffee stall",
        }

    def test_create_booth_for_started_event(self, booth_stores):
        """Applications to an event that already started are refused."""
        booths, events = booth_stores
        event = make_event(days_ahead=-1)
        events.get_event.return_value = event
        service = BoothService(booths, events, clock=clock)
        with pytest.raises(ValidationError, match="already started"):
            service.create_booth(self._payload(event.id))
        booths.create_booth.assert_not_called()

    def test_create_booth_unknown_event(self, booth_stores):
        """A missing event is a reference error."""
        booths, events = booth_stores
        events.get_event.return_value = None
        service = BoothService(booths, events, clock=clock)
        with pytest.raises(ReferenceNotFoundError):
            service.create_booth(self._payload(uuid.uuid4()))

    def test_create_booth_duplicate_phone(self, booth_stores):
        """A second application with the same phone conflicts."""
        booths, events = booth_stores
        event = make_event()
        existing = make_booth()
        events.get_event.return_value = event
        booths.find_application.return_value = existing
        service = BoothService(booths, events, clock=clock)
        with pytest.raises(ConflictError) as exc_info:
            service.create_booth(self._payload(event.id))
        assert exc_info.value.details["existing_booth_id"] == str(existing.id)

    def test_duplicates_allowed_when_configured(self, booth_stores):
        """Duplicate checks can be switched off."""
        booths, events = booth_stores
        event = make_event()
        events.get_event.return_value = event
        service = BoothService(booths, events, clock=clock, reject_duplicates=False)
        service.create_booth(self._payload(event.id))
        booths.find_application.assert_not_called()
        booths.create_booth.assert_called_once()

    def test_create_booth_invalid_phone(self, booth_stores):
        """Phone numbers must be 10-15 digits."""
        booths, events = booth_stores
        service = BoothService(booths, events, clock=clock)
        payload = self._payload(uuid.uuid4())
        payload["phone"] = "123"
        with pytest.raises(ValidationError, match="10-15 digits"):
            service.create_booth(payload)

    def test_update_decided_booth(self, booth_stores):
        """Applicants cannot edit approved applications."""
        booths, events = booth_stores
        booth = make_booth(BoothStatus.APPROVED)
        booths.get_booth.return_value = booth
        service = BoothService(booths, events, clock=clock)
        with pytest.raises(ValidationError, match="Cannot update booth application"):
            service.update_booth(str(booth.id), {"name": "New name"})

    def test_update_status_accepts_legacy_token(self, booth_stores):
        """ACCEPT is stored as APPROVED."""
        booths, events = booth_stores
        booth = make_booth()
        booths.get_booth.return_value = booth
        service = BoothService(booths, events, clock=clock)
        service.update_status(str(booth.id), "ACCEPT", "Looks good")
        booths.update_booth.assert_called_once_with(
            booth.id, {"status": BoothStatus.APPROVED, "admin_notes": "Looks good"}
        )

    def test_strict_transitions(self, booth_stores):
        """With strict transitions a decided application stays decided."""
        booths, events = booth_stores
        booth = make_booth(BoothStatus.REJECTED)
        booths.get_booth.return_value = booth
        service = BoothService(booths, events, clock=clock, strict_transitions=True)
        with pytest.raises(ValidationError, match="Cannot change booth status"):
            service.update_status(str(booth.id), "APPROVED")

    def test_bulk_update_is_all_or_nothing(self, booth_stores):
        """One unknown id rejects the batch and nothing is written."""
        booths, events = booth_stores
        known = make_booth()
        booths.get_booth.side_effect = lambda booth_id: known if booth_id == known.id else None
        service = BoothService(booths, events, clock=clock)
        with pytest.raises(ValidationError) as exc_info:
            service.bulk_update_status([str(known.id), str(uuid.uuid4()), "bad"], "APPROVED")
        assert exc_info.value.details["errors"] == [
            "Booth at index 1: Booth application not found",
            "Booth at index 2: Valid booth ID is required",
        ]
        booths.update_statuses.assert_not_called()

    def test_bulk_update_writes_once(self, booth_stores):
        """A valid batch is written in a single store call."""
        booths, events = booth_stores
        first, second = make_booth(), make_booth()
        by_id = {first.id: first, second.id: second}
        booths.get_booth.side_effect = by_id.get
        booths.update_statuses.return_value = [first, second]
        service = BoothService(booths, events, clock=clock)
        updated = service.bulk_update_status([str(first.id), str(second.id)], "REJECT")
        assert len(updated) == 2
        booths.update_statuses.assert_called_once_with(
            [first.id, second.id], BoothStatus.REJECTED, None
        )

    def test_bulk_update_needs_ids(self, booth_stores):
        """An empty list is refused."""
        service = BoothService(*booth_stores, clock=clock)
        with pytest.raises(ValidationError, match="Booth IDs array is required"):
            service.bulk_update_status([], "APPROVED")


@pytest.fixture
def catalog_stores():
    records = Mock(spec=NamedRecordStore)
    events = Mock(spec=EventStore)
    dependents = Mock(spec=DependentStore)
    return records, events, dependents


class TestCatalogService:
    """Tests for areas and event categories."""

    def test_delete_area_with_events_refused(self, catalog_stores):
        """An area referenced by three events is not deleted without force."""
        records, events, dependents = catalog_stores
        area = NamedRecord(AreaId(uuid.uuid4()), "Jakarta Selatan")
        records.get_record.return_value = area
        dependents.count.return_value = 3
        dependents.sample.return_value = [{"id": "e1", "name": "A"}]
        service = CatalogService(AREA, records, events, dependents)
        with pytest.raises(DependentsExistError) as exc_info:
            service.delete(str(area.id))
        assert exc_info.value.message == "Cannot delete area with associated events"
        assert exc_info.value.details["associated_events_count"] == 3
        records.delete_record.assert_not_called()

    def test_forced_delete_reports_affected(self, catalog_stores):
        """A forced delete proceeds and reports three affected events."""
        records, events, dependents = catalog_stores
        area = NamedRecord(AreaId(uuid.uuid4()), "Jakarta Selatan")
        records.get_record.return_value = area
        dependents.count.return_value = 3
        dependents.sample.return_value = []
        service = CatalogService(AREA, records, events, dependents)
        record, outcome = service.delete(str(area.id), force=True)
        assert record == area
        assert outcome.affected == 3
        assert outcome.dependent == "events"
        records.delete_record.assert_called_once_with(area.id)

    def test_forced_delete_in_nullify_mode_detaches_events(self, catalog_stores):
        """Nullify mode clears the references before deleting."""
        records, events, dependents = catalog_stores
        area = NamedRecord(AreaId(uuid.uuid4()), "Jakarta Selatan")
        records.get_record.return_value = area
        dependents.count.return_value = 3
        dependents.sample.return_value = []
        dependents.release.return_value = 3
        service = CatalogService(AREA, records, events, dependents, DeleteMode.NULLIFY)
        _, outcome = service.delete(str(area.id), force=True)
        dependents.release.assert_called_once_with(area.id, DeleteMode.NULLIFY)
        assert outcome.released == 3

    def test_bulk_create_rejects_blank_name(self, catalog_stores):
        """A blank name at index 1 rejects the whole batch."""
        records, events, dependents = catalog_stores
        records.find_by_name.return_value = None
        service = CatalogService(EVENT_CATEGORY, records, events, dependents)
        with pytest.raises(ValidationError) as exc_info:
            service.bulk_create([{"name": "A"}, {"name": ""}])
        assert exc_info.value.details["errors"] == [
            "Event category at index 1: Name is required"
        ]
        records.create_records.assert_not_called()

    def test_bulk_create_all_valid(self, catalog_stores):
        """Two new names are created together."""
        records, events, dependents = catalog_stores
        records.find_by_name.return_value = None
        records.create_records.side_effect = lambda names: [
            NamedRecord(CategoryId(uuid.uuid4()), name) for name in names
        ]
        service = CatalogService(EVENT_CATEGORY, records, events, dependents)
        created = service.bulk_create([{"name": "A"}, {"name": "B"}])
        assert [record.name for record in created] == ["A", "B"]
        records.create_records.assert_called_once_with(["A", "B"])

    def test_bulk_create_duplicates(self, catalog_stores):
        """Names repeated in the batch or already stored are reported."""
        records, events, dependents = catalog_stores
        records.find_by_name.side_effect = lambda name, exclude=None: (
            NamedRecord(AreaId(uuid.uuid4()), name) if name == "Taken" else None
        )
        service = CatalogService(AREA, records, events, dependents)
        with pytest.raises(ValidationError) as exc_info:
            service.bulk_create([{"name": "A"}, {"name": "a"}, {"name": "Taken"}, "x"])
        assert exc_info.value.details["errors"] == [
            "Area at index 1: Duplicate name in batch: a",
            "Area at index 2: Area with name 'Taken' already exists",
            "Area at index 3: Item must be an object",
        ]

    def test_create_duplicate_name_conflicts(self, catalog_stores):
        """A single create with a taken name conflicts."""
        records, events, dependents = catalog_stores
        records.find_by_name.return_value = NamedRecord(AreaId(uuid.uuid4()), "A")
        service = CatalogService(AREA, records, events, dependents)
        with pytest.raises(ConflictError):
            service.create({"name": "A"})

    def test_statistics(self, catalog_stores):
        """Statistics count records with and without events."""
        records, events, dependents = catalog_stores
        busy = NamedRecord(AreaId(uuid.uuid4()), "Busy")
        quiet = NamedRecord(AreaId(uuid.uuid4()), "Quiet")
        records.all_records.return_value = [busy, quiet]
        events.count_by.return_value = {busy.id: 4}
        service = CatalogService(AREA, records, events, dependents)
        stats = service.get_statistics()
        assert stats["total"] == 2
        assert stats["with_events"] == 1
        assert stats["total_events"] == 4
        assert stats["top_by_events"][0]["name"] == "Busy"
        events.count_by.assert_called_once_with("area_id")


@pytest.fixture
def vendor_stores(storage):
    return {
        "vendors": Mock(spec=VendorStore),
        "accounts": Mock(spec=AccountStore),
        "events": Mock(spec=EventStore),
        "event_dependents": Mock(spec=DependentStore),
        "storage": storage,
    }


class TestVendorService:
    """Tests for VendorService."""

    def _payload(self, user_id, **overrides):
        payload = {
            "name": "Kopi Kita",
            "user_id": str(user_id),
            "description": "Coffee",
            "phone": "081234567890",
            "instagram": "https://instagram.com/foo.bar/",
        }
        payload.update(overrides)
        return payload

    def test_create_vendor_normalizes_instagram(self, vendor_stores):
        """The stored Instagram value is the bare handle."""
        account = make_account(Role.VENDOR)
        vendor_stores["accounts"].get_account.return_value = account
        vendor_stores["vendors"].get_by_user.return_value = None
        vendor_stores["vendors"].create_vendor.side_effect = lambda values: Vendor(
            id=VendorId(uuid.uuid4()),
            user_id=values["user_id"],
            name=values["name"],
            description=values["description"],
            phone=values["phone"],
            instagram=values["instagram"],
            banner=values["banner"],
            location=None,
            email=None,
            created_at=NOW,
        )
        service = VendorService(**vendor_stores)
        details = service.create_vendor(self._payload(account.id), PNG)
        assert details.vendor.instagram == "foo.bar"
        assert details.vendor.banner == "/media/vendor-banners/banner.png"
        assert details.events_count == 0

    def test_create_vendor_for_plain_user(self, vendor_stores):
        """Only vendor or admin accounts may own a vendor profile."""
        account = make_account(Role.USER)
        vendor_stores["accounts"].get_account.return_value = account
        service = VendorService(**vendor_stores)
        with pytest.raises(ValidationError, match="vendor or admin role"):
            service.create_vendor(self._payload(account.id), PNG)

    def test_one_vendor_per_user(self, vendor_stores):
        """A user with a vendor profile cannot get a second one."""
        account = make_account(Role.VENDOR)
        vendor_stores["accounts"].get_account.return_value = account
        vendor_stores["vendors"].get_by_user.return_value = Mock()
        service = VendorService(**vendor_stores)
        with pytest.raises(ConflictError, match="already has a vendor profile"):
            service.create_vendor(self._payload(account.id), PNG)
        vendor_stores["storage"].save.assert_not_called()

    def test_unknown_user(self, vendor_stores):
        """A missing owner is a reference error."""
        vendor_stores["accounts"].get_account.return_value = None
        service = VendorService(**vendor_stores)
        with pytest.raises(ReferenceNotFoundError, match="User not found"):
            service.create_vendor(self._payload(uuid.uuid4()), PNG)

    def test_invalid_instagram(self, vendor_stores):
        """Unparseable handles are rejected."""
        service = VendorService(**vendor_stores)
        with pytest.raises(ValidationError, match="Instagram"):
            service.create_vendor(self._payload(uuid.uuid4(), instagram="not a handle"), PNG)


class TestRatingService:
    """Tests for RatingService."""

    def test_event_stats(self):
        """Stats aggregate the stored stars of one event."""
        ratings, events = Mock(spec=RatingStore), Mock(spec=EventStore)
        event_id = EventId(uuid.uuid4())
        events.event_exists.return_value = True
        ratings.stars_by_event.return_value = {event_id: [5, 4, 5, 3]}
        stats = RatingService(ratings, events).get_event_rating_stats(str(event_id))
        assert stats.total_ratings == 4
        assert stats.average_rating == 4.25

    def test_stats_for_unknown_event(self):
        """Stats for a missing event are not found."""
        ratings, events = Mock(spec=RatingStore), Mock(spec=EventStore)
        events.event_exists.return_value = False
        with pytest.raises(NotFoundError):
            RatingService(ratings, events).get_event_rating_stats(str(uuid.uuid4()))

    def test_create_rating_out_of_range(self):
        """Stars outside 1-5 are rejected before the event lookup."""
        ratings, events = Mock(spec=RatingStore), Mock(spec=EventStore)
        with pytest.raises(ValidationError):
            RatingService(ratings, events).create_rating(
                {"name": "Ana", "event_id": str(uuid.uuid4()), "rating_star": 7}
            )
        events.event_exists.assert_not_called()

    def test_create_rating_unknown_event(self):
        """Rating a missing event is a reference error."""
        ratings, events = Mock(spec=RatingStore), Mock(spec=EventStore)
        events.event_exists.return_value = False
        with pytest.raises(ReferenceNotFoundError):
            RatingService(ratings, events).create_rating(
                {"name": "Ana", "event_id": str(uuid.uuid4()), "rating_star": 4}
            )


class TestRentalService:
    """Tests for RentalService."""

    def _payload(self, rental_id, **overrides):
        payload = {
            "name": "Tent 3x3",
            "description": "Folding tent",
            "price": "150000",
            "rental_id": str(rental_id),
            "location": "Jakarta",
            "contact": "081234567890",
        }
        payload.update(overrides)
        return payload

    def test_product_price_must_be_positive(self, storage):
        """Rental products cannot be free."""
        rentals = Mock(spec=RentalStore)
        service = RentalService(rentals, Mock(spec=DependentStore), storage)
        with pytest.raises(ValidationError, match="Price must be a positive number"):
            service.create_product(self._payload(uuid.uuid4(), price="0"))

    def test_product_defaults_to_ready(self, storage):
        """New products are ready unless told otherwise."""
        rentals = Mock(spec=RentalStore)
        rental = Rental(RentalId(uuid.uuid4()), "Tents", None)
        rentals.get_rental.return_value = rental
        service = RentalService(rentals, Mock(spec=DependentStore), storage)
        service.create_product(self._payload(rental.id))
        values = rentals.create_product.call_args.args[0]
        assert values["is_ready"] is True
        assert values["price"] == 150000
        assert values["rental_id"] == rental.id

    def test_product_unknown_rental(self, storage):
        """Products must belong to an existing rental."""
        rentals = Mock(spec=RentalStore)
        rentals.get_rental.return_value = None
        service = RentalService(rentals, Mock(spec=DependentStore), storage)
        with pytest.raises(ReferenceNotFoundError, match="Rental not found"):
            service.create_product(self._payload(uuid.uuid4()))


class TestAccountService:
    """Tests for AccountService."""

    def test_signup_duplicate_email(self):
        """Registering a taken email conflicts."""
        accounts = Mock(spec=AccountStore)
        accounts.email_taken.return_value = True
        service = AccountService(accounts, Mock(spec=VendorStore))
        with pytest.raises(ConflictError):
            service.signup({"email": "a@example.com", "password": "secret123"})

    def test_signup_short_password(self):
        """Passwords need at least six characters."""
        service = AccountService(Mock(spec=AccountStore), Mock(spec=VendorStore))
        with pytest.raises(ValidationError, match="at least 6"):
            service.signup({"email": "a@example.com", "password": "123"})

    def test_cannot_delete_self(self):
        """Admins cannot delete their own account."""
        accounts = Mock(spec=AccountStore)
        account = make_account(Role.ADMIN)
        accounts.get_account.return_value = account
        service = AccountService(accounts, Mock(spec=VendorStore))
        with pytest.raises(PermissionDeniedError):
            service.delete_user(str(account.id), account.id)
        accounts.delete_account.assert_not_called()

    def test_delete_vendor_user_removes_profile(self):
        """Deleting a vendor account also removes the vendor profile."""
        accounts, vendors = Mock(spec=AccountStore), Mock(spec=VendorStore)
        account = make_account(Role.VENDOR)
        accounts.get_account.return_value = account
        AccountService(accounts, vendors).delete_user(str(account.id), UserId(uuid.uuid4()))
        vendors.delete_for_user.assert_called_once_with(account.id)
        accounts.delete_account.assert_called_once_with(account.id)
