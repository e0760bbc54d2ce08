"""Store interfaces (repository pattern).

Stores must be swappable and return domain models. Every method may raise
StoreError when the backing store call fails.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from marketplace.domain import (
    Account,
    AreaId,
    AssetUpload,
    Banner,
    BannerId,
    BoothApplication,
    BoothId,
    BoothStatus,
    CategoryId,
    EntityId,
    Event,
    EventId,
    NamedRecord,
    Page,
    Rating,
    RatingId,
    Rental,
    RentalId,
    RentalProduct,
    RentalProductId,
    Role,
    StoredAsset,
    UserId,
    Vendor,
    VendorId,
)
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.lifecycle import EventDraft


@dataclass(frozen=True)
class Listing:
    """Search, sort and window shared by list queries."""

    search: str | None = None
    sort_by: str = "id"
    descending: bool = False
    offset: int = 0
    limit: int | None = None


@dataclass(frozen=True)
class EventFilters:
    """Filters accepted by event listings and statistics."""

    category: str | None = None
    category_id: CategoryId | None = None
    area_id: AreaId | None = None
    vendor_id: VendorId | None = None
    min_price: int | None = None
    max_price: int | None = None
    starts_after: datetime | None = None
    ends_before: datetime | None = None


class DependentStore(ABC):
    """Records that reference a parent record through one foreign key."""

    @abstractmethod
    def count(self, parent_id: EntityId) -> int:
        """Return how many records reference the parent."""
        ...

    @abstractmethod
    def sample(self, parent_id: EntityId, limit: int) -> list[dict[str, Any]]:
        """Return up to ``limit`` referencing records as plain dicts."""
        ...

    @abstractmethod
    def release(self, parent_id: EntityId, mode: DeleteMode) -> int:
        """Detach or delete the dependents ahead of a forced parent delete.

        ORPHAN leaves them untouched. Returns the number of records changed.
        """
        ...


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self, filters: EventFilters, listing: Listing) -> Page[Event]:
        ...

    @abstractmethod
    def all_events(self, filters: EventFilters) -> list[Event]:
        """Return every event matching the filters, unpaginated."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        ...

    @abstractmethod
    def count_by(self, field: str) -> dict[EntityId, int]:
        """Return event counts keyed by the referenced id (area_id, vendor_id, category_id)."""
        ...

    @abstractmethod
    def create_event(self, draft: EventDraft, banner: str, permit_img: str) -> Event:
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, changes: dict[str, Any]) -> Event:
        ...

    @abstractmethod
    def delete_event(self, event_id: EventId) -> None:
        ...


class BoothStore(ABC):
    """Interface for booth application persistence."""

    @abstractmethod
    def list_booths(
        self,
        event_id: EventId | None,
        status: BoothStatus | None,
        listing: Listing,
    ) -> Page[BoothApplication]:
        ...

    @abstractmethod
    def list_for_event(
        self, event_id: EventId, statuses: Iterable[BoothStatus]
    ) -> list[BoothApplication]:
        """Return an event's applications in the given states, newest first."""
        ...

    @abstractmethod
    def statuses_by_event(
        self, event_ids: Iterable[EventId] | None = None
    ) -> dict[EventId, list[BoothStatus]]:
        """Return application states grouped by event (all events when None)."""
        ...

    @abstractmethod
    def get_booth(self, booth_id: BoothId) -> BoothApplication | None:
        ...

    @abstractmethod
    def find_application(self, event_id: EventId, phone: str) -> BoothApplication | None:
        """Return an existing application for the event and phone, if any."""
        ...

    @abstractmethod
    def create_booth(
        self, event_id: EventId, name: str, phone: str, description: str
    ) -> BoothApplication:
        """Insert a new PENDING application."""
        ...

    @abstractmethod
    def update_booth(self, booth_id: BoothId, changes: dict[str, Any]) -> BoothApplication:
        ...

    @abstractmethod
    def update_statuses(
        self,
        booth_ids: list[BoothId],
        status: BoothStatus,
        admin_notes: str | None,
    ) -> list[BoothApplication]:
        """Set the status of every listed application in one write."""
        ...

    @abstractmethod
    def delete_booth(self, booth_id: BoothId) -> None:
        ...


class RatingStore(ABC):
    """Interface for rating persistence."""

    @abstractmethod
    def list_ratings(
        self, event_id: EventId | None, rating_star: int | None, listing: Listing
    ) -> Page[Rating]:
        ...

    @abstractmethod
    def stars_by_event(
        self, event_ids: Iterable[EventId] | None = None
    ) -> dict[EventId, list[int]]:
        ...

    @abstractmethod
    def get_rating(self, rating_id: RatingId) -> Rating | None:
        ...

    @abstractmethod
    def create_rating(
        self, event_id: EventId, name: str, review: str | None, rating_star: int
    ) -> Rating:
        ...

    @abstractmethod
    def update_rating(self, rating_id: RatingId, changes: dict[str, Any]) -> Rating:
        ...

    @abstractmethod
    def delete_rating(self, rating_id: RatingId) -> None:
        ...

    @abstractmethod
    def delete_for_event(self, event_id: EventId) -> int:
        """Delete every rating of an event and return how many were removed."""
        ...


class VendorStore(ABC):
    """Interface for vendor profile persistence."""

    @abstractmethod
    def list_vendors(self, listing: Listing) -> Page[Vendor]:
        ...

    @abstractmethod
    def all_vendors(self) -> list[Vendor]:
        ...

    @abstractmethod
    def get_vendor(self, vendor_id: VendorId) -> Vendor | None:
        ...

    @abstractmethod
    def get_by_user(self, user_id: UserId) -> Vendor | None:
        ...

    @abstractmethod
    def create_vendor(self, values: dict[str, Any]) -> Vendor:
        ...

    @abstractmethod
    def update_vendor(self, vendor_id: VendorId, changes: dict[str, Any]) -> Vendor:
        ...

    @abstractmethod
    def delete_vendor(self, vendor_id: VendorId) -> None:
        ...

    @abstractmethod
    def delete_for_user(self, user_id: UserId) -> int:
        ...


class NamedRecordStore(ABC):
    """Interface for simple named lookup records (areas, event categories)."""

    @abstractmethod
    def list_records(self, listing: Listing) -> Page[NamedRecord]:
        ...

    @abstractmethod
    def all_records(self) -> list[NamedRecord]:
        """Return every record ordered by name."""
        ...

    @abstractmethod
    def get_record(self, record_id: EntityId) -> NamedRecord | None:
        ...

    @abstractmethod
    def find_by_name(
        self, name: str, exclude: EntityId | None = None
    ) -> NamedRecord | None:
        """Case-insensitive exact name lookup, optionally skipping one record."""
        ...

    @abstractmethod
    def create_records(self, names: list[str]) -> list[NamedRecord]:
        """Insert every name in one write."""
        ...

    @abstractmethod
    def rename_record(self, record_id: EntityId, name: str) -> NamedRecord:
        ...

    @abstractmethod
    def delete_record(self, record_id: EntityId) -> None:
        ...


class RentalStore(ABC):
    """Interface for rental categories and their products."""

    @abstractmethod
    def list_rentals(self, listing: Listing) -> Page[Rental]:
        ...

    @abstractmethod
    def get_rental(self, rental_id: RentalId) -> Rental | None:
        ...

    @abstractmethod
    def find_rental_by_name(
        self, name: str, exclude: RentalId | None = None
    ) -> Rental | None:
        ...

    @abstractmethod
    def create_rental(self, name: str, banner: str | None) -> Rental:
        ...

    @abstractmethod
    def update_rental(self, rental_id: RentalId, changes: dict[str, Any]) -> Rental:
        ...

    @abstractmethod
    def delete_rental(self, rental_id: RentalId) -> None:
        ...

    @abstractmethod
    def list_products(
        self,
        rental_id: RentalId | None,
        is_ready: bool | None,
        listing: Listing,
    ) -> Page[RentalProduct]:
        ...

    @abstractmethod
    def products_by_rental(self) -> dict[RentalId, list[RentalProduct]]:
        ...

    @abstractmethod
    def get_product(self, product_id: RentalProductId) -> RentalProduct | None:
        ...

    @abstractmethod
    def create_product(self, values: dict[str, Any]) -> RentalProduct:
        ...

    @abstractmethod
    def update_product(
        self, product_id: RentalProductId, changes: dict[str, Any]
    ) -> RentalProduct:
        ...

    @abstractmethod
    def delete_product(self, product_id: RentalProductId) -> None:
        ...


class BannerStore(ABC):
    """Interface for homepage banners."""

    @abstractmethod
    def list_banners(self, listing: Listing) -> Page[Banner]:
        ...

    @abstractmethod
    def get_banner(self, banner_id: BannerId) -> Banner | None:
        ...

    @abstractmethod
    def create_banner(self, name: str, banner: str, link: str | None) -> Banner:
        ...

    @abstractmethod
    def update_banner(self, banner_id: BannerId, changes: dict[str, Any]) -> Banner:
        ...

    @abstractmethod
    def delete_banner(self, banner_id: BannerId) -> None:
        ...


class AccountStore(ABC):
    """Interface to the account/auth provider and its profile records."""

    @abstractmethod
    def get_account(self, user_id: UserId) -> Account | None:
        ...

    @abstractmethod
    def email_taken(self, email: str) -> bool:
        ...

    @abstractmethod
    def create_account(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: Role,
    ) -> Account:
        ...

    @abstractmethod
    def check_credentials(self, email: str, password: str) -> Account | None:
        """Return the account when the password matches, otherwise None."""
        ...

    @abstractmethod
    def issue_token(self, user_id: UserId) -> str:
        ...

    @abstractmethod
    def revoke_token(self, token: str) -> bool:
        """Invalidate a bearer token. Returns False if it was unknown."""
        ...

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        ...

    @abstractmethod
    def update_account(self, user_id: UserId, changes: dict[str, Any]) -> Account:
        ...

    @abstractmethod
    def delete_account(self, user_id: UserId) -> None:
        ...


class AssetStorage(ABC):
    """Interface to object storage for images and documents."""

    @abstractmethod
    def save(self, folder: str, upload: AssetUpload) -> StoredAsset:
        """Store the payload under a generated key inside ``folder``."""
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        ...

    @abstractmethod
    def path_for_url(self, url: str) -> str | None:
        """Map a public URL back to its storage key, if it belongs to this storage."""
        ...
