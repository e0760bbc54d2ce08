"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in marketplace/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from marketplace.domain.access import Role
from marketplace.domain.booth_status import BoothStatus
from marketplace.domain.value_objects import (
    AreaId,
    BannerId,
    BoothId,
    CategoryId,
    EventId,
    RatingId,
    RentalId,
    RentalProductId,
    UserId,
    VendorId,
)

T = TypeVar("T")


@dataclass(frozen=True)
class NamedRecord:
    """Domain representation of a simple named lookup record (area, category)."""

    id: AreaId | CategoryId
    name: str


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event."""

    id: EventId
    name: str
    price: int
    description: str
    category: str
    category_id: CategoryId | None
    location: str
    contact: str
    start_date: datetime
    end_date: datetime
    booth_slot: int
    area_id: AreaId | None
    vendor_id: VendorId | None
    banner: str | None
    permit_img: str | None
    created_at: datetime


@dataclass(frozen=True)
class BoothApplication:
    """Domain representation of a booth application."""

    id: BoothId
    event_id: EventId | None
    name: str
    phone: str
    description: str
    status: BoothStatus
    admin_notes: str | None
    created_at: datetime


@dataclass(frozen=True)
class Rating:
    """Domain representation of an event rating."""

    id: RatingId
    event_id: EventId
    name: str
    review: str | None
    rating_star: int
    created_at: datetime


@dataclass(frozen=True)
class Vendor:
    """Domain representation of a vendor profile."""

    id: VendorId
    user_id: UserId
    name: str
    description: str
    phone: str
    instagram: str
    banner: str | None
    location: str | None
    email: str | None
    created_at: datetime

    @property
    def instagram_url(self) -> str:
        return f"https://instagram.com/{self.instagram}"


@dataclass(frozen=True)
class Rental:
    """Domain representation of a rental category."""

    id: RentalId
    name: str
    banner: str | None


@dataclass(frozen=True)
class RentalProduct:
    """Domain representation of a rentable product."""

    id: RentalProductId
    rental_id: RentalId | None
    name: str
    description: str
    price: int
    location: str
    contact: str
    banner: str | None
    is_ready: bool


@dataclass(frozen=True)
class Banner:
    """Domain representation of a homepage banner."""

    id: BannerId
    name: str
    banner: str
    link: str | None
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Domain representation of a user account and its profile."""

    id: UserId
    email: str
    first_name: str
    last_name: str
    role: Role


@dataclass(frozen=True)
class AssetUpload:
    """Binary payload destined for object storage."""

    filename: str
    content: bytes
    content_type: str

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else "bin"


@dataclass(frozen=True)
class StoredAsset:
    """Location of an uploaded asset."""

    path: str
    url: str


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a listing plus the total match count."""

    items: list[T]
    total: int
