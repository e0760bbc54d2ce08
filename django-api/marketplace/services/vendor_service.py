"""Vendor profile service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from marketplace.domain import AssetUpload, Page, UserId, Vendor, VendorId
from marketplace.domain.access import VENDOR_OR_ADMIN
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.errors import ConflictError, ReferenceNotFoundError, ValidationError
from marketplace.domain.validators import normalize_instagram, validate_phone
from marketplace.services.base import (
    DeleteOutcome,
    check_upload,
    guarded_delete,
    normalize_listing,
    require_fields,
    require_found,
    supplied,
)
from marketplace.stores.assets import UploadBatch, discard_asset
from marketplace.stores.interfaces import (
    AccountStore,
    AssetStorage,
    DependentStore,
    EventStore,
    Listing,
    VendorStore,
)

logger = logging.getLogger(__name__)

BANNER_FOLDER = "vendor-banners"
REQUIRED_FIELDS = ("name", "user_id", "description", "phone", "instagram")
EDITABLE_FIELDS = ("name", "user_id", "description", "phone", "instagram", "location", "email")
SORT_FIELDS = ("name", "created_at")
TOP_VENDORS = 5


@dataclass(frozen=True)
class VendorDetails:
    vendor: Vendor
    events_count: int


class VendorService:
    """Service for vendor profiles."""

    def __init__(
        self,
        vendors: VendorStore,
        accounts: AccountStore,
        events: EventStore,
        event_dependents: DependentStore,
        storage: AssetStorage,
        delete_mode: DeleteMode = DeleteMode.ORPHAN,
    ) -> None:
        self._vendors = vendors
        self._accounts = accounts
        self._events = events
        self._event_dependents = event_dependents
        self._storage = storage
        self._delete_mode = delete_mode

    def create_vendor(self, data: Mapping[str, Any], banner: AssetUpload | None) -> VendorDetails:
        """Create a vendor profile for a vendor or admin account.

        Raises:
            ValidationError: If a field is missing or invalid, the banner is
                missing, or the user has the wrong role.
            ReferenceNotFoundError: If the user does not exist.
            ConflictError: If the user already has a vendor profile.
            StoreError: If the upload or insert fails.
        """
        require_fields(data, REQUIRED_FIELDS)
        check_upload(banner, "Banner image", required=True)
        values = self._clean(data)
        self._check_owner(values["user_id"])

        batch = UploadBatch(self._storage)
        with batch.guard():
            values["banner"] = batch.upload(BANNER_FOLDER, banner, "banner image").url
            vendor = self._vendors.create_vendor(values)
        logger.info("Created vendor %s for user %s", vendor.id, vendor.user_id)
        return VendorDetails(vendor, 0)

    def list_vendors(self, listing: Listing) -> Page[VendorDetails]:
        listing = normalize_listing(listing, SORT_FIELDS, "name", descending=False)
        page = self._vendors.list_vendors(listing)
        counts = self._events.count_by("vendor_id")
        return Page(
            items=[VendorDetails(vendor, counts.get(vendor.id, 0)) for vendor in page.items],
            total=page.total,
        )

    def get_vendor(self, vendor_id: str) -> VendorDetails:
        """Raises InvalidIdError or NotFoundError for a bad vendor id."""
        vendor = self._load(vendor_id)
        return self._with_count(vendor)

    def get_vendor_by_user(self, user_id: str) -> VendorDetails:
        """Raises InvalidIdError or NotFoundError for a bad user id."""
        vendor = require_found(self._vendors.get_by_user(UserId.parse(user_id)), "Vendor")
        return self._with_count(vendor)

    def update_vendor(
        self,
        vendor_id: str,
        data: Mapping[str, Any],
        banner: AssetUpload | None = None,
    ) -> VendorDetails:
        """Partial update with the creation checks applied to supplied fields.

        Raises:
            ValidationError: If the patch is empty or a value is invalid.
            ConflictError: If the new owner already has a vendor profile.
        """
        vendor = self._load(vendor_id)
        check_upload(banner, "Banner image")
        changes = self._clean(supplied(data, EDITABLE_FIELDS))
        if not changes and banner is None:
            raise ValidationError("At least one field is required to update")
        if "user_id" in changes and changes["user_id"] != vendor.user_id:
            self._check_owner(changes["user_id"])

        batch = UploadBatch(self._storage)
        with batch.guard():
            if banner is not None:
                changes["banner"] = batch.upload(BANNER_FOLDER, banner, "banner image").url
            updated = self._vendors.update_vendor(vendor.id, changes)
        if banner is not None:
            discard_asset(self._storage, vendor.banner)
        logger.info("Updated vendor %s fields=%s", vendor.id, sorted(changes))
        return self._with_count(updated)

    def delete_vendor(self, vendor_id: str, force: bool = False) -> tuple[Vendor, DeleteOutcome]:
        """Delete a vendor unless events reference it.

        Raises:
            DependentsExistError: If events exist and force is not set.
        """
        vendor = self._load(vendor_id)
        outcome = guarded_delete(
            "vendor",
            "events",
            vendor.id,
            self._event_dependents,
            force,
            self._delete_mode,
            lambda: self._vendors.delete_vendor(vendor.id),
        )
        return vendor, outcome

    def get_statistics(self) -> dict[str, Any]:
        vendors = self._vendors.all_vendors()
        counts = self._events.count_by("vendor_id")
        ranked = sorted(vendors, key=lambda vendor: counts.get(vendor.id, 0), reverse=True)
        with_events = sum(1 for vendor in vendors if counts.get(vendor.id, 0) > 0)
        return {
            "total_vendors": len(vendors),
            "vendors_with_events": with_events,
            "vendors_without_events": len(vendors) - with_events,
            "top_vendors": [
                {
                    "id": str(vendor.id),
                    "name": vendor.name,
                    "events_count": counts.get(vendor.id, 0),
                }
                for vendor in ranked[:TOP_VENDORS]
            ],
            "total_events": sum(counts.get(vendor.id, 0) for vendor in vendors),
        }

    def _load(self, vendor_id: str) -> Vendor:
        return require_found(self._vendors.get_vendor(VendorId.parse(vendor_id)), "Vendor")

    def _with_count(self, vendor: Vendor) -> VendorDetails:
        return VendorDetails(vendor, self._events.count_by("vendor_id").get(vendor.id, 0))

    def _check_owner(self, user_id: UserId) -> None:
        account = self._accounts.get_account(user_id)
        if account is None:
            raise ReferenceNotFoundError("User")
        if account.role not in VENDOR_OR_ADMIN:
            raise ValidationError(
                "User must have vendor or admin role",
                current_role=account.role.value,
            )
        if self._vendors.get_by_user(user_id) is not None:
            raise ConflictError("User already has a vendor profile")

    def _clean(self, data: Mapping[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in ("name", "description"):
            if name in data:
                text = str(data[name]).strip()
                if not text:
                    raise ValidationError(f"{name.capitalize()} cannot be empty")
                values[name] = text
        for name in ("location", "email"):
            if name in data:
                values[name] = str(data[name]).strip() or None
        if "phone" in data:
            phone = str(data["phone"]).strip()
            if not validate_phone(phone):
                raise ValidationError("Phone number must be 10-15 digits")
            values["phone"] = phone
        if "instagram" in data:
            values["instagram"] = normalize_instagram(str(data["instagram"]).strip())
        if "user_id" in data:
            values["user_id"] = UserId.parse(data["user_id"])
        return values
