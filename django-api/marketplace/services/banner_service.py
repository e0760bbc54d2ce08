"""Homepage banner service."""

import logging
from collections.abc import Mapping
from typing import Any

from marketplace.domain import AssetUpload, Banner, BannerId, Page
from marketplace.domain.errors import ValidationError
from marketplace.services.base import check_upload, normalize_listing, require_found
from marketplace.stores.assets import UploadBatch, discard_asset
from marketplace.stores.interfaces import AssetStorage, BannerStore, Listing

logger = logging.getLogger(__name__)

BANNER_FOLDER = "banners"
ACTIVE_LIMIT = 5
SORT_FIELDS = ("name", "created_at")


class BannerService:
    """Service for homepage banners."""

    def __init__(self, banners: BannerStore, storage: AssetStorage) -> None:
        self._banners = banners
        self._storage = storage

    def create_banner(self, data: Mapping[str, Any], image: AssetUpload | None) -> Banner:
        """Raises ValidationError when the name or image is missing."""
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValidationError("Name is required")
        check_upload(image, "Banner image", required=True)
        link = str(data.get("link") or "").strip() or None
        batch = UploadBatch(self._storage)
        with batch.guard():
            url = batch.upload(BANNER_FOLDER, image, "banner image").url
            banner = self._banners.create_banner(name, url, link)
        logger.info("Created banner %s (%s)", banner.id, banner.name)
        return banner

    def list_banners(self, listing: Listing) -> Page[Banner]:
        return self._banners.list_banners(normalize_listing(listing, SORT_FIELDS, "created_at"))

    def active_banners(self, limit: int = ACTIVE_LIMIT) -> list[Banner]:
        """Most recent banners first."""
        listing = Listing(sort_by="created_at", descending=True, limit=limit)
        return self._banners.list_banners(listing).items

    def get_banner(self, banner_id: str) -> Banner:
        return require_found(self._banners.get_banner(BannerId.parse(banner_id)), "Banner")

    def update_banner(
        self,
        banner_id: str,
        data: Mapping[str, Any],
        image: AssetUpload | None = None,
    ) -> Banner:
        banner = self.get_banner(banner_id)
        check_upload(image, "Banner image")
        changes: dict[str, Any] = {}
        if data.get("name") is not None:
            name = str(data["name"]).strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            changes["name"] = name
        if data.get("link") is not None:
            changes["link"] = str(data["link"]).strip() or None
        if not changes and image is None:
            raise ValidationError("At least one field is required to update")
        batch = UploadBatch(self._storage)
        with batch.guard():
            if image is not None:
                changes["banner"] = batch.upload(BANNER_FOLDER, image, "banner image").url
            updated = self._banners.update_banner(banner.id, changes)
        if image is not None:
            discard_asset(self._storage, banner.banner)
        return updated

    def delete_banner(self, banner_id: str) -> Banner:
        banner = self.get_banner(banner_id)
        self._banners.delete_banner(banner.id)
        logger.info("Deleted banner %s", banner.id)
        return banner
