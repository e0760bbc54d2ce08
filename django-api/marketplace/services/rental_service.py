"""Rental categories and the products listed under them."""

import logging
from collections.abc import Mapping
from typing import Any

from marketplace.domain import (
    AssetUpload,
    Page,
    Rental,
    RentalId,
    RentalProduct,
    RentalProductId,
)
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.errors import ConflictError, ReferenceNotFoundError, ValidationError
from marketplace.domain.validators import validate_contact
from marketplace.domain.value_objects import Price
from marketplace.services.base import (
    DeleteOutcome,
    check_upload,
    guarded_delete,
    is_present,
    normalize_listing,
    parse_flag,
    require_fields,
    require_found,
    supplied,
)
from marketplace.stores.assets import UploadBatch, discard_asset
from marketplace.stores.interfaces import (
    AssetStorage,
    DependentStore,
    Listing,
    RentalStore,
)

logger = logging.getLogger(__name__)

RENTAL_FOLDER = "rentals"
PRODUCT_FOLDER = "rental-products"
RENTAL_SORT_FIELDS = ("name", "created_at")
PRODUCT_SORT_FIELDS = ("name", "price", "created_at")
PRODUCT_REQUIRED_FIELDS = ("name", "description", "price", "rental_id", "location", "contact")
PRODUCT_FIELDS = PRODUCT_REQUIRED_FIELDS + ("banner", "is_ready")


class RentalService:
    """Service for rentals and rental products."""

    def __init__(
        self,
        rentals: RentalStore,
        product_dependents: DependentStore,
        storage: AssetStorage,
        delete_mode: DeleteMode = DeleteMode.ORPHAN,
    ) -> None:
        self._rentals = rentals
        self._product_dependents = product_dependents
        self._storage = storage
        self._delete_mode = delete_mode

    def create_rental(self, data: Mapping[str, Any], banner: AssetUpload | None = None) -> Rental:
        """Raises ValidationError for a missing name and ConflictError for a taken one."""
        name = _required_text(data.get("name"), "Name")
        check_upload(banner, "Banner image")
        self._ensure_unique(name)
        batch = UploadBatch(self._storage)
        with batch.guard():
            url = batch.upload(RENTAL_FOLDER, banner, "banner image").url if banner else None
            rental = self._rentals.create_rental(name, url)
        logger.info("Created rental %s (%s)", rental.id, rental.name)
        return rental

    def list_rentals(self, listing: Listing) -> Page[Rental]:
        return self._rentals.list_rentals(
            normalize_listing(listing, RENTAL_SORT_FIELDS, "created_at", descending=False)
        )

    def get_rental(self, rental_id: str) -> Rental:
        return require_found(self._rentals.get_rental(RentalId.parse(rental_id)), "Rental")

    def update_rental(
        self,
        rental_id: str,
        data: Mapping[str, Any],
        banner: AssetUpload | None = None,
    ) -> Rental:
        rental = self.get_rental(rental_id)
        check_upload(banner, "Banner image")
        changes: dict[str, Any] = {}
        if data.get("name") is not None:
            changes["name"] = _required_text(data["name"], "Name")
            self._ensure_unique(changes["name"], exclude=rental.id)
        if not changes and banner is None:
            raise ValidationError("At least one field is required to update")
        batch = UploadBatch(self._storage)
        with batch.guard():
            if banner is not None:
                changes["banner"] = batch.upload(RENTAL_FOLDER, banner, "banner image").url
            updated = self._rentals.update_rental(rental.id, changes)
        if banner is not None:
            discard_asset(self._storage, rental.banner)
        return updated

    def delete_rental(self, rental_id: str, force: bool = False) -> tuple[Rental, DeleteOutcome]:
        """Delete a rental unless products reference it.

        Raises:
            DependentsExistError: If products exist and force is not set.
        """
        rental = self.get_rental(rental_id)
        outcome = guarded_delete(
            "rental",
            "products",
            rental.id,
            self._product_dependents,
            force,
            self._delete_mode,
            lambda: self._rentals.delete_rental(rental.id),
        )
        return rental, outcome

    def rental_summary(self) -> list[dict[str, Any]]:
        """Product counts and price range for every rental."""
        products = self._rentals.products_by_rental()
        summary = []
        for rental in self._rentals.list_rentals(Listing(sort_by="created_at")).items:
            items = products.get(rental.id, [])
            prices = [product.price for product in items]
            available = sum(1 for product in items if product.is_ready)
            summary.append(
                {
                    "rental": rental,
                    "total_products": len(items),
                    "available_products": available,
                    "unavailable_products": len(items) - available,
                    "price_range": {
                        "min": min(prices) if prices else None,
                        "max": max(prices) if prices else None,
                        "average": round(sum(prices) / len(prices)) if prices else None,
                    },
                }
            )
        return summary

    def create_product(
        self, data: Mapping[str, Any], image: AssetUpload | None = None
    ) -> RentalProduct:
        """Raises ValidationError, InvalidIdError or ReferenceNotFoundError on bad input."""
        require_fields(data, PRODUCT_REQUIRED_FIELDS)
        check_upload(image, "Product image")
        values = self._clean_product(data)
        values.setdefault("is_ready", True)
        batch = UploadBatch(self._storage)
        with batch.guard():
            if image is not None:
                values["banner"] = batch.upload(PRODUCT_FOLDER, image, "product image").url
            product = self._rentals.create_product(values)
        logger.info("Created rental product %s under rental %s", product.id, product.rental_id)
        return product

    def list_products(
        self,
        listing: Listing,
        rental_id: str | None = None,
        is_ready: Any = None,
    ) -> Page[RentalProduct]:
        return self._rentals.list_products(
            RentalId.parse(rental_id) if is_present(rental_id) else None,
            parse_flag(is_ready) if is_present(is_ready) else None,
            normalize_listing(listing, PRODUCT_SORT_FIELDS, "created_at"),
        )

    def get_product(self, product_id: str) -> RentalProduct:
        return require_found(
            self._rentals.get_product(RentalProductId.parse(product_id)), "Rental product"
        )

    def update_product(
        self,
        product_id: str,
        data: Mapping[str, Any],
        image: AssetUpload | None = None,
    ) -> RentalProduct:
        product = self.get_product(product_id)
        check_upload(image, "Product image")
        changes = self._clean_product(supplied(data, PRODUCT_FIELDS))
        if not changes and image is None:
            raise ValidationError("At least one field is required to update")
        batch = UploadBatch(self._storage)
        with batch.guard():
            if image is not None:
                changes["banner"] = batch.upload(PRODUCT_FOLDER, image, "product image").url
            updated = self._rentals.update_product(product.id, changes)
        if image is not None:
            discard_asset(self._storage, product.banner)
        return updated

    def delete_product(self, product_id: str) -> RentalProduct:
        product = self.get_product(product_id)
        self._rentals.delete_product(product.id)
        logger.info("Deleted rental product %s", product.id)
        return product

    def _ensure_unique(self, name: str, exclude: RentalId | None = None) -> None:
        if self._rentals.find_rental_by_name(name, exclude) is not None:
            raise ConflictError("Rental with this name already exists")

    def _clean_product(self, data: Mapping[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in ("name", "description", "location"):
            if name in data:
                values[name] = _required_text(data[name], name.capitalize())
        if "price" in data:
            values["price"] = _positive_price(data["price"])
        if "contact" in data:
            contact = str(data["contact"]).strip()
            if not validate_contact(contact):
                raise ValidationError("Contact must be a valid phone number or email")
            values["contact"] = contact
        if "rental_id" in data:
            rental_id = RentalId.parse(data["rental_id"])
            if self._rentals.get_rental(rental_id) is None:
                raise ReferenceNotFoundError("Rental")
            values["rental_id"] = rental_id
        if data.get("banner") is not None:
            values["banner"] = str(data["banner"]).strip() or None
        if data.get("is_ready") is not None:
            values["is_ready"] = parse_flag(data["is_ready"], default=True)
        return values


def _required_text(value: Any, label: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValidationError(f"{label} is required")
    return text


def _positive_price(value: Any) -> int:
    try:
        price = Price.parse(value).amount
    except ValueError as exc:
        raise ValidationError(str(exc)) from None
    if price <= 0:
        raise ValidationError("Price must be a positive number")
    return price
