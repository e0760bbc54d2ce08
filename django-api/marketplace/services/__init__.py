from marketplace.services.account_service import AccountService, LoginResult
from marketplace.services.banner_service import BannerService
from marketplace.services.booth_service import BoothService
from marketplace.services.catalog_service import (
    AREA,
    EVENT_CATEGORY,
    CatalogEntry,
    CatalogKind,
    CatalogService,
)
from marketplace.services.event_service import EventDetails, EventService
from marketplace.services.rating_service import RatingService
from marketplace.services.rental_service import RentalService
from marketplace.services.vendor_service import VendorDetails, VendorService

__all__ = [
    "AREA",
    "EVENT_CATEGORY",
    "AccountService",
    "BannerService",
    "BoothService",
    "CatalogEntry",
    "CatalogKind",
    "CatalogService",
    "EventDetails",
    "EventService",
    "LoginResult",
    "RatingService",
    "RentalService",
    "VendorDetails",
    "VendorService",
]
