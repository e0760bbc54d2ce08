from marketplace.domain.access import Role
from marketplace.domain.booth_status import BoothStatus
from marketplace.domain.models import (
    Account,
    AssetUpload,
    Banner,
    BoothApplication,
    Event,
    NamedRecord,
    Page,
    Rating,
    Rental,
    RentalProduct,
    StoredAsset,
    Vendor,
)
from marketplace.domain.value_objects import (
    AreaId,
    BannerId,
    BoothId,
    BoothSlot,
    CategoryId,
    EntityId,
    EventId,
    Price,
    RatingId,
    RentalId,
    RentalProductId,
    StarRating,
    UserId,
    VendorId,
)

__all__ = [
    "Account",
    "AssetUpload",
    "Banner",
    "BoothApplication",
    "Event",
    "NamedRecord",
    "Page",
    "Rating",
    "Rental",
    "RentalProduct",
    "StoredAsset",
    "Vendor",
    "Role",
    "BoothStatus",
    "EntityId",
    "EventId",
    "BoothId",
    "RatingId",
    "VendorId",
    "AreaId",
    "CategoryId",
    "RentalId",
    "RentalProductId",
    "BannerId",
    "UserId",
    "Price",
    "BoothSlot",
    "StarRating",
]
