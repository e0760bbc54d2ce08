from marketplace.stores.interfaces import (
    AccountStore,
    AssetStorage,
    BannerStore,
    BoothStore,
    DependentStore,
    EventFilters,
    EventStore,
    Listing,
    NamedRecordStore,
    RatingStore,
    RentalStore,
    VendorStore,
)

__all__ = [
    "AccountStore",
    "AssetStorage",
    "BannerStore",
    "BoothStore",
    "DependentStore",
    "EventFilters",
    "EventStore",
    "Listing",
    "NamedRecordStore",
    "RatingStore",
    "RentalStore",
    "VendorStore",
]
