from django.urls import path

from marketplace.handlers import (
    ActiveBannerListView,
    AdminUserDetailView,
    AdminUserListView,
    BannerDetailView,
    BannerListView,
    BoothBulkStatusView,
    BoothDetailView,
    BoothListView,
    BoothStatisticsView,
    BoothStatusView,
    CatalogBulkView,
    CatalogDetailView,
    CatalogDetailWithCountView,
    CatalogDropdownView,
    CatalogListView,
    CatalogStatisticsView,
    CatalogWithCountView,
    EventBoothListView,
    EventDetailView,
    EventListView,
    EventRatingListView,
    EventRatingStatsView,
    EventStatisticsView,
    LoginView,
    LogoutView,
    RatingDetailView,
    RatingListView,
    RentalDetailView,
    RentalListView,
    RentalProductDetailView,
    RentalProductListView,
    RentalSummaryView,
    RentalWithProductsView,
    SignupView,
    VendorByUserView,
    VendorDetailView,
    VendorEventListView,
    VendorListView,
    VendorStatisticsView,
)


def catalog_routes(prefix: str, catalog: str, bulk_key: str) -> list:
    """Routes shared by the area and event category lookups."""
    kwargs = {"catalog": catalog, "bulk_key": bulk_key}
    name = prefix.rstrip("s")
    return [
        path(prefix, CatalogListView.as_view(**kwargs), name=f"{name}-list"),
        path(f"{prefix}/bulk", CatalogBulkView.as_view(**kwargs), name=f"{name}-bulk"),
        path(
            f"{prefix}/dropdown",
            CatalogDropdownView.as_view(**kwargs),
            name=f"{name}-dropdown",
        ),
        path(
            f"{prefix}/with-count",
            CatalogWithCountView.as_view(**kwargs),
            name=f"{name}-with-count",
        ),
        path(
            f"{prefix}/statistics",
            CatalogStatisticsView.as_view(**kwargs),
            name=f"{name}-statistics",
        ),
        path(
            f"{prefix}/<str:record_id>",
            CatalogDetailView.as_view(**kwargs),
            name=f"{name}-detail",
        ),
        path(
            f"{prefix}/<str:record_id>/with-count",
            CatalogDetailWithCountView.as_view(**kwargs),
            name=f"{name}-detail-with-count",
        ),
    ]


urlpatterns = [
    # Accounts
    path("signup", SignupView.as_view(), name="signup"),
    path("login", LoginView.as_view(), name="login"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("admin/users", AdminUserListView.as_view(), name="admin-user-list"),
    path(
        "admin/users/<str:user_id>",
        AdminUserDetailView.as_view(),
        name="admin-user-detail",
    ),
    # Events
    path("events", EventListView.as_view(), name="event-list"),
    path("events/statistics", EventStatisticsView.as_view(), name="event-statistics"),
    path(
        "events/vendor/<str:vendor_id>",
        VendorEventListView.as_view(),
        name="vendor-event-list",
    ),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    # Booths
    path("booths", BoothListView.as_view(), name="booth-list"),
    path("booths/statistics", BoothStatisticsView.as_view(), name="booth-statistics"),
    path("booths/bulk/status", BoothBulkStatusView.as_view(), name="booth-bulk-status"),
    path(
        "booths/event/<str:event_id>",
        EventBoothListView.as_view(),
        name="event-booth-list",
    ),
    path("booths/<str:booth_id>", BoothDetailView.as_view(), name="booth-detail"),
    path("booths/<str:booth_id>/status", BoothStatusView.as_view(), name="booth-status"),
    # Ratings
    path("rating", RatingListView.as_view(), name="rating-list"),
    path(
        "rating/event/<str:event_id>",
        EventRatingListView.as_view(),
        name="event-rating-list",
    ),
    path(
        "rating/<str:event_id>/stats",
        EventRatingStatsView.as_view(),
        name="event-rating-stats",
    ),
    path("rating/<str:rating_id>", RatingDetailView.as_view(), name="rating-detail"),
    # Vendors
    path("vendors", VendorListView.as_view(), name="vendor-list"),
    path("vendors/statistics", VendorStatisticsView.as_view(), name="vendor-statistics"),
    path("vendors/user/<str:user_id>", VendorByUserView.as_view(), name="vendor-by-user"),
    path("vendors/<str:vendor_id>", VendorDetailView.as_view(), name="vendor-detail"),
    # Lookups
    *catalog_routes("areas", "areas", "areas"),
    *catalog_routes("event-categories", "event_categories", "categories"),
    # Rentals
    path("rentals", RentalListView.as_view(), name="rental-list"),
    path("rentals/summary", RentalSummaryView.as_view(), name="rental-summary"),
    path("rentals/<str:rental_id>", RentalDetailView.as_view(), name="rental-detail"),
    path(
        "rentals/<str:rental_id>/with-products",
        RentalWithProductsView.as_view(),
        name="rental-with-products",
    ),
    path("rental-products", RentalProductListView.as_view(), name="rental-product-list"),
    path(
        "rental-products/<str:product_id>",
        RentalProductDetailView.as_view(),
        name="rental-product-detail",
    ),
    # Banners
    path("banners", BannerListView.as_view(), name="banner-list"),
    path("banners/active", ActiveBannerListView.as_view(), name="banner-active"),
    path("banners/<str:banner_id>", BannerDetailView.as_view(), name="banner-detail"),
]
