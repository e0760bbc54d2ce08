from marketplace.handlers.views import (
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

__all__ = [
    "ActiveBannerListView",
    "AdminUserDetailView",
    "AdminUserListView",
    "BannerDetailView",
    "BannerListView",
    "BoothBulkStatusView",
    "BoothDetailView",
    "BoothListView",
    "BoothStatisticsView",
    "BoothStatusView",
    "CatalogBulkView",
    "CatalogDetailView",
    "CatalogDetailWithCountView",
    "CatalogDropdownView",
    "CatalogListView",
    "CatalogStatisticsView",
    "CatalogWithCountView",
    "EventBoothListView",
    "EventDetailView",
    "EventListView",
    "EventRatingListView",
    "EventRatingStatsView",
    "EventStatisticsView",
    "LoginView",
    "LogoutView",
    "RatingDetailView",
    "RatingListView",
    "RentalDetailView",
    "RentalListView",
    "RentalProductDetailView",
    "RentalProductListView",
    "RentalSummaryView",
    "RentalWithProductsView",
    "SignupView",
    "VendorByUserView",
    "VendorDetailView",
    "VendorEventListView",
    "VendorListView",
    "VendorStatisticsView",
]
