from django.contrib import admin

from marketplace.models import (
    Area,
    Banner,
    Booth,
    Event,
    EventCategory,
    Rating,
    Rental,
    RentalProduct,
    UserProfile,
    Vendor,
)


class BoothInline(admin.TabularInline):
    model = Booth
    extra = 0
    fields = ["name", "phone", "status"]


class RatingInline(admin.TabularInline):
    model = Rating
    extra = 0


class RentalProductInline(admin.TabularInline):
    model = RentalProduct
    extra = 1


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "start_date", "end_date", "price"]
    search_fields = ["name", "location", "category"]
    inlines = [BoothInline, RatingInline]


@admin.register(Booth)
class BoothAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "phone", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["name", "phone"]


@admin.register(Rating)
class RatingAdmin(admin.ModelAdmin):
    list_display = ["name", "event", "rating_star", "created_at"]
    list_filter = ["rating_star"]


@admin.register(Vendor)
class VendorAdmin(admin.ModelAdmin):
    list_display = ["name", "phone", "instagram", "created_at"]
    search_fields = ["name", "instagram"]


@admin.register(Area, EventCategory)
class NamedRecordAdmin(admin.ModelAdmin):
    list_display = ["name", "created_at"]
    search_fields = ["name"]


@admin.register(Rental)
class RentalAdmin(admin.ModelAdmin):
    list_display = ["name", "created_at"]
    inlines = [RentalProductInline]


@admin.register(RentalProduct)
class RentalProductAdmin(admin.ModelAdmin):
    list_display = ["name", "rental", "price", "is_ready"]
    list_filter = ["is_ready"]


@admin.register(Banner)
class BannerAdmin(admin.ModelAdmin):
    list_display = ["name", "link", "created_at"]


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ["user", "role"]
    list_filter = ["role"]
