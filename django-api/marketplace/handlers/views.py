"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let the exception handler map domain errors to HTTP responses
- Never contain business logic
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from django.conf import settings
from django.db import transaction
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from marketplace import models as orm
from marketplace.domain import AreaId, CategoryId, Page, Role, VendorId
from marketplace.domain.access import ADMIN_ONLY, AUTHENTICATED, VENDOR_OR_ADMIN
from marketplace.domain.deletion import DeleteMode, parse_force
from marketplace.domain.lifecycle import parse_date_filter
from marketplace.handlers import serializers as s
from marketplace.handlers.permissions import RolePermission, caller_id
from marketplace.services import (
    AREA,
    EVENT_CATEGORY,
    AccountService,
    BannerService,
    BoothService,
    CatalogService,
    EventService,
    RatingService,
    RentalService,
    VendorService,
)
from marketplace.services.base import DeleteOutcome, is_present, parse_flag
from marketplace.stores.django_store import (
    DjangoAccountStore,
    DjangoAssetStorage,
    DjangoBannerStore,
    DjangoBoothStore,
    DjangoDependents,
    DjangoEventStore,
    DjangoNamedRecordStore,
    DjangoRatingStore,
    DjangoRentalStore,
    DjangoVendorStore,
)
from marketplace.stores.interfaces import EventFilters, Listing


@dataclass(frozen=True)
class Services:
    events: EventService
    booths: BoothService
    ratings: RatingService
    vendors: VendorService
    areas: CatalogService
    event_categories: CatalogService
    rentals: RentalService
    banners: BannerService
    accounts: AccountService


def build_services() -> Services:
    """Wire the services to the Django stores using the current settings."""
    mode = DeleteMode.parse(getattr(settings, "DEPENDENT_DELETE_MODE", "orphan"))
    storage = DjangoAssetStorage()
    events = DjangoEventStore()
    booths = DjangoBoothStore()
    ratings = DjangoRatingStore()
    vendors = DjangoVendorStore()
    rentals = DjangoRentalStore()
    areas = DjangoNamedRecordStore(orm.Area, AreaId)
    categories = DjangoNamedRecordStore(orm.EventCategory, CategoryId)

    def events_by(column: str) -> DjangoDependents:
        return DjangoDependents(orm.Event, column, ("id", "name"))

    return Services(
        events=EventService(
            events,
            booths,
            ratings,
            areas,
            categories,
            vendors,
            DjangoDependents(orm.Booth, "event_id", ("id", "name", "status")),
            storage,
            delete_mode=mode,
        ),
        booths=BoothService(
            booths,
            events,
            strict_transitions=getattr(settings, "BOOTH_STRICT_TRANSITIONS", False),
            reject_duplicates=getattr(settings, "BOOTH_REJECT_DUPLICATES", True),
        ),
        ratings=RatingService(ratings, events),
        vendors=VendorService(
            vendors,
            DjangoAccountStore(),
            events,
            events_by("vendor_id"),
            storage,
            delete_mode=mode,
        ),
        areas=CatalogService(AREA, areas, events, events_by("area_id"), mode),
        event_categories=CatalogService(
            EVENT_CATEGORY, categories, events, events_by("event_category_id"), mode
        ),
        rentals=RentalService(
            rentals,
            DjangoDependents(orm.RentalProduct, "rental_id", ("id", "name")),
            storage,
            delete_mode=mode,
        ),
        banners=BannerService(DjangoBannerStore(), storage),
        accounts=AccountService(DjangoAccountStore(), vendors),
    )


def ok(
    data: Any = None,
    message: str | None = None,
    status_code: int = status.HTTP_200_OK,
    **extra: Any,
) -> Response:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return Response(body, status=status_code)


def deleted(message: str, key: str, data: Any, outcome: DeleteOutcome) -> Response:
    return ok(
        {key: data},
        message,
        **{
            f"affected_{outcome.dependent}_count": outcome.affected,
            "dependent_delete_mode": outcome.mode.value,
        },
    )


def validated(serializer_class, data) -> Any:
    serializer = serializer_class(data=data)
    serializer.is_valid(raise_exception=True)
    return serializer


def page_listing(request: Request, query_class=s.ListQuerySerializer) -> tuple[Any, Listing]:
    query = validated(query_class, request.query_params).validated_data
    listing = Listing(
        search=query["search"] or None,
        sort_by=query["sort_by"],
        descending=query["sort_order"] == "desc",
        offset=(query["page"] - 1) * query["limit"],
        limit=query["limit"],
    )
    return query, listing


def paginated(page: Page, data: list, listing: Listing, **extra: Any) -> Response:
    limit = listing.limit or max(page.total, 1)
    return ok(
        data,
        pagination={
            "current_page": listing.offset // limit + 1,
            "per_page": limit,
            "total": page.total,
            "total_pages": (page.total + limit - 1) // limit,
        },
        **extra,
    )


def offset_listing(request: Request) -> Listing:
    query = validated(s.OffsetQuerySerializer, request.query_params).validated_data
    return Listing(sort_by="created_at", descending=True, offset=query["offset"], limit=query["limit"])


def offset_page(page: Page, data: list, listing: Listing) -> Response:
    return ok(
        data,
        count=len(data),
        total=page.total,
        pagination={
            "offset": listing.offset,
            "limit": listing.limit,
            "has_more": listing.offset + len(data) < page.total,
        },
    )


class MarketplaceView(APIView):
    """Base view: per-method role requirements and service access."""

    method_roles: dict[str, frozenset[Role]] = {}

    def get_permissions(self):
        required = self.method_roles.get(self.request.method)
        if required is None:
            return [AllowAny()]
        return [RolePermission(required)]

    @property
    def services(self) -> Services:
        return build_services()


# Accounts


class SignupView(MarketplaceView):
    """Handler for POST /api/signup"""

    def post(self, request: Request) -> Response:
        payload = validated(s.SignupSerializer, request.data).payload()
        account = self.services.accounts.signup(payload)
        return ok(
            s.AccountSerializer(account).data,
            "User registered successfully",
            status.HTTP_201_CREATED,
        )


class LoginView(MarketplaceView):
    """Handler for POST /api/login"""

    def post(self, request: Request) -> Response:
        payload = validated(s.LoginSerializer, request.data).payload()
        result = self.services.accounts.login(payload.get("email"), payload.get("password"))
        return ok(
            {
                "token": result.token,
                "token_type": "Bearer",
                "user": s.AccountSerializer(result.account).data,
            },
            "Login successful",
        )


class LogoutView(MarketplaceView):
    """Handler for POST /api/logout"""

    method_roles = {"POST": AUTHENTICATED}

    def post(self, request: Request) -> Response:
        token = getattr(request.auth, "key", None)
        self.services.accounts.logout(token)
        return ok(message="Logout successful")


class AdminUserListView(MarketplaceView):
    """Handler for GET /api/admin/users"""

    method_roles = {"GET": ADMIN_ONLY}

    def get(self, request: Request) -> Response:
        users = self.services.accounts.list_users()
        return ok(s.AccountSerializer(users, many=True).data, count=len(users))


class AdminUserDetailView(MarketplaceView):
    """Handler for PUT/DELETE /api/admin/users/{user_id}"""

    method_roles = {"PUT": ADMIN_ONLY, "DELETE": ADMIN_ONLY}

    def put(self, request: Request, user_id: str) -> Response:
        payload = validated(s.RoleChangeSerializer, request.data).payload()
        account = self.services.accounts.change_role(user_id, payload)
        return ok(s.AccountSerializer(account).data, "User role updated successfully")

    def delete(self, request: Request, user_id: str) -> Response:
        account = self.services.accounts.delete_user(user_id, caller_id(request))
        return ok(
            {"deleted_user": s.AccountSerializer(account).data},
            "User deleted successfully",
        )


# Events


def event_filters(query: dict[str, Any]) -> EventFilters:
    def ref(id_type, name):
        return id_type.parse(query[name]) if is_present(query.get(name)) else None

    return EventFilters(
        category=query.get("category") or None,
        category_id=ref(CategoryId, "event_category_id"),
        area_id=ref(AreaId, "area_id"),
        vendor_id=ref(VendorId, "vendor_id"),
        min_price=query.get("min_price"),
        max_price=query.get("max_price"),
        starts_after=parse_date_filter(query.get("start_date")),
        ends_before=parse_date_filter(query.get("end_date")),
    )


class EventListView(MarketplaceView):
    """Handler for GET/POST /api/events"""

    method_roles = {"POST": VENDOR_OR_ADMIN}

    def get(self, request: Request) -> Response:
        query, listing = page_listing(request, s.EventQuerySerializer)
        page = self.services.events.list_events(event_filters(query), listing)
        data = s.EventDetailsSerializer(page.items, many=True).data
        return paginated(page, data, listing)

    def post(self, request: Request) -> Response:
        serializer = validated(s.EventInputSerializer, request.data)
        details = self.services.events.create_event(
            serializer.payload(),
            serializer.upload("banner_image"),
            serializer.upload("permit_img"),
        )
        return ok(
            s.EventDetailsSerializer(details).data,
            "Event created successfully",
            status.HTTP_201_CREATED,
        )


class EventStatisticsView(MarketplaceView):
    """Handler for GET /api/events/statistics"""

    def get(self, request: Request) -> Response:
        query = validated(s.EventQuerySerializer, request.query_params).validated_data
        return ok(self.services.events.get_statistics(event_filters(query)))


class VendorEventListView(MarketplaceView):
    """Handler for GET /api/events/vendor/{vendor_id}"""

    def get(self, request: Request, vendor_id: str) -> Response:
        _, listing = page_listing(request)
        page = self.services.events.list_vendor_events(vendor_id, listing)
        data = s.EventDetailsSerializer(page.items, many=True).data
        return paginated(page, data, listing)


class EventDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/events/{event_id}"""

    method_roles = {"PUT": VENDOR_OR_ADMIN, "DELETE": ADMIN_ONLY}

    def get(self, request: Request, event_id: str) -> Response:
        details = self.services.events.get_event(event_id)
        return ok(s.EventDetailsSerializer(details).data)

    def put(self, request: Request, event_id: str) -> Response:
        serializer = validated(s.EventInputSerializer, request.data)
        details = self.services.events.update_event(
            event_id,
            serializer.payload(),
            banner=serializer.upload("banner_image"),
            permit=serializer.upload("permit_img"),
            remove_banner=serializer.validated_data["remove_banner"],
            remove_permit=serializer.validated_data["remove_permit"],
        )
        return ok(s.EventDetailsSerializer(details).data, "Event updated successfully")

    @transaction.atomic
    def delete(self, request: Request, event_id: str) -> Response:
        force = parse_force(request.query_params.get("force"))
        event, outcome = self.services.events.delete_event(event_id, force)
        return deleted(
            "Event deleted successfully",
            "deleted_event",
            s.EventSerializer(event).data,
            outcome,
        )


# Booths


class BoothListView(MarketplaceView):
    """Handler for GET/POST /api/booths"""

    method_roles = {"GET": ADMIN_ONLY, "POST": AUTHENTICATED}

    def get(self, request: Request) -> Response:
        _, listing = page_listing(request)
        page = self.services.booths.list_booths(
            listing,
            event_id=request.query_params.get("event_id"),
            status=request.query_params.get("status"),
        )
        return paginated(page, s.BoothSerializer(page.items, many=True).data, listing)

    def post(self, request: Request) -> Response:
        payload = validated(s.BoothInputSerializer, request.data).payload()
        booth = self.services.booths.create_booth(payload)
        return ok(
            s.BoothSerializer(booth).data,
            "Booth application submitted successfully",
            status.HTTP_201_CREATED,
        )


class BoothStatisticsView(MarketplaceView):
    """Handler for GET /api/booths/statistics"""

    method_roles = {"GET": ADMIN_ONLY}

    def get(self, request: Request) -> Response:
        return ok(self.services.booths.get_statistics(request.query_params.get("event_id")))


class BoothBulkStatusView(MarketplaceView):
    """Handler for PUT /api/booths/bulk/status"""

    method_roles = {"PUT": ADMIN_ONLY}

    def put(self, request: Request) -> Response:
        serializer = validated(s.BulkBoothStatusSerializer, request.data)
        booths = self.services.booths.bulk_update_status(
            serializer.validated_data.get("booth_ids"),
            serializer.status_token(),
            serializer.validated_data.get("admin_notes"),
        )
        return ok(
            s.BoothSerializer(booths, many=True).data,
            f"{len(booths)} booth applications updated successfully",
            updated_count=len(booths),
        )


class EventBoothListView(MarketplaceView):
    """Handler for GET /api/booths/event/{event_id}"""

    def get(self, request: Request, event_id: str) -> Response:
        include_pending = parse_flag(request.query_params.get("include_pending"))
        booths = self.services.booths.list_event_booths(event_id, include_pending)
        return ok(s.BoothSerializer(booths, many=True).data, count=len(booths))


class BoothDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/booths/{booth_id}"""

    method_roles = {"GET": AUTHENTICATED, "PUT": AUTHENTICATED, "DELETE": ADMIN_ONLY}

    def get(self, request: Request, booth_id: str) -> Response:
        return ok(s.BoothSerializer(self.services.booths.get_booth(booth_id)).data)

    def put(self, request: Request, booth_id: str) -> Response:
        payload = validated(s.BoothInputSerializer, request.data).payload()
        booth = self.services.booths.update_booth(booth_id, payload)
        return ok(s.BoothSerializer(booth).data, "Booth application updated successfully")

    def delete(self, request: Request, booth_id: str) -> Response:
        booth = self.services.booths.delete_booth(booth_id)
        return ok(
            {"deleted_booth": s.BoothSerializer(booth).data},
            "Booth application deleted successfully",
        )


class BoothStatusView(MarketplaceView):
    """Handler for PUT /api/booths/{booth_id}/status"""

    method_roles = {"PUT": ADMIN_ONLY}

    def put(self, request: Request, booth_id: str) -> Response:
        serializer = validated(s.BoothStatusSerializer, request.data)
        booth = self.services.booths.update_status(
            booth_id,
            serializer.status_token(),
            serializer.validated_data.get("admin_notes"),
        )
        return ok(s.BoothSerializer(booth).data, "Booth status updated successfully")


# Ratings


class RatingListView(MarketplaceView):
    """Handler for GET/POST /api/rating"""

    method_roles = {"POST": AUTHENTICATED}

    def get(self, request: Request) -> Response:
        listing = offset_listing(request)
        page = self.services.ratings.list_ratings(
            listing,
            event_id=request.query_params.get("event_id"),
            rating_star=request.query_params.get("rating_star"),
        )
        return offset_page(page, s.RatingSerializer(page.items, many=True).data, listing)

    def post(self, request: Request) -> Response:
        payload = validated(s.RatingInputSerializer, request.data).payload()
        rating = self.services.ratings.create_rating(payload)
        return ok(
            s.RatingSerializer(rating).data,
            "Rating created successfully",
            status.HTTP_201_CREATED,
        )


class EventRatingListView(MarketplaceView):
    """Handler for GET/DELETE /api/rating/event/{event_id}"""

    method_roles = {"DELETE": ADMIN_ONLY}

    def get(self, request: Request, event_id: str) -> Response:
        listing = offset_listing(request)
        page = self.services.ratings.list_event_ratings(event_id, listing)
        return offset_page(page, s.RatingSerializer(page.items, many=True).data, listing)

    def delete(self, request: Request, event_id: str) -> Response:
        deleted_count = self.services.ratings.delete_event_ratings(event_id)
        return ok(
            message=f"{deleted_count} ratings deleted successfully",
            deleted_count=deleted_count,
        )


class EventRatingStatsView(MarketplaceView):
    """Handler for GET /api/rating/{event_id}/stats"""

    def get(self, request: Request, event_id: str) -> Response:
        stats = self.services.ratings.get_event_rating_stats(event_id)
        return ok({"event_id": event_id, **stats.as_dict()})


class RatingDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/rating/{rating_id}"""

    method_roles = {"PUT": VENDOR_OR_ADMIN, "DELETE": VENDOR_OR_ADMIN}

    def get(self, request: Request, rating_id: str) -> Response:
        return ok(s.RatingSerializer(self.services.ratings.get_rating(rating_id)).data)

    def put(self, request: Request, rating_id: str) -> Response:
        payload = validated(s.RatingInputSerializer, request.data).payload()
        rating = self.services.ratings.update_rating(rating_id, payload)
        return ok(s.RatingSerializer(rating).data, "Rating updated successfully")

    def delete(self, request: Request, rating_id: str) -> Response:
        deleted_count = self.services.ratings.delete_rating(rating_id)
        return ok(message="Rating deleted successfully", deleted_count=deleted_count)


# Vendors


class VendorListView(MarketplaceView):
    """Handler for GET/POST /api/vendors"""

    method_roles = {"POST": ADMIN_ONLY}

    def get(self, request: Request) -> Response:
        _, listing = page_listing(request)
        page = self.services.vendors.list_vendors(listing)
        data = s.VendorDetailsSerializer(page.items, many=True).data
        return paginated(page, data, listing)

    def post(self, request: Request) -> Response:
        serializer = validated(s.VendorInputSerializer, request.data)
        details = self.services.vendors.create_vendor(
            serializer.payload(), serializer.upload("banner_image")
        )
        return ok(
            s.VendorDetailsSerializer(details).data,
            "Vendor created successfully",
            status.HTTP_201_CREATED,
        )


class VendorStatisticsView(MarketplaceView):
    """Handler for GET /api/vendors/statistics"""

    def get(self, request: Request) -> Response:
        return ok(self.services.vendors.get_statistics())


class VendorByUserView(MarketplaceView):
    """Handler for GET /api/vendors/user/{user_id}"""

    def get(self, request: Request, user_id: str) -> Response:
        details = self.services.vendors.get_vendor_by_user(user_id)
        return ok(s.VendorDetailsSerializer(details).data)


class VendorDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/vendors/{vendor_id}"""

    method_roles = {"PUT": VENDOR_OR_ADMIN, "DELETE": ADMIN_ONLY}

    def get(self, request: Request, vendor_id: str) -> Response:
        return ok(s.VendorDetailsSerializer(self.services.vendors.get_vendor(vendor_id)).data)

    def put(self, request: Request, vendor_id: str) -> Response:
        serializer = validated(s.VendorInputSerializer, request.data)
        details = self.services.vendors.update_vendor(
            vendor_id, serializer.payload(), serializer.upload("banner_image")
        )
        return ok(s.VendorDetailsSerializer(details).data, "Vendor updated successfully")

    @transaction.atomic
    def delete(self, request: Request, vendor_id: str) -> Response:
        force = parse_force(request.query_params.get("force"))
        vendor, outcome = self.services.vendors.delete_vendor(vendor_id, force)
        return deleted(
            "Vendor deleted successfully",
            "deleted_vendor",
            s.VendorSerializer(vendor).data,
            outcome,
        )


# Areas and event categories


class CatalogView(MarketplaceView):
    """Shared base for the area and event category endpoints."""

    catalog = "areas"
    bulk_key = "areas"

    @property
    def catalog_service(self) -> CatalogService:
        return getattr(self.services, self.catalog)

    @property
    def label(self) -> str:
        return self.catalog_service.kind.label


class CatalogListView(CatalogView):
    """Handler for GET/POST /api/areas and /api/event-categories"""

    method_roles = {"POST": ADMIN_ONLY}

    def get(self, request: Request) -> Response:
        _, listing = page_listing(request)
        page = self.catalog_service.list(listing)
        data = s.NamedRecordSerializer(page.items, many=True).data
        return paginated(page, data, listing)

    def post(self, request: Request) -> Response:
        payload = validated(s.NamedRecordInputSerializer, request.data).payload()
        record = self.catalog_service.create(payload)
        return ok(
            s.NamedRecordSerializer(record).data,
            f"{self.label} created successfully",
            status.HTTP_201_CREATED,
        )


class CatalogBulkView(CatalogView):
    """Handler for POST /api/areas/bulk and /api/event-categories/bulk"""

    method_roles = {"POST": ADMIN_ONLY}

    def post(self, request: Request) -> Response:
        body = request.data if isinstance(request.data, Mapping) else {}
        records = self.catalog_service.bulk_create(body.get(self.bulk_key))
        return ok(
            s.NamedRecordSerializer(records, many=True).data,
            f"{len(records)} {self.catalog_service.kind.plural.lower()} created successfully",
            status.HTTP_201_CREATED,
            count=len(records),
        )


class CatalogDropdownView(CatalogView):
    """Handler for GET /api/areas/dropdown and /api/event-categories/dropdown"""

    def get(self, request: Request) -> Response:
        records = self.catalog_service.dropdown()
        return ok(s.NamedRecordSerializer(records, many=True).data)


class CatalogWithCountView(CatalogView):
    """Handler for GET /api/areas/with-count and /api/event-categories/with-count"""

    def get(self, request: Request) -> Response:
        entries = self.catalog_service.list_with_counts()
        return ok(s.CatalogEntrySerializer(entries, many=True).data)


class CatalogStatisticsView(CatalogView):
    """Handler for GET /api/areas/statistics and /api/event-categories/statistics"""

    def get(self, request: Request) -> Response:
        return ok(self.catalog_service.get_statistics())


class CatalogDetailView(CatalogView):
    """Handler for GET/PUT/DELETE /api/areas/{id} and /api/event-categories/{id}"""

    method_roles = {"PUT": ADMIN_ONLY, "DELETE": ADMIN_ONLY}

    def get(self, request: Request, record_id: str) -> Response:
        return ok(s.NamedRecordSerializer(self.catalog_service.get(record_id)).data)

    def put(self, request: Request, record_id: str) -> Response:
        payload = validated(s.NamedRecordInputSerializer, request.data).payload()
        record = self.catalog_service.update(record_id, payload)
        return ok(s.NamedRecordSerializer(record).data, f"{self.label} updated successfully")

    @transaction.atomic
    def delete(self, request: Request, record_id: str) -> Response:
        force = parse_force(request.query_params.get("force"))
        record, outcome = self.catalog_service.delete(record_id, force)
        return deleted(
            f"{self.label} deleted successfully",
            "deleted",
            s.NamedRecordSerializer(record).data,
            outcome,
        )


class CatalogDetailWithCountView(CatalogView):
    """Handler for GET /api/areas/{id}/with-count and /api/event-categories/{id}/with-count"""

    def get(self, request: Request, record_id: str) -> Response:
        entry = self.catalog_service.get_with_count(record_id)
        return ok(s.CatalogEntrySerializer(entry).data)


# Rentals and rental products


class RentalListView(MarketplaceView):
    """Handler for GET/POST /api/rentals"""

    method_roles = {"POST": ADMIN_ONLY}

    def get(self, request: Request) -> Response:
        _, listing = page_listing(request)
        page = self.services.rentals.list_rentals(listing)
        return paginated(page, s.RentalSerializer(page.items, many=True).data, listing)

    def post(self, request: Request) -> Response:
        serializer = validated(s.RentalInputSerializer, request.data)
        rental = self.services.rentals.create_rental(
            serializer.payload(), serializer.upload("banner_image")
        )
        return ok(
            s.RentalSerializer(rental).data,
            "Rental created successfully",
            status.HTTP_201_CREATED,
        )


class RentalSummaryView(MarketplaceView):
    """Handler for GET /api/rentals/summary"""

    def get(self, request: Request) -> Response:
        summary = [
            {**entry, "rental": s.RentalSerializer(entry["rental"]).data}
            for entry in self.services.rentals.rental_summary()
        ]
        return ok(summary, count=len(summary))


class RentalDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/rentals/{rental_id}"""

    method_roles = {"PUT": ADMIN_ONLY, "DELETE": ADMIN_ONLY}

    def get(self, request: Request, rental_id: str) -> Response:
        return ok(s.RentalSerializer(self.services.rentals.get_rental(rental_id)).data)

    def put(self, request: Request, rental_id: str) -> Response:
        serializer = validated(s.RentalInputSerializer, request.data)
        rental = self.services.rentals.update_rental(
            rental_id, serializer.payload(), serializer.upload("banner_image")
        )
        return ok(s.RentalSerializer(rental).data, "Rental updated successfully")

    @transaction.atomic
    def delete(self, request: Request, rental_id: str) -> Response:
        force = parse_force(request.query_params.get("force"))
        rental, outcome = self.services.rentals.delete_rental(rental_id, force)
        return deleted(
            "Rental deleted successfully",
            "deleted_rental",
            s.RentalSerializer(rental).data,
            outcome,
        )


class RentalWithProductsView(MarketplaceView):
    """Handler for GET /api/rentals/{rental_id}/with-products"""

    def get(self, request: Request, rental_id: str) -> Response:
        rental = self.services.rentals.get_rental(rental_id)
        _, listing = page_listing(request)
        page = self.services.rentals.list_products(listing, rental_id=rental_id)
        return paginated(
            page,
            s.RentalProductSerializer(page.items, many=True).data,
            listing,
            rental=s.RentalSerializer(rental).data,
        )


class RentalProductListView(MarketplaceView):
    """Handler for GET/POST /api/rental-products"""

    method_roles = {"POST": VENDOR_OR_ADMIN}

    def get(self, request: Request) -> Response:
        _, listing = page_listing(request)
        page = self.services.rentals.list_products(
            listing,
            rental_id=request.query_params.get("rental_id"),
            is_ready=request.query_params.get("is_ready"),
        )
        return paginated(page, s.RentalProductSerializer(page.items, many=True).data, listing)

    def post(self, request: Request) -> Response:
        serializer = validated(s.RentalProductInputSerializer, request.data)
        product = self.services.rentals.create_product(
            serializer.payload(), serializer.upload("product_image")
        )
        return ok(
            s.RentalProductSerializer(product).data,
            "Rental product created successfully",
            status.HTTP_201_CREATED,
        )


class RentalProductDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/rental-products/{product_id}"""

    method_roles = {"PUT": VENDOR_OR_ADMIN, "DELETE": VENDOR_OR_ADMIN}

    def get(self, request: Request, product_id: str) -> Response:
        product = self.services.rentals.get_product(product_id)
        return ok(s.RentalProductSerializer(product).data)

    def put(self, request: Request, product_id: str) -> Response:
        serializer = validated(s.RentalProductInputSerializer, request.data)
        product = self.services.rentals.update_product(
            product_id, serializer.payload(), serializer.upload("product_image")
        )
        return ok(s.RentalProductSerializer(product).data, "Rental product updated successfully")

    def delete(self, request: Request, product_id: str) -> Response:
        product = self.services.rentals.delete_product(product_id)
        return ok(
            {"deleted_product": s.RentalProductSerializer(product).data},
            "Rental product deleted successfully",
        )


# Banners


class BannerListView(MarketplaceView):
    """Handler for GET/POST /api/banners"""

    method_roles = {"POST": ADMIN_ONLY}

    def get(self, request: Request) -> Response:
        _, listing = page_listing(request)
        page = self.services.banners.list_banners(listing)
        return paginated(page, s.BannerSerializer(page.items, many=True).data, listing)

    def post(self, request: Request) -> Response:
        serializer = validated(s.BannerInputSerializer, request.data)
        banner = self.services.banners.create_banner(
            serializer.payload(), serializer.upload("banner_image")
        )
        return ok(
            s.BannerSerializer(banner).data,
            "Banner created successfully",
            status.HTTP_201_CREATED,
        )


class ActiveBannerListView(MarketplaceView):
    """Handler for GET /api/banners/active"""

    def get(self, request: Request) -> Response:
        banners = self.services.banners.active_banners()
        return ok(s.BannerSerializer(banners, many=True).data)


class BannerDetailView(MarketplaceView):
    """Handler for GET/PUT/DELETE /api/banners/{banner_id}"""

    method_roles = {"PUT": ADMIN_ONLY, "DELETE": ADMIN_ONLY}

    def get(self, request: Request, banner_id: str) -> Response:
        return ok(s.BannerSerializer(self.services.banners.get_banner(banner_id)).data)

    def put(self, request: Request, banner_id: str) -> Response:
        serializer = validated(s.BannerInputSerializer, request.data)
        banner = self.services.banners.update_banner(
            banner_id, serializer.payload(), serializer.upload("banner_image")
        )
        return ok(s.BannerSerializer(banner).data, "Banner updated successfully")

    def delete(self, request: Request, banner_id: str) -> Response:
        banner = self.services.banners.delete_banner(banner_id)
        return ok(
            {"deleted_banner": s.BannerSerializer(banner).data},
            "Banner deleted successfully",
        )
