"""Django ORM implementations of the marketplace stores.

Every public method converts ORM rows to domain models and turns database
failures into StoreError so services never see Django exceptions.
"""

import functools
import logging
import uuid
from collections import defaultdict
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, TypeVar

from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage
from django.db import DatabaseError, models, transaction
from django.db.models import Count, Q, QuerySet
from rest_framework.authtoken.models import Token

from marketplace import models as orm
from marketplace.domain import (
    Account,
    AreaId,
    AssetUpload,
    Banner,
    BannerId,
    BoothApplication,
    BoothId,
    BoothStatus,
    CategoryId,
    EntityId,
    Event,
    EventId,
    NamedRecord,
    Page,
    Rating,
    RatingId,
    Rental,
    RentalId,
    RentalProduct,
    RentalProductId,
    Role,
    StoredAsset,
    UserId,
    Vendor,
    VendorId,
)
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.errors import StoreError
from marketplace.domain.lifecycle import EventDraft
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

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def translate_errors(action: str) -> Callable[[F], F]:
    """Turn database failures inside a store method into StoreError."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except (DatabaseError, ObjectDoesNotExist) as exc:
                logger.error("Store call failed: %s", action, exc_info=True)
                raise StoreError(f"Failed to {action}", str(exc)) from exc

        return wrapper  # type: ignore[return-value]

    return decorator


def _plain(value: Any) -> Any:
    """Unwrap domain ids and enums into column values."""
    if isinstance(value, EntityId):
        return value.value
    if isinstance(value, Enum):
        return value.value
    return value


def _columns(changes: dict[str, Any], renames: dict[str, str] | None = None) -> dict[str, Any]:
    renames = renames or {}
    return {renames.get(key, key): _plain(value) for key, value in changes.items()}


def _page(queryset: QuerySet, listing: Listing, search_fields: Iterable[str]) -> tuple[QuerySet, int]:
    """Apply search, ordering and window to a queryset; return it with the total."""
    if listing.search:
        condition = Q()
        for field in search_fields:
            condition |= Q(**{f"{field}__icontains": listing.search})
        queryset = queryset.filter(condition)
    order = f"-{listing.sort_by}" if listing.descending else listing.sort_by
    queryset = queryset.order_by(order, "id")
    total = queryset.count()
    end = listing.offset + listing.limit if listing.limit is not None else None
    return queryset[listing.offset:end], total


def _optional(id_type: type[EntityId], value: uuid.UUID | None) -> Any:
    return id_type(value) if value is not None else None


def to_event(row: orm.Event) -> Event:
    return Event(
        id=EventId(row.id),
        name=row.name,
        price=row.price,
        description=row.description,
        category=row.category,
        category_id=_optional(CategoryId, row.event_category_id),
        location=row.location,
        contact=row.contact,
        start_date=row.start_date,
        end_date=row.end_date,
        booth_slot=row.booth_slot,
        area_id=_optional(AreaId, row.area_id),
        vendor_id=_optional(VendorId, row.vendor_id),
        banner=row.banner,
        permit_img=row.permit_img,
        created_at=row.created_at,
    )


def to_booth(row: orm.Booth) -> BoothApplication:
    return BoothApplication(
        id=BoothId(row.id),
        event_id=_optional(EventId, row.event_id),
        name=row.name,
        phone=row.phone,
        description=row.description,
        status=BoothStatus(row.status),
        admin_notes=row.admin_notes,
        created_at=row.created_at,
    )


def to_rating(row: orm.Rating) -> Rating:
    return Rating(
        id=RatingId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        review=row.review,
        rating_star=row.rating_star,
        created_at=row.created_at,
    )


def to_vendor(row: orm.Vendor) -> Vendor:
    return Vendor(
        id=VendorId(row.id),
        user_id=UserId(row.user_id),
        name=row.name,
        description=row.description,
        phone=row.phone,
        instagram=row.instagram,
        banner=row.banner,
        location=row.location,
        email=row.email,
        created_at=row.created_at,
    )


def to_rental(row: orm.Rental) -> Rental:
    return Rental(id=RentalId(row.id), name=row.name, banner=row.banner)


def to_product(row: orm.RentalProduct) -> RentalProduct:
    return RentalProduct(
        id=RentalProductId(row.id),
        rental_id=_optional(RentalId, row.rental_id),
        name=row.name,
        description=row.description,
        price=row.price,
        location=row.location,
        contact=row.contact,
        banner=row.banner,
        is_ready=row.is_ready,
    )


def to_banner(row: orm.Banner) -> Banner:
    return Banner(
        id=BannerId(row.id),
        name=row.name,
        banner=row.banner,
        link=row.link,
        created_at=row.created_at,
    )


def to_account(profile: orm.UserProfile) -> Account:
    user = profile.user
    return Account(
        id=UserId(profile.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        role=Role(profile.role),
    )


class DjangoDependents(DependentStore):
    """Rows of ``model`` pointing at a parent through ``column``."""

    def __init__(self, model: type[models.Model], column: str, sample_fields: tuple[str, ...]) -> None:
        self._model = model
        self._column = column
        self._sample_fields = sample_fields

    def _referencing(self, parent_id: EntityId) -> QuerySet:
        return self._model.objects.filter(**{self._column: parent_id.value})

    @translate_errors("check associated records")
    def count(self, parent_id: EntityId) -> int:
        return self._referencing(parent_id).count()

    @translate_errors("check associated records")
    def sample(self, parent_id: EntityId, limit: int) -> list[dict[str, Any]]:
        rows = self._referencing(parent_id).order_by("id").values(*self._sample_fields)[:limit]
        return [{key: _json_value(value) for key, value in row.items()} for row in rows]

    @translate_errors("update associated records")
    def release(self, parent_id: EntityId, mode: DeleteMode) -> int:
        queryset = self._referencing(parent_id)
        if mode == DeleteMode.NULLIFY:
            return queryset.update(**{self._column: None})
        if mode == DeleteMode.CASCADE:
            deleted, _ = queryset.delete()
            return deleted
        return 0


def _json_value(value: Any) -> Any:
    return str(value) if isinstance(value, uuid.UUID) else value


class DjangoEventStore(EventStore):
    """PostgreSQL-backed event store using Django ORM."""

    _COUNT_KEYS: dict[str, type[EntityId]] = {
        "area_id": AreaId,
        "vendor_id": VendorId,
        "event_category_id": CategoryId,
    }

    def _filtered(self, filters: EventFilters) -> QuerySet:
        queryset = orm.Event.objects.all()
        if filters.category:
            queryset = queryset.filter(category__icontains=filters.category)
        if filters.category_id:
            queryset = queryset.filter(event_category_id=filters.category_id.value)
        if filters.area_id:
            queryset = queryset.filter(area_id=filters.area_id.value)
        if filters.vendor_id:
            queryset = queryset.filter(vendor_id=filters.vendor_id.value)
        if filters.min_price is not None:
            queryset = queryset.filter(price__gte=filters.min_price)
        if filters.max_price is not None:
            queryset = queryset.filter(price__lte=filters.max_price)
        if filters.starts_after:
            queryset = queryset.filter(start_date__gte=filters.starts_after)
        if filters.ends_before:
            queryset = queryset.filter(end_date__lte=filters.ends_before)
        return queryset

    @translate_errors("fetch events")
    def list_events(self, filters: EventFilters, listing: Listing) -> Page[Event]:
        rows, total = _page(self._filtered(filters), listing, ("name", "description", "location"))
        return Page(items=[to_event(row) for row in rows], total=total)

    @translate_errors("fetch events")
    def all_events(self, filters: EventFilters) -> list[Event]:
        return [to_event(row) for row in self._filtered(filters)]

    @translate_errors("fetch event")
    def get_event(self, event_id: EventId) -> Event | None:
        row = orm.Event.objects.filter(pk=event_id.value).first()
        return to_event(row) if row else None

    @translate_errors("fetch event")
    def event_exists(self, event_id: EventId) -> bool:
        return orm.Event.objects.filter(pk=event_id.value).exists()

    @translate_errors("count events")
    def count_by(self, field: str) -> dict[EntityId, int]:
        id_type = self._COUNT_KEYS[field]
        rows = (
            orm.Event.objects.exclude(**{f"{field}__isnull": True})
            .order_by()
            .values(field)
            .annotate(total=Count("id"))
        )
        return {id_type(row[field]): row["total"] for row in rows}

    @translate_errors("create event")
    def create_event(self, draft: EventDraft, banner: str, permit_img: str) -> Event:
        row = orm.Event.objects.create(
            name=draft.name,
            price=draft.price,
            description=draft.description,
            category=draft.category,
            event_category_id=draft.category_id.value,
            location=draft.location,
            contact=draft.contact,
            start_date=draft.start_date,
            end_date=draft.end_date,
            booth_slot=draft.booth_slot,
            area_id=_plain(draft.area_id),
            vendor_id=_plain(draft.vendor_id),
            banner=banner,
            permit_img=permit_img,
        )
        return to_event(row)

    @translate_errors("update event")
    def update_event(self, event_id: EventId, changes: dict[str, Any]) -> Event:
        values = _columns(changes, {"category_id": "event_category_id"})
        orm.Event.objects.filter(pk=event_id.value).update(**values)
        return to_event(orm.Event.objects.get(pk=event_id.value))

    @translate_errors("delete event")
    def delete_event(self, event_id: EventId) -> None:
        orm.Event.objects.filter(pk=event_id.value).delete()


class DjangoBoothStore(BoothStore):
    """Booth applications stored with Django ORM."""

    @translate_errors("fetch booths")
    def list_booths(
        self,
        event_id: EventId | None,
        status: BoothStatus | None,
        listing: Listing,
    ) -> Page[BoothApplication]:
        queryset = orm.Booth.objects.all()
        if event_id:
            queryset = queryset.filter(event_id=event_id.value)
        if status:
            queryset = queryset.filter(status=status.value)
        rows, total = _page(queryset, listing, ("name", "description"))
        return Page(items=[to_booth(row) for row in rows], total=total)

    @translate_errors("fetch booths for this event")
    def list_for_event(
        self, event_id: EventId, statuses: Iterable[BoothStatus]
    ) -> list[BoothApplication]:
        rows = orm.Booth.objects.filter(
            event_id=event_id.value,
            status__in=[status.value for status in statuses],
        ).order_by("-created_at")
        return [to_booth(row) for row in rows]

    @translate_errors("fetch booth statuses")
    def statuses_by_event(
        self, event_ids: Iterable[EventId] | None = None
    ) -> dict[EventId, list[BoothStatus]]:
        queryset = orm.Booth.objects.exclude(event_id__isnull=True)
        if event_ids is not None:
            queryset = queryset.filter(event_id__in=[event_id.value for event_id in event_ids])
        grouped: dict[EventId, list[BoothStatus]] = defaultdict(list)
        for event_id, status in queryset.values_list("event_id", "status"):
            grouped[EventId(event_id)].append(BoothStatus(status))
        return dict(grouped)

    @translate_errors("fetch booth")
    def get_booth(self, booth_id: BoothId) -> BoothApplication | None:
        row = orm.Booth.objects.filter(pk=booth_id.value).first()
        return to_booth(row) if row else None

    @translate_errors("check existing applications")
    def find_application(self, event_id: EventId, phone: str) -> BoothApplication | None:
        row = orm.Booth.objects.filter(event_id=event_id.value, phone=phone).first()
        return to_booth(row) if row else None

    @translate_errors("create booth application")
    def create_booth(
        self, event_id: EventId, name: str, phone: str, description: str
    ) -> BoothApplication:
        row = orm.Booth.objects.create(
            event_id=event_id.value,
            name=name,
            phone=phone,
            description=description,
            status=BoothStatus.PENDING.value,
        )
        return to_booth(row)

    @translate_errors("update booth application")
    def update_booth(self, booth_id: BoothId, changes: dict[str, Any]) -> BoothApplication:
        orm.Booth.objects.filter(pk=booth_id.value).update(**_columns(changes))
        return to_booth(orm.Booth.objects.get(pk=booth_id.value))

    @translate_errors("update booth statuses")
    def update_statuses(
        self,
        booth_ids: list[BoothId],
        status: BoothStatus,
        admin_notes: str | None,
    ) -> list[BoothApplication]:
        values: dict[str, Any] = {"status": status.value}
        if admin_notes is not None:
            values["admin_notes"] = admin_notes
        keys = [booth_id.value for booth_id in booth_ids]
        with transaction.atomic():
            orm.Booth.objects.filter(pk__in=keys).update(**values)
        return [to_booth(row) for row in orm.Booth.objects.filter(pk__in=keys)]

    @translate_errors("delete booth application")
    def delete_booth(self, booth_id: BoothId) -> None:
        orm.Booth.objects.filter(pk=booth_id.value).delete()


class DjangoRatingStore(RatingStore):
    """Event ratings stored with Django ORM."""

    @translate_errors("fetch ratings")
    def list_ratings(
        self, event_id: EventId | None, rating_star: int | None, listing: Listing
    ) -> Page[Rating]:
        queryset = orm.Rating.objects.all()
        if event_id:
            queryset = queryset.filter(event_id=event_id.value)
        if rating_star is not None:
            queryset = queryset.filter(rating_star=rating_star)
        rows, total = _page(queryset, listing, ("name", "review"))
        return Page(items=[to_rating(row) for row in rows], total=total)

    @translate_errors("fetch rating statistics")
    def stars_by_event(
        self, event_ids: Iterable[EventId] | None = None
    ) -> dict[EventId, list[int]]:
        queryset = orm.Rating.objects.all()
        if event_ids is not None:
            queryset = queryset.filter(event_id__in=[event_id.value for event_id in event_ids])
        grouped: dict[EventId, list[int]] = defaultdict(list)
        for event_id, star in queryset.values_list("event_id", "rating_star"):
            grouped[EventId(event_id)].append(star)
        return dict(grouped)

    @translate_errors("fetch rating")
    def get_rating(self, rating_id: RatingId) -> Rating | None:
        row = orm.Rating.objects.filter(pk=rating_id.value).first()
        return to_rating(row) if row else None

    @translate_errors("create rating")
    def create_rating(
        self, event_id: EventId, name: str, review: str | None, rating_star: int
    ) -> Rating:
        row = orm.Rating.objects.create(
            event_id=event_id.value,
            name=name,
            review=review,
            rating_star=rating_star,
        )
        return to_rating(row)

    @translate_errors("update rating")
    def update_rating(self, rating_id: RatingId, changes: dict[str, Any]) -> Rating:
        orm.Rating.objects.filter(pk=rating_id.value).update(**_columns(changes))
        return to_rating(orm.Rating.objects.get(pk=rating_id.value))

    @translate_errors("delete rating")
    def delete_rating(self, rating_id: RatingId) -> None:
        orm.Rating.objects.filter(pk=rating_id.value).delete()

    @translate_errors("delete event ratings")
    def delete_for_event(self, event_id: EventId) -> int:
        deleted, _ = orm.Rating.objects.filter(event_id=event_id.value).delete()
        return deleted


class DjangoVendorStore(VendorStore):
    """Vendor profiles stored with Django ORM."""

    @translate_errors("fetch vendors")
    def list_vendors(self, listing: Listing) -> Page[Vendor]:
        rows, total = _page(
            orm.Vendor.objects.all(), listing, ("name", "description", "instagram")
        )
        return Page(items=[to_vendor(row) for row in rows], total=total)

    @translate_errors("fetch vendors")
    def all_vendors(self) -> list[Vendor]:
        return [to_vendor(row) for row in orm.Vendor.objects.all()]

    @translate_errors("fetch vendor")
    def get_vendor(self, vendor_id: VendorId) -> Vendor | None:
        row = orm.Vendor.objects.filter(pk=vendor_id.value).first()
        return to_vendor(row) if row else None

    @translate_errors("fetch vendor")
    def get_by_user(self, user_id: UserId) -> Vendor | None:
        row = orm.Vendor.objects.filter(user_id=user_id.value).first()
        return to_vendor(row) if row else None

    @translate_errors("create vendor")
    def create_vendor(self, values: dict[str, Any]) -> Vendor:
        return to_vendor(orm.Vendor.objects.create(**_columns(values)))

    @translate_errors("update vendor")
    def update_vendor(self, vendor_id: VendorId, changes: dict[str, Any]) -> Vendor:
        orm.Vendor.objects.filter(pk=vendor_id.value).update(**_columns(changes))
        return to_vendor(orm.Vendor.objects.get(pk=vendor_id.value))

    @translate_errors("delete vendor")
    def delete_vendor(self, vendor_id: VendorId) -> None:
        orm.Vendor.objects.filter(pk=vendor_id.value).delete()

    @translate_errors("delete vendor")
    def delete_for_user(self, user_id: UserId) -> int:
        deleted, _ = orm.Vendor.objects.filter(user_id=user_id.value).delete()
        return deleted


class DjangoNamedRecordStore(NamedRecordStore):
    """Areas or event categories, selected by the model passed in."""

    def __init__(self, model: type[orm.Area] | type[orm.EventCategory], id_type: type[EntityId]) -> None:
        self._model = model
        self._id_type = id_type

    def _record(self, row: models.Model) -> NamedRecord:
        return NamedRecord(id=self._id_type(row.id), name=row.name)

    @translate_errors("fetch records")
    def list_records(self, listing: Listing) -> Page[NamedRecord]:
        rows, total = _page(self._model.objects.all(), listing, ("name",))
        return Page(items=[self._record(row) for row in rows], total=total)

    @translate_errors("fetch records")
    def all_records(self) -> list[NamedRecord]:
        return [self._record(row) for row in self._model.objects.order_by("name")]

    @translate_errors("fetch record")
    def get_record(self, record_id: EntityId) -> NamedRecord | None:
        row = self._model.objects.filter(pk=record_id.value).first()
        return self._record(row) if row else None

    @translate_errors("check existing names")
    def find_by_name(self, name: str, exclude: EntityId | None = None) -> NamedRecord | None:
        queryset = self._model.objects.filter(name__iexact=name)
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.value)
        row = queryset.first()
        return self._record(row) if row else None

    @translate_errors("create records")
    def create_records(self, names: list[str]) -> list[NamedRecord]:
        with transaction.atomic():
            rows = [self._model.objects.create(name=name) for name in names]
        return [self._record(row) for row in rows]

    @translate_errors("update record")
    def rename_record(self, record_id: EntityId, name: str) -> NamedRecord:
        self._model.objects.filter(pk=record_id.value).update(name=name)
        return self._record(self._model.objects.get(pk=record_id.value))

    @translate_errors("delete record")
    def delete_record(self, record_id: EntityId) -> None:
        self._model.objects.filter(pk=record_id.value).delete()


class DjangoRentalStore(RentalStore):
    """Rental categories and products stored with Django ORM."""

    @translate_errors("fetch rentals")
    def list_rentals(self, listing: Listing) -> Page[Rental]:
        rows, total = _page(orm.Rental.objects.all(), listing, ("name",))
        return Page(items=[to_rental(row) for row in rows], total=total)

    @translate_errors("fetch rental")
    def get_rental(self, rental_id: RentalId) -> Rental | None:
        row = orm.Rental.objects.filter(pk=rental_id.value).first()
        return to_rental(row) if row else None

    @translate_errors("check existing names")
    def find_rental_by_name(self, name: str, exclude: RentalId | None = None) -> Rental | None:
        queryset = orm.Rental.objects.filter(name__iexact=name)
        if exclude is not None:
            queryset = queryset.exclude(pk=exclude.value)
        row = queryset.first()
        return to_rental(row) if row else None

    @translate_errors("create rental")
    def create_rental(self, name: str, banner: str | None) -> Rental:
        return to_rental(orm.Rental.objects.create(name=name, banner=banner))

    @translate_errors("update rental")
    def update_rental(self, rental_id: RentalId, changes: dict[str, Any]) -> Rental:
        orm.Rental.objects.filter(pk=rental_id.value).update(**_columns(changes))
        return to_rental(orm.Rental.objects.get(pk=rental_id.value))

    @translate_errors("delete rental")
    def delete_rental(self, rental_id: RentalId) -> None:
        orm.Rental.objects.filter(pk=rental_id.value).delete()

    @translate_errors("fetch rental products")
    def list_products(
        self,
        rental_id: RentalId | None,
        is_ready: bool | None,
        listing: Listing,
    ) -> Page[RentalProduct]:
        queryset = orm.RentalProduct.objects.all()
        if rental_id:
            queryset = queryset.filter(rental_id=rental_id.value)
        if is_ready is not None:
            queryset = queryset.filter(is_ready=is_ready)
        rows, total = _page(queryset, listing, ("name", "description", "location"))
        return Page(items=[to_product(row) for row in rows], total=total)

    @translate_errors("fetch rental products")
    def products_by_rental(self) -> dict[RentalId, list[RentalProduct]]:
        grouped: dict[RentalId, list[RentalProduct]] = defaultdict(list)
        for row in orm.RentalProduct.objects.exclude(rental_id__isnull=True):
            grouped[RentalId(row.rental_id)].append(to_product(row))
        return dict(grouped)

    @translate_errors("fetch rental product")
    def get_product(self, product_id: RentalProductId) -> RentalProduct | None:
        row = orm.RentalProduct.objects.filter(pk=product_id.value).first()
        return to_product(row) if row else None

    @translate_errors("create rental product")
    def create_product(self, values: dict[str, Any]) -> RentalProduct:
        return to_product(orm.RentalProduct.objects.create(**_columns(values)))

    @translate_errors("update rental product")
    def update_product(self, product_id: RentalProductId, changes: dict[str, Any]) -> RentalProduct:
        orm.RentalProduct.objects.filter(pk=product_id.value).update(**_columns(changes))
        return to_product(orm.RentalProduct.objects.get(pk=product_id.value))

    @translate_errors("delete rental product")
    def delete_product(self, product_id: RentalProductId) -> None:
        orm.RentalProduct.objects.filter(pk=product_id.value).delete()


class DjangoBannerStore(BannerStore):
    """Homepage banners stored with Django ORM."""

    @translate_errors("fetch banners")
    def list_banners(self, listing: Listing) -> Page[Banner]:
        rows, total = _page(orm.Banner.objects.all(), listing, ("name",))
        return Page(items=[to_banner(row) for row in rows], total=total)

    @translate_errors("fetch banner")
    def get_banner(self, banner_id: BannerId) -> Banner | None:
        row = orm.Banner.objects.filter(pk=banner_id.value).first()
        return to_banner(row) if row else None

    @translate_errors("create banner")
    def create_banner(self, name: str, banner: str, link: str | None) -> Banner:
        return to_banner(orm.Banner.objects.create(name=name, banner=banner, link=link))

    @translate_errors("update banner")
    def update_banner(self, banner_id: BannerId, changes: dict[str, Any]) -> Banner:
        orm.Banner.objects.filter(pk=banner_id.value).update(**_columns(changes))
        return to_banner(orm.Banner.objects.get(pk=banner_id.value))

    @translate_errors("delete banner")
    def delete_banner(self, banner_id: BannerId) -> None:
        orm.Banner.objects.filter(pk=banner_id.value).delete()


class DjangoAccountStore(AccountStore):
    """Accounts backed by django.contrib.auth users, profiles and DRF tokens."""

    def _profiles(self) -> QuerySet:
        return orm.UserProfile.objects.select_related("user")

    @translate_errors("fetch user")
    def get_account(self, user_id: UserId) -> Account | None:
        profile = self._profiles().filter(pk=user_id.value).first()
        return to_account(profile) if profile else None

    @translate_errors("check existing users")
    def email_taken(self, email: str) -> bool:
        return get_user_model().objects.filter(email__iexact=email).exists()

    @translate_errors("create user")
    def create_account(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: Role,
    ) -> Account:
        with transaction.atomic():
            user = get_user_model().objects.create_user(
                username=email,
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
            profile = orm.UserProfile.objects.create(user=user, role=role.value)
        return to_account(profile)

    @translate_errors("check credentials")
    def check_credentials(self, email: str, password: str) -> Account | None:
        profile = self._profiles().filter(user__email__iexact=email).first()
        if profile is None or not profile.user.is_active:
            return None
        if not profile.user.check_password(password):
            return None
        return to_account(profile)

    @translate_errors("issue token")
    def issue_token(self, user_id: UserId) -> str:
        profile = self._profiles().get(pk=user_id.value)
        token, _ = Token.objects.get_or_create(user=profile.user)
        return token.key

    @translate_errors("revoke token")
    def revoke_token(self, token: str) -> bool:
        deleted, _ = Token.objects.filter(key=token).delete()
        return deleted > 0

    @translate_errors("fetch users")
    def list_accounts(self) -> list[Account]:
        return [to_account(profile) for profile in self._profiles().order_by("user__email")]

    @translate_errors("update user")
    def update_account(self, user_id: UserId, changes: dict[str, Any]) -> Account:
        profile = self._profiles().get(pk=user_id.value)
        with transaction.atomic():
            if "role" in changes:
                profile.role = _plain(changes["role"])
                profile.save(update_fields=["role"])
            user_fields = [name for name in ("first_name", "last_name") if name in changes]
            for name in user_fields:
                setattr(profile.user, name, changes[name])
            if user_fields:
                profile.user.save(update_fields=user_fields)
        return to_account(profile)

    @translate_errors("delete user")
    def delete_account(self, user_id: UserId) -> None:
        profile = self._profiles().get(pk=user_id.value)
        profile.user.delete()


class DjangoAssetStorage(AssetStorage):
    """Object storage through Django's storage API."""

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage or default_storage

    def save(self, folder: str, upload: AssetUpload) -> StoredAsset:
        name = f"{folder}/{uuid.uuid4()}.{upload.extension}"
        path = self._storage.save(name, ContentFile(upload.content))
        return StoredAsset(path=path, url=self._storage.url(path))

    def delete(self, path: str) -> None:
        self._storage.delete(path)

    def path_for_url(self, url: str) -> str | None:
        base_url = getattr(self._storage, "base_url", None)
        if base_url and url.startswith(base_url):
            return url[len(base_url):]
        return None
