"""Serializers for request payloads and domain model responses.

Input serializers declare which fields an endpoint accepts and coerce their
wire types. Presence and value rules stay in the domain layer so every
entry point reports the same messages.
"""

from typing import Any

from django.core.files.uploadedfile import UploadedFile
from rest_framework import serializers

from marketplace.domain import AssetUpload
from marketplace.domain.value_objects import MAX_STORED_INT
from marketplace.services import CatalogEntry, EventDetails, VendorDetails


def _text() -> serializers.CharField:
    return serializers.CharField(
        required=False, allow_blank=True, allow_null=True, trim_whitespace=False
    )


class RawField(serializers.Field):
    """Passes the wire value through for the domain layer to interpret."""

    def to_internal_value(self, data):
        return data

    def to_representation(self, value):
        return value


def _file() -> serializers.FileField:
    return serializers.FileField(required=False, allow_null=True, allow_empty_file=False)


def to_upload(file: UploadedFile | None) -> AssetUpload | None:
    if file is None:
        return None
    return AssetUpload(
        filename=file.name or "upload",
        content=file.read(),
        content_type=file.content_type or "application/octet-stream",
    )


class PayloadSerializer(serializers.Serializer):
    """Base input schema.

    ``payload`` drops fields the client did not send and the ``side_fields``
    (uploads and flags) that views pass to services separately.
    """

    side_fields: tuple[str, ...] = ()

    def payload(self) -> dict[str, Any]:
        return {
            key: value
            for key, value in self.validated_data.items()
            if value is not None and key not in self.side_fields
        }

    def upload(self, name: str) -> AssetUpload | None:
        return to_upload(self.validated_data.get(name))


# Inputs


class ListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(
        required=False, min_value=1, max_value=MAX_STORED_INT, default=1
    )
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=10)
    search = serializers.CharField(required=False, allow_blank=True, default="")
    sort_by = serializers.CharField(required=False, allow_blank=True, default="")
    sort_order = serializers.ChoiceField(
        choices=["asc", "desc"], required=False, default="desc"
    )


class OffsetQuerySerializer(serializers.Serializer):
    offset = serializers.IntegerField(
        required=False, min_value=0, max_value=MAX_STORED_INT, default=0
    )
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=50)


class EventQuerySerializer(ListQuerySerializer):
    category = _text()
    event_category_id = _text()
    area_id = _text()
    vendor_id = _text()
    min_price = serializers.IntegerField(required=False, min_value=0, max_value=MAX_STORED_INT)
    max_price = serializers.IntegerField(required=False, min_value=0, max_value=MAX_STORED_INT)
    start_date = _text()
    end_date = _text()


class EventInputSerializer(PayloadSerializer):
    side_fields = ("banner_image", "permit_img", "remove_banner", "remove_permit")

    name = _text()
    price = _text()
    description = _text()
    category = _text()
    event_category_id = _text()
    location = _text()
    contact = _text()
    start_date = _text()
    end_date = _text()
    booth_slot = _text()
    area_id = _text()
    vendor_id = _text()
    banner_image = _file()
    permit_img = _file()
    remove_banner = serializers.BooleanField(required=False, default=False)
    remove_permit = serializers.BooleanField(required=False, default=False)


class BoothInputSerializer(PayloadSerializer):
    event_id = _text()
    name = _text()
    phone = _text()
    description = _text()
    desc = _text()

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        legacy = data.pop("desc", None)
        if "description" not in data and legacy is not None:
            data["description"] = legacy
        return data


class BoothStatusSerializer(PayloadSerializer):
    status = _text()
    is_acc = _text()
    admin_notes = _text()

    def status_token(self) -> str | None:
        data = self.validated_data
        return data.get("status") or data.get("is_acc")


class BulkBoothStatusSerializer(BoothStatusSerializer):
    booth_ids = serializers.ListField(child=serializers.CharField(), required=False)


class RatingInputSerializer(PayloadSerializer):
    name = _text()
    event_id = _text()
    review = _text()
    rating_star = _text()


class VendorInputSerializer(PayloadSerializer):
    side_fields = ("banner_image",)

    name = _text()
    user_id = _text()
    description = _text()
    phone = _text()
    instagram = _text()
    location = _text()
    email = _text()
    banner_image = _file()


class NamedRecordInputSerializer(PayloadSerializer):
    name = _text()


class RentalInputSerializer(PayloadSerializer):
    side_fields = ("banner_image",)

    name = _text()
    banner_image = _file()


class RentalProductInputSerializer(PayloadSerializer):
    side_fields = ("product_image",)

    name = _text()
    description = _text()
    price = _text()
    rental_id = _text()
    location = _text()
    contact = _text()
    banner = _text()
    is_ready = RawField(required=False, allow_null=True)
    product_image = _file()


class BannerInputSerializer(PayloadSerializer):
    side_fields = ("banner_image",)

    name = _text()
    link = _text()
    banner_image = _file()


class SignupSerializer(PayloadSerializer):
    email = _text()
    password = _text()
    first_name = _text()
    last_name = _text()
    role = _text()


class LoginSerializer(PayloadSerializer):
    email = _text()
    password = _text()


class RoleChangeSerializer(PayloadSerializer):
    role = _text()
    first_name = _text()
    last_name = _text()


# Outputs


class EntityIdField(serializers.Field):
    """Renders domain ids as UUID strings."""

    def to_representation(self, value) -> str:
        return str(value)


class EnumField(serializers.Field):
    def to_representation(self, value) -> str:
        return value.value


class NamedRecordSerializer(serializers.Serializer):
    id = EntityIdField()
    name = serializers.CharField()


class CatalogEntrySerializer(serializers.Serializer):
    def to_representation(self, instance: CatalogEntry) -> dict[str, Any]:
        return {
            **NamedRecordSerializer(instance.record).data,
            "events_count": instance.events_count,
        }


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model."""

    id = EntityIdField()
    name = serializers.CharField()
    price = serializers.IntegerField()
    description = serializers.CharField()
    category = serializers.CharField()
    event_category_id = EntityIdField(source="category_id")
    location = serializers.CharField()
    contact = serializers.CharField()
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    booth_slot = serializers.IntegerField()
    area_id = EntityIdField()
    vendor_id = EntityIdField()
    banner = serializers.CharField()
    permit_img = serializers.CharField()
    created_at = serializers.DateTimeField()


class EventDetailsSerializer(serializers.Serializer):
    """Event plus derived timeline, booth counts and rating summary."""

    def to_representation(self, instance: EventDetails) -> dict[str, Any]:
        ratings = instance.rating_stats
        return {
            **EventSerializer(instance.event).data,
            **instance.timeline.as_dict(),
            "booth_stats": instance.booth_stats,
            "rating_stats": {
                "total_ratings": ratings.total_ratings,
                "average_rating": ratings.average_rating,
            },
        }


class BoothSerializer(serializers.Serializer):
    """Serializer for BoothApplication domain model."""

    id = EntityIdField()
    event_id = EntityIdField()
    name = serializers.CharField()
    phone = serializers.CharField()
    description = serializers.CharField()
    status = EnumField()
    admin_notes = serializers.CharField()
    created_at = serializers.DateTimeField()


class RatingSerializer(serializers.Serializer):
    id = EntityIdField()
    event_id = EntityIdField()
    name = serializers.CharField()
    review = serializers.CharField()
    rating_star = serializers.IntegerField()
    created_at = serializers.DateTimeField()


class VendorSerializer(serializers.Serializer):
    id = EntityIdField()
    user_id = EntityIdField()
    name = serializers.CharField()
    description = serializers.CharField()
    phone = serializers.CharField()
    instagram = serializers.CharField()
    instagram_url = serializers.CharField()
    banner = serializers.CharField()
    location = serializers.CharField()
    email = serializers.CharField()
    created_at = serializers.DateTimeField()


class VendorDetailsSerializer(serializers.Serializer):
    def to_representation(self, instance: VendorDetails) -> dict[str, Any]:
        return {
            **VendorSerializer(instance.vendor).data,
            "events_count": instance.events_count,
        }


class RentalSerializer(serializers.Serializer):
    id = EntityIdField()
    name = serializers.CharField()
    banner = serializers.CharField()


class RentalProductSerializer(serializers.Serializer):
    id = EntityIdField()
    rental_id = EntityIdField()
    name = serializers.CharField()
    description = serializers.CharField()
    price = serializers.IntegerField()
    location = serializers.CharField()
    contact = serializers.CharField()
    banner = serializers.CharField()
    is_ready = serializers.BooleanField()


class BannerSerializer(serializers.Serializer):
    id = EntityIdField()
    name = serializers.CharField()
    banner = serializers.CharField()
    link = serializers.CharField()
    created_at = serializers.DateTimeField()


class AccountSerializer(serializers.Serializer):
    id = EntityIdField()
    email = serializers.CharField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    role = EnumField()
