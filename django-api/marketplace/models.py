"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.

References that the guarded delete protects (event -> area, category,
vendor; booth -> event; rental product -> rental) are stored without a
database constraint so a forced delete can leave orphans when configured to.
"""

import uuid

from django.conf import settings
from django.db import models


def _reference(to: str, related_name: str) -> models.ForeignKey:
    return models.ForeignKey(
        to,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name=related_name,
    )


class Area(models.Model):
    """Persistence model for event areas."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class EventCategory(models.Model):
    """Persistence model for event categories."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "event categories"

    def __str__(self) -> str:
        return self.name


class UserProfile(models.Model):
    """Public account record: role plus a stable UUID for the auth user."""

    ROLE_CHOICES = [("admin", "Admin"), ("vendor", "Vendor"), ("user", "User")]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile"
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default="user")

    def __str__(self) -> str:
        return f"{self.user} ({self.role})"


class Vendor(models.Model):
    """Persistence model for vendor profiles."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        UserProfile,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="vendors",
    )
    name = models.CharField(max_length=255)
    description = models.TextField()
    phone = models.CharField(max_length=15)
    instagram = models.CharField(max_length=30)
    banner = models.URLField(max_length=500, blank=True, null=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Event(models.Model):
    """Persistence model for bazaar events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    price = models.PositiveIntegerField()
    description = models.TextField()
    category = models.CharField(max_length=255)
    event_category = _reference("EventCategory", "events")
    location = models.CharField(max_length=255)
    contact = models.CharField(max_length=255)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    booth_slot = models.PositiveIntegerField(default=10)
    area = _reference("Area", "events")
    vendor = _reference("Vendor", "events")
    banner = models.URLField(max_length=500, blank=True, null=True)
    permit_img = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_date"]
        indexes = [
            models.Index(fields=["start_date"], name="event_start_date_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Booth(models.Model):
    """Persistence model for booth applications."""

    STATUS_CHOICES = [
        ("PENDING", "Pending"),
        ("APPROVED", "Approved"),
        ("REJECTED", "Rejected"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = _reference("Event", "booths")
    name = models.CharField(max_length=255)
    phone = models.CharField(max_length=15)
    description = models.TextField()
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default="PENDING")
    admin_notes = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["event", "phone"], name="booth_event_phone_idx"),
            models.Index(fields=["status"], name="booth_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.status}"


class Rating(models.Model):
    """Persistence model for event ratings."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="ratings")
    name = models.CharField(max_length=255)
    review = models.TextField(blank=True, null=True)
    rating_star = models.PositiveSmallIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} - {self.rating_star}"


class Rental(models.Model):
    """Persistence model for rental categories."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    banner = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.name


class RentalProduct(models.Model):
    """Persistence model for rentable products."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    rental = _reference("Rental", "products")
    name = models.CharField(max_length=255)
    description = models.TextField()
    price = models.PositiveIntegerField()
    location = models.CharField(max_length=255)
    contact = models.CharField(max_length=255)
    banner = models.URLField(max_length=500, blank=True, null=True)
    is_ready = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class Banner(models.Model):
    """Persistence model for homepage banners."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    banner = models.URLField(max_length=500)
    link = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name
