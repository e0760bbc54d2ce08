"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from marketplace import models as orm
from marketplace.domain import Role
from marketplace.stores.django_store import DjangoAccountStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded assets out of the source tree."""
    settings.MEDIA_ROOT = str(tmp_path / "media")
    settings.DEPENDENT_DELETE_MODE = "orphan"
    return settings.MEDIA_ROOT


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def png_upload(name: str = "banner.png") -> SimpleUploadedFile:
    return SimpleUploadedFile(name, PNG_BYTES, content_type="image/png")


def _client_for(email: str, role: Role) -> APIClient:
    accounts = DjangoAccountStore()
    account = accounts.create_account(email, "secret123", "Test", role.value, role)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {accounts.issue_token(account.id)}")
    client.account = account
    return client


@pytest.fixture
def admin_client(db) -> APIClient:
    return _client_for("admin@example.com", Role.ADMIN)


@pytest.fixture
def vendor_client(db) -> APIClient:
    return _client_for("vendor@example.com", Role.VENDOR)


@pytest.fixture
def user_client(db) -> APIClient:
    return _client_for("user@example.com", Role.USER)


@pytest.fixture
def category(db) -> orm.EventCategory:
    return orm.EventCategory.objects.create(name="Culinary")


@pytest.fixture
def area(db) -> orm.Area:
    return orm.Area.objects.create(name="Jakarta Selatan")


@pytest.fixture
def make_event(db, category):
    """Factory for persisted events starting ``days_ahead`` days from now."""

    def make(name: str = "Night Bazaar", days_ahead: int = 10, **fields) -> orm.Event:
        start = datetime.now(timezone.utc) + timedelta(days=days_ahead)
        values = {
            "name": name,
            "price": 50000,
            "description": "Weekend market",
            "category": "Food",
            "event_category": category,
            "location": "Senayan",
            "contact": "081234567890",
            "start_date": start,
            "end_date": start + timedelta(days=2),
            "booth_slot": 10,
        }
        values.update(fields)
        return orm.Event.objects.create(**values)

    return make


@pytest.fixture
def upload():
    """Factory for small PNG uploads."""
    return png_upload
