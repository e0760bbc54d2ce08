"""Named lookup records that events reference: areas and event categories.

Both kinds behave the same, so one service class is configured per kind.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from marketplace.domain import AreaId, CategoryId, EntityId, NamedRecord, Page
from marketplace.domain.bulk import require_valid_batch
from marketplace.domain.deletion import DeleteMode
from marketplace.domain.errors import ConflictError, ValidationError
from marketplace.services.base import (
    DeleteOutcome,
    guarded_delete,
    normalize_listing,
    require_found,
)
from marketplace.stores.interfaces import (
    DependentStore,
    EventStore,
    Listing,
    NamedRecordStore,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = ("name", "created_at")
TOP_RECORDS = 5


@dataclass(frozen=True)
class CatalogKind:
    """Naming and wiring for one kind of lookup record."""

    label: str
    plural: str
    id_type: type[EntityId]
    event_field: str


@dataclass(frozen=True)
class CatalogEntry:
    record: NamedRecord
    events_count: int


class CatalogService:
    """CRUD, bulk creation and usage statistics for one lookup kind."""

    def __init__(
        self,
        kind: CatalogKind,
        records: NamedRecordStore,
        events: EventStore,
        event_dependents: DependentStore,
        delete_mode: DeleteMode = DeleteMode.ORPHAN,
    ) -> None:
        self._kind = kind
        self._records = records
        self._events = events
        self._event_dependents = event_dependents
        self._delete_mode = delete_mode

    @property
    def kind(self) -> CatalogKind:
        return self._kind

    def create(self, data: Mapping[str, Any]) -> NamedRecord:
        """Raises ValidationError for a missing name and ConflictError for a taken one."""
        name = self._name(data.get("name"))
        self._ensure_unique(name)
        record = self._records.create_records([name])[0]
        logger.info("Created %s %s (%s)", self._kind.label.lower(), record.id, name)
        return record

    def bulk_create(self, items: Any) -> list[NamedRecord]:
        """Create every item or none.

        Each item needs a name that is neither repeated in the batch nor
        already taken.

        Raises:
            ValidationError: Listing every invalid item by index.
        """
        seen: set[str] = set()

        def clean(index: int, item: Any) -> str:
            if not isinstance(item, Mapping):
                raise ValidationError("Item must be an object")
            name = self._name(item.get("name"))
            key = name.casefold()
            if key in seen:
                raise ValidationError(f"Duplicate name in batch: {name}")
            seen.add(key)
            if self._records.find_by_name(name) is not None:
                raise ValidationError(f"{self._kind.label} with name '{name}' already exists")
            return name

        names = require_valid_batch(items, clean, self._kind.label, self._kind.plural)
        created = self._records.create_records(names)
        logger.info("Bulk created %d %s", len(created), self._kind.plural.lower())
        return created

    def dropdown(self) -> list[NamedRecord]:
        return self._records.all_records()

    def list_with_counts(self) -> list[CatalogEntry]:
        counts = self._counts()
        return [
            CatalogEntry(record, counts.get(record.id, 0))
            for record in self._records.all_records()
        ]

    def get(self, record_id: str) -> NamedRecord:
        """Raises InvalidIdError or NotFoundError for a bad id."""
        return require_found(
            self._records.get_record(self._kind.id_type.parse(record_id)), self._kind.label
        )

    def get_with_count(self, record_id: str) -> CatalogEntry:
        record = self.get(record_id)
        return CatalogEntry(record, self._counts().get(record.id, 0))

    def update(self, record_id: str, data: Mapping[str, Any]) -> NamedRecord:
        """Rename a record, keeping names unique."""
        record = self.get(record_id)
        name = self._name(data.get("name"))
        self._ensure_unique(name, exclude=record.id)
        return self._records.rename_record(record.id, name)

    def delete(self, record_id: str, force: bool = False) -> tuple[NamedRecord, DeleteOutcome]:
        """Delete a record unless events reference it.

        Raises:
            DependentsExistError: If events exist and force is not set.
        """
        record = self.get(record_id)
        outcome = guarded_delete(
            self._kind.label.lower(),
            "events",
            record.id,
            self._event_dependents,
            force,
            self._delete_mode,
            lambda: self._records.delete_record(record.id),
        )
        return record, outcome

    def get_statistics(self) -> dict[str, Any]:
        entries = self.list_with_counts()
        ranked = sorted(entries, key=lambda entry: entry.events_count, reverse=True)
        with_events = sum(1 for entry in entries if entry.events_count > 0)
        return {
            "total": len(entries),
            "with_events": with_events,
            "without_events": len(entries) - with_events,
            "top_by_events": [
                {
                    "id": str(entry.record.id),
                    "name": entry.record.name,
                    "events_count": entry.events_count,
                }
                for entry in ranked[:TOP_RECORDS]
            ],
            "total_events": sum(entry.events_count for entry in entries),
        }

    def _counts(self) -> dict[EntityId, int]:
        return self._events.count_by(self._kind.event_field)

    def _name(self, value: Any) -> str:
        name = str(value).strip() if value is not None else ""
        if not name:
            raise ValidationError("Name is required")
        return name

    def _ensure_unique(self, name: str, exclude: EntityId | None = None) -> None:
        if self._records.find_by_name(name, exclude) is not None:
            raise ConflictError(f"{self._kind.label} with this name already exists")

    # Defined last: the name shadows the builtin inside the class body.
    def list(self, listing: Listing) -> Page[NamedRecord]:
        return self._records.list_records(
            normalize_listing(listing, SORT_FIELDS, "name", descending=False)
        )


AREA = CatalogKind("Area", "Areas", AreaId, "area_id")
EVENT_CATEGORY = CatalogKind("Event category", "Event categories", CategoryId, "event_category_id")
