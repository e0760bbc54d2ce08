"""Plumbing shared by the entity services."""

import logging
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, TypeVar

from marketplace.domain import AssetUpload, EntityId
from marketplace.domain.deletion import SAMPLE_SIZE, DeleteMode, evaluate_delete
from marketplace.domain.errors import NotFoundError, ValidationError
from marketplace.stores.interfaces import DependentStore, Listing

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
R = TypeVar("R")

IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
DOCUMENT_TYPES = IMAGE_TYPES | {"application/pdf"}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def require_found(record: R | None, entity: str) -> R:
    """Return the record or raise NotFoundError naming the entity."""
    if record is None:
        raise NotFoundError(entity)
    return record


def is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def require_fields(data: Mapping[str, Any], fields: Collection[str]) -> None:
    """Raises ValidationError naming every missing field."""
    missing = [name for name in fields if not is_present(data.get(name))]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )


def supplied(data: Mapping[str, Any], fields: Collection[str]) -> dict[str, Any]:
    """Return the fields present in a partial update payload."""
    return {name: data[name] for name in fields if data.get(name) is not None}


def parse_flag(value: Any, default: bool = False) -> bool:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def check_upload(
    upload: AssetUpload | None,
    label: str,
    allowed: frozenset[str] = IMAGE_TYPES,
    required: bool = False,
) -> None:
    """Validate an uploaded file's presence and content type.

    Raises:
        ValidationError: If a required file is missing or the type is not allowed.
    """
    if upload is None:
        if required:
            raise ValidationError(f"{label} is required")
        return
    if upload.content_type not in allowed:
        raise ValidationError(
            f"{label} has an unsupported file type",
            allowed_types=sorted(allowed),
        )


def normalize_listing(
    listing: Listing,
    allowed: Collection[str],
    fallback: str,
    descending: bool = True,
) -> Listing:
    """Fall back to a default ordering when the requested sort field is unknown."""
    if listing.sort_by in allowed:
        return listing
    return replace(listing, sort_by=fallback, descending=descending)


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a guarded delete."""

    dependent: str
    affected: int
    released: int
    mode: DeleteMode


def guarded_delete(
    entity: str,
    dependent: str,
    parent_id: EntityId,
    dependents: DependentStore,
    force: bool,
    mode: DeleteMode,
    delete: Callable[[], None],
) -> DeleteOutcome:
    """Delete a record unless other records still reference it.

    Raises:
        DependentsExistError: If dependents exist and ``force`` is not set.
        StoreError: If a store call fails.
    """
    count = dependents.count(parent_id)
    sample = dependents.sample(parent_id, SAMPLE_SIZE) if count else []
    decision = evaluate_delete(entity, dependent, count, sample, force, mode)
    released = 0
    if decision.touches_dependents:
        released = dependents.release(parent_id, decision.mode)
    delete()
    logger.info(
        "Deleted %s %s (%d associated %s, mode=%s, released=%d)",
        entity,
        parent_id,
        decision.dependent_count,
        dependent,
        decision.mode.value,
        released,
    )
    return DeleteOutcome(
        dependent=dependent,
        affected=decision.dependent_count,
        released=released,
        mode=decision.mode,
    )
