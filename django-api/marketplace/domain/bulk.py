"""Per-item validation for batch writes.

Every batch is all-or-nothing: items are checked independently, every
failure is reported with its index, and nothing is written if any item
fails.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from marketplace.domain.errors import DomainError, StoreError, ValidationError

Item = TypeVar("Item")
Clean = TypeVar("Clean")


@dataclass(frozen=True)
class BatchResult(Generic[Clean]):
    """Cleaned items and the per-index errors found while cleaning."""

    items: list[Clean] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_batch(
    items: Sequence[Item],
    clean: Callable[[int, Item], Clean],
    label: str,
) -> BatchResult[Clean]:
    """Run ``clean`` on every item, collecting DomainError messages by index."""
    cleaned: list[Clean] = []
    errors: list[str] = []
    for index, item in enumerate(items):
        try:
            cleaned.append(clean(index, item))
        except StoreError:
            raise
        except DomainError as exc:
            errors.append(f"{label} at index {index}: {exc.message}")
    return BatchResult(items=cleaned, errors=errors)


def require_valid_batch(
    items: Any,
    clean: Callable[[int, Item], Clean],
    label: str,
    collection: str,
) -> list[Clean]:
    """Validate a whole batch and return the cleaned items.

    Raises:
        ValidationError: If the batch is empty or any item is invalid.
    """
    if not isinstance(items, (list, tuple)) or not items:
        raise ValidationError(f"{collection} array is required")
    result = validate_batch(items, clean, label)
    if not result.ok:
        raise ValidationError("Validation errors", errors=result.errors)
    return result.items
