"""Guarded delete for records that other records reference.

A delete is refused while dependents exist unless it is forced. What
happens to the dependents of a forced delete is configured per deployment
through DeleteMode.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from marketplace.domain.errors import DependentsExistError, ValidationError

SAMPLE_SIZE = 5


class DeleteMode(str, Enum):
    """Treatment of dependents when their parent is force-deleted."""

    ORPHAN = "orphan"
    NULLIFY = "nullify"
    CASCADE = "cascade"

    @classmethod
    def parse(cls, value: str) -> "DeleteMode":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown dependent delete mode: {value}",
                allowed_modes=[mode.value for mode in cls],
            ) from None


@dataclass(frozen=True)
class DeleteDecision:
    """Outcome of evaluating a delete request."""

    allowed: bool
    dependent_count: int
    sample: list[dict[str, Any]] = field(default_factory=list)
    mode: DeleteMode = DeleteMode.ORPHAN

    @property
    def touches_dependents(self) -> bool:
        return self.dependent_count > 0 and self.mode != DeleteMode.ORPHAN


def parse_force(value: Any) -> bool:
    """Only an explicit true flag forces a delete."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true" if value is not None else False


def evaluate_delete(
    entity: str,
    dependent: str,
    dependent_count: int,
    sample: list[dict[str, Any]],
    force: bool,
    mode: DeleteMode = DeleteMode.ORPHAN,
) -> DeleteDecision:
    """Decide whether a delete may proceed.

    Raises:
        DependentsExistError: If dependents exist and the delete is not forced.
    """
    sample = sample[:SAMPLE_SIZE]
    if dependent_count > 0 and not force:
        raise DependentsExistError(entity, dependent, dependent_count, sample)
    return DeleteDecision(
        allowed=True,
        dependent_count=dependent_count,
        sample=sample,
        mode=mode,
    )
