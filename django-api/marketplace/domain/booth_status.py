"""Booth application approval states.

PENDING is the initial state. APPROVED and REJECTED are the admin
decisions. Admins may set any state unless strict transitions are enabled,
in which case only a pending application can be decided.
"""

from collections import Counter
from collections.abc import Iterable
from enum import Enum
from typing import Any

from marketplace.domain.errors import ValidationError


class BoothStatus(str, Enum):
    """Canonical approval states."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


# Older clients send the short tokens.
_ALIASES = {
    "ACCEPT": BoothStatus.APPROVED,
    "ACCEPTED": BoothStatus.APPROVED,
    "REJECT": BoothStatus.REJECTED,
}

_STRICT_TRANSITIONS: dict[BoothStatus, frozenset[BoothStatus]] = {
    BoothStatus.PENDING: frozenset({BoothStatus.APPROVED, BoothStatus.REJECTED}),
    BoothStatus.APPROVED: frozenset(),
    BoothStatus.REJECTED: frozenset(),
}


def parse_status(value: Any) -> BoothStatus:
    """Map a client token onto the canonical vocabulary.

    Raises:
        ValidationError: If the token is missing or unknown.
    """
    token = str(value).strip().upper() if value is not None else ""
    if token in _ALIASES:
        return _ALIASES[token]
    try:
        return BoothStatus(token)
    except ValueError:
        raise ValidationError(
            "Status must be one of: PENDING, APPROVED, REJECTED"
        ) from None


def can_transition(current: BoothStatus, target: BoothStatus, strict: bool = False) -> bool:
    """Return True if an admin may move an application from current to target."""
    if not strict or current == target:
        return True
    return target in _STRICT_TRANSITIONS[current]


def ensure_transition(current: BoothStatus, target: BoothStatus, strict: bool = False) -> None:
    if not can_transition(current, target, strict):
        raise ValidationError(
            f"Cannot change booth status from {current.value} to {target.value}",
            current_status=current.value,
        )


def ensure_editable(status: BoothStatus) -> None:
    """Applicants may only edit applications that are still pending.

    Raises:
        ValidationError: If the application has already been decided.
    """
    if status != BoothStatus.PENDING:
        raise ValidationError(
            f"Cannot update booth application with status: {status.value}",
            current_status=status.value,
        )


def booth_statistics(statuses: Iterable[BoothStatus]) -> dict[str, int]:
    """Count applications per state, with rounded percentage rates."""
    counts = Counter(statuses)
    total = sum(counts.values())
    stats = {
        "total_applications": total,
        "pending": counts[BoothStatus.PENDING],
        "approved": counts[BoothStatus.APPROVED],
        "rejected": counts[BoothStatus.REJECTED],
    }
    if total:
        stats["acceptance_rate"] = _percent(stats["approved"], total)
        stats["rejection_rate"] = _percent(stats["rejected"], total)
        stats["pending_rate"] = _percent(stats["pending"], total)
    return stats


def _percent(part: int, total: int) -> int:
    # Round half up.
    return int(part * 100 / total + 0.5)
