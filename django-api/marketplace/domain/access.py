"""Role vocabulary and the authorization predicate.

This only decides whether a role may act; establishing who the caller is
belongs to the authentication layer.
"""

from enum import Enum

from marketplace.domain.errors import ValidationError


class Role(str, Enum):
    """Account roles."""

    ADMIN = "admin"
    VENDOR = "vendor"
    USER = "user"


AUTHENTICATED: frozenset[Role] = frozenset()
ADMIN_ONLY: frozenset[Role] = frozenset({Role.ADMIN})
VENDOR_OR_ADMIN: frozenset[Role] = frozenset({Role.VENDOR, Role.ADMIN})
ANY_USER: frozenset[Role] = frozenset({Role.USER, Role.VENDOR, Role.ADMIN})


def parse_role(value: str | None) -> Role:
    """Return the Role for a role string.

    Raises:
        ValidationError: If the value is not a known role.
    """
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        raise ValidationError(
            "Invalid role specified",
            allowed_roles=[role.value for role in Role],
        ) from None


def is_allowed(role: Role | str | None, required: frozenset[Role]) -> bool:
    """Allow when no roles are required or the caller's role is required.

    An unknown or missing role only passes the authentication-only check.
    """
    if not required:
        return True
    try:
        caller = Role(role)
    except ValueError:
        return False
    return caller in required


def describe(required: frozenset[Role]) -> str:
    """Human-readable list of roles, used in 403 messages."""
    return " or ".join(sorted(role.value for role in required))
