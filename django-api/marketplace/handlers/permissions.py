"""Authentication and role checks for the API views."""

from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import BasePermission
from rest_framework.request import Request

from marketplace.domain import Role, UserId
from marketplace.domain.access import AUTHENTICATED, describe, is_allowed


class BearerTokenAuthentication(TokenAuthentication):
    """DRF token auth read from ``Authorization: Bearer <token>``."""

    keyword = "Bearer"


def caller_role(request: Request) -> Role | None:
    profile = getattr(request.user, "profile", None)
    return Role(profile.role) if profile is not None else None


def caller_id(request: Request) -> UserId | None:
    profile = getattr(request.user, "profile", None)
    return UserId(profile.id) if profile is not None else None


class RolePermission(BasePermission):
    """Require an authenticated caller whose role is in ``required``.

    An empty set only requires authentication.
    """

    def __init__(self, required: frozenset[Role] = AUTHENTICATED) -> None:
        self.required = required
        self.message = (
            f"Access forbidden. Required role: {describe(required)}"
            if required
            else "Authentication required"
        )

    def has_permission(self, request: Request, view) -> bool:
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return is_allowed(caller_role(request), self.required)
