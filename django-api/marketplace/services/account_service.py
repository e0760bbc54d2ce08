"""Account service: sign-up, token login and admin user management."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from marketplace.domain import Account, Role, UserId
from marketplace.domain.access import parse_role
from marketplace.domain.errors import (
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    StoreError,
    ValidationError,
)
from marketplace.domain.validators import validate_email
from marketplace.services.base import require_found
from marketplace.stores.interfaces import AccountStore, VendorStore

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class LoginResult:
    token: str
    account: Account


class AccountService:
    """Service for accounts and bearer tokens."""

    def __init__(self, accounts: AccountStore, vendors: VendorStore) -> None:
        self._accounts = accounts
        self._vendors = vendors

    def signup(self, data: Mapping[str, Any]) -> Account:
        """Register a new account.

        Raises:
            ValidationError: If email or password is missing or invalid, or
                the role is unknown.
            ConflictError: If the email is already registered.
        """
        email = str(data.get("email") or "").strip().lower()
        password = str(data.get("password") or "")
        if not email or not password:
            raise ValidationError("Email and password are required")
        if not validate_email(email):
            raise ValidationError("Invalid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        role = parse_role(data.get("role") or Role.USER.value)
        if self._accounts.email_taken(email):
            raise ConflictError("Email is already registered")
        account = self._accounts.create_account(
            email,
            password,
            str(data.get("first_name") or "").strip(),
            str(data.get("last_name") or "").strip(),
            role,
        )
        logger.info("Account %s signed up with role %s", account.id, role.value)
        return account

    def login(self, email: Any, password: Any) -> LoginResult:
        """Exchange credentials for a bearer token.

        Raises:
            ValidationError: If either credential is missing.
            AuthenticationError: If the credentials do not match.
        """
        if not email or not password:
            raise ValidationError("Email and password are required")
        account = self._accounts.check_credentials(str(email).strip().lower(), str(password))
        if account is None:
            raise AuthenticationError("Invalid email or password")
        return LoginResult(token=self._accounts.issue_token(account.id), account=account)

    def logout(self, token: str | None) -> None:
        """Revoke a bearer token.

        Raises:
            AuthenticationError: If the token is missing or unknown.
        """
        if not token or not self._accounts.revoke_token(token):
            raise AuthenticationError("Invalid or expired token")

    def list_users(self) -> list[Account]:
        return self._accounts.list_accounts()

    def change_role(self, user_id: str, data: Mapping[str, Any]) -> Account:
        """Set a user's role and optionally their names.

        Raises:
            ValidationError: If the role is missing or unknown.
            NotFoundError: If the user does not exist.
        """
        account = self._load(user_id)
        if not data.get("role"):
            raise ValidationError("Role is required")
        changes: dict[str, Any] = {"role": parse_role(data["role"])}
        for name in ("first_name", "last_name"):
            if data.get(name) is not None:
                changes[name] = str(data[name]).strip()
        updated = self._accounts.update_account(account.id, changes)
        logger.info(
            "Role of user %s changed from %s to %s",
            account.id,
            account.role.value,
            updated.role.value,
        )
        return updated

    def delete_user(self, user_id: str, acting_user_id: UserId | None) -> Account:
        """Delete an account and, best effort, its vendor profile.

        Raises:
            PermissionDeniedError: If admins try to delete themselves.
            NotFoundError: If the user does not exist.
        """
        account = self._load(user_id)
        if acting_user_id is not None and account.id == acting_user_id:
            raise PermissionDeniedError("You cannot delete your own account")
        if account.role == Role.VENDOR:
            try:
                self._vendors.delete_for_user(account.id)
            except StoreError:
                logger.warning("Failed to delete vendor profile of user %s", account.id, exc_info=True)
        self._accounts.delete_account(account.id)
        logger.info("Deleted user %s", account.id)
        return account

    def _load(self, user_id: str) -> Account:
        return require_found(self._accounts.get_account(UserId.parse(user_id)), "User")
