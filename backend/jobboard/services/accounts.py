"""
Account Service.

Registration, login, profile management, logout and email verification for
job seekers and employers. Works against any ``AccountStore``; HTTP concerns
stay in the route modules.
"""

import logging
from datetime import timedelta
from typing import Any, Optional

from jobboard.core.config import settings
from jobboard.core.errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from jobboard.core.security import (
    create_access_token,
    decode_access_token,
    generate_verify_token,
    get_password_hash,
    verify_password,
)
from jobboard.models import EMPLOYER_FIELDS, Account, Role
from jobboard.models.account import utcnow
from jobboard.services.account_store import AccountStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "password", "role")

# Extra fields each role must supply at registration
ROLE_REQUIRED_FIELDS = {
    Role.JOB_SEEKER: (),
    Role.EMPLOYER: ("organization_name", "industry_type"),
}

# Fields a role is allowed to store besides the common ones
ROLE_PROFILE_FIELDS = {
    Role.JOB_SEEKER: (),
    Role.EMPLOYER: EMPLOYER_FIELDS,
}

UPDATABLE_FIELDS = ("name", "email")


def _present(value: Any) -> bool:
    return value is not None and value != ""


class AccountService:
    """Credential registration and authentication flow."""

    def __init__(self, store: AccountStore):
        self.store = store

    # ============== Registration ==============

    def register(self, data: dict) -> Account:
        """
        Create a new account.

        Args:
            data: snake_case fields: name, email, password, role and, for
                employers, the organization attributes

        Raises:
            ValidationError: missing fields, unknown role, or an employer
                without organization name / industry type
            ConflictError: the email is already registered
        """
        if not all(_present(data.get(field)) for field in REQUIRED_FIELDS):
            raise ValidationError("Missing required fields")

        try:
            role = Role(data["role"])
        except ValueError as exc:
            raise ValidationError("Invalid role") from exc

        if not all(_present(data.get(field)) for field in ROLE_REQUIRED_FIELDS[role]):
            raise ValidationError("Missing organization details for employer")

        if self.store.get_by_email(data["email"]) is not None:
            raise ConflictError("Email already exists")

        profile = {
            field: data[field]
            for field in ROLE_PROFILE_FIELDS[role]
            if _present(data.get(field))
        }
        account = Account(
            name=data["name"],
            email=data["email"],
            hashed_password=get_password_hash(data["password"]),
            role=role.value,
            is_verified=False,
            verify_token=generate_verify_token(),
            verify_token_expiry=utcnow()
            + timedelta(minutes=settings.VERIFY_TOKEN_EXPIRE_MINUTES),
            **profile,
        )
        account = self.store.add(account)

        logger.info("Registered %s account %s", account.role, account.id)
        # No mailer is wired in; the token is only redeemable via /auth/verify-email
        logger.info(
            "Verification token issued for account %s (expires %s), email dispatch not configured",
            account.id,
            account.verify_token_expiry.isoformat(),
        )
        return account

    # ============== Login / Logout ==============

    def login(self, email: str, password: str) -> tuple[str, Account]:
        """
        Check credentials and mint a session token.

        Returns:
            (token, account)

        Raises:
            NotFoundError: no account with this email
            AuthenticationError: wrong password, or unverified email when
                ``REQUIRE_VERIFIED_EMAIL`` is enabled
        """
        account = self.store.get_by_email(email)
        if account is None:
            raise NotFoundError("User Not Found")

        if not verify_password(password, account.hashed_password):
            raise AuthenticationError("Invalid Credentials")

        if settings.REQUIRE_VERIFIED_EMAIL and not account.is_verified:
            raise AuthenticationError("Email not verified")

        token = create_access_token(data={"sub": str(account.id)})
        logger.info("Login: account %s", account.id)
        return token, account

    def logout(self, token: Optional[str]) -> None:
        """
        Validate the token being discarded by the client.

        Sessions are stateless, so nothing is revoked server-side; the token
        stays valid until it expires.
        """
        if not token:
            raise AuthenticationError("No token, authorization denied")
        if decode_access_token(token) is None:
            raise AuthenticationError("Token verification failed, authorization denied")

    # ============== Profile ==============

    def get_account(self, account_id: Optional[int]) -> Account:
        account = self.store.get(account_id) if account_id is not None else None
        if account is None:
            raise NotFoundError("User Not Found")
        return account

    def update_account(self, account_id: Optional[int], changes: dict) -> Account:
        """
        Apply a partial update.

        Only non-empty fields among name, email, password and the role's
        profile fields are written; a new password is re-hashed. An empty
        ``changes`` dict leaves the account untouched.
        """
        if account_id is None:
            raise BadRequestError("User ID is required")

        account = self.store.get(account_id)
        if account is None:
            raise NotFoundError("User not found")

        allowed = UPDATABLE_FIELDS + ROLE_PROFILE_FIELDS[Role(account.role)]
        updates = {
            field: changes[field]
            for field in allowed
            if _present(changes.get(field))
        }
        if _present(changes.get("password")):
            updates["hashed_password"] = get_password_hash(changes["password"])

        if not updates:
            return account

        if "email" in updates and updates["email"] != account.email:
            if self.store.get_by_email(updates["email"]) is not None:
                raise ConflictError("Email already exists")

        for field, value in updates.items():
            setattr(account, field, value)
        account = self.store.save(account)

        changed = sorted(
            "password" if field == "hashed_password" else field for field in updates
        )
        logger.info("Updated account %s (%s)", account.id, ", ".join(changed))
        return account

    def delete_account(self, account_id: Optional[int]) -> None:
        if account_id is None:
            raise BadRequestError("User ID is required")

        if not self.store.delete(account_id):
            raise NotFoundError("User not found")

        logger.info("Deleted account %s", account_id)

    # ============== Email verification ==============

    def verify_email(self, token: Optional[str]) -> Account:
        """
        Redeem an email-verification token issued at registration.

        Raises:
            ValidationError: unknown or expired token
        """
        account = self.store.get_by_verify_token(token) if token else None
        if account is None:
            raise ValidationError("Invalid verification token")

        if account.verify_token_expiry is None or account.verify_token_expiry < utcnow():
            raise ValidationError("Verification token expired")

        account.is_verified = True
        account.verify_token = None
        account.verify_token_expiry = None
        account = self.store.save(account)

        logger.info("Verified email for account %s", account.id)
        return account
