"""
Account Service - registration, login and profile.

An account is a restaurant; its id is the tenant id of everything it owns.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rest_api.models import User, utc_now
from rest_api.services.base_service import BaseService
from rest_api.services.crud.repository import BaseRepository
from shared.config.constants import ErrorMessages, SubscriptionPlan, SubscriptionStatus
from shared.config.logging import audit_auth_event, get_logger
from shared.config.settings import settings
from shared.security.auth import sign_account_token
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.utils.exceptions import AppException, DuplicateEntityError, ValidationError
from shared.utils.schemas import AccountOutput, AuthResponse

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    # Compared against when the email is unknown, so both failure paths cost a bcrypt check
    return hash_password("no-such-account")


class AccountService(BaseService[User]):
    """Service for accounts."""

    entity_name = "User"

    def __init__(self, db: Session):
        super().__init__(db, User)
        self._accounts = BaseRepository(User, db)

    def get_account(self, account_id: int) -> User | None:
        return self._accounts.find_by_id(account_id)

    def find_by_email(self, email: str) -> User | None:
        return self._accounts.find_one(User.email == email.strip().lower())

    def register(self, data: dict[str, Any], ip_address: str | None = None) -> AuthResponse:
        """
        Create an account on the free plan with a trial expiry.

        Raises:
            DuplicateEntityError: If the email is already registered.
        """
        email = data["email"]
        if self.find_by_email(email) is not None:
            audit_auth_event("REGISTER", email=email, success=False, reason="duplicate", ip_address=ip_address)
            raise DuplicateEntityError(ErrorMessages.USER_EXISTS)

        account = User(
            email=email,
            password=hash_password(data["password"]),
            first_name=data["first_name"],
            last_name=data["last_name"],
            restaurant_name=data["restaurant_name"],
            restaurant_address=data.get("address"),
            phone=data.get("phone"),
            subscription_plan=SubscriptionPlan.FREE.value,
            subscription_status=SubscriptionStatus.ACTIVE,
            subscription_expires_at=utc_now() + timedelta(days=settings.trial_days),
        )
        self._accounts.add(account)
        self._commit("register account", email=email)
        self._accounts.refresh(account)

        audit_auth_event("REGISTER", user_id=account.id, email=email, ip_address=ip_address)
        return AuthResponse(
            message="User created successfully",
            token=sign_account_token(account.id, account.email),
            user=AccountOutput.model_validate(account),
        )

    def login(self, email: str, password: str, ip_address: str | None = None) -> AuthResponse:
        """
        Check credentials and issue a token.

        Raises:
            ValidationError: With one message for unknown email and wrong password.
        """
        account = self.find_by_email(email)
        if account is None:
            verify_password(password, _dummy_hash())
            audit_auth_event("LOGIN", email=email, success=False, reason="unknown email", ip_address=ip_address)
            raise ValidationError(ErrorMessages.INVALID_CREDENTIALS)

        if not verify_password(password, account.password):
            audit_auth_event(
                "LOGIN", user_id=account.id, email=email, success=False,
                reason="wrong password", ip_address=ip_address,
            )
            raise ValidationError(ErrorMessages.INVALID_CREDENTIALS)

        if needs_rehash(account.password):
            account.password = hash_password(password)
            self._commit("rehash password", user_id=account.id)

        audit_auth_event("LOGIN", user_id=account.id, email=email, ip_address=ip_address)
        return AuthResponse(
            token=sign_account_token(account.id, account.email),
            user=AccountOutput.model_validate(account),
        )

    def update_profile(self, account: User, data: dict[str, Any]) -> AccountOutput:
        """Apply the given profile fields; missing or null fields are kept."""
        if "address" in data:
            data["restaurant_address"] = data.pop("address")
        for field_name, value in self._drop_null_required(data).items():
            setattr(account, field_name, value)

        self._commit("update profile", user_id=account.id)
        self._accounts.refresh(account)
        logger.info("Profile updated", user_id=account.id, fields=sorted(data))
        return AccountOutput.model_validate(account)

    def change_password(
        self,
        account: User,
        current_password: str,
        new_password: str,
        ip_address: str | None = None,
    ) -> None:
        """
        Raises:
            ValidationError: If the current password does not match.
        """
        if not verify_password(current_password, account.password):
            audit_auth_event(
                "PASSWORD_CHANGE", user_id=account.id, email=account.email,
                success=False, reason="wrong current password", ip_address=ip_address,
            )
            raise ValidationError(ErrorMessages.WRONG_PASSWORD)

        account.password = hash_password(new_password)
        self._commit("change password", user_id=account.id)
        audit_auth_event("PASSWORD_CHANGE", user_id=account.id, email=account.email, ip_address=ip_address)

    def _on_integrity_error(
        self, error: IntegrityError, operation: str, **log_context: Any
    ) -> AppException:
        # Two registrations with the same email racing past find_by_email
        if operation == "register account":
            return DuplicateEntityError(ErrorMessages.USER_EXISTS)
        return super()._on_integrity_error(error, operation, **log_context)
