"""User account business logic."""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import AuthenticationError, InvalidInputError
from calorie_tracker.domain.models import AuthResult, NewUser, UserGoals, UserRecord
from calorie_tracker.services.security import PasswordHasher, TokenService

_logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_NAME_LENGTH = 100
MAX_PROFILE_PICTURE_BYTES = 2 * 1024 * 1024
_DATA_URL_PREFIX = "data:image/"
_BASE64_MARKER = ";base64,"


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user for a lower-cased email, if present."""

    def create_user(self, user: NewUser) -> UserRecord:
        """Create and return a new user record."""

    def update_goals(self, user_id: UUID, goals: UserGoals) -> UserRecord | None:
        """Replace the user's daily goals."""

    def update_profile(
        self,
        user_id: UUID,
        first_name: str,
        middle_name: str | None,
        last_name: str,
    ) -> UserRecord | None:
        """Replace the user's name fields."""

    def update_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Store a new password hash."""

    def set_profile_picture(
        self, user_id: UUID, picture: str | None
    ) -> UserRecord | None:
        """Store or clear the profile picture data URL."""

    def delete_user_cascade(self, user_id: UUID) -> bool:
        """Delete the user and everything they own in one transaction."""


@dataclass
class AccountService:
    """Application service for registration, login and profile changes."""

    repository: UserRepository
    hasher: PasswordHasher
    tokens: TokenService

    def register(  # noqa: PLR0913
        self,
        *,
        first_name: str,
        middle_name: str | None,
        last_name: str,
        email: str,
        password: str,
    ) -> AuthResult:
        """Create an account and return a token for it."""
        normalized_email = _normalize_email(email)
        _validate_password(password)
        first, middle, last = _clean_names(first_name, middle_name, last_name)
        if self.repository.get_by_email(normalized_email) is not None:
            raise InvalidInputError("Email already exists")

        user = self.repository.create_user(
            NewUser(
                first_name=first,
                middle_name=middle,
                last_name=last,
                email=normalized_email,
                password_hash=self.hasher.hash(password),
            )
        )
        _logger.info("Registered user", extra={"user_id": str(user.id)})
        return AuthResult(token=self.tokens.issue(user), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        """Verify credentials and return a fresh token."""
        user = self.repository.get_by_email(_normalize_email(email))
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        return AuthResult(token=self.tokens.issue(user), user=user)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user, if present."""
        return self.repository.get_by_id(user_id)

    def update_profile(
        self,
        user_id: UUID,
        first_name: str,
        middle_name: str | None,
        last_name: str,
    ) -> UserRecord | None:
        """Update name fields."""
        first, middle, last = _clean_names(first_name, middle_name, last_name)
        return self.repository.update_profile(user_id, first, middle, last)

    def change_password(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> bool:
        """Replace the password after checking the current one."""
        _validate_password(new_password)
        user = self.repository.get_by_id(user_id)
        if user is None or not self.hasher.verify(
            current_password, user.password_hash
        ):
            return False
        self.repository.update_password_hash(user_id, self.hasher.hash(new_password))
        return True

    def set_profile_picture(self, user_id: UUID, image_data: str) -> UserRecord | None:
        """Store an image data URL as the profile picture."""
        _validate_profile_picture(image_data)
        return self.repository.set_profile_picture(user_id, image_data)

    def remove_profile_picture(self, user_id: UUID) -> bool:
        """Clear the profile picture."""
        return self.repository.set_profile_picture(user_id, None) is not None

    def delete_account(self, user_id: UUID) -> bool:
        """Delete the user with foods, entries, water logs and favorites."""
        deleted = self.repository.delete_user_cascade(user_id)
        if deleted:
            _logger.info("Deleted account", extra={"user_id": str(user_id)})
        return deleted


def _normalize_email(email: str) -> str:
    # Format is validated by EmailStr in the request schemas.
    return email.strip().lower()


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidInputError("Password must be at least 6 characters")


def _clean_names(
    first_name: str, middle_name: str | None, last_name: str
) -> tuple[str, str | None, str]:
    first = first_name.strip()
    last = last_name.strip()
    middle = middle_name.strip() if middle_name else None
    if not first or not last:
        raise InvalidInputError("First and last name are required")
    for value in (first, middle or "", last):
        if len(value) > MAX_NAME_LENGTH:
            raise InvalidInputError("Names must be at most 100 characters")
    return first, middle or None, last


def _validate_profile_picture(image_data: str) -> None:
    if not image_data.startswith(_DATA_URL_PREFIX) or _BASE64_MARKER not in image_data:
        raise InvalidInputError("Invalid image data")
    payload = image_data.split(_BASE64_MARKER, maxsplit=1)[1]
    try:
        decoded = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidInputError("Invalid image data") from exc
    if not decoded:
        raise InvalidInputError("Invalid image data")
    if len(decoded) > MAX_PROFILE_PICTURE_BYTES:
        raise InvalidInputError("Profile picture must be 2MB or smaller")
