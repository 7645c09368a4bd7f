"""Password hashing and bearer token helpers."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import bcrypt
import jwt

from calorie_tracker.domain.errors import AuthenticationError, InvalidInputError
from calorie_tracker.domain.models import UserRecord

_BCRYPT_MAX_BYTES = 72
_ALGORITHM = "HS256"


@dataclass
class PasswordHasher:
    """bcrypt wrapper with a configurable work factor."""

    rounds: int = 12

    def hash(self, password: str) -> str:
        """Return a bcrypt hash for the password."""
        encoded = password.encode("utf-8")
        if len(encoded) > _BCRYPT_MAX_BYTES:
            raise InvalidInputError("Password must be at most 72 bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode(
            "utf-8"
        )

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True when the password matches the stored hash."""
        encoded = password.encode("utf-8")
        if len(encoded) > _BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            return False


@dataclass
class TokenService:
    """Issues and validates HS256 JWTs carrying the user id."""

    secret: str
    issuer: str
    audience: str
    expires_minutes: int

    def issue(self, user: UserRecord, now: datetime | None = None) -> str:
        """Return a signed token for the user."""
        issued_at = now or datetime.now(tz=UTC)
        claims = {
            "sub": str(user.id),
            "userId": str(user.id),
            "email": user.email,
            "jti": uuid4().hex,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(claims, self.secret, algorithm=_ALGORITHM)

    def user_id_from(self, token: str) -> UUID:
        """Validate the token and return the user id it carries."""
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[_ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError("Invalid token") from exc

        raw_id = claims.get("userId") or claims.get("sub")
        try:
            return UUID(str(raw_id))
        except ValueError as exc:
            raise AuthenticationError("Invalid token") from exc
