"""Password hashing and JWT creation/verification for authentication."""

import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import get_settings

# Min/max lengths for signup input validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 120

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72

# Size of the signing key generated when JWT_SECRET is not configured.
GENERATED_SECRET_BYTES = 64


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never match."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


class TokenError(Exception):
    """Raised when an access token cannot be accepted."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MalformedTokenError(TokenError):
    """Token cannot be decoded, or lacks the claims we issue."""


class BadSignatureError(TokenError):
    """Token signature does not match the process signing key."""


class TokenExpiredError(TokenError):
    """Token signature is intact but its expiry has passed."""


class TokenCodec:
    """
    Issues and validates signed, expiring access tokens.

    The codec owns the signing key for its whole lifetime. Tokens carry the
    subject (username) plus iat/exp claims; there is no server-side session.
    """

    def __init__(self, secret: str | bytes, algorithm: str, ttl: timedelta) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def issue(self, subject: str, now: datetime | None = None) -> str:
        """Create a token for subject with iat=now and exp=now+ttl."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: str) -> str:
        """
        Verify signature and expiry; return the embedded subject.

        Raises BadSignatureError, TokenExpiredError or MalformedTokenError.
        The signature is checked before expiry, so a tampered token is never
        reported as merely expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidSignatureError as e:
            raise BadSignatureError("Token signature is invalid") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Malformed token: {e}") from e
        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("Malformed token: empty subject")
        return subject


@lru_cache
def get_token_codec() -> TokenCodec:
    """
    Return the process-wide token codec.

    Cached so the signing key (configured or generated) is fixed for the
    process lifetime.
    """
    settings = get_settings()
    if settings.JWT_SECRET is not None:
        secret: str | bytes = settings.JWT_SECRET.get_secret_value()
    else:
        secret = secrets.token_bytes(GENERATED_SECRET_BYTES)
    return TokenCodec(
        secret=secret,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(milliseconds=settings.JWT_EXPIRATION_MS),
    )
