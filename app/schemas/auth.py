"""Request/response schemas for auth endpoints and the request principal."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.common import ApiModel

# Shape check only: one "@" with text on both sides and a dot in the domain.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
# Usernames never contain "@", so signin can tell them apart from emails.
USERNAME_PATTERN = r"^[^@\s]+$"


class SignupRequest(ApiModel):
    """New account details. New accounts receive the USER role."""

    username: str = Field(
        ...,
        min_length=USERNAME_MIN_LEN,
        max_length=USERNAME_MAX_LEN,
        pattern=USERNAME_PATTERN,
    )
    email: str = Field(..., max_length=50, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    phone: str | None = Field(default=None, max_length=32)


class SigninRequest(BaseModel):
    """Credentials for signin. username may also be the account email."""

    username: str = Field(..., min_length=1, max_length=255, description="Username or email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class JwtResponse(BaseModel):
    """Signin result: bearer token plus the identity it was issued for."""

    token: str = Field(..., description="JWT access token")
    type: str = Field(default="Bearer", description="Token type")
    id: int
    username: str
    email: str
    roles: list[str]


class Principal(BaseModel):
    """Authenticated identity attached to a single request."""

    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    email: str
    roles: frozenset[str]


class UserSummary(ApiModel):
    """Public view of a user embedded in events and bookings (no password)."""

    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
