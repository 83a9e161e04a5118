"""Pydantic request/response schemas."""

from app.schemas.auth import (
    JwtResponse,
    Principal,
    SigninRequest,
    SignupRequest,
    UserSummary,
)
from app.schemas.booking import BookingCreate, BookingRead, BookingStatus
from app.schemas.category import CategoryRead, CategoryWrite
from app.schemas.common import MessageResponse, Page
from app.schemas.event import EventRead, EventStatus, EventWrite
from app.schemas.health import HealthResponse

__all__ = [
    "BookingCreate",
    "BookingRead",
    "BookingStatus",
    "CategoryRead",
    "CategoryWrite",
    "EventRead",
    "EventStatus",
    "EventWrite",
    "HealthResponse",
    "JwtResponse",
    "MessageResponse",
    "Page",
    "Principal",
    "SigninRequest",
    "SignupRequest",
    "UserSummary",
]
