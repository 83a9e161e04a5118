"""Request/response schemas for bookings."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.auth import UserSummary
from app.schemas.common import ApiModel, Money
from app.schemas.event import EventRead

BookingStatus = Literal["PENDING", "CONFIRMED", "CANCELLED", "REFUNDED"]


class BookingCreate(ApiModel):
    event_id: int
    number_of_tickets: int = Field(..., ge=1, le=1000)


class BookingRead(ApiModel):
    id: int
    number_of_tickets: int
    total_amount: Money
    status: BookingStatus
    booking_date: datetime
    user: UserSummary
    event: EventRead
    created_at: datetime | None = None
    updated_at: datetime | None = None
