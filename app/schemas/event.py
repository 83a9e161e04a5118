"""Request/response schemas for events."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from app.schemas.auth import UserSummary
from app.schemas.category import CategoryRead
from app.schemas.common import ApiModel, Money

EventStatus = Literal["DRAFT", "PENDING", "PUBLISHED", "REJECTED", "CANCELLED", "COMPLETED"]

EVENT_STATUS_VALUES: tuple[EventStatus, ...] = (
    "DRAFT",
    "PENDING",
    "PUBLISHED",
    "REJECTED",
    "CANCELLED",
    "COMPLETED",
)


class EventWrite(ApiModel):
    """Editable event fields, used for create, submit and update."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    start_date_time: datetime
    end_date_time: datetime
    location: str = Field(..., min_length=1, max_length=255)
    max_attendees: int | None = Field(default=None, ge=1)
    ticket_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    image_url: str | None = Field(default=None, max_length=1024)
    status: EventStatus | None = None
    category_id: int | None = None


class EventRead(ApiModel):
    id: int
    title: str
    description: str | None = None
    start_date_time: datetime
    end_date_time: datetime
    location: str
    max_attendees: int | None = None
    ticket_price: Money
    image_url: str | None = None
    status: EventStatus
    organizer: UserSummary
    category: CategoryRead | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
