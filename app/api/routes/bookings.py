"""Booking routes. Members book and list their own tickets; admins manage all bookings."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.routes.auth import require
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.booking import BookingCreate, BookingRead
from app.schemas.common import Page
from app.services import bookings as booking_service
from app.services.pagination import paginate
from app.services.principal import load_user

router = APIRouter()


@router.get(
    "",
    response_model=Page[BookingRead],
    dependencies=[Depends(require("bookings:list"))],
)
def list_bookings(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(ge=1, le=100)] = 10,
) -> Page[BookingRead]:
    return paginate(booking_service.all_bookings(db), page, size, BookingRead)


@router.post("", response_model=BookingRead)
def create_booking(
    body: BookingCreate,
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(require("bookings:create"))],
) -> BookingRead:
    """Book tickets for the caller. totalAmount = event ticket price x numberOfTickets."""
    booking = booking_service.create_booking(db, body, load_user(db, principal))
    return BookingRead.model_validate(booking)


@router.get("/my-bookings", response_model=list[BookingRead])
def list_my_bookings(
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(require("bookings:mine"))],
) -> list[BookingRead]:
    return [BookingRead.model_validate(b) for b in booking_service.bookings_for_user(db, principal.id)]


@router.get(
    "/event/{event_id}",
    response_model=list[BookingRead],
    dependencies=[Depends(require("bookings:by_event"))],
)
def list_event_bookings(event_id: int, db: Annotated[Session, Depends(get_db)]) -> list[BookingRead]:
    return [BookingRead.model_validate(b) for b in booking_service.bookings_for_event(db, event_id)]


@router.get(
    "/{booking_id}",
    response_model=BookingRead,
    dependencies=[Depends(require("bookings:get"))],
)
def get_booking(booking_id: int, db: Annotated[Session, Depends(get_db)]) -> BookingRead:
    return BookingRead.model_validate(booking_service.get_booking(db, booking_id))


@router.put(
    "/{booking_id}/confirm",
    response_model=BookingRead,
    dependencies=[Depends(require("bookings:confirm"))],
)
def confirm_booking(booking_id: int, db: Annotated[Session, Depends(get_db)]) -> BookingRead:
    booking = booking_service.set_booking_status(db, booking_id, booking_service.STATUS_CONFIRMED)
    return BookingRead.model_validate(booking)


@router.put(
    "/{booking_id}/cancel",
    response_model=BookingRead,
    dependencies=[Depends(require("bookings:cancel"))],
)
def cancel_booking(booking_id: int, db: Annotated[Session, Depends(get_db)]) -> BookingRead:
    booking = booking_service.set_booking_status(db, booking_id, booking_service.STATUS_CANCELLED)
    return BookingRead.model_validate(booking)
