"""Ticket bookings and their amount computation."""

import logging
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.orm import Query, Session

from app.core.exceptions import NotFoundError
from app.models import Booking, User
from app.schemas.booking import BookingCreate, BookingStatus
from app.services.events import get_event

logger = logging.getLogger(__name__)

STATUS_PENDING: BookingStatus = "PENDING"
STATUS_CONFIRMED: BookingStatus = "CONFIRMED"
STATUS_CANCELLED: BookingStatus = "CANCELLED"

CENTS = Decimal("0.01")


def compute_total(ticket_price: Decimal, number_of_tickets: int) -> Decimal:
    """Ticket price times ticket count, rounded to cents."""
    return (Decimal(ticket_price) * number_of_tickets).quantize(CENTS, rounding=ROUND_HALF_UP)


def create_booking(db: Session, body: BookingCreate, user: User) -> Booking:
    """Book tickets for user at the event's current price. New bookings are PENDING."""
    event = get_event(db, body.event_id)
    booking = Booking(
        number_of_tickets=body.number_of_tickets,
        total_amount=compute_total(event.ticket_price, body.number_of_tickets),
        status=STATUS_PENDING,
        booking_date=datetime.now(UTC),
        user=user,
        event=event,
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    logger.info(
        "Booking created",
        extra={
            "booking_id": booking.id,
            "event_id": event.id,
            "user_id": user.id,
            "tickets": booking.number_of_tickets,
        },
    )
    return booking


def all_bookings(db: Session) -> Query:
    """Every booking, newest first."""
    return db.query(Booking).order_by(Booking.booking_date.desc(), Booking.id.desc())


def get_booking(db: Session, booking_id: int) -> Booking:
    booking = db.get(Booking, booking_id)
    if booking is None:
        raise NotFoundError("Booking", booking_id)
    return booking


def bookings_for_user(db: Session, user_id: int) -> list[Booking]:
    return (
        db.query(Booking)
        .filter(Booking.user_id == user_id)
        .order_by(Booking.booking_date.desc(), Booking.id.desc())
        .all()
    )


def bookings_for_event(db: Session, event_id: int) -> list[Booking]:
    """Bookings of one event; NotFoundError if the event does not exist."""
    get_event(db, event_id)
    return (
        db.query(Booking)
        .filter(Booking.event_id == event_id)
        .order_by(Booking.booking_date.desc(), Booking.id.desc())
        .all()
    )


def set_booking_status(db: Session, booking_id: int, status: BookingStatus) -> Booking:
    booking = get_booking(db, booking_id)
    previous = booking.status
    booking.status = status
    db.commit()
    db.refresh(booking)
    logger.info(
        "Booking status changed",
        extra={"booking_id": booking_id, "from_status": previous, "to_status": status},
    )
    return booking
