"""ORM model for ticket bookings."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base


class Booking(Base):
    """
    Tickets reserved by a user for an event.

    total_amount is fixed at booking time (ticket price x number of tickets);
    later price changes on the event do not touch existing bookings.
    status: PENDING, CONFIRMED, CANCELLED or REFUNDED.
    """

    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number_of_tickets = Column(Integer, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(String(16), nullable=False, default="PENDING", index=True)
    booking_date = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id = Column(
        Integer,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    user = relationship("User", lazy="joined")
    event = relationship("Event", back_populates="bookings", lazy="joined")
