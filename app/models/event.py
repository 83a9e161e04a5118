"""ORM model for events and their moderation status."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base


class Event(Base):
    """
    An event organized by a user, optionally filed under a category.

    status: DRAFT, PENDING, PUBLISHED, REJECTED, CANCELLED or COMPLETED.
    User submissions start as PENDING and only appear in public listings once
    an admin approves them.
    """

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    start_date_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date_time = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=False, default="")
    max_attendees = Column(Integer, nullable=True)
    ticket_price = Column(Numeric(10, 2), nullable=False, default=0)
    image_url = Column(String(1024), nullable=True)
    status = Column(String(16), nullable=False, default="DRAFT", index=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    organizer = relationship("User", lazy="joined")
    category = relationship("Category", lazy="joined")
    bookings = relationship("Booking", back_populates="event", cascade="all, delete-orphan")
