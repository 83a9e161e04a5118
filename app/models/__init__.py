"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.booking import Booking
from app.models.category import Category
from app.models.event import Event
from app.models.user import User, UserRole

__all__ = ["Base", "Booking", "Category", "Event", "User", "UserRole"]
