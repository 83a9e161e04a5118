"""Event listing, authoring and moderation.

Moderation workflow: a member submits an event, which is stored as PENDING
and hidden from public listings. An admin either approves it (PUBLISHED) or
rejects it (REJECTED). Events created directly by an admin skip moderation
and are PUBLISHED unless another status is asked for explicitly.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from app.core.exceptions import InvalidRequestError, NotFoundError
from app.models import Category, Event, User
from app.schemas.event import EventStatus, EventWrite

logger = logging.getLogger(__name__)

STATUS_PENDING: EventStatus = "PENDING"
STATUS_PUBLISHED: EventStatus = "PUBLISHED"
STATUS_REJECTED: EventStatus = "REJECTED"

# Statuses an admin-created event is promoted from to PUBLISHED.
UNMODERATED_STATUSES: tuple[EventStatus | None, ...] = (None, "DRAFT", "PENDING")

# sortBy values accepted by listing endpoints.
SORTABLE_COLUMNS = {
    "id": Event.id,
    "startDateTime": Event.start_date_time,
    "endDateTime": Event.end_date_time,
    "createdAt": Event.created_at,
    "title": Event.title,
    "ticketPrice": Event.ticket_price,
}


def all_events(db: Session) -> Query:
    return db.query(Event)


def events_with_status(db: Session, status: EventStatus) -> Query:
    return db.query(Event).filter(Event.status == status)


def upcoming_events(db: Session, now: datetime | None = None) -> Query:
    """Published events that have not started yet, soonest first."""
    now = now or datetime.now(UTC)
    return (
        db.query(Event)
        .filter(Event.status == STATUS_PUBLISHED, Event.start_date_time > now)
        .order_by(Event.start_date_time.asc(), Event.id.asc())
    )


def search_events(db: Session, keyword: str) -> Query:
    """Case-insensitive match on title, description or location."""
    pattern = f"%{keyword.strip()}%"
    return (
        db.query(Event)
        .filter(
            or_(
                Event.title.ilike(pattern),
                Event.description.ilike(pattern),
                Event.location.ilike(pattern),
            )
        )
        .order_by(Event.start_date_time.asc(), Event.id.asc())
    )


def get_event(db: Session, event_id: int) -> Event:
    event = db.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event", event_id)
    return event


def events_by_organizer(db: Session, organizer_id: int) -> list[Event]:
    return (
        db.query(Event)
        .filter(Event.organizer_id == organizer_id)
        .order_by(Event.start_date_time.asc(), Event.id.asc())
        .all()
    )


def _resolve_category(db: Session, category_id: int | None) -> Category | None:
    if category_id is None:
        return None
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


def _as_utc(value: datetime) -> datetime:
    """Naive datetimes from clients are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _apply_fields(db: Session, event: Event, body: EventWrite) -> None:
    start = _as_utc(body.start_date_time)
    end = _as_utc(body.end_date_time)
    if end < start:
        raise InvalidRequestError("Event end must not be before its start")
    event.title = body.title
    event.description = body.description
    event.start_date_time = start
    event.end_date_time = end
    event.location = body.location
    event.max_attendees = body.max_attendees
    event.ticket_price = body.ticket_price
    event.image_url = body.image_url
    event.category = _resolve_category(db, body.category_id)


def _save(db: Session, event: Event) -> Event:
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def create_event(db: Session, body: EventWrite, organizer: User) -> Event:
    """Admin-authored event; published unless an explicit later status is given."""
    event = Event(organizer=organizer)
    _apply_fields(db, event, body)
    event.status = STATUS_PUBLISHED if body.status in UNMODERATED_STATUSES else body.status
    _save(db, event)
    logger.info(
        "Event created",
        extra={"event_id": event.id, "organizer_id": organizer.id, "status": event.status},
    )
    return event


def submit_event(db: Session, body: EventWrite, organizer: User) -> Event:
    """Member-submitted event; always enters moderation as PENDING."""
    event = Event(organizer=organizer)
    _apply_fields(db, event, body)
    event.status = STATUS_PENDING
    _save(db, event)
    logger.info(
        "Event submitted for review",
        extra={"event_id": event.id, "organizer_id": organizer.id},
    )
    return event


def update_event(db: Session, event_id: int, body: EventWrite) -> Event:
    event = get_event(db, event_id)
    _apply_fields(db, event, body)
    if body.status is not None:
        event.status = body.status
    return _save(db, event)


def delete_event(db: Session, event_id: int) -> None:
    """Delete an event together with its bookings."""
    event = get_event(db, event_id)
    db.delete(event)
    db.commit()
    logger.info("Event deleted", extra={"event_id": event_id})


def _moderate(db: Session, event_id: int, status: EventStatus) -> Event:
    event = get_event(db, event_id)
    previous = event.status
    event.status = status
    _save(db, event)
    logger.info(
        "Event moderated",
        extra={"event_id": event_id, "from_status": previous, "to_status": status},
    )
    return event


def approve_event(db: Session, event_id: int) -> Event:
    return _moderate(db, event_id, STATUS_PUBLISHED)


def reject_event(db: Session, event_id: int) -> Event:
    return _moderate(db, event_id, STATUS_REJECTED)
