"""Event routes: public listings, member submissions and admin moderation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.routes.auth import require
from app.core.database import get_db
from app.schemas.auth import Principal
from app.schemas.common import MessageResponse, Page
from app.schemas.event import EventRead, EventWrite
from app.services import events as event_service
from app.services.pagination import apply_sort, paginate
from app.services.principal import load_user

router = APIRouter()

PageParam = Annotated[int, Query(ge=0)]
SizeParam = Annotated[int, Query(ge=1, le=100)]
SortDirParam = Annotated[str, Query(alias="sortDir", description="asc or desc")]


@router.get("", response_model=Page[EventRead])
def list_events(
    db: Annotated[Session, Depends(get_db)],
    page: PageParam = 0,
    size: SizeParam = 10,
    sort_by: Annotated[str, Query(alias="sortBy")] = "startDateTime",
    sort_dir: SortDirParam = "asc",
) -> Page[EventRead]:
    """All events, any status, sorted by sortBy/sortDir."""
    query = apply_sort(event_service.all_events(db), event_service.SORTABLE_COLUMNS, sort_by, sort_dir)
    return paginate(query, page, size, EventRead)


@router.get("/upcoming", response_model=Page[EventRead])
def list_upcoming_events(
    db: Annotated[Session, Depends(get_db)],
    page: PageParam = 0,
    size: SizeParam = 10,
) -> Page[EventRead]:
    """Published events that have not started yet, soonest first."""
    return paginate(event_service.upcoming_events(db), page, size, EventRead)


@router.get(
    "/pending",
    response_model=Page[EventRead],
    dependencies=[Depends(require("events:pending"))],
)
def list_pending_events(
    db: Annotated[Session, Depends(get_db)],
    page: PageParam = 0,
    size: SizeParam = 10,
    sort_by: Annotated[str, Query(alias="sortBy")] = "createdAt",
    sort_dir: SortDirParam = "desc",
) -> Page[EventRead]:
    """Moderation queue: events awaiting approval."""
    query = apply_sort(
        event_service.events_with_status(db, event_service.STATUS_PENDING),
        event_service.SORTABLE_COLUMNS,
        sort_by,
        sort_dir,
    )
    return paginate(query, page, size, EventRead)


@router.get("/search", response_model=Page[EventRead])
def search_events(
    db: Annotated[Session, Depends(get_db)],
    keyword: Annotated[str, Query(min_length=1, max_length=200)],
    page: PageParam = 0,
    size: SizeParam = 10,
) -> Page[EventRead]:
    return paginate(event_service.search_events(db, keyword), page, size, EventRead)


@router.get("/my-events", response_model=list[EventRead])
def list_my_events(
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(require("events:mine"))],
) -> list[EventRead]:
    """Events organized by the caller, in any status."""
    return [EventRead.model_validate(e) for e in event_service.events_by_organizer(db, principal.id)]


@router.post("/submit", response_model=EventRead)
def submit_event(
    body: EventWrite,
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(require("events:submit"))],
) -> EventRead:
    """Submit an event for admin review. It is stored as PENDING."""
    event = event_service.submit_event(db, body, load_user(db, principal))
    return EventRead.model_validate(event)


@router.get("/{event_id}", response_model=EventRead)
def get_event(event_id: int, db: Annotated[Session, Depends(get_db)]) -> EventRead:
    return EventRead.model_validate(event_service.get_event(db, event_id))


@router.post("", response_model=EventRead)
def create_event(
    body: EventWrite,
    db: Annotated[Session, Depends(get_db)],
    principal: Annotated[Principal, Depends(require("events:create"))],
) -> EventRead:
    """Create an event as admin. DRAFT, PENDING or missing status becomes PUBLISHED."""
    event = event_service.create_event(db, body, load_user(db, principal))
    return EventRead.model_validate(event)


@router.put(
    "/{event_id}",
    response_model=EventRead,
    dependencies=[Depends(require("events:update"))],
)
def update_event(
    event_id: int,
    body: EventWrite,
    db: Annotated[Session, Depends(get_db)],
) -> EventRead:
    return EventRead.model_validate(event_service.update_event(db, event_id, body))


@router.delete(
    "/{event_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require("events:delete"))],
)
def delete_event(event_id: int, db: Annotated[Session, Depends(get_db)]) -> MessageResponse:
    event_service.delete_event(db, event_id)
    return MessageResponse(message="Event deleted")


@router.put(
    "/{event_id}/approve",
    response_model=EventRead,
    dependencies=[Depends(require("events:approve"))],
)
def approve_event(event_id: int, db: Annotated[Session, Depends(get_db)]) -> EventRead:
    return EventRead.model_validate(event_service.approve_event(db, event_id))


@router.put(
    "/{event_id}/reject",
    response_model=EventRead,
    dependencies=[Depends(require("events:reject"))],
)
def reject_event(event_id: int, db: Annotated[Session, Depends(get_db)]) -> EventRead:
    return EventRead.model_validate(event_service.reject_event(db, event_id))
