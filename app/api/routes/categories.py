"""Category routes. Reads are public; writes require ADMIN."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.routes.auth import require
from app.core.database import get_db
from app.schemas.category import CategoryRead, CategoryWrite
from app.schemas.common import MessageResponse
from app.services import categories as category_service

router = APIRouter()


@router.get("", response_model=list[CategoryRead])
def list_categories(db: Annotated[Session, Depends(get_db)]) -> list[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in category_service.list_categories(db)]


@router.get("/{category_id}", response_model=CategoryRead)
def get_category(category_id: int, db: Annotated[Session, Depends(get_db)]) -> CategoryRead:
    return CategoryRead.model_validate(category_service.get_category(db, category_id))


@router.post(
    "",
    response_model=CategoryRead,
    dependencies=[Depends(require("categories:create"))],
)
def create_category(
    body: CategoryWrite,
    db: Annotated[Session, Depends(get_db)],
) -> CategoryRead:
    return CategoryRead.model_validate(category_service.create_category(db, body))


@router.put(
    "/{category_id}",
    response_model=CategoryRead,
    dependencies=[Depends(require("categories:update"))],
)
def update_category(
    category_id: int,
    body: CategoryWrite,
    db: Annotated[Session, Depends(get_db)],
) -> CategoryRead:
    return CategoryRead.model_validate(category_service.update_category(db, category_id, body))


@router.delete(
    "/{category_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require("categories:delete"))],
)
def delete_category(
    category_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    category_service.delete_category(db, category_id)
    return MessageResponse(message="Category deleted")
