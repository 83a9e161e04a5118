"""Category CRUD."""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateCategoryError, NotFoundError
from app.models import Category, Event
from app.schemas.category import CategoryWrite

logger = logging.getLogger(__name__)


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


def _check_name_free(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Category.id).filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first() is not None:
        raise DuplicateCategoryError()


def create_category(db: Session, body: CategoryWrite) -> Category:
    _check_name_free(db, body.name)
    category = Category(name=body.name, description=body.description)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Category created", extra={"category_id": category.id})
    return category


def update_category(db: Session, category_id: int, body: CategoryWrite) -> Category:
    category = get_category(db, category_id)
    _check_name_free(db, body.name, exclude_id=category_id)
    category.name = body.name
    category.description = body.description
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Delete a category; its events stay, uncategorized."""
    category = get_category(db, category_id)
    db.query(Event).filter(Event.category_id == category_id).update(
        {Event.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()
    logger.info("Category deleted", extra={"category_id": category_id})
