"""Page/size slicing and whitelisted sorting for listing endpoints."""

import math
from typing import Any, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Query

from app.core.exceptions import InvalidRequestError
from app.schemas.common import Page

MAX_PAGE_SIZE = 100

ItemT = TypeVar("ItemT", bound=BaseModel)


def apply_sort(
    query: Query,
    sortable: dict[str, Any],
    sort_by: str,
    sort_dir: str,
) -> Query:
    """Order query by a whitelisted column; unknown fields are rejected."""
    column = sortable.get(sort_by)
    if column is None:
        raise InvalidRequestError(
            f"Cannot sort by '{sort_by}'. Allowed: {', '.join(sorted(sortable))}"
        )
    if sort_dir.lower() == "desc":
        return query.order_by(column.desc(), sortable["id"].desc())
    return query.order_by(column.asc(), sortable["id"].asc())


def paginate(query: Query, page: int, size: int, item_schema: type[ItemT]) -> Page[ItemT]:
    """
    Return one zero-based page of query, each row converted with item_schema.

    query must already be ordered so pages are stable.
    """
    if page < 0:
        raise InvalidRequestError("page must be >= 0")
    if size < 1 or size > MAX_PAGE_SIZE:
        raise InvalidRequestError(f"size must be between 1 and {MAX_PAGE_SIZE}")
    total = query.order_by(None).count()
    rows = query.offset(page * size).limit(size).all()
    return Page[item_schema](
        content=[item_schema.model_validate(row) for row in rows],
        total_elements=total,
        total_pages=math.ceil(total / size) if total else 0,
        number=page,
        size=size,
    )
