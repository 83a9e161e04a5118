"""Request/response schemas for categories."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import ApiModel


class CategoryWrite(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=2000)


class CategoryRead(ApiModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
