"""Shared schema building blocks: camelCase base model, money type, pages, messages."""

from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# Money is kept as Decimal internally and written as a JSON number.
Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class ApiModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Plain message body, used for confirmations and every error response."""

    message: str


class Page(ApiModel, Generic[T]):
    """One page of a sorted listing."""

    content: list[T]
    total_elements: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    number: int = Field(..., ge=0, description="Zero-based page index")
    size: int = Field(..., ge=1)
