"""Pydantic schemas for the demo item API."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import Field


class ItemPath(BaseModel):
    """Route parameters addressing one item."""

    item_id: int = Field(ge=1)


class ItemCreate(BaseModel):
    """Payload to create an item."""

    name: str = Field(min_length=1, max_length=120)
    price: float = Field(ge=0)
    tags: list[str] = Field(default_factory=list)


class ItemSearch(BaseModel):
    """Query string filters for listing items."""

    max_price: float = Field(ge=0)


class Item(BaseModel):
    """Item response payload."""

    id: int
    name: str
    price: float
    tags: list[str] = Field(default_factory=list)


class ItemListResponse(BaseModel):
    """List response envelope for items."""

    items: list[Item]
