"""Pydantic schemas for saved listings."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Favorite(BaseModel):
    id: int
    property_id: int
    saved_date: datetime


class FavoriteCreate(BaseModel):
    property_id: int
    saved_date: datetime = Field(default_factory=_utcnow)


class FavoritesChange(BaseModel):
    action: Literal["created", "deleted", "cleared"]
    property_id: Optional[int] = None
    count: int


class FavoriteListResponse(BaseModel):
    items: List[Favorite]
    total: int
