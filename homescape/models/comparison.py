"""Pydantic schemas for side-by-side comparison responses."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from .listing import Listing

DUPLICATE = "duplicate"
LIMIT_REACHED = "limit reached"


class AddResult(BaseModel):
    accepted: bool
    reason: Optional[Literal["duplicate", "limit reached"]] = None


class ComparisonRow(BaseModel):
    key: str
    label: str
    values: List[str]


class ComparisonItemRequest(BaseModel):
    property_id: int


class ComparisonSessionResponse(BaseModel):
    session_id: str
    ids: List[int]
    items: List[Listing]
    table: List[ComparisonRow]
