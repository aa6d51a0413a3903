"""Pydantic models representing listing domain objects."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., gt=0)
    title: str
    address: str
    city: str
    state: str
    zip_code: str
    price: float = Field(..., ge=0)
    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    square_feet: int = Field(..., ge=0)
    lot_size: int = Field(0, ge=0)
    year_built: int
    property_type: str
    status: str
    images: List[str] = Field(..., min_length=1)
    amenities: List[str] = Field(default_factory=list)
    description: str = ""
    listed_date: Optional[datetime] = None
    virtual_tour_url: Optional[str] = None


class ListingListResponse(BaseModel):
    items: List[Listing]
    total: int
