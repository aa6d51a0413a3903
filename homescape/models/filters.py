"""Typed search and filter criteria for the listing catalog."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FilterCriteria(BaseModel):
    """Active constraints for the catalog view.

    ``None`` disables a dimension. Zero is a real threshold, not "unset".
    An empty ``property_types`` list places no constraint on the type, and a
    ``search_query`` that is blank after trimming is ignored.
    """

    model_config = ConfigDict(frozen=True)

    search_query: Optional[str] = None
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    property_types: List[str] = Field(default_factory=list)

    @property
    def normalized_query(self) -> Optional[str]:
        if self.search_query is None:
            return None
        query = self.search_query.strip().lower()
        return query or None
