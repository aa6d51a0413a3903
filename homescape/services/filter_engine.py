"""In-memory listing filter used by the catalog view.

Every active dimension of a :class:`FilterCriteria` is a predicate; a listing
is kept only when it satisfies all of them. The result keeps the input order
and neither the input sequence nor its listings are modified.
"""

from __future__ import annotations

from typing import Iterable, List

from ..models.filters import FilterCriteria
from ..models.listing import Listing

TEXT_FIELDS = ("title", "address", "city", "state")


def _matches_query(listing: Listing, query: str) -> bool:
    for field in TEXT_FIELDS:
        if query in getattr(listing, field).lower():
            return True
    # zip codes are digits, compare without case folding
    return query in listing.zip_code


def matches(listing: Listing, criteria: FilterCriteria) -> bool:
    query = criteria.normalized_query
    if query is not None and not _matches_query(listing, query):
        return False
    if criteria.price_min is not None and listing.price < criteria.price_min:
        return False
    if criteria.price_max is not None and listing.price > criteria.price_max:
        return False
    if criteria.bedrooms is not None and listing.bedrooms < criteria.bedrooms:
        return False
    if criteria.bathrooms is not None and listing.bathrooms < criteria.bathrooms:
        return False
    if criteria.property_types and listing.property_type not in criteria.property_types:
        return False
    return True


def apply(listings: Iterable[Listing], criteria: FilterCriteria) -> List[Listing]:
    return [listing for listing in listings if matches(listing, criteria)]


__all__ = ["apply", "matches", "TEXT_FIELDS"]
