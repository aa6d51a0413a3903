"""Bounded comparison set and the side-by-side table built from it."""

from __future__ import annotations

import os
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from ..errors import NotFound
from ..models.comparison import DUPLICATE, LIMIT_REACHED, AddResult, ComparisonRow
from ..models.listing import Listing
from ..utils.logging import get_logger

LOGGER = get_logger("services.comparison")

MAX_COMPARED = 3
MAX_SESSIONS = int(os.getenv("COMPARISON_MAX_SESSIONS", "256"))


class ComparisonSet:
    """Ordered, duplicate-free selection of at most ``MAX_COMPARED`` listing ids."""

    def __init__(self, limit: int = MAX_COMPARED) -> None:
        self.limit = limit
        self._ids: List[int] = []
        self._members: set[int] = set()

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    @property
    def is_full(self) -> bool:
        return len(self._ids) >= self.limit

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, listing_id: object) -> bool:
        return listing_id in self._members

    def add(self, listing_id: int) -> AddResult:
        if listing_id in self._members:
            return AddResult(accepted=False, reason=DUPLICATE)
        if self.is_full:
            return AddResult(accepted=False, reason=LIMIT_REACHED)
        self._ids.append(listing_id)
        self._members.add(listing_id)
        return AddResult(accepted=True)

    def remove(self, listing_id: int) -> None:
        if listing_id in self._members:
            self._members.discard(listing_id)
            self._ids.remove(listing_id)

    def clear(self) -> None:
        self._ids.clear()
        self._members.clear()

    def to_listings(self, all_listings: Iterable[Listing]) -> List[Listing]:
        """Resolve ids in selection order; ids without a listing are dropped."""
        by_id = {listing.id: listing for listing in all_listings}
        return [by_id[listing_id] for listing_id in self._ids if listing_id in by_id]

    def suggest_next(self, all_listings: Iterable[Listing]) -> Optional[Listing]:
        if self.is_full:
            return None
        for listing in all_listings:
            if listing.id not in self._members:
                return listing
        return None


# ----------------------------------------------------------------------
# Table formatting


def format_price(value: float) -> str:
    return f"${value:,.0f}"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


@dataclass(frozen=True)
class Attribute:
    key: str
    label: str
    format: Callable[[object], str] = str
    suffix: str = ""


COMPARISON_ATTRIBUTES = [
    Attribute("price", "Price", format_price),
    Attribute("bedrooms", "Bedrooms", _format_number, " beds"),
    Attribute("bathrooms", "Bathrooms", _format_number, " baths"),
    Attribute("square_feet", "Square Feet", _format_number, " sqft"),
    Attribute("year_built", "Year Built"),
    Attribute("property_type", "Property Type"),
    Attribute("lot_size", "Lot Size", _format_number, " sqft"),
]


def comparison_table(listings: List[Listing]) -> List[ComparisonRow]:
    rows: List[ComparisonRow] = []
    for attribute in COMPARISON_ATTRIBUTES:
        values = []
        for listing in listings:
            value = getattr(listing, attribute.key)
            values.append(f"{attribute.format(value)}{attribute.suffix}")
        rows.append(ComparisonRow(key=attribute.key, label=attribute.label, values=values))
    return rows


# ----------------------------------------------------------------------
# Sessions


class ComparisonSessions:
    """Independent comparison sets keyed by an opaque session id.

    Sessions live in memory only and are not synchronised with each other.
    At most ``max_sessions`` are kept; creating one more evicts the session
    that was least recently used.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        self.max_sessions = max(1, max_sessions)
        self._sessions: OrderedDict[str, ComparisonSet] = OrderedDict()

    def create(self) -> str:
        while len(self._sessions) >= self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            LOGGER.info("comparison_session_evicted id=%s", evicted)
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = ComparisonSet()
        LOGGER.debug("comparison_session_created id=%s", session_id)
        return session_id

    def get(self, session_id: str) -> ComparisonSet:
        comparison = self._sessions.get(session_id)
        if comparison is None:
            raise NotFound(f"Comparison session not found: {session_id}")
        self._sessions.move_to_end(session_id)
        return comparison

    def close(self, session_id: str) -> None:
        comparison = self.get(session_id)
        comparison.clear()
        del self._sessions[session_id]
        LOGGER.debug("comparison_session_closed id=%s", session_id)

    def __len__(self) -> int:
        return len(self._sessions)


_sessions_singleton: Optional[ComparisonSessions] = None


def get_sessions() -> ComparisonSessions:
    global _sessions_singleton
    if _sessions_singleton is None:
        _sessions_singleton = ComparisonSessions()
    return _sessions_singleton


def reset_sessions() -> None:
    global _sessions_singleton
    _sessions_singleton = None
