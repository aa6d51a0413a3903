"""Read-only listing repository shared by the services and the API."""

from __future__ import annotations

from typing import List, Optional

from ..models.filters import FilterCriteria
from ..models.listing import Listing
from ..services import filter_engine
from ..utils.logging import get_logger
from .dataset import ListingDataset

LOGGER = get_logger("db.repo")


class Repo:
    def __init__(self, filename: Optional[str] = None) -> None:
        self._dataset = ListingDataset(filename)

    # ------------------------------------------------------------------
    # Listings
    def list_listings(self) -> List[Listing]:
        return self._dataset.all()

    def get_listing(self, listing_id: int) -> Listing:
        return self._dataset.get(listing_id)

    def filter_listings(self, criteria: FilterCriteria) -> List[Listing]:
        return filter_engine.apply(self._dataset.all(), criteria)

    def property_types(self) -> List[str]:
        seen: List[str] = []
        for listing in self._dataset.all():
            if listing.property_type not in seen:
                seen.append(listing.property_type)
        return seen

    @property
    def filename(self) -> str:
        return self._dataset.filename


_repo_singleton: Repo | None = None


def get_repository() -> Repo:
    """Return the process-wide repository, loading the dataset on first use.

    A failed load is not cached, so the next call retries.
    """
    global _repo_singleton
    if _repo_singleton is None:
        _repo_singleton = Repo()
        LOGGER.info("repository_ready file=%s", _repo_singleton.filename)
    return _repo_singleton


def reset_repository() -> None:
    global _repo_singleton
    _repo_singleton = None
