"""Static JSON dataset backing the listing catalog."""

from __future__ import annotations

import os
from typing import Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from ..errors import NotFound, StoreUnavailable
from ..models.listing import Listing
from ..utils.io import load_json
from ..utils.logging import get_logger
from .mappers import map_listing_row

LOGGER = get_logger("db.dataset")

LISTINGS_FILE = "properties.json"

NUMERIC_COLUMNS = ["price", "bedrooms", "bathrooms", "squareFeet", "lotSize", "yearBuilt"]


def listings_file() -> str:
    return os.getenv("LISTINGS_FILE", LISTINGS_FILE)


class ListingDataset:
    """Listings parsed and validated from the static dataset, in file order."""

    def __init__(self, filename: Optional[str] = None) -> None:
        self.filename = filename or listings_file()
        frame = self._load(self.filename)
        self._prepare(frame)
        self._listings = self._build(frame)
        self._lookup: Dict[int, Listing] = {listing.id: listing for listing in self._listings}
        LOGGER.info("dataset_loaded file=%s listings=%d", self.filename, len(self._listings))

    def all(self) -> List[Listing]:
        return list(self._listings)

    def get(self, listing_id: int) -> Listing:
        listing = self._lookup.get(listing_id)
        if listing is None:
            raise NotFound(f"Property not found: {listing_id}")
        return listing

    def __len__(self) -> int:
        return len(self._listings)

    @staticmethod
    def _load(filename: str) -> pd.DataFrame:
        try:
            return load_json(filename)
        except FileNotFoundError as exc:
            raise StoreUnavailable(f"Listing dataset not found: {filename}") from exc
        except ValueError as exc:
            raise StoreUnavailable(f"Listing dataset is not valid JSON: {filename}") from exc

    @staticmethod
    def _prepare(df: pd.DataFrame) -> None:
        if "Id" not in df.columns and "id" in df.columns:
            df["Id"] = df["id"]
        for column in NUMERIC_COLUMNS:
            if column in df.columns:
                df[column] = pd.to_numeric(df[column], errors="coerce")

    @staticmethod
    def _build(df: pd.DataFrame) -> List[Listing]:
        df = df.astype(object).where(pd.notnull(df), None)
        listings: List[Listing] = []
        seen: set[int] = set()
        for row in df.to_dict("records"):
            try:
                listing = Listing(**map_listing_row(row))
            except ValidationError as exc:
                raise StoreUnavailable(f"Malformed listing record: {row.get('Id')!r}") from exc
            if listing.id in seen:
                raise StoreUnavailable(f"Duplicate listing id in dataset: {listing.id}")
            seen.add(listing.id)
            listings.append(listing)
        return listings


__all__ = ["ListingDataset", "listings_file"]
