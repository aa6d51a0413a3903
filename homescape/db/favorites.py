"""Favorites store persisted as a JSON array under a single storage key.

Each public operation performs one read-modify-write of the stored array while
holding the store's lock, so callers sharing a store never observe or produce
a partial write, and two concurrent ``create`` calls for the same listing
still leave a single record behind.
"""

from __future__ import annotations

import asyncio
import json
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from ..errors import NotFound, StoreUnavailable
from ..models.favorite import Favorite, FavoriteCreate, FavoritesChange
from ..utils.logging import get_logger
from .storage import KeyValueStore, get_store

LOGGER = get_logger("db.favorites")

STORAGE_KEY = "homescape_favorites"

Subscriber = Callable[[FavoritesChange], None]

_FAVORITES = TypeAdapter(List[Favorite])


class FavoritesStore:
    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self.storage = storage
        self.key = key
        self._lock = asyncio.Lock()
        self._subscribers: List[Subscriber] = []

    # ------------------------------------------------------------------
    # Reads
    async def get_all(self) -> List[Favorite]:
        async with self._lock:
            return self._read()

    async def get_by_id(self, property_id: int) -> Favorite:
        async with self._lock:
            for favorite in self._read():
                if favorite.property_id == property_id:
                    return favorite
        raise NotFound(f"Favorite not found: {property_id}")

    async def count(self) -> int:
        async with self._lock:
            return len(self._read())

    # ------------------------------------------------------------------
    # Writes
    async def create(self, favorite: FavoriteCreate) -> Favorite:
        async with self._lock:
            favorites = self._read()
            for existing in favorites:
                if existing.property_id == favorite.property_id:
                    return existing
            next_id = max((f.id for f in favorites), default=0) + 1
            created = Favorite(id=next_id, property_id=favorite.property_id, saved_date=favorite.saved_date)
            favorites.append(created)
            self._write(favorites)
            change = FavoritesChange(action="created", property_id=created.property_id, count=len(favorites))
        LOGGER.info("favorite_created property_id=%s id=%s", created.property_id, created.id)
        self._notify(change)
        return created

    async def delete(self, property_id: int) -> bool:
        async with self._lock:
            favorites = self._read()
            remaining = [f for f in favorites if f.property_id != property_id]
            self._write(remaining)
            change = FavoritesChange(action="deleted", property_id=property_id, count=len(remaining))
        LOGGER.info("favorite_deleted property_id=%s removed=%d", property_id, len(favorites) - len(remaining))
        self._notify(change)
        return True

    async def clear(self) -> bool:
        async with self._lock:
            self.storage.remove(self.key)
            change = FavoritesChange(action="cleared", count=0)
        LOGGER.info("favorites_cleared")
        self._notify(change)
        return True

    # ------------------------------------------------------------------
    # Change notifications
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for every successful mutation.

        Returns a function that removes the subscription again.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, change: FavoritesChange) -> None:
        for callback in list(self._subscribers):
            try:
                callback(change)
            except Exception:
                LOGGER.exception("favorites_subscriber_failed action=%s", change.action)

    # ------------------------------------------------------------------
    def _read(self) -> List[Favorite]:
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            return _FAVORITES.validate_json(raw)
        except ValidationError as exc:
            raise StoreUnavailable(f"Stored favorites are unreadable: {self.key}") from exc

    def _write(self, favorites: List[Favorite]) -> None:
        payload = [favorite.model_dump(mode="json") for favorite in favorites]
        self.storage.set(self.key, json.dumps(payload))


_favorites_singleton: Optional[FavoritesStore] = None


def get_favorites_store() -> FavoritesStore:
    global _favorites_singleton
    if _favorites_singleton is None:
        _favorites_singleton = FavoritesStore(get_store())
    return _favorites_singleton


def reset_favorites_store() -> None:
    global _favorites_singleton
    _favorites_singleton = None
