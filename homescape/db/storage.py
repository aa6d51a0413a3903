"""Key-value text storage used for favorites and contact submissions."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..errors import StoreUnavailable
from ..utils.io import data_dir
from ..utils.logging import get_logger

LOGGER = get_logger("db.storage")


def storage_dir() -> Path:
    return Path(os.getenv("STORAGE_DIR", os.path.join(data_dir(), ".storage")))


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """One file per key under ``base_dir``; writes replace the file atomically."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else storage_dir()

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            LOGGER.error("storage_read_failed key=%s error=%s", key, exc)
            raise StoreUnavailable(f"Cannot read storage key {key}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.base_dir, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp, path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as exc:
            LOGGER.error("storage_write_failed key=%s error=%s", key, exc)
            raise StoreUnavailable(f"Cannot write storage key {key}") from exc

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            LOGGER.error("storage_remove_failed key=%s error=%s", key, exc)
            raise StoreUnavailable(f"Cannot remove storage key {key}") from exc


_store_singleton: Optional[KeyValueStore] = None


def get_store() -> KeyValueStore:
    global _store_singleton
    if _store_singleton is None:
        _store_singleton = JsonFileStore()
        LOGGER.info("storage_ready dir=%s", storage_dir())
    return _store_singleton


def reset_store() -> None:
    global _store_singleton
    _store_singleton = None


__all__ = ["KeyValueStore", "MemoryStore", "JsonFileStore", "get_store", "reset_store", "storage_dir"]
