"""IO helpers for loading the static listing dataset into pandas DataFrames."""

from __future__ import annotations

import hashlib
import os
from functools import lru_cache
from typing import Optional

import pandas as pd

from .logging import get_logger

LOGGER = get_logger("utils.io")

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "data")


def data_dir() -> str:
    return os.getenv("DATA_DIR", DEFAULT_DATA_DIR)


def resolve_path(name: str) -> str:
    return name if os.path.isabs(name) else os.path.join(data_dir(), name)


@lru_cache(maxsize=16)
def _read_json(path: str, mtime: float) -> pd.DataFrame:
    LOGGER.debug("loading_json path=%s", path)
    # dtype/convert_dates off: zip codes must stay text
    return pd.read_json(path, orient="records", dtype=False, convert_dates=False)


def load_json(name: str) -> pd.DataFrame:
    """Load a JSON array of records by filename from the data directory.

    Returns a fresh copy on every call; the parsed frame is cached per file
    modification time.
    """

    path = resolve_path(name)
    if not os.path.exists(path):
        raise FileNotFoundError(f"JSON not found: {path}")
    return _read_json(path, os.path.getmtime(path)).copy()


def file_sha256(name: str) -> Optional[str]:
    """Compute a sha256 hash of a data file for provenance reporting."""

    path = resolve_path(name)
    if not os.path.exists(path):
        return None
    h = hashlib.sha256()
    with open(path, "rb") as infile:
        for chunk in iter(lambda: infile.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


__all__ = ["load_json", "file_sha256", "data_dir", "resolve_path"]
