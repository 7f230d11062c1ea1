from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from apps.common import get_logger

logger = get_logger(__name__).bind(component="storefront", layer="persistence")

CART_STORAGE_KEY = "cart-storage"
WISHLIST_STORAGE_KEY = "wishlist-storage"
STATE_VERSION = 0

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class Storage(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """One ``<key>.json`` file per key under ``directory``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        # Write then rename so readers never see a half-written file
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, path)
        except OSError:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass


def load_state(storage: Storage, key: str) -> Optional[Dict[str, Any]]:
    """
    Read the ``state`` part of a persisted ``{"state": ..., "version": 0}``
    record. Missing, unreadable or foreign-version records yield ``None``.
    """
    raw = storage.get_item(key)
    if raw is None:
        return None
    try:
        record = json.loads(raw)
    except ValueError:
        logger.warning("Discarding unreadable persisted state", key=key)
        return None
    if not isinstance(record, dict) or not isinstance(record.get("state"), dict):
        logger.warning("Discarding malformed persisted state", key=key)
        return None
    if record.get("version", STATE_VERSION) != STATE_VERSION:
        logger.info("Ignoring persisted state from another version", key=key, version=record.get("version"))
        return None
    return record["state"]


def save_state(storage: Storage, key: str, state: Dict[str, Any]) -> None:
    record = {"state": state, "version": STATE_VERSION}
    storage.set_item(key, json.dumps(record, ensure_ascii=False))
