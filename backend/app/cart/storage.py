"""
Durable key/value storage for the shopping cart.

The cart store receives one of these as a capability instead of reaching for a
global, so tests can hand it an in-memory double.
"""

import os
import logging
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

CART_STORAGE_KEY = "cart"


class CartStorage(Protocol):
    """Minimal string key/value storage, shaped like browser localStorage."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage:
    """Ephemeral storage kept in a dictionary."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)


class JSONFileStorage:
    """Storage writing one `<key>.json` file per key inside a directory."""

    def __init__(self, directory: str):
        self.directory = directory
        os.makedirs(directory, exist_ok=True)

    def _path(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as fh:
            return fh.read()

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            fh.write(value)
        os.replace(tmp_path, path)
        logger.debug(f"Saved {key} to {path}")

    def remove_item(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass
