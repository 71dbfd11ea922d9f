# agent_dialogs/state/storage.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Storage interface and the in-process implementation."""

from abc import ABC, abstractmethod
import json
import logging
from typing import Any, Optional

from pydantic import BaseModel

from ..errors import Errors, StorageError, generate_exception

logger = logging.getLogger(__name__)

ETAG_KEY = "eTag"
ETAG_ANY = "*"

StoreItems = dict[str, dict[str, Any]]


def json_default(value: Any) -> Any:
    """JSON fallback: models are dumped, anything else is stringified."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    return str(value)


class Storage(ABC):
    """Key/value store for agent state.

    Items are JSON-compatible dicts. An item carrying an ``eTag`` is only
    written if it matches the stored item's eTag, unless the eTag is ``*``.
    """

    @abstractmethod
    async def read(self, keys: list[str]) -> StoreItems:
        """Read items by key. Missing keys are absent from the result.

        Raises:
            StorageError: If no keys are given.
        """
        raise NotImplementedError()

    @abstractmethod
    async def write(self, changes: StoreItems) -> None:
        """Write items by key.

        Raises:
            StorageError: If no changes are given or an eTag conflicts.
        """
        raise NotImplementedError()

    @abstractmethod
    async def delete(self, keys: list[str]) -> None:
        """Delete items by key. Missing keys are ignored."""
        raise NotImplementedError()


def require_keys(keys: Any, operation: str) -> None:
    if not keys:
        raise generate_exception(
            StorageError, Errors.STORAGE_KEYS_REQUIRED, params={"operation": operation}
        )


def should_write(key: str, new_item: dict[str, Any], old_item: Optional[dict[str, Any]]) -> bool:
    """Apply the optimistic concurrency rule for one key.

    Raises:
        StorageError: If the new item's eTag does not match the stored one.
    """
    new_etag = new_item.get(ETAG_KEY)
    if old_item is None or not new_etag or new_etag == ETAG_ANY:
        return True
    if new_etag == old_item.get(ETAG_KEY):
        return True
    raise generate_exception(StorageError, Errors.ETAG_CONFLICT, params={"key": key})


class MemoryStorage(Storage):
    """Process-local storage. Items are stored as JSON to isolate callers."""

    def __init__(self, memory: Optional[dict[str, str]] = None):
        self.memory: dict[str, str] = memory if memory is not None else {}
        self._etag = 1

    async def read(self, keys: list[str]) -> StoreItems:
        require_keys(keys, "reading")

        data: StoreItems = {}
        for key in keys:
            logger.debug(f"Reading key: {key}")
            item = self.memory.get(key)
            if item:
                data[key] = json.loads(item)
        return data

    async def write(self, changes: StoreItems) -> None:
        require_keys(changes, "writing")

        for key, new_item in changes.items():
            logger.debug(f"Writing key: {key}")
            old = self.memory.get(key)
            old_item = json.loads(old) if old else None
            if should_write(key, new_item, old_item):
                self._save_item(key, new_item)

    async def delete(self, keys: list[str]) -> None:
        logger.debug(f"Deleting keys: {', '.join(keys)}")
        for key in keys:
            self.memory.pop(key, None)

    def _save_item(self, key: str, item: dict[str, Any]) -> None:
        clone = {**item, ETAG_KEY: str(self._etag)}
        self._etag += 1
        self.memory[key] = json.dumps(clone, default=json_default)
