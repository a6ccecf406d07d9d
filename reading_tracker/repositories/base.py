"""Shared read/write plumbing for repositories storing one JSON document per key."""
import json
import logging
from typing import Any, Optional

from reading_tracker.storage import KeyValueStore
from reading_tracker.utils.exceptions import StorageError

logger = logging.getLogger(__name__)

_MISSING = object()


class JsonDocumentRepository:
    """Reads and overwrites a single JSON document in a key-value store.

    Storage failures and malformed JSON never propagate: reads return
    ``_MISSING`` and writes are dropped, with the condition logged.
    """

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    def _read(self) -> Any:
        try:
            data = self.store.get(self.key)
        except StorageError as e:
            logger.error(f"Failed to load {self.key}: {e}")
            return _MISSING
        if data is None:
            return _MISSING
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed JSON stored under {self.key}: {e}")
            return _MISSING

    def _write(self, payload: Any) -> bool:
        try:
            self.store.set(self.key, json.dumps(payload))
        except StorageError as e:
            logger.error(f"Failed to save {self.key}: {e}")
            return False
        return True

    @staticmethod
    def _is_missing(value: Optional[Any]) -> bool:
        return value is _MISSING
