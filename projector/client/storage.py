# File: projector/client/storage.py

"""
Key-value persistence for client components.

Values are serialized as JSON. A stored value that cannot be decoded is
treated as missing and ``get`` returns the caller's default.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Read/write contract shared by every store implementation."""

    @abstractmethod
    def _read_raw(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def _write_raw(self, key: str, raw: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...

    def get(self, key: str, default: Any = None) -> Any:
        raw = self._read_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring unreadable value stored under %r", key)
            return default

    def set(self, key: str, value: Any) -> None:
        self._write_raw(key, json.dumps(value))


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def _read_raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def _write_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk, mapping keys to their
    serialized values. The file is re-read on every access so two stores
    pointing at the same path see each other's writes.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Store file %s is unreadable; starting empty", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def _read_raw(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def _write_raw(self, key: str, raw: str) -> None:
        data = self._load()
        data[key] = raw
        self._save(data)

    def delete(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)
