"""Key/value storage backends for saved game state.

Values are JSON-compatible. Writes are synchronous, so a read always
sees the previous write to the same key.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Protocol

from geocache.errors import SnapshotError, StorageError

logger = logging.getLogger(__name__)


class Storage(Protocol):
    """Durable string-keyed store of JSON values."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...

    def set_many(self, values: Mapping[str, Any]) -> None: ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...


class MemoryStorage:
    """In-process storage. Values are kept as JSON text, like a browser's localStorage."""

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def set_many(self, values: Mapping[str, Any]) -> None:
        encoded = {k: json.dumps(v) for k, v in values.items()}
        self._data.update(encoded)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileStorage:
    """All keys in one JSON document, rewritten atomically on every write."""

    __slots__ = ("_path", "_data")

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        if not self._path.exists():
            self._data = {}
            return self._data
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self._path}: {exc}") from exc
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Save file {self._path} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise SnapshotError(f"Save file {self._path} does not hold an object")
        self._data = data
        return self._data

    def _flush(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp, self._path)
        except OSError as exc:
            Path(tmp).unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self._path}: {exc}") from exc
        self._data = data
        logger.debug("Saved %d keys to %s", len(data), self._path)

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> None:
        data = dict(self._load())
        data.update(values)
        self._flush(data)

    def delete(self, key: str) -> None:
        data = dict(self._load())
        if data.pop(key, None) is not None:
            self._flush(data)

    def clear(self) -> None:
        self._flush({})
