"""Durable key store: JSON values under namespaced string keys.

Backends hold raw text. KeyStore layers JSON on top and never raises for
storage problems: a missing, corrupt or unreachable value is reported as a
ReadResult status by ``load`` and replaced by the caller's default in
``read``. Writes that cannot be persisted return False and the caller keeps
its in-memory value.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from discipline.fileio import read_text, write_text_atomic
from discipline.workspace import store_dir

logger = logging.getLogger(__name__)

KEY_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z0-9_]+)+$")

FOUND = "found"
MISSING = "missing"
CORRUPT = "corrupt"
UNAVAILABLE = "unavailable"


class StorageUnavailable(Exception):
    """The backend is missing, disabled or failed an I/O operation."""


class CorruptValue(ValueError):
    """Stored text could not be decoded as JSON."""


def validate_key(key: str) -> str:
    """Return *key* if it is a dotted, module-prefixed key; raise otherwise."""
    if not isinstance(key, str) or not KEY_RE.match(key):
        raise ValueError(f"Invalid store key: {key!r} (expected '<prefix>.<name>')")
    return key


# ── Backends ──────────────────────────────────────────────────


class MemoryBackend:
    """Dict-backed backend. ``broken=True`` simulates disabled storage."""

    def __init__(self, data: dict[str, str] | None = None, broken: bool = False) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.broken = broken

    def _check(self) -> None:
        if self.broken:
            raise StorageUnavailable("memory backend disabled")

    def get_item(self, key: str) -> str | None:
        self._check()
        return self.data.get(key)

    def set_item(self, key: str, text: str) -> None:
        self._check()
        self.data[key] = text

    def keys(self) -> list[str]:
        self._check()
        return sorted(self.data)


class FileBackend:
    """One file per key under *directory*, written atomically."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        try:
            return read_text(self._path(key))
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailable(str(e)) from e

    def set_item(self, key: str, text: str) -> None:
        try:
            write_text_atomic(self._path(key), text, suffix=".json")
        except OSError as e:
            raise StorageUnavailable(str(e)) from e

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        try:
            return sorted(p.stem for p in self.directory.glob("*.json") if not p.name.startswith("."))
        except OSError as e:
            raise StorageUnavailable(str(e)) from e


# ── JSON layer ────────────────────────────────────────────────


@dataclass
class ReadResult:
    key: str
    status: str
    value: Any = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.status == FOUND


def _resolve_default(default: Any) -> Any:
    return default() if callable(default) else default


class KeyStore:
    """JSON get/set over a raw text backend, with corruption fallback."""

    def __init__(self, backend: Any) -> None:
        self.backend = backend

    def load(self, key: str) -> ReadResult:
        """Fetch and decode *key* without substituting any default."""
        validate_key(key)
        try:
            raw = self.backend.get_item(key)
        except StorageUnavailable as e:
            return ReadResult(key, UNAVAILABLE, error=str(e))
        if raw is None:
            return ReadResult(key, MISSING)
        try:
            return ReadResult(key, FOUND, value=_decode(raw))
        except CorruptValue as e:
            return ReadResult(key, CORRUPT, error=str(e))

    def read(self, key: str, default: Any | Callable[[], Any] = None) -> Any:
        """Decoded value of *key*, or *default* (called if callable) on any failure."""
        result = self.load(key)
        if result.ok:
            return result.value
        if result.status == MISSING:
            logger.debug("Key %s not set, using default", key)
        else:
            logger.warning("Key %s is %s (%s), using default", key, result.status, result.error)
        return _resolve_default(default)

    def write(self, key: str, value: Any) -> bool:
        """Encode and store *value*. Returns False if it could not be persisted."""
        validate_key(key)
        try:
            text = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.warning("Value for %s is not serializable: %s", key, e)
            return False
        try:
            self.backend.set_item(key, text)
        except StorageUnavailable as e:
            logger.warning("Could not persist %s: %s", key, e)
            return False
        return True

    def keys(self, prefix: str | None = None) -> list[str]:
        try:
            keys = self.backend.keys()
        except StorageUnavailable as e:
            logger.warning("Could not list keys: %s", e)
            return []
        if prefix:
            keys = [k for k in keys if k.startswith(prefix)]
        return keys

    def dump(self, prefix: str | None = None) -> dict[str, Any]:
        """All readable values, keyed by store key (corrupt keys are skipped)."""
        out: dict[str, Any] = {}
        for key in self.keys(prefix):
            if not KEY_RE.match(key):
                continue
            result = self.load(key)
            if result.ok:
                out[key] = result.value
        return out


def _decode(raw: str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise CorruptValue(str(e)) from e


def open_store(root: Path | None = None) -> KeyStore:
    """KeyStore over the workspace's file-backed store directory."""
    return KeyStore(FileBackend(store_dir(root)))
