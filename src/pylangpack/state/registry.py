"""Namespaced key-value registries.

Values must be JSON-serializable. Writes are last-write-wins; the JSON file
backend serializes writes across threads and processes and replaces the
file atomically.
"""

from __future__ import annotations

import contextlib
import copy
import fcntl
import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Protocol

from pylangpack.exceptions import LanguagePackStateError

_logger = logging.getLogger(__name__)


class Registry(Protocol):
    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        ...

    def set(self, namespace: str, key: str, value: Any) -> None:
        ...


class MemoryRegistry:
    """In-memory registry for tests and one-shot runs."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None) -> None:
        self._data: dict[str, dict[str, Any]] = copy.deepcopy(initial) if initial else {}
        self._lock = threading.Lock()

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        with self._lock:
            return copy.deepcopy(self._data.get(namespace, {}).get(key, default))

    def set(self, namespace: str, key: str, value: Any) -> None:
        with self._lock:
            self._data.setdefault(namespace, {})[key] = copy.deepcopy(value)

    def snapshot(self) -> dict[str, dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._data)


_PATH_LOCKS: dict[Path, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _path_lock(path: Path) -> threading.Lock:
    """Process-wide lock shared by every registry bound to *path*."""
    key = path.resolve()
    with _PATH_LOCKS_GUARD:
        lock = _PATH_LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _PATH_LOCKS[key] = lock
        return lock


class JsonFileRegistry:
    """Registry persisted as a single JSON document.

    The document has the shape ``{namespace: {key: value}}``. The file is
    re-read on every access so that separate processes observe each other's
    writes. Each read-modify-write of ``set`` holds a lock shared by all
    registries on the same path in this process and an exclusive ``flock``
    on a ``.lock`` file next to the document, so concurrent writers of
    distinct keys never drop each other's updates.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = _path_lock(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def lock_path(self) -> Path:
        return self._path.with_name(f"{self._path.name}.lock")

    @contextlib.contextmanager
    def _exclusive(self) -> Iterator[None]:
        with self._lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                handle = open(self.lock_path, "a+b")  # noqa: SIM115
            except OSError as exc:
                raise LanguagePackStateError(f"Could not lock registry {self._path}: {exc}") from exc
            with handle:
                fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
                try:
                    yield
                finally:
                    fcntl.flock(handle.fileno(), fcntl.LOCK_UN)

    def _load(self) -> dict[str, dict[str, Any]]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise LanguagePackStateError(f"Could not read registry {self._path}: {exc}") from exc
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LanguagePackStateError(f"Registry {self._path} is not valid JSON") from exc
        if not isinstance(data, dict):
            raise LanguagePackStateError(f"Registry {self._path} must contain a JSON object")
        return data

    def _dump(self, data: dict[str, dict[str, Any]]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, namespace: str, key: str, default: Any = None) -> Any:
        with self._lock:
            section = self._load().get(namespace)
        if not isinstance(section, dict):
            return default
        return section.get(key, default)

    def set(self, namespace: str, key: str, value: Any) -> None:
        with self._exclusive():
            data = self._load()
            section = data.get(namespace)
            if not isinstance(section, dict):
                section = {}
                data[namespace] = section
            section[key] = value
            try:
                self._dump(data)
            except OSError as exc:
                raise LanguagePackStateError(f"Could not write registry {self._path}: {exc}") from exc
        _logger.debug("Registry %s: %s/%s updated", self._path, namespace, key)
