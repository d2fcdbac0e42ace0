"""Durable key-value preference storage."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

import portalocker

from sitefx.logging import get_logger


class PreferenceStore(Protocol):
    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryPreferenceStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes += 1


class JsonPreferenceStore:
    """Preferences kept in one JSON object on disk.

    Writes hold an exclusive ``portalocker`` lock on a sidecar lock file.
    A missing or unreadable file behaves like an empty store.
    """

    def __init__(self, path: Path, timeout: float = 2.0) -> None:
        self.path = path
        self.lockfile = path.with_suffix(path.suffix + ".lock")
        self.timeout = timeout
        self.logger = get_logger("preferences")

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            self.logger.warning("Ignoring unreadable preferences at {}: {}", self.path, e)
            return {}
        if not isinstance(data, dict):
            self.logger.warning("Ignoring preferences at {}: not an object", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with portalocker.Lock(str(self.lockfile), timeout=self.timeout):
            data = self._load()
            data[key] = value
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp.replace(self.path)
        self.logger.debug("Stored preference {}={}", key, value)
