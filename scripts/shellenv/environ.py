"""Accessors for the process-wide environment table.

Both loaders read and write the environment through an ``EnvironmentTable``
instead of touching ``os.environ`` directly, so callers (and tests) can hand
them an isolated ``MemoryEnvironment``.

Neither implementation is synchronized. The loaders do unguarded
read-modify-write on the table, so concurrent calls from several threads
need external locking.
"""

import os
from abc import ABC, abstractmethod
from typing import Dict, Mapping, MutableMapping, Optional


class EnvironmentTable(ABC):
    @abstractmethod
    def _store(self) -> MutableMapping[str, str]:
        raise NotImplementedError

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._store().get(key, default)

    def set(self, key: str, value: str) -> None:
        """Create or overwrite *key*; entries are never deleted."""
        self._store()[key] = value

    def snapshot(self) -> Dict[str, str]:
        """Return an independent copy of every (key, value) pair."""
        return dict(self._store())

    def __contains__(self, key: object) -> bool:
        return key in self._store()

    def __len__(self) -> int:
        return len(self._store())


class ProcessEnvironment(EnvironmentTable):
    """The real environment of this process (``os.environ``)."""

    def _store(self) -> MutableMapping[str, str]:
        return os.environ


class MemoryEnvironment(EnvironmentTable):
    """An isolated table, copied from *initial* and never shared."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None):
        self._vars: Dict[str, str] = dict(initial) if initial else {}

    def _store(self) -> MutableMapping[str, str]:
        return self._vars
