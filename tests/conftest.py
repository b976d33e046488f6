"""Shared fixtures for envscope tests."""

from pathlib import Path
from typing import Any, Dict, List, Tuple

import pytest

from envscope.config import LIST_VALUED_NAMES, POSIX_LIST_VALUED_NAMES, ResolverConfig
from envscope.exceptions import StoreKeyAbsent
from envscope.stores import PersistedStore
from envscope.types import ValueKind


class MemoryStore(PersistedStore):
    """In-memory store that records how often it is released."""

    def __init__(self, entries: Dict[str, Tuple[Any, ValueKind]], location: str = "memory"):
        super().__init__(location)
        self._entries = dict(entries)
        self.release_count = 0
        self.reads: List[str] = []

    def names(self) -> List[str]:
        return list(self._entries)

    def read(self, name: str) -> Tuple[Any, ValueKind]:
        self.reads.append(name)
        if name not in self._entries:
            raise StoreKeyAbsent(name)
        return self._entries[name]

    def _release(self):
        self.release_count += 1


class FailingStore(MemoryStore):
    """Store whose reads fail with an OS error other than key absence."""

    def read(self, name: str) -> Tuple[Any, ValueKind]:
        raise PermissionError(13, "Access is denied", name)


def write_store(path: Path, content: str) -> Path:
    """Write a YAML store file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def posix_config(tmp_path):
    """File-backend config with ':' as the path-list separator."""
    return ResolverConfig(
        backend='file',
        user_store=tmp_path / 'user' / 'environment.yaml',
        machine_store=tmp_path / 'machine' / 'environment.yaml',
        path_separator=':',
        list_valued_names=POSIX_LIST_VALUED_NAMES,
    )


@pytest.fixture
def windows_config(tmp_path):
    """Config using the Windows separator and name set."""
    return ResolverConfig(
        backend='file',
        user_store=tmp_path / 'user' / 'environment.yaml',
        machine_store=tmp_path / 'machine' / 'environment.yaml',
        path_separator=';',
        list_valued_names=LIST_VALUED_NAMES,
    )
