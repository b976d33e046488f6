"""
Persisted store interface.

A store is a read-only key/value view bound to one scope. The resolver only
needs names(), read() and close(); lookup() and entries() build on them.
"""

import logging
from typing import Any, Iterator, List, Tuple

from envscope.exceptions import StoreKeyAbsent
from envscope.types import ValueKind, VariableEntry


logger = logging.getLogger(__name__)

DEFAULT_ENTRY_NAME = "(Default)"


def to_text(value: Any) -> str:
    """Render a stored value as text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return "\n".join(to_text(item) for item in value)
    return str(value)


class PersistedStore:
    """Base class for user/machine stores."""

    def __init__(self, location: str):
        self.location = location
        self.closed = False

    def names(self) -> List[str]:
        """Return all entry names; '' is the nameless default entry."""
        raise NotImplementedError

    def read(self, name: str) -> Tuple[Any, ValueKind]:
        """
        Read one entry.

        Returns:
            Tuple of (stored value, declared kind)

        Raises:
            StoreKeyAbsent: If the entry does not exist
        """
        raise NotImplementedError

    def _release(self):
        """Release backend resources."""

    def close(self):
        if self.closed:
            return
        self.closed = True
        logger.debug(f"Closing store: {self.location}")
        self._release()

    def lookup(self, name: str) -> VariableEntry:
        """
        Fetch a named entry; an absent entry yields no kind and an empty value.
        """
        try:
            value, kind = self.read(name)
        except StoreKeyAbsent:
            logger.debug(f"Entry '{name}' absent from {self.location}")
            return VariableEntry(name=name, kind=None, raw_value="")
        return VariableEntry(name=name, kind=kind, raw_value=to_text(value))

    def entries(self) -> Iterator[VariableEntry]:
        """Yield every entry in store order, skipping entries that vanish mid-read."""
        for name in self.names():
            try:
                value, kind = self.read(name)
            except StoreKeyAbsent:
                continue
            yield VariableEntry(
                name=name if name else DEFAULT_ENTRY_NAME,
                kind=kind,
                raw_value=to_text(value),
            )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<{type(self).__name__} {self.location!r} ({state})>"


class EmptyStore(PersistedStore):
    """Stand-in for a store whose key or file does not exist."""

    def names(self) -> List[str]:
        return []

    def read(self, name: str) -> Tuple[Any, ValueKind]:
        raise StoreKeyAbsent(name)
