"""
Persisted store backends for the user and machine scopes.
"""

import logging

from envscope.config import ResolverConfig
from envscope.types import Scope
from .base import PersistedStore, EmptyStore, DEFAULT_ENTRY_NAME, to_text
from .file_store import FileStore
from .registry import RegistryStore


logger = logging.getLogger(__name__)


def open_store(scope: Scope, config: ResolverConfig) -> PersistedStore:
    """
    Open the persisted store for a scope using the configured backend.

    A missing key or file opens as an empty store; other failures propagate.
    """
    if scope == Scope.PROCESS:
        raise ValueError("The process scope has no persisted store")

    if config.backend == 'registry':
        try:
            return RegistryStore(scope)
        except FileNotFoundError:
            logger.debug(f"Registry key for scope '{scope.value}' not found")
            return EmptyStore(f"registry:{scope.value}")

    path = config.user_store if scope == Scope.USER else config.machine_store
    try:
        return FileStore(path)
    except FileNotFoundError:
        logger.debug(f"Store file for scope '{scope.value}' not found: {path}")
        return EmptyStore(str(path))


__all__ = [
    'PersistedStore',
    'EmptyStore',
    'FileStore',
    'RegistryStore',
    'DEFAULT_ENTRY_NAME',
    'open_store',
    'to_text',
]
