"""Scope binding: map a scope to the store handle it reads from."""

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from envscope.stores import PersistedStore
from envscope.types import Scope


logger = logging.getLogger(__name__)

StoreFactory = Callable[[Scope], PersistedStore]


@contextmanager
def bind_scope(scope: Scope, store_factory: StoreFactory) -> Iterator[Optional[PersistedStore]]:
    """
    Bind a scope for the duration of one resolution.

    Yields None for the process scope, which is read from the live
    environment. Persisted stores are closed exactly once on exit,
    whether the body returns or raises.
    """
    if scope == Scope.PROCESS:
        logger.debug("Bound process scope")
        yield None
        return

    store = store_factory(scope)
    logger.debug(f"Bound {scope.value} scope to {store.location}")
    try:
        yield store
    finally:
        store.close()
