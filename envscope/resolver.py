"""
Environment variable resolution.

Binds a scope, enumerates it or looks up one name, and shapes the value
into either a raw string or a structured record.
"""

import logging
import os
from functools import partial
from typing import List, Mapping, Optional, Union

from envscope.binding import StoreFactory, bind_scope
from envscope.config import ResolverConfig
from envscope.exceptions import NotFoundOrEmpty, ParameterBindingError
from envscope.stores import PersistedStore, open_store
from envscope.types import (
    OutputRecord,
    RawRecord,
    ResolveRequest,
    Scope,
    StructuredRecord,
    VariableEntry,
)


logger = logging.getLogger(__name__)


class VariableResolver:
    """
    Resolves variables from the process, user or machine scope.

    Args:
        config: Resolver configuration (defaults to ResolverConfig.from_environ())
        environ: Live process environment (defaults to os.environ)
        store_factory: Opens the persisted store for a scope
    """

    def __init__(
        self,
        config: Optional[ResolverConfig] = None,
        environ: Optional[Mapping[str, str]] = None,
        store_factory: Optional[StoreFactory] = None
    ):
        self.config = config or ResolverConfig.from_environ()
        self.environ = os.environ if environ is None else environ
        self.store_factory = store_factory or partial(open_store, config=self.config)

    def resolve(self, request: ResolveRequest) -> List[OutputRecord]:
        """
        Resolve one request.

        The result is fully materialized so the store is closed before
        this returns.

        Raises:
            ParameterBindingError: If the request breaks parameter constraints
            NotFoundOrEmpty: If a named variable is missing or empty
        """
        errors = request.validate()
        if errors:
            raise ParameterBindingError(errors)

        logger.debug(
            f"Resolving name={request.name!r} scope={request.scope.value} "
            f"mode={request.output_mode.value}"
        )

        with bind_scope(request.scope, self.store_factory) as store:
            if request.is_enumeration:
                return self._enumerate(store)

            entry = self._lookup(request.name, store)
            if not entry.raw_value:
                raise NotFoundOrEmpty(request.name)

            return [self._shape(entry, request)]

    def _enumerate(self, store: Optional[PersistedStore]) -> List[OutputRecord]:
        """One undecomposed record per entry in the bound scope."""
        if store is None:
            return [StructuredRecord(name=name, value=value) for name, value in self.environ.items()]

        return [
            StructuredRecord(name=entry.name, value=entry.raw_value, kind=entry.kind)
            for entry in store.entries()
        ]

    def _lookup(self, name: str, store: Optional[PersistedStore]) -> VariableEntry:
        if store is None:
            return VariableEntry(name=name, kind=None, raw_value=self.environ.get(name) or "")
        return store.lookup(name)

    def _shape(self, entry: VariableEntry, request: ResolveRequest) -> OutputRecord:
        if request.raw:
            return RawRecord(entry.raw_value)

        delimiter = request.delimiter
        if entry.name in self.config.list_valued_names:
            delimiter = self.config.path_separator

        if delimiter:
            fields = tuple(entry.raw_value.split(delimiter))
        else:
            fields = (entry.raw_value,)

        return StructuredRecord(name=entry.name, value=fields, kind=entry.kind)


def resolve(
    name: Optional[str] = None,
    scope: Union[Scope, str] = Scope.PROCESS,
    delimiter: Optional[str] = None,
    raw: bool = False,
    **kwargs
) -> List[OutputRecord]:
    """Convenience wrapper: build a request and resolve it with a default resolver."""
    try:
        scope = Scope(scope)
    except ValueError:
        raise ParameterBindingError([f"Unknown scope '{scope}'"]) from None

    request = ResolveRequest(name=name, scope=scope, delimiter=delimiter, raw=raw)
    return VariableResolver(**kwargs).resolve(request)
