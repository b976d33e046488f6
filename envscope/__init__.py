"""
Envscope: read environment variables from the process, user or machine scope.
"""

from .config import ResolverConfig
from .exceptions import NotFoundOrEmpty, ParameterBindingError, StoreFormatError
from .resolver import VariableResolver, resolve
from .types import (
    OutputMode,
    RawRecord,
    ResolveRequest,
    Scope,
    StructuredRecord,
    ValueKind,
    VariableEntry,
)

__version__ = "0.1.0"

__all__ = [
    'ResolverConfig',
    'NotFoundOrEmpty',
    'ParameterBindingError',
    'StoreFormatError',
    'VariableResolver',
    'resolve',
    'OutputMode',
    'RawRecord',
    'ResolveRequest',
    'Scope',
    'StructuredRecord',
    'ValueKind',
    'VariableEntry',
]
