"""
Type definitions for environment variable resolution.

Defines scopes, persisted value kinds, the invocation request and the two
output record shapes (raw and structured).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class Scope(str, Enum):
    """Backing store a variable is resolved against."""
    PROCESS = "process"
    USER = "user"
    MACHINE = "machine"


class ValueKind(str, Enum):
    """Declared storage kind of a persisted value."""
    STRING = "string"
    EXPAND_STRING = "expand_string"
    MULTI_STRING = "multi_string"
    BINARY = "binary"
    DWORD = "dword"
    QWORD = "qword"
    NONE = "none"
    UNKNOWN = "unknown"


class OutputMode(str, Enum):
    """Record shape produced by one invocation."""
    RAW = "raw"
    STRUCTURED = "structured"


@dataclass(frozen=True)
class VariableEntry:
    """
    A single entry read from a store.

    Attributes:
        name: Variable name ('(Default)' for a persisted store's nameless entry)
        kind: Declared kind; None for the process scope or an absent entry
        raw_value: Value as text
    """
    name: str
    kind: Optional[ValueKind]
    raw_value: str


@dataclass(frozen=True)
class RawRecord:
    """Unmodified value, no metadata."""
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value}


@dataclass(frozen=True)
class StructuredRecord:
    """
    Inspection record.

    Attributes:
        name: Variable name
        value: Raw string, or ordered fields when decomposed
        kind: Declared kind (omitted from output when None)
    """
    name: str
    value: Union[str, Tuple[str, ...]]
    kind: Optional[ValueKind] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict, omitting a missing kind."""
        result: Dict[str, Any] = {"name": self.name}
        if self.kind is not None:
            result["kind"] = self.kind.value
        result["value"] = list(self.value) if isinstance(self.value, tuple) else self.value
        return result


OutputRecord = Union[RawRecord, StructuredRecord]


@dataclass(frozen=True)
class ResolveRequest:
    """
    Parameters of one resolution.

    Attributes:
        name: Variable name; empty or None enumerates the whole scope
        scope: Scope to resolve against
        delimiter: Single character used to split the value
        raw: Return the unmodified string instead of a structured record
    """
    name: Optional[str] = None
    scope: Scope = Scope.PROCESS
    delimiter: Optional[str] = None
    raw: bool = False

    @property
    def is_enumeration(self) -> bool:
        return not self.name

    @property
    def output_mode(self) -> OutputMode:
        return OutputMode.RAW if self.raw else OutputMode.STRUCTURED

    def validate(self) -> List[str]:
        """
        Check parameter-set constraints.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not isinstance(self.scope, Scope):
            errors.append(f"Unknown scope '{self.scope}'")

        if self.delimiter is not None and len(self.delimiter) != 1:
            errors.append(f"Delimiter must be a single character, got '{self.delimiter}'")

        if self.raw:
            if not self.name:
                errors.append("A name is required when raw output is requested")
            if self.delimiter is not None:
                errors.append("Delimiter cannot be combined with raw output")

        return errors
