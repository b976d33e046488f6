"""Envscope exceptions."""

from typing import List


class EnvscopeError(Exception):
    """Base class for envscope errors."""
    exit_code = 1


class NotFoundOrEmpty(EnvscopeError):
    """Raised when a requested variable is missing or has an empty value.

    Terminates the invocation; no records are produced.
    """

    error_id = "EnvironmentVariableNotFoundOrEmpty"
    category = "ObjectNotFound"

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot find environment variable '{name}' because it does not exist or is empty."
        )


class StoreKeyAbsent(EnvscopeError):
    """Raised by a persisted store when an entry does not exist.

    Recovered by the resolver; never surfaced to callers.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Entry '{name}' is not present in the store")


class StoreFormatError(EnvscopeError):
    """Raised when a file-backed store is not a valid entry mapping."""
    exit_code = 2


class ParameterBindingError(EnvscopeError):
    """Raised when a resolve request breaks parameter-set constraints.

    Mirrors the CLI's validation exit code so callers can map it directly.
    """

    exit_code = 2

    def __init__(self, errors: List[str]):
        self.errors = errors

        messages = []
        for error in errors:
            messages.append(f"Parameter error: {error}")

        super().__init__("\n".join(messages))
