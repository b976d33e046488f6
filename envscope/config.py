"""
Resolver configuration.

Store locations and backend selection come from ENVSCOPE_* environment
variables; the list-valued name set is fixed per platform at import time.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Mapping, Optional


BACKENDS = {"registry", "file"}

# Names whose values are path lists; matched case-sensitively
LIST_VALUED_NAMES: FrozenSet[str] = frozenset({"Path", "PATHEXT", "PSModulePath"})
POSIX_LIST_VALUED_NAMES: FrozenSet[str] = LIST_VALUED_NAMES | {"PATH"}

DEFAULT_MACHINE_STORE = Path("/etc/envscope/environment.yaml")


def default_list_valued_names(platform: str = sys.platform) -> FrozenSet[str]:
    """Return the list-valued name set for a platform."""
    if platform == "win32":
        return LIST_VALUED_NAMES
    return POSIX_LIST_VALUED_NAMES


def default_backend(platform: str = sys.platform) -> str:
    return "registry" if platform == "win32" else "file"


def default_user_store(environ: Mapping[str, str]) -> Path:
    """User store under $XDG_CONFIG_HOME, falling back to ~/.config."""
    config_home = environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "envscope" / "environment.yaml"


@dataclass
class ResolverConfig:
    """
    Configuration for a VariableResolver.

    Attributes:
        backend: Persisted store backend ('registry' or 'file')
        user_store: YAML file backing the user scope (file backend)
        machine_store: YAML file backing the machine scope (file backend)
        path_separator: Delimiter forced for list-valued names
        list_valued_names: Names whose delimiter is always path_separator
        platform: Host platform; the registry backend needs win32
    """
    backend: str = field(default_factory=default_backend)
    user_store: Optional[Path] = None
    machine_store: Path = DEFAULT_MACHINE_STORE
    path_separator: str = os.pathsep
    list_valued_names: FrozenSet[str] = field(default_factory=default_list_valued_names)
    platform: str = field(default_factory=lambda: sys.platform)

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown store backend '{self.backend}'. Supported: {sorted(BACKENDS)}")
        if self.backend == "registry" and self.platform != "win32":
            raise ValueError(f"The registry backend is only available on Windows, not '{self.platform}'")
        if self.user_store is None:
            self.user_store = default_user_store(os.environ)

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> 'ResolverConfig':
        """Build configuration from ENVSCOPE_* variables."""
        if environ is None:
            environ = os.environ

        backend = environ.get("ENVSCOPE_BACKEND") or default_backend()
        user_store = environ.get("ENVSCOPE_USER_STORE")
        machine_store = environ.get("ENVSCOPE_MACHINE_STORE")

        return cls(
            backend=backend.lower(),
            user_store=Path(user_store) if user_store else default_user_store(environ),
            machine_store=Path(machine_store) if machine_store else DEFAULT_MACHINE_STORE,
        )
