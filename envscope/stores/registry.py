"""
Windows registry backed stores.

User variables live under HKCU\\Environment, machine variables under the
Session Manager environment key. Keys are opened read-only.
"""

import logging
from typing import Any, List, Tuple

from envscope.exceptions import StoreKeyAbsent
from envscope.stores.base import PersistedStore
from envscope.types import Scope, ValueKind


logger = logging.getLogger(__name__)

REGISTRY_PATHS = {
    Scope.USER: ("HKEY_CURRENT_USER", "Environment"),
    Scope.MACHINE: (
        "HKEY_LOCAL_MACHINE",
        r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment",
    ),
}

KINDS_BY_TYPE_NAME = {
    "REG_NONE": ValueKind.NONE,
    "REG_SZ": ValueKind.STRING,
    "REG_EXPAND_SZ": ValueKind.EXPAND_STRING,
    "REG_BINARY": ValueKind.BINARY,
    "REG_DWORD": ValueKind.DWORD,
    "REG_MULTI_SZ": ValueKind.MULTI_STRING,
    "REG_QWORD": ValueKind.QWORD,
}


class RegistryStore(PersistedStore):
    """
    Read-only view of a registry environment key.

    Args:
        scope: USER or MACHINE
        winreg_module: Module providing the winreg API (defaults to winreg)

    Raises:
        FileNotFoundError: If the key does not exist
    """

    def __init__(self, scope: Scope, winreg_module=None):
        if winreg_module is None:
            import winreg as winreg_module

        hive_name, path = REGISTRY_PATHS[scope]
        super().__init__(f"{hive_name}\\{path}")

        self._winreg = winreg_module
        self._kinds = {
            getattr(winreg_module, type_name): kind
            for type_name, kind in KINDS_BY_TYPE_NAME.items()
            if hasattr(winreg_module, type_name)
        }
        hive = getattr(winreg_module, hive_name)
        self._key = winreg_module.OpenKey(hive, path, 0, winreg_module.KEY_READ)
        logger.debug(f"Opened registry key: {self.location}")

    def names(self) -> List[str]:
        _, value_count, _ = self._winreg.QueryInfoKey(self._key)
        return [self._winreg.EnumValue(self._key, index)[0] for index in range(value_count)]

    def read(self, name: str) -> Tuple[Any, ValueKind]:
        try:
            value, value_type = self._winreg.QueryValueEx(self._key, name)
        except FileNotFoundError:
            raise StoreKeyAbsent(name) from None

        kind = self._kinds.get(value_type, ValueKind.UNKNOWN)

        # Match the registry API's default of expanding %VAR% references
        if kind == ValueKind.EXPAND_STRING and isinstance(value, str):
            value = self._winreg.ExpandEnvironmentStrings(value)

        return value, kind

    def _release(self):
        self._winreg.CloseKey(self._key)
