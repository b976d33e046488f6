"""
YAML file backed stores.

Each top-level key is a variable name. An entry is either a plain scalar
(a string value), a list (a multi-string value), or a mapping with explicit
'kind' and 'value' fields:

    EDITOR: vim
    Path:
      kind: expand_string
      value: $HOME/bin:/usr/local/bin
    "": default entry value

Keys are taken as written; only the quoted empty key is the default entry.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from envscope.exceptions import StoreFormatError, StoreKeyAbsent
from envscope.stores.base import PersistedStore
from envscope.types import ValueKind


logger = logging.getLogger(__name__)

NULL_TAG = 'tag:yaml.org,2002:null'
ENTRY_FIELDS = {'kind', 'value'}


class LiteralLoader(yaml.SafeLoader):
    """YAML loader that keeps scalars as written instead of converting 'on', '010', '1.10'."""

    def construct_mapping(self, node, deep=False):
        """Take mapping keys verbatim so '~' or 'null' stay names; reject duplicates."""
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    "found a non-scalar key", key_node.start_mark
                )
            key = key_node.value
            if key in mapping:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    f"found duplicate key '{key}'", key_node.start_mark
                )
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


# Keep only the null resolver (values only) so bools, ints, floats and timestamps stay strings
LiteralLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag == NULL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class FileStore(PersistedStore):
    """
    Read-only view of a YAML environment file.

    Raises:
        FileNotFoundError: If the file does not exist
        StoreFormatError: If the file is not a mapping of valid entries
    """

    def __init__(self, path: Path):
        super().__init__(str(path))
        self.path = Path(path)

        with open(self.path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.load(f, Loader=LiteralLoader)
            except (yaml.YAMLError, UnicodeDecodeError) as e:
                raise StoreFormatError(f"Failed to load store {self.path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise StoreFormatError(
                f"Store {self.path} must be a YAML mapping, got {type(data).__name__}"
            )

        self._entries: Dict[str, Tuple[Any, ValueKind]] = {}
        for key, raw_entry in data.items():
            name = str(key)
            self._entries[name] = self._parse_entry(name, raw_entry)

        logger.debug(f"Loaded {len(self._entries)} entries from {self.path}")

    def _parse_entry(self, name: str, raw_entry: Any) -> Tuple[Any, ValueKind]:
        if isinstance(raw_entry, list):
            return raw_entry, ValueKind.MULTI_STRING
        if not isinstance(raw_entry, dict):
            return raw_entry, ValueKind.STRING

        unknown = set(raw_entry) - ENTRY_FIELDS
        if unknown:
            raise StoreFormatError(
                f"Entry '{name}' in {self.path} has unknown fields: {sorted(unknown)}"
            )

        kind_name = raw_entry.get('kind') or ValueKind.STRING.value
        try:
            kind = ValueKind(str(kind_name).lower())
        except ValueError:
            raise StoreFormatError(
                f"Entry '{name}' in {self.path} has unknown kind '{kind_name}'"
            ) from None

        return raw_entry.get('value'), kind

    def names(self) -> List[str]:
        return list(self._entries)

    def read(self, name: str) -> Tuple[Any, ValueKind]:
        if name not in self._entries:
            raise StoreKeyAbsent(name)

        value, kind = self._entries[name]
        if kind == ValueKind.EXPAND_STRING and isinstance(value, str):
            value = os.path.expandvars(value)
        return value, kind
