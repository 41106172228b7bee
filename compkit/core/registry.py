# compkit/core/registry.py

"""
Component registry store.

The registry is a directory holding an index (registry/index.json or
registry/index.yaml) plus the component source files the index refers to.
File paths in the index are relative to the registry root.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from compkit.core.console import Console, ConsoleAware
from compkit.core.constants import REGISTRY_INDEX_JSON, REGISTRY_INDEX_YAML
from compkit.core.exceptions import RegistryUnavailableError
from compkit.core.models import RegistryEntry

# ==============================================================
# REGISTRY STORE CLASS
# ==============================================================

class RegistryStore(ConsoleAware):
    """Loads and exposes the catalog of installable components."""

    def __init__(self, root: Path, console: Optional[Console] = None, verbose: bool = False):
        super().__init__(console, verbose)
        self.root: Path = Path(root)
        self._entries: Optional[List[RegistryEntry]] = None
        self._by_name: Dict[str, RegistryEntry] = {}

    @property
    def index_path(self) -> Path:
        """YAML index takes precedence when both formats exist."""
        yaml_path = self.root / REGISTRY_INDEX_YAML
        if yaml_path.exists():
            return yaml_path
        return self.root / REGISTRY_INDEX_JSON

    def load(self) -> List[RegistryEntry]:
        """
        Load the registry index (cached after the first call).

        Returns:
            Registry entries in index order

        Raises:
            RegistryUnavailableError: Index missing, unparsable, or holding
                malformed / duplicated entries
        """
        if self._entries is not None:
            return self._entries

        index_path = self.index_path
        self.log(f"[dim]Registry index:[/] {index_path}")

        if not index_path.exists():
            raise RegistryUnavailableError(str(index_path), "registry index not found")

        raw = self._read_index(index_path)
        if isinstance(raw, dict) and "items" in raw:
            raw = raw["items"]
        if not isinstance(raw, list):
            raise RegistryUnavailableError(str(index_path), "registry index must be a list of components")

        entries: List[RegistryEntry] = []
        by_name: Dict[str, RegistryEntry] = {}
        for position, item in enumerate(raw):
            if not isinstance(item, dict):
                raise RegistryUnavailableError(str(index_path), f"entry #{position} is not an object")
            try:
                entry = RegistryEntry.model_validate(item)
            except ValidationError as e:
                label = item.get("name") or f"#{position}"
                raise RegistryUnavailableError(str(index_path), f"invalid entry {label}: {e}")
            if entry.name in by_name:
                raise RegistryUnavailableError(str(index_path), f"duplicate component name '{entry.name}'")
            by_name[entry.name] = entry
            entries.append(entry)

        self.log(f"[dim]Loaded[/] {len(entries)} component(s)")
        self._entries = entries
        self._by_name = by_name
        return entries

    def _read_index(self, index_path: Path):
        try:
            text = index_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryUnavailableError(str(index_path), f"could not read index: {e}")

        try:
            if index_path.suffix in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise RegistryUnavailableError(str(index_path), f"could not parse index: {e}")

    def names(self) -> List[str]:
        return [entry.name for entry in self.load()]

    def get(self, name: str) -> Optional[RegistryEntry]:
        self.load()
        return self._by_name.get(name)

    def source_path(self, relative_path: str) -> Path:
        """Absolute path of a component file inside the registry."""
        return self.root / relative_path
