"""JSON file-based compound registry.

Stores the saved compounds as one JSON document:
    {storage_dir}/compound_registry.json
    {
        "compound_database": [
            {"name": "...", "molecular_weight": "...", "density": "..."},
            ...
        ]
    }

The file is read once at construction and rewritten on every add/remove.
Each write goes to a temporary file first and is then moved into place.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from .interfaces import CompoundRegistryInterface, RegistryEntry

logger = logging.getLogger(__name__)


DEFAULT_FILENAME = "compound_registry.json"
DEFAULT_STORAGE_KEY = "compound_database"


class FileCompoundRegistry(CompoundRegistryInterface):
    """File-based implementation of the compound registry.

    Example:
        >>> registry = FileCompoundRegistry("./molcal_data")
        >>> registry.add_entry("Ethanol", molecular_weight="46.07", density="0.789")
        >>> [e.name for e in registry.list_entries()]
        ['Ethanol']
        >>> registry.remove_entry(0)
        True
    """

    def __init__(
        self,
        storage_dir: str | Path,
        filename: str = DEFAULT_FILENAME,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        """Initialize file-based registry.

        Parameters
        ----------
        storage_dir : str or Path
            Directory holding the registry file
        filename : str, default="compound_registry.json"
            Registry file name
        storage_key : str, default="compound_database"
            Key under which the entry list is stored
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.storage_dir / filename
        self.storage_key = storage_key
        self._entries: list[RegistryEntry] = self._load()

    def _load(self) -> list[RegistryEntry]:
        """Read the registry file, falling back to an empty list."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            raw_entries = data.get(self.storage_key, [])
            if not isinstance(raw_entries, list):
                raise ValueError(f"'{self.storage_key}' is not a list")
            return [RegistryEntry.from_dict(e) for e in raw_entries]
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"Could not load compound registry from {self.path}: {e}")
            return []

    def _save(self, entries: list[RegistryEntry]) -> None:
        """Rewrite the registry file atomically with ``entries``."""
        data = {self.storage_key: [e.to_dict() for e in entries]}

        fd, tmp_name = tempfile.mkstemp(
            dir=self.storage_dir, prefix=".registry_", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error(f"Could not save compound registry to {self.path}: {e}")
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def list_entries(self) -> list[RegistryEntry]:
        return list(self._entries)

    def add_entry(self, name, molecular_weight="", density="") -> RegistryEntry:
        entry = RegistryEntry(name=name, molecular_weight=molecular_weight, density=density)
        entry.validate()

        entries = [*self._entries, entry]
        self._save(entries)
        self._entries = entries
        logger.info(f"Saved compound '{entry.name}' ({len(self._entries)} entries)")
        return entry

    def remove_entry(self, position: int) -> bool:
        if not 0 <= position < len(self._entries):
            return False

        removed = self._entries[position]
        entries = [e for i, e in enumerate(self._entries) if i != position]
        self._save(entries)
        self._entries = entries
        logger.info(f"Removed compound '{removed.name}' ({len(self._entries)} entries)")
        return True

    def reload(self) -> list[RegistryEntry]:
        """Re-read the file (e.g. after another session wrote it)."""
        self._entries = self._load()
        return self.list_entries()
