"""Abstract interface for the compound registry.

Defines the contract for registry backends so the GUI can be handed a
file-backed registry, an in-memory one, or anything else with the same
operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


def _is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


@dataclass(frozen=True)
class RegistryEntry:
    """A reusable compound: name, molecular weight and density.

    Values are stored as typed by the user, like the form rows they fill.
    """
    name: str
    molecular_weight: str | float | None = ""
    density: str | float | None = ""

    def validate(self) -> None:
        """Raise ValueError unless the entry has a name and a MW or density."""
        if _is_blank(self.name):
            raise ValueError("A saved compound needs a name")
        if _is_blank(self.molecular_weight) and _is_blank(self.density):
            raise ValueError(
                f"Saved compound '{self.name}' needs a molecular weight or a density"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "molecular_weight": self.molecular_weight,
            "density": self.density,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RegistryEntry":
        """Create from dictionary."""
        return cls(
            name=data["name"],
            molecular_weight=data.get("molecular_weight", ""),
            density=data.get("density", ""),
        )


class CompoundRegistryInterface(ABC):
    """Ordered store of reusable compound entries.

    Entries are addressed by list position only. Duplicates are allowed.
    """

    @abstractmethod
    def list_entries(self) -> list[RegistryEntry]:
        """List all entries in insertion order."""
        pass

    @abstractmethod
    def add_entry(
        self,
        name: str,
        molecular_weight: str | float | None = "",
        density: str | float | None = "",
    ) -> RegistryEntry:
        """Append an entry.

        Parameters
        ----------
        name : str
            Compound name (required)
        molecular_weight : str or float, optional
            Molecular weight in g/mol
        density : str or float, optional
            Density in g/mL

        Returns
        -------
        RegistryEntry
            The stored entry

        Raises
        ------
        ValueError
            If the name is blank or both MW and density are blank
        """
        pass

    @abstractmethod
    def remove_entry(self, position: int) -> bool:
        """Remove the entry at ``position``.

        Returns
        -------
        bool
            True if removed, False if the position does not exist
        """
        pass

    def get_entry(self, position: int) -> RegistryEntry | None:
        """Get the entry at ``position``, or None."""
        entries = self.list_entries()
        if 0 <= position < len(entries):
            return entries[position]
        return None

    def __len__(self) -> int:
        return len(self.list_entries())


class InMemoryCompoundRegistry(CompoundRegistryInterface):
    """Registry without persistence (tests and throwaway sessions)."""

    def __init__(self, entries: list[RegistryEntry] | None = None):
        self._entries: list[RegistryEntry] = list(entries or [])

    def list_entries(self) -> list[RegistryEntry]:
        return list(self._entries)

    def add_entry(self, name, molecular_weight="", density="") -> RegistryEntry:
        entry = RegistryEntry(name=name, molecular_weight=molecular_weight, density=density)
        entry.validate()
        self._entries = [*self._entries, entry]
        return entry

    def remove_entry(self, position: int) -> bool:
        if not 0 <= position < len(self._entries):
            return False
        self._entries = [e for i, e in enumerate(self._entries) if i != position]
        return True
