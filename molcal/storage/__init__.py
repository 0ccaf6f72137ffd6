"""Compound registry storage.

Two registry backends are available:

1. FileCompoundRegistry (default): JSON file persisted across sessions
2. InMemoryCompoundRegistry: same interface, nothing written to disk

Example usage with FileCompoundRegistry:
    from molcal.storage import FileCompoundRegistry
    registry = FileCompoundRegistry("./molcal_data")

    registry.add_entry("Triethylamine", molecular_weight="101.19", density="0.726")
    for entry in registry.list_entries():
        print(entry.name, entry.molecular_weight, entry.density)

    registry.remove_entry(0)
"""

from .interfaces import (
    RegistryEntry,
    CompoundRegistryInterface,
    InMemoryCompoundRegistry,
)

from .file_storage import (
    FileCompoundRegistry,
)

__all__ = [
    # Interface
    'RegistryEntry',
    'CompoundRegistryInterface',
    'InMemoryCompoundRegistry',
    # File-based implementation
    'FileCompoundRegistry',
]
