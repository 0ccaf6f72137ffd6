"""Tests for the compound registry.

Comprehensive tests covering:
- Adding, listing and removing entries
- Validation of new entries
- Persistence across instances
- Fallback on corrupt files
- In-memory implementation parity
"""

import json
import logging
import os

import pytest


def _failing_replace(src, dst):
    raise OSError("disk full")


# --- Fixtures ---

@pytest.fixture
def registry(temp_dir):
    """Create a FileCompoundRegistry instance."""
    from molcal.storage import FileCompoundRegistry
    return FileCompoundRegistry(temp_dir)


@pytest.fixture(params=["file", "memory"])
def any_registry(request, temp_dir):
    """Both registry implementations."""
    from molcal.storage import FileCompoundRegistry, InMemoryCompoundRegistry

    if request.param == "file":
        return FileCompoundRegistry(temp_dir)
    return InMemoryCompoundRegistry()


# =============================================================================
# Interface behaviour (both implementations)
# =============================================================================

class TestRegistryOperations:

    def test_starts_empty(self, any_registry):
        assert any_registry.list_entries() == []
        assert len(any_registry) == 0

    def test_add_keeps_order_and_duplicates(self, any_registry):
        any_registry.add_entry("Ethanol", molecular_weight="46.07", density="0.789")
        any_registry.add_entry("Water", molecular_weight="18.015", density="1.0")
        any_registry.add_entry("Ethanol", molecular_weight="46.07", density="0.789")

        names = [e.name for e in any_registry.list_entries()]

        assert names == ["Ethanol", "Water", "Ethanol"]

    def test_add_returns_entry(self, any_registry):
        entry = any_registry.add_entry("Toluene", molecular_weight="92.14")

        assert entry.name == "Toluene"
        assert entry.molecular_weight == "92.14"
        assert entry.density == ""

    def test_density_alone_is_enough(self, any_registry):
        any_registry.add_entry("Brine", density="1.2")

        assert len(any_registry) == 1

    @pytest.mark.parametrize("name, mw, density", [
        ("", "46.07", "0.789"),
        ("   ", "46.07", ""),
        ("Ethanol", "", ""),
        ("Ethanol", None, None),
    ])
    def test_invalid_entries_rejected(self, any_registry, name, mw, density):
        with pytest.raises(ValueError):
            any_registry.add_entry(name, molecular_weight=mw, density=density)

        assert len(any_registry) == 0

    def test_remove_by_position(self, any_registry):
        any_registry.add_entry("A", molecular_weight="1")
        any_registry.add_entry("B", molecular_weight="2")
        any_registry.add_entry("C", molecular_weight="3")

        assert any_registry.remove_entry(1) is True

        assert [e.name for e in any_registry.list_entries()] == ["A", "C"]

    @pytest.mark.parametrize("position", [-1, 1, 5])
    def test_remove_out_of_range(self, any_registry, position):
        any_registry.add_entry("A", molecular_weight="1")

        assert any_registry.remove_entry(position) is False
        assert len(any_registry) == 1

    def test_get_entry(self, any_registry):
        any_registry.add_entry("A", molecular_weight="1")

        assert any_registry.get_entry(0).name == "A"
        assert any_registry.get_entry(1) is None

    def test_list_is_a_copy(self, any_registry):
        any_registry.add_entry("A", molecular_weight="1")

        any_registry.list_entries().clear()

        assert len(any_registry) == 1


# =============================================================================
# File persistence
# =============================================================================

class TestFilePersistence:

    def test_file_layout(self, registry):
        registry.add_entry("Ethanol", molecular_weight="46.07", density="0.789")

        with open(registry.path, encoding="utf-8") as f:
            data = json.load(f)

        assert data == {
            "compound_database": [
                {"name": "Ethanol", "molecular_weight": "46.07", "density": "0.789"},
            ]
        }

    def test_persists_across_instances(self, temp_dir):
        from molcal.storage import FileCompoundRegistry

        first = FileCompoundRegistry(temp_dir)
        first.add_entry("A", molecular_weight="1")
        first.add_entry("B", density="2")
        first.remove_entry(0)

        second = FileCompoundRegistry(temp_dir)

        assert [e.name for e in second.list_entries()] == ["B"]

    def test_custom_filename_and_key(self, temp_dir):
        from molcal.storage import FileCompoundRegistry

        registry = FileCompoundRegistry(temp_dir, filename="mine.json", storage_key="saved")
        registry.add_entry("A", molecular_weight="1")

        data = json.loads((temp_dir / "mine.json").read_text(encoding="utf-8"))
        assert list(data) == ["saved"]

    def test_no_temp_files_left(self, registry, temp_dir):
        registry.add_entry("A", molecular_weight="1")
        registry.remove_entry(0)

        assert [p.name for p in temp_dir.iterdir()] == ["compound_registry.json"]

    def test_failed_add_leaves_entries_unchanged(self, registry, temp_dir, monkeypatch):
        registry.add_entry("A", molecular_weight="1")
        monkeypatch.setattr(os, "replace", _failing_replace)

        with pytest.raises(OSError, match="disk full"):
            registry.add_entry("B", molecular_weight="2")

        assert [e.name for e in registry.list_entries()] == ["A"]
        assert [p.name for p in temp_dir.iterdir()] == ["compound_registry.json"]

    def test_failed_remove_keeps_entry(self, registry, temp_dir, monkeypatch):
        registry.add_entry("A", molecular_weight="1")
        monkeypatch.setattr(os, "replace", _failing_replace)

        with pytest.raises(OSError, match="disk full"):
            registry.remove_entry(0)

        assert [e.name for e in registry.list_entries()] == ["A"]
        assert [p.name for p in temp_dir.iterdir()] == ["compound_registry.json"]

    def test_failed_first_save_stays_empty(self, registry, temp_dir, monkeypatch, caplog):
        monkeypatch.setattr(os, "replace", _failing_replace)

        with caplog.at_level(logging.ERROR), pytest.raises(OSError):
            registry.add_entry("A", molecular_weight="1")

        assert len(registry) == 0
        assert list(temp_dir.iterdir()) == []
        assert "Could not save compound registry" in caplog.text

    @pytest.mark.parametrize("content", [
        "{not json",
        "[1, 2, 3]",
        '{"compound_database": "oops"}',
        '{"compound_database": [{"molecular_weight": "1"}]}',
        '{"compound_database": [42]}',
    ])
    def test_corrupt_file_falls_back_to_empty(self, temp_dir, caplog, content):
        from molcal.storage import FileCompoundRegistry

        (temp_dir / "compound_registry.json").write_text(content, encoding="utf-8")

        with caplog.at_level(logging.WARNING):
            registry = FileCompoundRegistry(temp_dir)

        assert registry.list_entries() == []
        assert "Could not load compound registry" in caplog.text

    def test_write_after_corrupt_load_repairs_file(self, temp_dir):
        from molcal.storage import FileCompoundRegistry

        (temp_dir / "compound_registry.json").write_text("garbage", encoding="utf-8")
        registry = FileCompoundRegistry(temp_dir)

        registry.add_entry("A", molecular_weight="1")

        assert [e.name for e in FileCompoundRegistry(temp_dir).list_entries()] == ["A"]

    def test_reload(self, temp_dir):
        from molcal.storage import FileCompoundRegistry

        first = FileCompoundRegistry(temp_dir)
        second = FileCompoundRegistry(temp_dir)
        first.add_entry("A", molecular_weight="1")

        assert second.list_entries() == []
        assert [e.name for e in second.reload()] == ["A"]

    def test_creates_storage_dir(self, temp_dir):
        from molcal.storage import FileCompoundRegistry

        FileCompoundRegistry(temp_dir / "nested" / "dir")

        assert (temp_dir / "nested" / "dir").is_dir()


# =============================================================================
# RegistryEntry
# =============================================================================

def test_entry_round_trip():
    from molcal.storage import RegistryEntry

    entry = RegistryEntry(name="Water", molecular_weight="18.015", density="1.0")

    assert RegistryEntry.from_dict(entry.to_dict()) == entry
