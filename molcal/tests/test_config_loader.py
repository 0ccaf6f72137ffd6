"""Tests for the configuration loader."""

import json

import pytest

from molcal.configs import AppConfig, clear_cache, get_config, load_config
from molcal.core import MassUnit


def test_packaged_defaults():
    config = load_config()

    assert config == AppConfig()
    assert config.export_filename == "MolCal.xlsx"
    assert config.sheet_name == "MolCal"
    assert config.unit is MassUnit.MG
    assert config.reset_on_escape is True


def test_get_config_is_cached():
    first = get_config()

    assert get_config() is first

    clear_cache()
    assert get_config() is not first


def test_user_file_overrides_subset(temp_dir):
    path = temp_dir / "settings.json"
    path.write_text(json.dumps({"weight_decimals": 2, "default_unit": "g"}), encoding="utf-8")

    config = load_config(path)

    assert config.weight_decimals == 2
    assert config.unit is MassUnit.G
    assert config.moles_decimals == 6


def test_registry_path(temp_dir):
    path = temp_dir / "settings.json"
    path.write_text(json.dumps({"storage_dir": str(temp_dir)}), encoding="utf-8")

    config = load_config(path)

    assert config.registry_path == temp_dir / "compound_registry.json"


def test_missing_file(temp_dir):
    with pytest.raises(FileNotFoundError):
        load_config(temp_dir / "nope.json")


@pytest.mark.parametrize("overrides, match", [
    ({"colour": "blue"}, "Unknown configuration keys"),
    ({"weight_decimals": -1}, "weight_decimals"),
    ({"moles_decimals": "6"}, "moles_decimals"),
    ({"default_unit": "kg"}, "Unknown mass unit"),
])
def test_invalid_values(temp_dir, overrides, match):
    path = temp_dir / "settings.json"
    path.write_text(json.dumps(overrides), encoding="utf-8")

    with pytest.raises(ValueError, match=match):
        load_config(path)


def test_non_object_file(temp_dir):
    path = temp_dir / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="JSON object"):
        load_config(path)


def test_to_dict_round_trip():
    config = AppConfig(volume_decimals=3)

    assert AppConfig.from_dict(config.to_dict()) == config
