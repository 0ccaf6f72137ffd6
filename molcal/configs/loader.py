"""Configuration loader for application settings.

Settings live in a JSON file shipped with the package (defaults.json).
A user file can override any subset of the keys.

Usage:
    >>> from molcal.configs import get_config, load_config
    >>> config = get_config()
    >>> config.export_filename
    'MolCal.xlsx'
    >>> custom = load_config("my_settings.json")
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any
import json

from ..core import MassUnit


@dataclass(frozen=True)
class AppConfig:
    """Application settings.

    Attributes
    ----------
    weight_decimals : int
        Decimal places shown for calculated weights
    volume_decimals : int
        Decimal places shown for calculated volumes
    moles_decimals : int
        Decimal places shown for moles
    default_unit : str
        Unit of a fresh limiting reactant row ("mg" or "g")
    export_filename : str
        File name of the exported workbook
    sheet_name : str
        Name of the single sheet in the exported workbook
    storage_dir : str
        Directory holding the compound registry file
    registry_filename : str
        File name of the compound registry
    storage_key : str
        Key under which the registry list is stored
    reset_on_escape : bool
        Whether the Escape key resets the form
    """
    weight_decimals: int = 4
    volume_decimals: int = 4
    moles_decimals: int = 6
    default_unit: str = "mg"
    export_filename: str = "MolCal.xlsx"
    sheet_name: str = "MolCal"
    storage_dir: str = "./molcal_data"
    registry_filename: str = "compound_registry.json"
    storage_key: str = "compound_database"
    reset_on_escape: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """Create from dictionary (JSON), validating keys and values."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}. Available: {sorted(known)}")

        config = cls(**data)

        for name in ("weight_decimals", "volume_decimals", "moles_decimals"):
            value = getattr(config, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        MassUnit.parse(config.default_unit)
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def unit(self) -> MassUnit:
        return MassUnit.parse(self.default_unit)

    @property
    def registry_path(self) -> Path:
        return Path(self.storage_dir) / self.registry_filename


# Module-level cache for the packaged defaults
_config_cache: dict[str, AppConfig] = {}


def _get_configs_dir() -> Path:
    """Get the configs directory path."""
    return Path(__file__).parent


def _load_json_config(path: Path) -> dict:
    """Load a JSON config file."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load settings, overlaying an optional user file on the defaults.

    Parameters
    ----------
    path : str or Path, optional
        User JSON file with a subset of the settings

    Returns
    -------
    AppConfig
        Merged settings

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist
    ValueError
        If a key is unknown or a value is invalid
    """
    data = _load_json_config(_get_configs_dir() / "defaults.json")

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        overrides = _load_json_config(path)
        if not isinstance(overrides, dict):
            raise ValueError(f"Config file must contain a JSON object: {path}")
        data.update(overrides)

    return AppConfig.from_dict(data)


def get_config() -> AppConfig:
    """Get the packaged default settings (cached)."""
    if "default" not in _config_cache:
        _config_cache["default"] = load_config()
    return _config_cache["default"]


def clear_cache() -> None:
    """Clear the config cache (useful for testing)."""
    _config_cache.clear()
