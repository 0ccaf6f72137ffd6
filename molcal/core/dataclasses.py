"""Core dataclasses for stoichiometry calculations.

These are the fundamental data structures used throughout the system:
- MassUnit: Unit of the limiting reactant weight (mg or g)
- CompoundRecord: One form row as typed by the user
- ComputedResult: Quantities computed for one row

Records keep the raw form input (strings, numbers or None). Numeric
coercion happens in the stoichiometry engine, never here.

All classes support serialization via to_dict()/from_dict().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

RawValue = Union[str, int, float, None]

LIMITING_REACTANT_NAME = "Limiting Reactant"


class MassUnit(str, Enum):
    """Mass unit of the limiting reactant weight.

    There is only one unit per calculation: the unit chosen on the
    limiting reactant governs conversion and display for every row.
    """
    MG = "mg"
    G = "g"

    def to_grams(self, value: float) -> float:
        """Convert a value in this unit to grams."""
        return value / 1000 if self is MassUnit.MG else value

    def from_grams(self, grams: float) -> float:
        """Convert grams to this unit."""
        return grams * 1000 if self is MassUnit.MG else grams

    @classmethod
    def parse(cls, value: "MassUnit | str") -> "MassUnit":
        """Parse a unit from its string value (case-insensitive)."""
        if isinstance(value, MassUnit):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            available = [u.value for u in cls]
            raise ValueError(f"Unknown mass unit: {value!r}. Available: {available}") from None


@dataclass(frozen=True)
class CompoundRecord:
    """One compound row of the form.

    Attributes
    ----------
    name : str
        Free-form label
    molecular_weight : str, float or None
        Molecular weight in g/mol (raw input)
    weight : str, float or None
        Weight of the limiting reactant in ``unit`` (raw input).
        Ignored on every other row.
    unit : MassUnit
        Unit of ``weight`` ("mg"/"g" strings are parsed). Only the limiting
        reactant's unit is used.
    equivalents : str, float or None
        Molar ratio relative to the limiting reactant (raw input).
        Ignored on the limiting reactant, which is always 1.
    density : str, float or None
        Density in g/mL (raw input). Blank or 0 means no volume.
    """
    name: str = ""
    molecular_weight: RawValue = ""
    weight: RawValue = ""
    unit: MassUnit = MassUnit.MG
    equivalents: RawValue = ""
    density: RawValue = ""

    def __post_init__(self):
        object.__setattr__(self, "unit", MassUnit.parse(self.unit))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "molecular_weight": self.molecular_weight,
            "weight": self.weight,
            "unit": self.unit.value,
            "equivalents": self.equivalents,
            "density": self.density,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CompoundRecord":
        """Create from dictionary."""
        return cls(
            name=data.get("name", ""),
            molecular_weight=data.get("molecular_weight", ""),
            weight=data.get("weight", ""),
            unit=MassUnit.parse(data.get("unit", MassUnit.MG)),
            equivalents=data.get("equivalents", ""),
            density=data.get("density", ""),
        )


def default_limiting_reactant(unit: MassUnit | str = MassUnit.MG) -> CompoundRecord:
    """The row a fresh or reset form starts with."""
    return CompoundRecord(
        name=LIMITING_REACTANT_NAME,
        molecular_weight="",
        weight="",
        unit=MassUnit.parse(unit),
        equivalents="1.0",
        density="",
    )


def blank_compound() -> CompoundRecord:
    """An empty row appended after the limiting reactant."""
    return CompoundRecord()


def format_quantity(value: float | None, decimals: int) -> str:
    """Fixed-point text for a computed quantity.

    None and exactly 0 both render as an empty string, which the form
    and the exporter read as "not computable yet".
    """
    if value is None or value == 0:
        return ""
    return f"{value:.{decimals}f}"


@dataclass(frozen=True)
class ComputedResult:
    """Quantities computed for one compound row.

    Absent values (not computable yet, or exactly zero) are None.

    Attributes
    ----------
    record : CompoundRecord
        The input row this result belongs to
    unit : MassUnit
        Global unit (the limiting reactant's) of ``calculated_weight``
    moles : float or None
        Amount of substance in mol
    calculated_weight : float or None
        Mass needed, expressed in ``unit``
    calculated_volume : float or None
        Volume needed in mL, only when the row has a positive density
    """
    record: CompoundRecord
    unit: MassUnit = MassUnit.MG
    moles: float | None = None
    calculated_weight: float | None = None
    calculated_volume: float | None = None

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def is_computed(self) -> bool:
        """Whether a weight could be calculated for this row."""
        return self.calculated_weight is not None

    def moles_display(self, decimals: int = 6) -> str:
        return format_quantity(self.moles, decimals)

    def weight_display(self, decimals: int = 4) -> str:
        return format_quantity(self.calculated_weight, decimals)

    def volume_display(self, decimals: int = 4) -> str:
        return format_quantity(self.calculated_volume, decimals)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "record": self.record.to_dict(),
            "unit": self.unit.value,
            "moles": self.moles,
            "calculated_weight": self.calculated_weight,
            "calculated_volume": self.calculated_volume,
        }
