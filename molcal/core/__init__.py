"""Core dataclasses for MolCal.

Provides the fundamental data structures used throughout the application:
- MassUnit: mg or g, chosen on the limiting reactant
- CompoundRecord: One row of the form (raw input values)
- ComputedResult: Moles, weight and volume computed for one row

Example:
    >>> from molcal.core import CompoundRecord, MassUnit
    >>>
    >>> lr = CompoundRecord(
    ...     name="Benzaldehyde",
    ...     molecular_weight="106.12",
    ...     weight="500",
    ...     unit=MassUnit.MG,
    ... )
"""

from .dataclasses import (
    LIMITING_REACTANT_NAME,
    MassUnit,
    CompoundRecord,
    ComputedResult,
    default_limiting_reactant,
    blank_compound,
    format_quantity,
)

__all__ = [
    "LIMITING_REACTANT_NAME",
    "MassUnit",
    "CompoundRecord",
    "ComputedResult",
    "default_limiting_reactant",
    "blank_compound",
    "format_quantity",
]
