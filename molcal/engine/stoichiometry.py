"""Stoichiometry engine.

Maps the ordered list of form rows to the moles, mass and volume needed
for each compound, anchored on the limiting reactant (row 0).

The computation is a pure function of its input: no state, no I/O, and it
never raises for whatever the user typed. Anything that is not a finite
number counts as 0, and an incomplete limiting reactant simply yields
absent results for every row.

Example:
    >>> from molcal.core import CompoundRecord, MassUnit
    >>> from molcal.engine import compute
    >>> results = compute([
    ...     CompoundRecord(name="A", molecular_weight=100, weight=500, unit=MassUnit.MG),
    ...     CompoundRecord(name="B", molecular_weight=50, equivalents=2),
    ... ])
    >>> results[1].calculated_weight
    500.0
"""

import math
from typing import Any, Sequence

from ..core import ComputedResult, CompoundRecord, MassUnit


def coerce_number(value: Any) -> float:
    """Coerce a raw form value to a finite float.

    Empty strings, None, NaN, infinities, booleans and unparseable text
    all become 0.0, as does text with "_" digit separators. Any other
    real number type (int, Decimal, Fraction, numpy scalars) is converted.
    Negative numbers are returned unchanged.

    Parameters
    ----------
    value : Any
        Raw input (str, int, float, None, ...)

    Returns
    -------
    float
        The parsed value, or 0.0
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        # float() also accepts digit separators such as "1_000"
        if "_" in value:
            return 0.0
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return 0.0

    return number if math.isfinite(number) else 0.0


def _present(value: float) -> float | None:
    """Zero means "not computable yet"."""
    return None if value == 0 else value


def _resolve_unit(value: Any) -> MassUnit:
    """Unit of the limiting reactant, mg when it cannot be parsed."""
    try:
        return MassUnit.parse(value)
    except ValueError:
        return MassUnit.MG


def _empty_results(records: Sequence[CompoundRecord], unit: MassUnit) -> list[ComputedResult]:
    return [ComputedResult(record=r, unit=unit) for r in records]


def is_limiting_reactant_complete(record: CompoundRecord) -> bool:
    """Whether the limiting reactant has both a weight and a molecular weight."""
    return (
        coerce_number(record.molecular_weight) != 0
        and coerce_number(record.weight) != 0
    )


def compute(records: Sequence[CompoundRecord]) -> list[ComputedResult]:
    """Compute moles, weight and volume for every row.

    Row 0 is the limiting reactant. Its equivalents are always taken as 1,
    so its moles equal the limiting moles exactly. Weights of all rows are
    expressed in the limiting reactant's unit.

    Parameters
    ----------
    records : Sequence[CompoundRecord]
        Form rows, limiting reactant first

    Returns
    -------
    list[ComputedResult]
        One result per record, same order
    """
    if not records:
        return []

    limiting = records[0]
    unit = _resolve_unit(limiting.unit)

    if not is_limiting_reactant_complete(limiting):
        return _empty_results(records, unit)

    limiting_mw = coerce_number(limiting.molecular_weight)
    limiting_grams = unit.to_grams(coerce_number(limiting.weight))
    limiting_moles = limiting_grams / limiting_mw if limiting_mw > 0 else 0.0

    results = []
    for index, record in enumerate(records):
        eq = 1.0 if index == 0 else coerce_number(record.equivalents)
        mw = coerce_number(record.molecular_weight)
        density = coerce_number(record.density)

        moles = limiting_moles * eq if limiting_moles > 0 and eq > 0 else 0.0
        grams_needed = moles * mw
        volume = grams_needed / density if density > 0 else 0.0

        results.append(ComputedResult(
            record=record,
            unit=unit,
            moles=_present(moles),
            calculated_weight=_present(unit.from_grams(grams_needed)),
            calculated_volume=_present(volume),
        ))

    return results
