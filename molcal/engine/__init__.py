"""Stoichiometry engine.

Example:
    >>> from molcal.engine import compute
    >>> results = compute(records)
    >>> for r in results:
    ...     print(r.name, r.moles_display(), r.weight_display())
"""

from ..core import format_quantity
from .stoichiometry import (
    coerce_number,
    compute,
    is_limiting_reactant_complete,
)

__all__ = [
    "coerce_number",
    "compute",
    "format_quantity",
    "is_limiting_reactant_complete",
]
