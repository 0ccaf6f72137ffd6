"""Form controller: owns the rows of the calculation form.

The rows are held as an immutable tuple. Every operation builds a new
tuple (copy-on-write), recomputes the results with the stoichiometry
engine and notifies subscribers. Row 0 is always the limiting reactant;
it is never removed, only reset.

Example:
    >>> controller = FormController()
    >>> controller.update_field(0, "molecular_weight", "100")
    >>> controller.update_field(0, "weight", "500")
    >>> controller.add_row()
    >>> controller.update_field(1, "molecular_weight", "50")
    >>> controller.update_field(1, "equivalents", "2")
    >>> controller.results[1].calculated_weight
    500.0
"""

import dataclasses
import logging
from typing import Callable, Sequence

from ..core import (
    CompoundRecord,
    ComputedResult,
    MassUnit,
    blank_compound,
    default_limiting_reactant,
)
from ..engine import compute, is_limiting_reactant_complete

logger = logging.getLogger(__name__)


EDITABLE_FIELDS = (
    "name",
    "molecular_weight",
    "weight",
    "unit",
    "equivalents",
    "density",
)

INCOMPLETE_LR_MESSAGE = (
    "Please enter the weight and molecular weight for the Limiting Reactant first."
)


class IncompleteLimitingReactantError(ValueError):
    """Raised when a row is added before the limiting reactant is complete."""

    def __init__(self, message: str = INCOMPLETE_LR_MESSAGE):
        super().__init__(message)


class FormController:
    """State container for the calculation form.

    Parameters
    ----------
    engine : callable, optional
        Function mapping records to results. Defaults to ``compute``.
    default_unit : MassUnit or str, default="mg"
        Unit of the limiting reactant in a fresh form
    reset_on_escape : bool, default=True
        Whether the Escape key resets the form
    """

    def __init__(
        self,
        engine: Callable[[Sequence[CompoundRecord]], list[ComputedResult]] = compute,
        default_unit: MassUnit | str = MassUnit.MG,
        reset_on_escape: bool = True,
    ):
        self._engine = engine
        self._default_unit = MassUnit.parse(default_unit)
        self.reset_on_escape = reset_on_escape

        self._records: tuple[CompoundRecord, ...] = (self._initial_record(),)
        self._results: tuple[ComputedResult, ...] = ()
        self._editing_index = 0
        self._show_table = False
        self._subscribers: list[Callable[["FormController"], None]] = []

        self._recompute()

    def _initial_record(self) -> CompoundRecord:
        return default_limiting_reactant(self._default_unit)

    # --- State ---

    @property
    def records(self) -> tuple[CompoundRecord, ...]:
        return self._records

    @property
    def results(self) -> tuple[ComputedResult, ...]:
        return self._results

    @property
    def row_count(self) -> int:
        return len(self._records)

    @property
    def limiting_reactant(self) -> CompoundRecord:
        return self._records[0]

    @property
    def unit(self) -> MassUnit:
        """Global unit (the limiting reactant's)."""
        return self._records[0].unit

    @property
    def editing_index(self) -> int:
        """Row that registry selections are applied to."""
        return self._editing_index

    @property
    def show_table(self) -> bool:
        return self._show_table

    def subscribe(self, callback: Callable[["FormController"], None]) -> None:
        """Register a callback invoked after every mutation."""
        self._subscribers.append(callback)

    def _recompute(self) -> None:
        self._results = tuple(self._engine(self._records))

    def _commit(
        self,
        records: tuple[CompoundRecord, ...] | None = None,
        editing_index: int | None = None,
        show_table: bool | None = None,
    ) -> None:
        """Swap in new state, recompute and notify."""
        if records is not None:
            self._records = records
        if editing_index is not None:
            self._editing_index = editing_index
        if show_table is not None:
            self._show_table = show_table

        self._recompute()
        for callback in self._subscribers:
            callback(self)

    def _check_index(self, row_index: int) -> None:
        if not 0 <= row_index < len(self._records):
            raise IndexError(
                f"Row {row_index} out of range (form has {len(self._records)} rows)"
            )

    # --- Operations ---

    def add_row(self) -> None:
        """Append a blank compound row.

        Raises
        ------
        IncompleteLimitingReactantError
            If the limiting reactant has no weight or molecular weight.
            The form is left unchanged.
        """
        if not is_limiting_reactant_complete(self._records[0]):
            raise IncompleteLimitingReactantError()

        records = (*self._records, blank_compound())
        self._commit(records=records, editing_index=len(records) - 1, show_table=False)

    def update_field(self, row_index: int, field_name: str, raw_value) -> None:
        """Set one field of one row to the raw input value.

        Raises
        ------
        IndexError
            If the row does not exist
        ValueError
            If the field is unknown, or the unit is not mg/g
        """
        self._check_index(row_index)
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown field: {field_name}. Available: {list(EDITABLE_FIELDS)}")

        if field_name == "unit":
            raw_value = MassUnit.parse(raw_value)
        elif field_name == "name":
            raw_value = "" if raw_value is None else str(raw_value)

        updated = dataclasses.replace(self._records[row_index], **{field_name: raw_value})
        records = tuple(
            updated if i == row_index else r for i, r in enumerate(self._records)
        )
        self._commit(records=records)

    def reset_all(self) -> None:
        """Restore exactly one default limiting reactant row."""
        self._commit(records=(self._initial_record(),), editing_index=0, show_table=False)

    def select_row(self, row_index: int) -> None:
        """Make ``row_index`` the target of registry selections."""
        self._check_index(row_index)
        self._commit(editing_index=row_index)

    def select_from_registry(self, row_index: int, entry) -> None:
        """Overwrite name, molecular weight and density of a row from a registry entry."""
        self._check_index(row_index)

        updated = dataclasses.replace(
            self._records[row_index],
            name=entry.name,
            molecular_weight=entry.molecular_weight,
            density=entry.density,
        )
        records = tuple(
            updated if i == row_index else r for i, r in enumerate(self._records)
        )
        self._commit(records=records)

    def apply_registry_entry(self, entry) -> None:
        """Fill the currently selected row from a registry entry."""
        self.select_from_registry(self._editing_index, entry)

    def open_table(self) -> None:
        self._commit(show_table=True)

    def close_table(self) -> None:
        self._commit(show_table=False)

    # --- Keyboard ---

    def handle_key(self, key: str, shift: bool = False) -> str | None:
        """Dispatch a keyboard shortcut.

        Enter adds a row, Shift+Enter opens the results table and Escape
        resets the form (when ``reset_on_escape`` is enabled).

        Returns
        -------
        str or None
            "add_row", "blocked", "show_table", "reset", or None if the
            key is not a shortcut
        """
        if key == "Enter" and shift:
            self.open_table()
            return "show_table"

        if key == "Enter":
            try:
                self.add_row()
            except IncompleteLimitingReactantError as e:
                logger.warning(str(e))
                return "blocked"
            return "add_row"

        if key == "Escape" and self.reset_on_escape:
            self.reset_all()
            return "reset"

        return None
