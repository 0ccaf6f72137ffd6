"""Spreadsheet export of calculation results.

Writes one sheet with one row per compound. The column set depends on the
data: "Volume (mL)" only appears when at least one volume was computed and
"Density (g/mL)" only when at least one density was entered.

Example:
    >>> exporter = ResultsExporter()
    >>> exporter.save(results)            # writes ./MolCal.xlsx
    >>> data = exporter.to_bytes(results) # for web download
"""

from io import BytesIO
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from ..core import ComputedResult
from ..engine import coerce_number

COL_SERIAL = "Sr. No."
COL_NAME = "Name"
COL_WEIGHT = "Weight"
COL_VOLUME = "Volume (mL)"
COL_MW = "Molecular Weight (g/mol)"
COL_MOLES = "Moles (mol)"
COL_EQUIVALENT = "Equivalent"
COL_DENSITY = "Density (g/mL)"

EXPORT_COLUMNS = [
    COL_SERIAL,
    COL_NAME,
    COL_WEIGHT,
    COL_VOLUME,
    COL_MW,
    COL_MOLES,
    COL_EQUIVALENT,
    COL_DENSITY,
]


def _number_or_blank(value: Any) -> float | str:
    number = coerce_number(value)
    return number if number != 0 else ""


class ResultsExporter:
    """Exporter for computed results.

    Parameters
    ----------
    weight_decimals : int, default=4
        Decimal places of calculated weights
    volume_decimals : int, default=4
        Decimal places of calculated volumes
    moles_decimals : int, default=6
        Decimal places of moles
    sheet_name : str, default="MolCal"
        Name of the single sheet
    filename : str, default="MolCal.xlsx"
        Default output file name
    """

    def __init__(
        self,
        weight_decimals: int = 4,
        volume_decimals: int = 4,
        moles_decimals: int = 6,
        sheet_name: str = "MolCal",
        filename: str = "MolCal.xlsx",
    ):
        self.weight_decimals = weight_decimals
        self.volume_decimals = volume_decimals
        self.moles_decimals = moles_decimals
        self.sheet_name = sheet_name
        self.filename = filename

    @classmethod
    def from_config(cls, config) -> "ResultsExporter":
        """Create from an AppConfig."""
        return cls(
            weight_decimals=config.weight_decimals,
            volume_decimals=config.volume_decimals,
            moles_decimals=config.moles_decimals,
            sheet_name=config.sheet_name,
            filename=config.export_filename,
        )

    def _weight_text(self, result: ComputedResult) -> str:
        """Calculated weight with unit, else the raw weight with unit."""
        unit = result.unit.value
        calculated = result.weight_display(self.weight_decimals)
        if calculated:
            return f"{calculated} {unit}"
        raw = result.record.weight
        if raw is not None and str(raw).strip():
            return f"{raw} {unit}"
        return ""

    def to_rows(self, results: Sequence[ComputedResult]) -> list[dict[str, Any]]:
        """One dict per compound, holding only the columns with data."""
        rows = []
        for i, result in enumerate(results):
            record = result.record
            row: dict[str, Any] = {
                COL_SERIAL: i + 1,
                COL_NAME: record.name,
                COL_WEIGHT: self._weight_text(result),
            }
            if result.calculated_volume is not None:
                row[COL_VOLUME] = round(result.calculated_volume, self.volume_decimals)
            row[COL_MW] = _number_or_blank(record.molecular_weight)
            row[COL_MOLES] = (
                round(result.moles, self.moles_decimals) if result.moles is not None else ""
            )
            row[COL_EQUIVALENT] = 1.0 if i == 0 else _number_or_blank(record.equivalents)
            density = _number_or_blank(record.density)
            if density != "":
                row[COL_DENSITY] = density
            rows.append(row)
        return rows

    def to_dataframe(self, results: Sequence[ComputedResult]) -> pd.DataFrame:
        """Export table with the columns present in at least one row."""
        rows = self.to_rows(results)
        present = {key for row in rows for key in row}
        columns = [c for c in EXPORT_COLUMNS if c in present]

        if not rows:
            return pd.DataFrame(columns=[c for c in EXPORT_COLUMNS if c not in (COL_VOLUME, COL_DENSITY)])

        return pd.DataFrame(rows, columns=columns).fillna("")

    def summary_dataframe(self, results: Sequence[ComputedResult]) -> pd.DataFrame:
        """Preview table with a fixed column set.

        The limiting reactant shows the weight as entered, every other row
        its calculated weight.
        """
        unit = results[0].unit.value if results else "mg"
        data = []
        for i, result in enumerate(results):
            record = result.record
            weight = (
                record.weight if i == 0 else result.weight_display(self.weight_decimals)
            )
            data.append({
                COL_SERIAL: i + 1,
                COL_NAME: record.name,
                f"Weight ({unit})": "" if weight is None else weight,
                COL_VOLUME: result.volume_display(self.volume_decimals),
                COL_MW: "" if record.molecular_weight is None else record.molecular_weight,
                COL_MOLES: result.moles_display(self.moles_decimals),
                "Equivalent (w.r.t LR)": "" if record.equivalents is None else record.equivalents,
            })

        columns = [
            COL_SERIAL, COL_NAME, f"Weight ({unit})", COL_VOLUME,
            COL_MW, COL_MOLES, "Equivalent (w.r.t LR)",
        ]
        return pd.DataFrame(data, columns=columns)

    def _write(self, results: Sequence[ComputedResult], target) -> None:
        df = self.to_dataframe(results)
        with pd.ExcelWriter(target, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name=self.sheet_name, index=False)

    def save(self, results: Sequence[ComputedResult], path: str | Path | None = None) -> Path:
        """Save the results to an Excel file.

        Parameters
        ----------
        results : Sequence[ComputedResult]
            Computed results, limiting reactant first
        path : str or Path, optional
            Output file or directory. Defaults to ``filename`` in the
            current directory; a directory gets ``filename`` appended.

        Returns
        -------
        Path
            The written file
        """
        if path is None:
            output_path = Path(self.filename)
        else:
            output_path = Path(path)
            if output_path.is_dir():
                output_path = output_path / self.filename

        output_path.parent.mkdir(parents=True, exist_ok=True)
        self._write(results, output_path)
        return output_path

    def to_bytes(self, results: Sequence[ComputedResult]) -> bytes:
        """Generate the workbook as bytes (for web download)."""
        buffer = BytesIO()
        self._write(results, buffer)
        buffer.seek(0)
        return buffer.getvalue()
