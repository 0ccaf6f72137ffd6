"""Spreadsheet export.

Example - Export computed results:
    >>> from molcal.excel import ResultsExporter
    >>> exporter = ResultsExporter()
    >>> path = exporter.save(results)          # MolCal.xlsx
    >>> preview = exporter.summary_dataframe(results)
"""

from .exporter import EXPORT_COLUMNS, ResultsExporter

__all__ = [
    'EXPORT_COLUMNS',
    'ResultsExporter',
]
