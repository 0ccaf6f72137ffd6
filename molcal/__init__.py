"""MolCal - stoichiometry calculator.

Computes moles, mass and volume of every compound in a reaction from the
weight of the limiting reactant and the molar equivalents of the others,
and exports the results to an Excel workbook.

Example workflow:
    1. Enter the limiting reactant (molecular weight, weight, unit)
    2. Add compounds with molecular weight, equivalents and density
    3. Preview the calculation table
    4. Export to Excel
    5. Save frequently used compounds for later sessions

Quick start:
    from molcal import FormController, ResultsExporter
    controller = FormController()
    controller.update_field(0, "molecular_weight", "100")
    controller.update_field(0, "weight", "500")
    controller.add_row()
    controller.update_field(1, "molecular_weight", "50")
    controller.update_field(1, "equivalents", "2")
    ResultsExporter().save(controller.results, "MolCal.xlsx")

Saved compounds:
    from molcal.storage import FileCompoundRegistry

    registry = FileCompoundRegistry("./molcal_data")
    registry.add_entry("Ethanol", molecular_weight="46.07", density="0.789")
    controller.select_from_registry(1, registry.get_entry(0))

GUI:
    python -m molcal.run_app
"""

from .core import (
    LIMITING_REACTANT_NAME,
    MassUnit,
    CompoundRecord,
    ComputedResult,
    default_limiting_reactant,
    blank_compound,
    format_quantity,
)

from .engine import (
    coerce_number,
    compute,
    is_limiting_reactant_complete,
)

from .form import (
    FormController,
    IncompleteLimitingReactantError,
)

from .excel import (
    ResultsExporter,
)

from .storage import (
    RegistryEntry,
    CompoundRegistryInterface,
    InMemoryCompoundRegistry,
    FileCompoundRegistry,
)

from .configs import (
    AppConfig,
    load_config,
    get_config,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    'LIMITING_REACTANT_NAME',
    'MassUnit',
    'CompoundRecord',
    'ComputedResult',
    'default_limiting_reactant',
    'blank_compound',
    'format_quantity',
    # Engine
    'coerce_number',
    'compute',
    'is_limiting_reactant_complete',
    # Form
    'FormController',
    'IncompleteLimitingReactantError',
    # Excel
    'ResultsExporter',
    # Storage
    'RegistryEntry',
    'CompoundRegistryInterface',
    'InMemoryCompoundRegistry',
    'FileCompoundRegistry',
    # Configuration
    'AppConfig',
    'load_config',
    'get_config',
]
