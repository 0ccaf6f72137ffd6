"""Panel GUI for MolCal stoichiometry calculations.

A single-page form:
1. Enter the limiting reactant (name, MW, density, weight + unit)
2. Add compounds with their molar equivalents (Enter)
3. Preview the calculation table (Shift+Enter)
4. Export to Excel
5. Reset the form (Esc)

Saved compounds (name, MW, density) can be stored and reused across
sessions: "Use" fills the currently selected row.

Run with:
    panel serve molcal/app.py --show --autoreload

Or programmatically:
    from molcal.app import serve
    serve(port=5006)
"""

import io
import logging
from pathlib import Path

import panel as pn
import param
import pandas as pd

pn.extension('tabulator', notifications=True)

from .configs import AppConfig, get_config
from .core import MassUnit
from .excel import ResultsExporter
from .form import FormController, IncompleteLimitingReactantError
from .storage import CompoundRegistryInterface, FileCompoundRegistry, RegistryEntry

logger = logging.getLogger(__name__)


class KeyboardShortcuts(pn.reactive.ReactiveHTML):
    """Forwards Enter / Shift+Enter / Escape key presses to Python.

    ``presses`` increases on every captured key so repeated presses of the
    same key still trigger watchers.
    """

    key = param.String(default="")
    shift = param.Boolean(default=False)
    presses = param.Integer(default=0)

    _template = '<div id="shortcuts" style="display: none;"></div>'

    _scripts = {
        'render': """
        document.addEventListener('keydown', (event) => {
          if (event.key !== 'Enter' && event.key !== 'Escape') {
            return
          }
          event.preventDefault()
          data.key = event.key
          data.shift = event.shiftKey
          data.presses = data.presses + 1
        })
        """,
    }


class MolCalApp(param.Parameterized):
    """Stoichiometry calculator application.

    Workflow:
    1. Limiting reactant: weight, unit and molecular weight
    2. Compounds: molecular weight and equivalents per row
    3. Table: preview of all computed quantities
    4. Export: one-sheet Excel workbook
    """

    status = param.String(default="Ready. Enter the limiting reactant.")

    def __init__(
        self,
        registry: CompoundRegistryInterface | None = None,
        config: AppConfig | None = None,
        **params
    ):
        super().__init__(**params)
        self.config = config or get_config()

        if registry is None:
            registry = FileCompoundRegistry(
                self.config.storage_dir,
                filename=self.config.registry_filename,
                storage_key=self.config.storage_key,
            )
        self.registry = registry

        self.controller = FormController(
            default_unit=self.config.unit,
            reset_on_escape=self.config.reset_on_escape,
        )
        self.exporter = ResultsExporter.from_config(self.config)

        # Per-row result panes, rebuilt with the rows
        self._result_panes: list[pn.pane.Markdown] = []

        self._build_ui()
        self.controller.subscribe(self._on_state_change)
        self._render_rows()
        self._render_registry()
        self._on_state_change(self.controller)

    def _build_ui(self):
        """Build UI components."""
        # === Form ===
        self._rows_column = pn.Column(sizing_mode='stretch_width')

        self._add_btn = pn.widgets.Button(
            name="+ Add Compound (Enter)",
            button_type="primary",
            width=200,
        )
        self._add_btn.on_click(self._on_add_row)

        self._table_btn = pn.widgets.Button(
            name="Preview Table (Shift+Enter)",
            button_type="default",
            width=220,
        )
        self._table_btn.on_click(lambda event: self.controller.open_table())

        self._export_download = pn.widgets.FileDownload(
            callback=self._export_callback,
            filename=self.config.export_filename,
            label="Export to Excel",
            button_type="success",
            width=200,
        )

        self._reset_btn = pn.widgets.Button(
            name="Reset (Esc)",
            button_type="danger",
            width=120,
        )
        self._reset_btn.on_click(self._on_reset)

        # === Results table ===
        self._results_table = pn.widgets.Tabulator(
            pd.DataFrame(),
            sizing_mode='stretch_width',
            disabled=True,
            show_index=False,
        )
        self._table_area = pn.Column(
            pn.pane.Markdown("## Calculation Summary"),
            self._results_table,
            sizing_mode='stretch_width',
            visible=False,
        )

        # === Saved compounds ===
        self._db_name_input = pn.widgets.TextInput(placeholder="Name", width=160)
        self._db_mw_input = pn.widgets.TextInput(placeholder="MW (g/mol)", width=120)
        self._db_density_input = pn.widgets.TextInput(placeholder="Density (g/mL)", width=120)

        self._db_save_btn = pn.widgets.Button(name="Save", button_type="primary", width=80)
        self._db_save_btn.on_click(self._on_save_compound)

        self._db_list = pn.Column(sizing_mode='stretch_width')

        # === Keyboard ===
        self._shortcuts = KeyboardShortcuts()
        self._shortcuts.param.watch(self._on_shortcut, 'presses')

        # Status bar
        self._status_pane = pn.pane.Alert(
            self.status,
            alert_type="info",
            sizing_mode='stretch_width',
        )

    # --- Rendering ---

    def _render_rows(self):
        """Rebuild the input widgets from the controller's records."""
        cards = []
        self._result_panes = []

        for i, record in enumerate(self.controller.records):
            title = "Limiting Reactant" if i == 0 else f"Compound {i + 1}"

            name_input = pn.widgets.TextInput(name="Name", value=record.name, width=180)
            mw_input = pn.widgets.TextInput(
                name="MW (g/mol)", value=str(record.molecular_weight or ""), width=120,
            )
            density_input = pn.widgets.TextInput(
                name="Density (g/mL)", value=str(record.density or ""), width=120,
            )
            self._bind(name_input, i, "name")
            self._bind(mw_input, i, "molecular_weight")
            self._bind(density_input, i, "density")
            widgets = [name_input, mw_input, density_input]

            if i == 0:
                weight_input = pn.widgets.TextInput(
                    name="Weight", value=str(record.weight or ""), width=120,
                )
                unit_select = pn.widgets.Select(
                    name="Unit",
                    options=[u.value for u in MassUnit],
                    value=record.unit.value,
                    width=80,
                )
                self._bind(weight_input, i, "weight")
                unit_select.param.watch(
                    lambda event: self.controller.update_field(0, "unit", event.new), 'value'
                )
                widgets += [weight_input, unit_select]
            else:
                eq_input = pn.widgets.TextInput(
                    name="Molar Equivalent", value=str(record.equivalents or ""), width=140,
                )
                self._bind(eq_input, i, "equivalents")
                widgets.append(eq_input)

            select_btn = pn.widgets.Button(name="Select", button_type="light", width=80)
            select_btn.on_click(lambda event, index=i: self.controller.select_row(index))

            result_pane = pn.pane.Markdown("", sizing_mode='stretch_width')
            self._result_panes.append(result_pane)

            cards.append(pn.Card(
                pn.Row(*widgets, select_btn),
                result_pane,
                title=title,
                collapsible=False,
                sizing_mode='stretch_width',
            ))

        self._rows_column.objects = cards

    def _bind(self, widget: pn.widgets.TextInput, row_index: int, field_name: str):
        """Push every keystroke of ``widget`` into the controller."""
        def update(event):
            self.controller.update_field(row_index, field_name, event.new)
        widget.param.watch(update, 'value_input')

    def _result_text(self, index: int) -> str:
        result = self.controller.results[index]
        weight = result.weight_display(self.config.weight_decimals)
        if not weight:
            return ""
        parts = [f"**{weight} {result.unit.value}**"]
        volume = result.volume_display(self.config.volume_decimals)
        if volume:
            parts.append(f"{volume} mL")
        parts.append(f"{result.moles_display(self.config.moles_decimals)} mol")
        return ", ".join(parts)

    def _render_registry(self):
        """Rebuild the saved compounds list."""
        items = []
        for position, entry in enumerate(self.registry.list_entries()):
            use_btn = pn.widgets.Button(name="Use", button_type="success", width=60)
            use_btn.on_click(lambda event, e=entry: self._on_use_compound(e))
            remove_btn = pn.widgets.Button(name="Remove", button_type="danger", width=80)
            remove_btn.on_click(lambda event, p=position: self._on_remove_compound(p))
            items.append(pn.Row(pn.pane.Markdown(entry.name, width=200), use_btn, remove_btn))

        if not items:
            items = [pn.pane.Markdown("*No saved compounds*")]
        self._db_list.objects = items

    def _on_state_change(self, controller: FormController):
        """Refresh computed values and the table after any change."""
        if len(self._result_panes) != controller.row_count:
            self._render_rows()

        for i, pane in enumerate(self._result_panes):
            pane.object = self._result_text(i)

        self._results_table.value = self.exporter.summary_dataframe(controller.results)
        self._table_area.visible = controller.show_table

    def _update_status(self, alert_type: str):
        """Update status pane."""
        self._status_pane.alert_type = alert_type
        self._status_pane.object = self.status

    def _warn(self, message: str):
        """Show a blocking warning to the user."""
        self.status = message
        self._update_status("warning")
        if pn.state.notifications is not None:
            pn.state.notifications.warning(message)

    # --- Callbacks ---

    def _on_add_row(self, event=None):
        try:
            self.controller.add_row()
        except IncompleteLimitingReactantError as e:
            self._warn(str(e))
            return
        self.status = f"Compound {self.controller.row_count} added."
        self._update_status("info")

    def _on_reset(self, event=None):
        self.controller.reset_all()
        self._render_rows()
        self._on_state_change(self.controller)
        self.status = "Form reset."
        self._update_status("info")

    def _on_shortcut(self, event):
        key, shift = self._shortcuts.key, self._shortcuts.shift
        if key == "Enter" and not shift:
            self._on_add_row()
        elif key == "Escape" and self.controller.reset_on_escape:
            self._on_reset()
        else:
            self.controller.handle_key(key, shift=shift)

    def _on_save_compound(self, event):
        try:
            entry = self.registry.add_entry(
                self._db_name_input.value_input,
                molecular_weight=self._db_mw_input.value_input,
                density=self._db_density_input.value_input,
            )
        except ValueError as e:
            self._warn(str(e))
            return
        except OSError as e:
            self.status = f"Could not save compound: {e}"
            self._update_status("danger")
            return

        for widget in (self._db_name_input, self._db_mw_input, self._db_density_input):
            widget.value = ""
        self._render_registry()
        self.status = f"Saved compound '{entry.name}'."
        self._update_status("success")

    def _on_use_compound(self, entry: RegistryEntry):
        self.controller.apply_registry_entry(entry)
        self._render_rows()
        self._on_state_change(self.controller)
        self.status = f"Filled row {self.controller.editing_index + 1} with '{entry.name}'."
        self._update_status("info")

    def _on_remove_compound(self, position: int):
        try:
            self.registry.remove_entry(position)
        except OSError as e:
            self.status = f"Could not remove compound: {e}"
            self._update_status("danger")
            return
        self._render_registry()

    def _export_callback(self):
        """Workbook for the FileDownload widget."""
        logger.info(f"Exporting {self.controller.row_count} compound(s)")
        return io.BytesIO(self.exporter.to_bytes(self.controller.results))

    def view(self) -> pn.viewable.Viewable:
        """Create the main application view."""
        form = pn.Column(
            self._rows_column,
            pn.Row(self._add_btn, self._table_btn, self._export_download, self._reset_btn),
            sizing_mode='stretch_width',
        )

        saved = pn.Column(
            pn.pane.Markdown("### Saved Compounds"),
            pn.Row(self._db_name_input, self._db_mw_input, self._db_density_input, self._db_save_btn),
            self._db_list,
            width=560,
        )

        layout = pn.Column(
            pn.pane.Markdown("# MolCal"),
            self._status_pane,
            pn.Row(form, saved, sizing_mode='stretch_width'),
            self._table_area,
            self._shortcuts,
            sizing_mode='stretch_width',
        )

        return layout


def create_app(
    storage_dir: str | Path | None = None,
    config: AppConfig | None = None,
) -> MolCalApp:
    """Create the application.

    Parameters
    ----------
    storage_dir : str or Path, optional
        Directory for the saved compounds file (overrides the config)
    config : AppConfig, optional
        Settings. Defaults to the packaged defaults.

    Returns
    -------
    MolCalApp
        The application instance
    """
    config = config or get_config()
    registry = FileCompoundRegistry(
        storage_dir if storage_dir is not None else config.storage_dir,
        filename=config.registry_filename,
        storage_key=config.storage_key,
    )
    return MolCalApp(registry=registry, config=config)


def serve(
    storage_dir: str | Path | None = None,
    config: AppConfig | None = None,
    **kwargs
):
    """Serve the application.

    Parameters
    ----------
    storage_dir : str or Path, optional
        Directory for the saved compounds file
    config : AppConfig, optional
        Settings
    **kwargs
        Additional arguments passed to pn.serve()
    """
    pn.serve(lambda: create_app(storage_dir=storage_dir, config=config).view(), **kwargs)


# For panel serve
if __name__.startswith("bokeh"):
    create_app().view().servable()
