"""Management view: asset and debt listings with CRUD and import/export."""

import tkinter as tk
from tkinter import ttk, messagebox, filedialog
from typing import Callable

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.controllers.manage import ManageController
from finance_dashboard.controllers.notifications import NotificationLevel, Notifier
from finance_dashboard.controllers.tables import TableView
from finance_dashboard.controllers.transfer import default_export_filename
from finance_dashboard.domain.enums import ExportFormat, TransferTarget
from finance_dashboard.ui.dialogs import AssetDialog, DebtDialog, HistoryDialog
from finance_dashboard.ui.widgets import create_table, fill_table, selected_key

IMPORT_FILETYPES = [("JSON files", "*.json"), ("CSV files", "*.csv"), ("All files", "*.*")]


class ManageView:
    """
    View for the manage tab.

    An inner notebook holds one page per entity kind, each with a
    toolbar and a full listing.
    """

    def __init__(self, parent: ttk.Notebook, api: FinanceAPI, notifier: Notifier):
        """
        Initialize manage view.

        Args:
            parent: Parent notebook widget
            api: Service client
            notifier: Toast notifier
        """
        self.parent = parent
        self.notifier = notifier
        self.frame = ttk.Frame(parent, padding="10")

        self.controller = ManageController(api, notifier, self._confirm)
        self.controller.subscribe(self._on_section_changed)

        self.notebook = ttk.Notebook(self.frame)
        self.notebook.pack(fill=tk.BOTH, expand=True)

        self.assets_tree = self._create_page(
            "Assets",
            self.controller.assets_table,
            [
                ("+ Add New Asset", self._on_add_asset),
                ("Edit Selected", self._on_edit_asset),
                ("Delete Selected", self._on_delete_asset),
                ("Value History", self._on_history),
            ],
            TransferTarget.ASSETS,
        )
        self.debts_tree = self._create_page(
            "Debts",
            self.controller.debts_table,
            [
                ("+ Add New Debt", self._on_add_debt),
                ("Edit Selected", self._on_edit_debt),
                ("Delete Selected", self._on_delete_debt),
            ],
            TransferTarget.DEBTS,
        )

        self.assets_tree.bind("<Double-1>", lambda e: self._on_edit_asset())
        self.debts_tree.bind("<Double-1>", lambda e: self._on_edit_debt())

    def _create_page(
        self,
        title: str,
        table: TableView,
        actions: list[tuple[str, Callable[[], None]]],
        target: TransferTarget,
    ) -> ttk.Treeview:
        """Create one notebook page: toolbar plus listing."""
        page = ttk.Frame(self.notebook, padding="5")
        self.notebook.add(page, text=f"  {title}  ")

        toolbar = ttk.Frame(page)
        toolbar.pack(fill=tk.X, pady=(0, 10))

        for text, command in actions:
            ttk.Button(toolbar, text=text, command=command).pack(side=tk.LEFT, padx=(0, 5))

        ttk.Button(toolbar, text="Refresh", command=self.refresh).pack(side=tk.RIGHT)
        ttk.Button(
            toolbar,
            text="Export CSV",
            command=lambda: self.export(target, ExportFormat.CSV),
        ).pack(side=tk.RIGHT, padx=(0, 5))
        ttk.Button(
            toolbar,
            text="Export JSON",
            command=lambda: self.export(target, ExportFormat.JSON),
        ).pack(side=tk.RIGHT, padx=(0, 5))
        ttk.Button(
            toolbar,
            text="Import...",
            command=lambda: self.import_file(target),
        ).pack(side=tk.RIGHT, padx=(0, 5))

        list_frame = ttk.LabelFrame(page, text=title, padding="5")
        list_frame.pack(fill=tk.BOTH, expand=True)
        return create_table(list_frame, table, height=15)

    # ------------------------------------------------------------------
    # Controller callbacks
    # ------------------------------------------------------------------

    def _confirm(self, message: str) -> bool:
        return messagebox.askyesno("Confirm Delete", message, parent=self.frame)

    def _on_section_changed(self, section: str) -> None:
        if section == "assets":
            fill_table(self.assets_tree, self.controller.assets_table)
        elif section == "debts":
            fill_table(self.debts_tree, self.controller.debts_table)

    def refresh(self) -> None:
        """Reload both listings."""
        self.controller.dispatch("refresh")

    # ------------------------------------------------------------------
    # Asset actions
    # ------------------------------------------------------------------

    def _require_selection(self, tree: ttk.Treeview, noun: str):
        key = selected_key(tree)
        if key is None:
            self.notifier.notify(f"Please select a {noun} first", NotificationLevel.WARNING)
        return key

    def _on_add_asset(self) -> None:
        if self.controller.dispatch("asset:add"):
            self._show_asset_dialog()

    def _on_edit_asset(self) -> None:
        asset_id = self._require_selection(self.assets_tree, "asset")
        if asset_id and self.controller.dispatch("asset:edit", asset_id):
            self._show_asset_dialog()

    def _show_asset_dialog(self) -> None:
        AssetDialog(
            self.frame.winfo_toplevel(),
            self.controller.asset_form,
            submit=lambda: self.controller.dispatch("asset:submit"),
            cancel=lambda: self.controller.dispatch("asset:cancel"),
        )

    def _on_delete_asset(self) -> None:
        asset_id = self._require_selection(self.assets_tree, "asset")
        if asset_id:
            name = self.assets_tree.item(asset_id, "values")[0]
            self.controller.dispatch("asset:delete", asset_id, name)

    def _on_history(self) -> None:
        asset_id = self._require_selection(self.assets_tree, "asset")
        if asset_id:
            name = self.assets_tree.item(asset_id, "values")[0]
            table = self.controller.dispatch("asset:history", asset_id)
            HistoryDialog(self.frame.winfo_toplevel(), name, table)

    # ------------------------------------------------------------------
    # Debt actions
    # ------------------------------------------------------------------

    def _on_add_debt(self) -> None:
        if self.controller.dispatch("debt:add"):
            self._show_debt_dialog()

    def _on_edit_debt(self) -> None:
        debt_id = self._require_selection(self.debts_tree, "debt")
        if debt_id and self.controller.dispatch("debt:edit", debt_id):
            self._show_debt_dialog()

    def _show_debt_dialog(self) -> None:
        DebtDialog(
            self.frame.winfo_toplevel(),
            self.controller.debt_form,
            submit=lambda: self.controller.dispatch("debt:submit"),
            cancel=lambda: self.controller.dispatch("debt:cancel"),
        )

    def _on_delete_debt(self) -> None:
        debt_id = self._require_selection(self.debts_tree, "debt")
        if debt_id:
            name = self.debts_tree.item(debt_id, "values")[0]
            self.controller.dispatch("debt:delete", debt_id, name)

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def import_file(self, target: TransferTarget) -> None:
        """Ask for a JSON/CSV file and upload it."""
        filepath = filedialog.askopenfilename(
            title=f"Import {target.value.title()}",
            filetypes=IMPORT_FILETYPES,
            parent=self.frame,
        )
        if not filepath:
            return
        event = "asset:import" if target is TransferTarget.ASSETS else "debt:import"
        self.controller.dispatch(event, filepath)

    def export(self, target: TransferTarget, fmt: ExportFormat) -> None:
        """Ask for a destination and download an export into it."""
        extension = f".{fmt.value}"
        filepath = filedialog.asksaveasfilename(
            title=f"Export {target.value.title()}",
            initialfile=default_export_filename(target, fmt),
            defaultextension=extension,
            filetypes=[(f"{fmt.value.upper()} files", f"*{extension}")],
            parent=self.frame,
        )
        if not filepath:
            return
        if target is TransferTarget.ALL:
            self.controller.dispatch("all:export", filepath)
        elif target is TransferTarget.ASSETS:
            self.controller.dispatch("asset:export", fmt, filepath)
        else:
            self.controller.dispatch("debt:export", fmt, filepath)

    def teardown(self) -> None:
        self.controller.teardown()
