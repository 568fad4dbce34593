"""Read-only dialog listing an asset's recorded values."""

import tkinter as tk
from tkinter import ttk

from finance_dashboard.controllers.tables import TableView
from finance_dashboard.ui.widgets import create_table, fill_table


class HistoryDialog:
    """Modal table of (date, value) points for one asset."""

    def __init__(self, parent, asset_name: str, table: TableView):
        """
        Initialize the dialog.

        Args:
            parent: Parent window
            asset_name: Shown in the title
            table: History rows built by the manage controller
        """
        self.dialog = tk.Toplevel(parent)
        self.dialog.title(f"Value History - {asset_name}")
        self.dialog.geometry("420x380")

        self.dialog.transient(parent)
        self.dialog.grab_set()

        frame = ttk.Frame(self.dialog, padding="15")
        frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(frame, text=asset_name, style='Heading.TLabel').pack(anchor=tk.W, pady=(0, 10))

        tree = create_table(frame, table, height=12)
        fill_table(tree, table)

        ttk.Button(frame, text="Close", command=self.dialog.destroy).pack(side=tk.RIGHT, pady=(10, 0))
        self.dialog.bind("<Escape>", lambda e: self.dialog.destroy())

        parent.wait_window(self.dialog)
