"""Small Tk helpers shared by views and dialogs."""

import tkinter as tk
from tkinter import ttk
from typing import Optional

from finance_dashboard.controllers.tables import TableView

NUMERIC_HEADINGS = {
    "Quantity",
    "Buy Price",
    "Current Value",
    "Total Value",
    "Profit/Loss",
    "Principal",
    "Interest Rate",
    "Value",
}


def create_table(parent, table: TableView, height: Optional[int] = None) -> ttk.Treeview:
    """Create a scrollable Treeview with headings taken from a TableView."""
    container = ttk.Frame(parent)
    container.pack(fill=tk.BOTH, expand=True)

    columns = [f"c{i}" for i in range(len(table.columns))]
    tree = ttk.Treeview(
        container,
        columns=columns,
        show="headings",
        selectmode="browse",
        height=height or 10,
    )
    for column, heading in zip(columns, table.columns):
        tree.heading(column, text=heading)
        anchor = "e" if heading in NUMERIC_HEADINGS else "w"
        tree.column(column, width=110, minwidth=60, anchor=anchor)

    scrollbar = ttk.Scrollbar(container, orient=tk.VERTICAL, command=tree.yview)
    tree.configure(yscrollcommand=scrollbar.set)

    tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
    scrollbar.pack(side=tk.RIGHT, fill=tk.Y)

    tree.tag_configure("positive", foreground="green")
    tree.tag_configure("negative", foreground="red")
    tree.tag_configure("message", foreground="gray")
    return tree


def fill_table(tree: ttk.Treeview, table: TableView) -> None:
    """Replace every row of a Treeview with the rows of a TableView."""
    for item in tree.get_children():
        tree.delete(item)

    if table.message and not table.rows:
        # Empty or failed state spans the first column
        values = [table.message] + [""] * (len(table.columns) - 1)
        tree.insert("", tk.END, values=values, tags=("message",))
        return

    for row in table.rows:
        tree.insert("", tk.END, iid=row.key, values=row.values, tags=row.tags)


def selected_key(tree: ttk.Treeview) -> Optional[str]:
    """Record id of the selected row (None for no selection or a message row)."""
    selection = tree.selection()
    if not selection:
        return None
    item = selection[0]
    if "message" in tree.item(item, "tags"):
        return None
    return item
