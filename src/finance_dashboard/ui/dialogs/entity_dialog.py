"""Asset and debt add/edit dialogs."""

import tkinter as tk
from tkinter import ttk
from typing import Callable

from finance_dashboard.controllers.base import MutationResult
from finance_dashboard.controllers.forms import EntityFormController, FormField


class EntityDialog:
    """
    Modal dialog bound to a form controller.

    The controller owns the field values and flags; the dialog only
    mirrors them into widgets and pushes edits back. Blocks until closed.
    """

    width = 460
    height = 440

    def __init__(
        self,
        parent,
        form: EntityFormController,
        submit: Callable[[], MutationResult],
        cancel: Callable[[], None],
    ):
        """
        Initialize the dialog.

        Args:
            parent: Parent window
            form: Form controller, already opened in create or edit mode
            submit: Page action that submits the form and refreshes the list
            cancel: Page action that closes the form
        """
        self.parent = parent
        self.form = form
        self._submit = submit
        self._cancel = cancel
        self.result: MutationResult = MutationResult(ok=False, action="cancelled")

        self.vars: dict[str, tk.StringVar] = {}
        self.rows: dict[str, tuple] = {}

        # Create dialog window
        self.dialog = tk.Toplevel(parent)
        self.dialog.title(form.title)
        self.dialog.geometry(f"{self.width}x{self.height}")
        self.dialog.resizable(False, False)

        # Make modal
        self.dialog.transient(parent)
        self.dialog.grab_set()

        # Center on parent
        self.dialog.update_idletasks()
        parent_widget = parent.winfo_toplevel()
        x = parent_widget.winfo_x() + (parent_widget.winfo_width() - self.width) // 2
        y = parent_widget.winfo_y() + (parent_widget.winfo_height() - self.height) // 2
        self.dialog.geometry(f"+{x}+{y}")

        self._create_content()
        self._sync_flags()

        self.dialog.protocol("WM_DELETE_WINDOW", self._on_cancel)
        self.dialog.bind("<Escape>", lambda e: self._on_cancel())

        parent_widget.wait_window(self.dialog)

    def _create_content(self) -> None:
        main_frame = ttk.Frame(self.dialog, padding="20")
        main_frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(main_frame, text=self.form.title, style='Heading.TLabel').grid(
            row=0, column=0, columnspan=3, sticky=tk.W, pady=(0, 15)
        )

        for index, form_field in enumerate(self.form.fields.values(), start=1):
            self._create_field_row(main_frame, index, form_field)

        main_frame.columnconfigure(1, weight=1)

        button_frame = ttk.Frame(main_frame)
        button_frame.grid(row=len(self.form.fields) + 1, column=0, columnspan=3, sticky=tk.EW, pady=(20, 0))

        ttk.Button(button_frame, text="Cancel", command=self._on_cancel).pack(side=tk.LEFT)
        ttk.Button(button_frame, text="Save", command=self._on_save).pack(side=tk.RIGHT)

    def _create_field_row(self, parent: ttk.Frame, row: int, form_field: FormField) -> None:
        label = ttk.Label(parent, text=f"{form_field.label}:", width=16)
        label.grid(row=row, column=0, sticky=tk.W, pady=4)

        var = tk.StringVar(value=form_field.value)
        if form_field.choices:
            widget = ttk.Combobox(
                parent,
                textvariable=var,
                values=list(form_field.choices),
                state="readonly",
                width=28,
            )
            widget.bind(
                "<<ComboboxSelected>>",
                lambda e, name=form_field.name: self._on_choice_changed(name),
            )
        else:
            widget = ttk.Entry(parent, textvariable=var, width=30)
        widget.grid(row=row, column=1, sticky=tk.EW, pady=4)

        mark = ttk.Label(parent, text="*", style='Error.TLabel')
        mark.grid(row=row, column=2, sticky=tk.W, padx=(4, 0))

        self.vars[form_field.name] = var
        self.rows[form_field.name] = (label, widget, mark)

    def _on_choice_changed(self, name: str) -> None:
        self.form.set_field(name, self.vars[name].get())
        self._sync_flags()

    def _sync_flags(self) -> None:
        """Show/hide and enable/disable rows to match the controller."""
        for name, form_field in self.form.fields.items():
            label, widget, mark = self.rows[name]
            if form_field.visible:
                label.grid()
                widget.grid()
                mark.grid()
            else:
                label.grid_remove()
                widget.grid_remove()
                mark.grid_remove()

            if form_field.required and form_field.enabled:
                mark.config(text="*")
            else:
                mark.config(text="")

            if isinstance(widget, ttk.Combobox):
                widget.config(state="readonly" if form_field.enabled else "disabled")
            else:
                widget.config(state="normal" if form_field.enabled else "disabled")

    def _push_values(self) -> None:
        for name, var in self.vars.items():
            self.form.set_field(name, var.get())

    def _on_save(self) -> None:
        self._push_values()
        self.result = self._submit()
        if self.result.ok:
            self.dialog.destroy()
        else:
            self._sync_flags()

    def _on_cancel(self) -> None:
        self._cancel()
        self.dialog.destroy()


class AssetDialog(EntityDialog):
    """Dialog for adding or editing an asset."""

    height = 460


class DebtDialog(EntityDialog):
    """Dialog for adding or editing a debt."""

    height = 420
