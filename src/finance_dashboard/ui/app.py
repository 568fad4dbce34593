"""Desktop application main class."""

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.config.settings import get_settings
from finance_dashboard.domain.enums import ExportFormat, TransferTarget
from finance_dashboard.ui.toast import Toast

logger = logging.getLogger(__name__)


class DesktopApp:
    """
    Main desktop application class.

    Manages the Tkinter root window, the service client, and lifecycle.
    """

    def __init__(self):
        """Initialize the desktop application."""
        self.settings = get_settings()
        self.root: Optional[tk.Tk] = None
        self.api: Optional[FinanceAPI] = None
        self.toast: Optional[Toast] = None
        self.main_window = None

    def run(self) -> None:
        """Start the desktop application."""
        self.root = tk.Tk()
        self.root.title(self.settings.app_name)
        self.root.geometry("1280x860")
        self.root.minsize(900, 650)

        try:
            # macOS app icon
            self.root.createcommand('tk::mac::ReopenApplication', self._on_reopen)
        except tk.TclError:
            pass

        self._configure_style()

        self.api = FinanceAPI.from_settings(self.settings)
        self.toast = Toast(self.root, self.settings.toast_duration_ms)
        logger.info("Connecting to %s", self.api.base_url)

        from finance_dashboard.ui.main_window import MainWindow
        self.main_window = MainWindow(self.root, self.api, self.toast, self.settings)

        self._create_menu_bar()

        self.root.protocol("WM_DELETE_WINDOW", self._on_close)
        self.root.mainloop()

    def _configure_style(self) -> None:
        """Configure ttk styles for consistent appearance."""
        style = ttk.Style()

        available_themes = style.theme_names()
        if 'aqua' in available_themes:  # macOS
            style.theme_use('aqua')
        elif 'clam' in available_themes:
            style.theme_use('clam')

        style.configure('Title.TLabel', font=('Helvetica', 16, 'bold'))
        style.configure('Heading.TLabel', font=('Helvetica', 12, 'bold'))
        style.configure('Success.TLabel', foreground='green')
        style.configure('Error.TLabel', foreground='red')
        style.configure('Positive.TLabel', foreground='green', font=('Helvetica', 12, 'bold'))
        style.configure('Negative.TLabel', foreground='red', font=('Helvetica', 12, 'bold'))

    def _create_menu_bar(self) -> None:
        """Create the application menu bar."""
        menubar = tk.Menu(self.root)
        self.root.config(menu=menubar)
        manage = self.main_window.manage_view

        # File menu
        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)

        export_menu = tk.Menu(file_menu, tearoff=0)
        file_menu.add_cascade(label="Export", menu=export_menu)
        for target in (TransferTarget.ASSETS, TransferTarget.DEBTS):
            for fmt in ExportFormat:
                export_menu.add_command(
                    label=f"{target.value.title()} as {fmt.value.upper()}...",
                    command=lambda t=target, f=fmt: manage.export(t, f),
                )
        export_menu.add_separator()
        export_menu.add_command(
            label="Everything as JSON...",
            command=lambda: manage.export(TransferTarget.ALL, ExportFormat.JSON),
        )

        import_menu = tk.Menu(file_menu, tearoff=0)
        file_menu.add_cascade(label="Import", menu=import_menu)
        import_menu.add_command(label="Assets...", command=lambda: manage.import_file(TransferTarget.ASSETS))
        import_menu.add_command(label="Debts...", command=lambda: manage.import_file(TransferTarget.DEBTS))

        file_menu.add_separator()
        file_menu.add_command(label="Quit", command=self._on_close, accelerator="Cmd+Q")

        # View menu
        view_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="View", menu=view_menu)
        view_menu.add_command(label="Refresh", command=self._on_refresh, accelerator="Ctrl+R")
        self.root.bind_all("<Control-r>", lambda e: self._on_refresh())

        # Help menu
        help_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Help", menu=help_menu)
        help_menu.add_command(label="About", command=self._on_about)

        try:
            self.root.createcommand('tk::mac::Quit', self._on_close)
        except tk.TclError:
            pass

    def _on_refresh(self) -> None:
        """Refresh all views."""
        self.main_window.refresh_all()

    def _on_about(self) -> None:
        """Show about dialog."""
        messagebox.showinfo(
            "About",
            f"{self.settings.app_name}\n"
            f"Version {self.settings.app_version}\n\n"
            f"Track assets and debts kept by a finance service.\n\n"
            f"Service:\n{self.settings.api_base_url}"
        )

    def _on_reopen(self) -> None:
        """Handle macOS dock click to reopen."""
        if self.root:
            self.root.deiconify()

    def _on_close(self) -> None:
        """Handle application close."""
        if self.main_window:
            self.main_window.teardown()
        if self.api:
            self.api.close()
        if self.root:
            self.root.destroy()
