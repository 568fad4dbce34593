"""Main application window with navigation."""

import tkinter as tk
from tkinter import ttk

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.config.settings import Settings
from finance_dashboard.controllers.notifications import Notifier
from finance_dashboard.controllers.status import load_header_status


class MainWindow:
    """
    Main application window with tabbed navigation.

    Contains tabs for the Dashboard and Manage views.
    """

    def __init__(self, root: tk.Tk, api: FinanceAPI, notifier: Notifier, settings: Settings):
        """
        Initialize main window.

        Args:
            root: Tkinter root window
            api: Service client shared by every view
            notifier: Toast notifier
            settings: Application settings
        """
        self.root = root
        self.api = api

        # Create main frame
        self.main_frame = ttk.Frame(root, padding="10")
        self.main_frame.pack(fill=tk.BOTH, expand=True)

        self._create_header(settings)

        # Create notebook (tabbed interface)
        self.notebook = ttk.Notebook(self.main_frame)
        self.notebook.pack(fill=tk.BOTH, expand=True, pady=(10, 0))

        from finance_dashboard.ui.views import DashboardView, ManageView

        self.dashboard_view = DashboardView(self.notebook, api, notifier, settings)
        self.manage_view = ManageView(self.notebook, api, notifier)
        self.manage_view.controller.subscribe(self._on_manage_changed)

        self.notebook.add(self.dashboard_view.frame, text="  Dashboard  ")
        self.notebook.add(self.manage_view.frame, text="  Manage  ")

        self.notebook.bind("<<NotebookTabChanged>>", self._on_tab_changed)

        # Initial load
        self.refresh_all()
        self.dashboard_view.start_auto_refresh()

    def _create_header(self, settings: Settings) -> None:
        """Create the header with connection status and net worth."""
        header_frame = ttk.Frame(self.main_frame)
        header_frame.pack(fill=tk.X, pady=(0, 10))

        title_label = ttk.Label(header_frame, text=settings.app_name, style='Title.TLabel')
        title_label.pack(side=tk.LEFT)

        status_frame = ttk.Frame(header_frame)
        status_frame.pack(side=tk.RIGHT)

        self.net_worth_label = ttk.Label(status_frame, text="Net Worth: --", style='Heading.TLabel')
        self.net_worth_label.pack(side=tk.RIGHT, padx=(20, 0))

        self.status_label = ttk.Label(status_frame, text="API offline", style='Error.TLabel')
        self.status_label.pack(side=tk.RIGHT)

    def _on_tab_changed(self, event) -> None:
        """Reload the tab that just became visible."""
        selected_tab = self.notebook.index(self.notebook.select())
        if selected_tab == 0:
            self.dashboard_view.refresh()
        elif selected_tab == 1:
            self.manage_view.refresh()

    def _on_manage_changed(self, section: str) -> None:
        """Reload the header after a mutation on the Manage tab."""
        if section == "totals":
            self._update_header()

    def refresh_all(self) -> None:
        """Refresh all views and header."""
        self._update_header()
        self.dashboard_view.refresh()
        self.manage_view.refresh()

    def _update_header(self) -> None:
        status = load_header_status(self.api)
        self.status_label.config(
            text=status.status_text,
            style='Success.TLabel' if status.online else 'Error.TLabel',
        )
        self.net_worth_label.config(
            text=f"Net Worth: {status.net_worth}",
            style='Positive.TLabel' if status.positive else 'Negative.TLabel',
        )

    def teardown(self) -> None:
        self.dashboard_view.teardown()
        self.manage_view.teardown()
