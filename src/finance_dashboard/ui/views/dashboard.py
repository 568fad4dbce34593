"""Dashboard view: headline figures, recent listings and charts."""

import tkinter as tk
from tkinter import ttk
from typing import Optional

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.config.settings import Settings
from finance_dashboard.controllers.dashboard import DashboardController
from finance_dashboard.controllers.notifications import Notifier
from finance_dashboard.controllers.tables import ASSET_SUMMARY_COLUMNS, DEBT_SUMMARY_COLUMNS, TableView
from finance_dashboard.ui.charts import MatplotlibChartSurface
from finance_dashboard.ui.widgets import create_table, fill_table


class DashboardView:
    """
    View for the dashboard tab.

    Redraws whichever section the controller reports as changed, and
    re-fetches the summary cards on a timer.
    """

    def __init__(self, parent: ttk.Notebook, api: FinanceAPI, notifier: Notifier, settings: Settings):
        """
        Initialize dashboard view.

        Args:
            parent: Parent notebook widget
            api: Service client
            notifier: Toast notifier
            settings: Application settings
        """
        self.parent = parent
        self.settings = settings
        self._refresh_job: Optional[str] = None

        self.frame = ttk.Frame(parent, padding="10")

        self._create_summary_cards()
        self._create_charts_row()
        self._create_recent_tables()

        charts = MatplotlibChartSurface({
            "distribution": self.distribution_frame,
            "comparison": self.comparison_frame,
        })
        self.controller = DashboardController(api, notifier, charts, settings)
        self.controller.subscribe(self._on_section_changed)

    def _create_summary_cards(self) -> None:
        """Create the four summary figures."""
        cards_frame = ttk.Frame(self.frame)
        cards_frame.pack(fill=tk.X, pady=(0, 10))

        self.card_labels: dict[str, ttk.Label] = {}
        for column, (key, title) in enumerate((
            ("total_assets", "Total Assets"),
            ("total_debts", "Total Debts"),
            ("net_worth", "Net Worth"),
            ("profit_loss", "Profit/Loss"),
        )):
            card = ttk.LabelFrame(cards_frame, text=title, padding="10")
            card.grid(row=0, column=column, sticky=tk.NSEW, padx=5)
            cards_frame.columnconfigure(column, weight=1)

            value_label = ttk.Label(card, text="--", style='Heading.TLabel')
            value_label.pack(anchor=tk.W)
            self.card_labels[key] = value_label

        self.degraded_label = ttk.Label(self.frame, text="", style='Error.TLabel')
        self.degraded_label.pack(anchor=tk.W)

    def _create_charts_row(self) -> None:
        charts_frame = ttk.Frame(self.frame)
        charts_frame.pack(fill=tk.BOTH, expand=True, pady=(0, 10))
        charts_frame.columnconfigure(0, weight=1)
        charts_frame.columnconfigure(1, weight=1)
        charts_frame.rowconfigure(0, weight=1)

        self.distribution_frame = ttk.LabelFrame(charts_frame, text="Asset Distribution", padding="5")
        self.distribution_frame.grid(row=0, column=0, sticky=tk.NSEW, padx=(0, 5))

        self.comparison_frame = ttk.LabelFrame(charts_frame, text="Investment vs Current Value", padding="5")
        self.comparison_frame.grid(row=0, column=1, sticky=tk.NSEW, padx=(5, 0))

    def _create_recent_tables(self) -> None:
        tables_frame = ttk.Frame(self.frame)
        tables_frame.pack(fill=tk.BOTH, expand=True)
        tables_frame.columnconfigure(0, weight=1)
        tables_frame.columnconfigure(1, weight=1)

        assets_frame = ttk.LabelFrame(tables_frame, text="Recent Assets", padding="5")
        assets_frame.grid(row=0, column=0, sticky=tk.NSEW, padx=(0, 5))

        debts_frame = ttk.LabelFrame(tables_frame, text="Recent Debts", padding="5")
        debts_frame.grid(row=0, column=1, sticky=tk.NSEW, padx=(5, 0))

        rows = self.settings.recent_rows_limit
        self.assets_tree = create_table(assets_frame, TableView(ASSET_SUMMARY_COLUMNS), height=rows)
        self.debts_tree = create_table(debts_frame, TableView(DEBT_SUMMARY_COLUMNS), height=rows)

    def _on_section_changed(self, section: str) -> None:
        if section == "summary":
            self._update_summary()
        elif section == "assets":
            fill_table(self.assets_tree, self.controller.recent_assets)
        elif section == "debts":
            fill_table(self.debts_tree, self.controller.recent_debts)

    def _update_summary(self) -> None:
        figures = self.controller.summary
        self.card_labels["total_assets"].config(text=figures.total_assets)
        self.card_labels["total_debts"].config(text=figures.total_debts)
        self.card_labels["net_worth"].config(text=figures.net_worth)
        self.card_labels["profit_loss"].config(
            text=figures.profit_loss,
            style='Positive.TLabel' if figures.profit_loss_positive else 'Negative.TLabel',
        )
        self.degraded_label.config(
            text="Summary unavailable; showing zeros." if figures.degraded else ""
        )

    def refresh(self) -> None:
        """Reload every section."""
        self.controller.dispatch("refresh")

    def start_auto_refresh(self) -> None:
        """Re-fetch the summary cards every summary_refresh_seconds."""
        self.stop_auto_refresh()
        if self.settings.summary_refresh_ms <= 0:
            return
        self._refresh_job = self.frame.after(self.settings.summary_refresh_ms, self._on_refresh_timer)

    def stop_auto_refresh(self) -> None:
        if self._refresh_job is not None:
            self.frame.after_cancel(self._refresh_job)
            self._refresh_job = None

    def _on_refresh_timer(self) -> None:
        self._refresh_job = None
        self.controller.dispatch("summary:refresh")
        self.start_auto_refresh()

    def teardown(self) -> None:
        self.stop_auto_refresh()
        self.controller.teardown()
