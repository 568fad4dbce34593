"""Summary page: headline figures, recent listings and charts."""

from dataclasses import dataclass
from typing import Optional

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.api.schemas import Summary
from finance_dashboard.config.settings import Settings, get_settings
from finance_dashboard.controllers.base import PageController
from finance_dashboard.controllers.charts import (
    ChartSlot,
    ChartSurface,
    asset_distribution,
    investment_comparison,
)
from finance_dashboard.controllers.notifications import Notifier, handle_error
from finance_dashboard.controllers.tables import (
    ASSET_SUMMARY_COLUMNS,
    DEBT_SUMMARY_COLUMNS,
    TableView,
    asset_summary_row,
    build_table,
    debt_summary_row,
)
from finance_dashboard.core.exceptions import AppError
from finance_dashboard.core.formatting import format_currency

NO_CHART_DATA = "No data"


@dataclass
class SummaryFigures:
    """Formatted headline figures."""

    total_assets: str
    total_debts: str
    net_worth: str
    profit_loss: str
    profit_loss_positive: bool = True
    degraded: bool = False

    @classmethod
    def from_summary(cls, summary: Summary) -> "SummaryFigures":
        profit_loss = summary.total_profit_loss
        return cls(
            total_assets=format_currency(summary.total_assets),
            total_debts=format_currency(summary.total_debts),
            net_worth=format_currency(summary.net_worth),
            profit_loss=format_currency(profit_loss),
            profit_loss_positive=profit_loss >= 0,
        )

    @classmethod
    def zeroed(cls) -> "SummaryFigures":
        zero = format_currency(0)
        return cls(zero, zero, zero, zero, profit_loss_positive=True, degraded=True)


class DashboardController(PageController):
    """
    Controller for the dashboard page.

    Owns the two chart handles for the lifetime of the page. Each
    section loads independently; a failure in one leaves the others
    untouched and renders a safe empty/zero state for itself.
    """

    def __init__(
        self,
        api: FinanceAPI,
        notifier: Notifier,
        charts: ChartSurface,
        settings: Optional[Settings] = None,
    ):
        super().__init__()
        self.api = api
        self.notifier = notifier
        self.charts = charts
        self.settings = settings or get_settings()

        self.summary = SummaryFigures.zeroed()
        self.recent_assets = TableView(columns=ASSET_SUMMARY_COLUMNS)
        self.recent_debts = TableView(columns=DEBT_SUMMARY_COLUMNS)
        self.distribution_chart = ChartSlot("distribution")
        self.comparison_chart = ChartSlot("comparison")

        self.handlers = {
            "load": self.load,
            "refresh": self.load,
            "summary:refresh": self.load_summary,
            "charts:refresh": self.load_charts,
        }

    def load(self) -> None:
        """Load every section, one after another."""
        self.load_summary()
        self.load_recent_assets()
        self.load_recent_debts()
        self.load_charts()

    def load_summary(self) -> SummaryFigures:
        try:
            self.summary = SummaryFigures.from_summary(self.api.get_summary())
        except AppError as e:
            handle_error(e, self.notifier)
            self.summary = SummaryFigures.zeroed()
        self._emit("summary")
        return self.summary

    def load_recent_assets(self) -> TableView:
        try:
            assets = self.api.list_assets()
            self.recent_assets = build_table(
                ASSET_SUMMARY_COLUMNS,
                assets,
                asset_summary_row,
                empty_message="No assets found. Add your first asset!",
                limit=self.settings.recent_rows_limit,
            )
        except AppError as e:
            handle_error(e, self.notifier)
            self.recent_assets = TableView.error(ASSET_SUMMARY_COLUMNS, "Failed to load assets")
        self._emit("assets")
        return self.recent_assets

    def load_recent_debts(self) -> TableView:
        try:
            debts = self.api.list_debts()
            self.recent_debts = build_table(
                DEBT_SUMMARY_COLUMNS,
                debts,
                debt_summary_row,
                empty_message="No debts found.",
                limit=self.settings.recent_rows_limit,
            )
        except AppError as e:
            handle_error(e, self.notifier)
            self.recent_debts = TableView.error(DEBT_SUMMARY_COLUMNS, "Failed to load debts")
        self._emit("debts")
        return self.recent_debts

    def load_charts(self) -> None:
        """Redraw both charts, destroying the previous ones first."""
        try:
            assets = self.api.list_assets()
        except AppError as e:
            handle_error(e, self.notifier)
            assets = []

        if assets:
            distribution = asset_distribution(assets)
            comparison = investment_comparison(assets)
            self.distribution_chart.replace(
                lambda: self.charts.create_chart(self.distribution_chart.name, distribution)
            )
            self.comparison_chart.replace(
                lambda: self.charts.create_chart(self.comparison_chart.name, comparison)
            )
        else:
            for slot in (self.distribution_chart, self.comparison_chart):
                slot.replace(lambda: self.charts.create_placeholder(slot.name, NO_CHART_DATA))
        self._emit("charts")

    def teardown(self) -> None:
        self.distribution_chart.clear()
        self.comparison_chart.clear()
        super().teardown()
