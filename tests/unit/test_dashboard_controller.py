"""
Unit tests for the dashboard page controller.

Tests cover:
- Summary figures and the zeroed fallback
- Recent asset/debt tables, limits and empty/failed states
- Chart datasets and chart lifecycle (destroy before replace)
- Event dispatch and section notifications
"""

import pytest

from finance_dashboard.controllers.charts import (
    ChartKind,
    GAIN_COLOR,
    LOSS_COLOR,
    asset_distribution,
    investment_comparison,
)
from finance_dashboard.controllers.dashboard import NO_CHART_DATA, DashboardController
from finance_dashboard.controllers.notifications import NotificationLevel
from finance_dashboard.api.schemas import Asset


@pytest.fixture
def dashboard(api, notifier, chart_surface, settings) -> DashboardController:
    return DashboardController(api, notifier, chart_surface, settings)


def stub_dashboard(backend, assets=(), debts=(), summary=None) -> None:
    backend.add("GET", "/summary", summary or {
        "total_assets": 1234.5,
        "total_debts": 200,
        "net_worth": 1034.5,
        "total_profit_loss": -15,
        "currency": "USD",
    })
    backend.add("GET", "/assets", list(assets))
    backend.add("GET", "/debts", list(debts))


# =============================================================================
# SUMMARY
# =============================================================================


class TestSummary:
    """Tests for the summary cards."""

    def test_figures_are_formatted(self, dashboard, backend):
        """
        GIVEN a summary from the service
        WHEN the dashboard loads it
        THEN every figure is formatted as currency
        """
        stub_dashboard(backend)

        figures = dashboard.load_summary()

        assert figures.total_assets == "$1,234.50"
        assert figures.total_debts == "$200.00"
        assert figures.net_worth == "$1,034.50"
        assert figures.profit_loss == "-$15.00"
        assert not figures.profit_loss_positive
        assert not figures.degraded

    def test_failure_shows_zeros(self, dashboard, backend, notifier):
        """
        GIVEN the summary endpoint fails
        WHEN the dashboard loads
        THEN zeroed figures are shown and an error is notified
        """
        backend.add("GET", "/summary", {"error": "db down"}, status=500)

        figures = dashboard.load_summary()

        assert figures.net_worth == "$0.00"
        assert figures.degraded
        assert notifier.last == ("db down", NotificationLevel.ERROR)


# =============================================================================
# RECENT TABLES
# =============================================================================


class TestRecentTables:
    """Tests for the recent assets and debts tables."""

    def test_recent_assets_limited(self, dashboard, backend, asset_factory):
        stub_dashboard(backend, assets=[asset_factory(id=f"a{i}") for i in range(8)])

        table = dashboard.load_recent_assets()

        assert [row.key for row in table.rows] == ["a0", "a1", "a2", "a3", "a4"]

    def test_asset_row_values(self, dashboard, backend, asset_factory):
        stub_dashboard(backend, assets=[asset_factory(id="a1", name="Apple", quantity=2)])

        row = dashboard.load_recent_assets().rows[0]

        assert row.values == ("Apple", "Stock", "2", "$150.00", "$300.00", "$100.00")
        assert row.tags == ("stock", "positive")

    def test_unknown_current_value_shows_placeholder(self, dashboard, backend, asset_factory):
        stub_dashboard(backend, assets=[asset_factory(id="a1", current_value=None)])

        row = dashboard.load_recent_assets().rows[0]

        assert row.values[3:] == ("--", "--", "--")
        assert "neutral" in row.tags

    def test_empty_assets(self, dashboard, backend):
        stub_dashboard(backend)

        table = dashboard.load_recent_assets()

        assert table.is_empty
        assert table.message == "No assets found. Add your first asset!"
        assert not table.failed

    def test_failed_debts(self, dashboard, backend, notifier):
        backend.add("GET", "/debts", status=502, body=b"")

        table = dashboard.load_recent_debts()

        assert table.failed
        assert table.message == "Failed to load debts"
        assert notifier.last == ("HTTP 502: Bad Gateway", NotificationLevel.ERROR)

    def test_debt_row_values(self, dashboard, backend, debt_factory):
        stub_dashboard(backend, debts=[debt_factory(id="d1")])

        row = dashboard.load_recent_debts().rows[0]

        assert row.values == ("Visa", "Credit Card", "$5,000.00", "$3,200.00", "19.9%")
        assert row.tags == ("credit-card",)


# =============================================================================
# CHARTS
# =============================================================================


class TestChartData:
    """Tests for chart dataset construction."""

    def test_distribution_aggregates_by_type(self, asset_factory):
        assets = [
            Asset(**asset_factory(type="stock", current_value=10, quantity=2)),
            Asset(**asset_factory(type="car", current_value=5000, quantity=1)),
            Asset(**asset_factory(type="stock", current_value=5, quantity=4)),
        ]

        data = asset_distribution(assets)

        assert data.kind is ChartKind.DOUGHNUT
        assert data.labels == ["Stock", "Car"]
        assert data.values == [40, 5000]

    def test_distribution_value_labels_include_share(self, asset_factory):
        assets = [
            Asset(**asset_factory(type="cash", current_value=75, quantity=1)),
            Asset(**asset_factory(type="car", current_value=25, quantity=1)),
        ]

        labels = asset_distribution(assets).value_labels()

        assert labels == ["Cash: $75.00 (75.0%)", "Car: $25.00 (25.0%)"]

    def test_comparison_gain(self, asset_factory):
        data = investment_comparison([Asset(**asset_factory(buy_price=100, current_value=150, quantity=2))])

        assert data.kind is ChartKind.BAR
        assert data.labels == ["Invested", "Current Value", "Profit/Loss"]
        assert data.values == [200, 300, 100]
        assert data.colors[-1] == GAIN_COLOR

    def test_comparison_loss(self, asset_factory):
        data = investment_comparison([Asset(**asset_factory(buy_price=100, current_value=50, quantity=1))])

        assert data.values[-1] == -50
        assert data.colors[-1] == LOSS_COLOR


class TestChartLifecycle:
    """Tests for chart creation and replacement."""

    def test_charts_created(self, dashboard, backend, asset_factory, chart_surface):
        stub_dashboard(backend, assets=[asset_factory()])

        dashboard.load_charts()

        assert chart_surface.events == [
            ("create", "distribution", 1),
            ("create", "comparison", 2),
        ]

    def test_previous_chart_destroyed_before_replacement(self, dashboard, backend, asset_factory, chart_surface):
        """
        GIVEN charts already drawn
        WHEN the charts are refreshed
        THEN each old chart is destroyed before its replacement is created
        AND only two charts are live
        """
        stub_dashboard(backend, assets=[asset_factory()])
        dashboard.load_charts()

        dashboard.load_charts()

        assert chart_surface.events[2:] == [
            ("destroy", "distribution", 1),
            ("create", "distribution", 3),
            ("destroy", "comparison", 2),
            ("create", "comparison", 4),
        ]
        assert len(chart_surface.live()) == 2

    def test_no_assets_draws_placeholders(self, dashboard, backend, chart_surface):
        stub_dashboard(backend)

        dashboard.load_charts()

        assert [event[0] for event in chart_surface.events] == ["placeholder", "placeholder"]
        assert chart_surface.placeholder_messages == [NO_CHART_DATA, NO_CHART_DATA]

    def test_fetch_failure_draws_placeholders(self, dashboard, backend, chart_surface, notifier):
        backend.add("GET", "/assets", {"error": "nope"}, status=500)

        dashboard.load_charts()

        assert {slot for _, slot, _ in chart_surface.events} == {"distribution", "comparison"}
        assert all(action == "placeholder" for action, _, _ in chart_surface.events)
        assert notifier.messages(NotificationLevel.ERROR) == ["nope"]

    def test_teardown_destroys_charts(self, dashboard, backend, asset_factory, chart_surface):
        stub_dashboard(backend, assets=[asset_factory()])
        dashboard.load_charts()

        dashboard.teardown()

        assert chart_surface.live() == []


# =============================================================================
# DISPATCH
# =============================================================================


class TestDispatch:
    """Tests for event dispatch and section notifications."""

    def test_load_emits_every_section(self, dashboard, backend, asset_factory):
        stub_dashboard(backend, assets=[asset_factory()])
        sections = []
        dashboard.subscribe(sections.append)

        dashboard.dispatch("load")

        assert sections == ["summary", "assets", "debts", "charts"]

    def test_one_failing_section_does_not_block_others(self, dashboard, backend, debt_factory):
        """
        GIVEN the summary and assets endpoints fail
        WHEN the dashboard loads
        THEN the debts table still renders
        """
        backend.add("GET", "/summary", status=500)
        backend.add("GET", "/assets", status=500)
        backend.add("GET", "/debts", [debt_factory(id="d1")])

        dashboard.dispatch("refresh")

        assert dashboard.summary.degraded
        assert dashboard.recent_assets.failed
        assert [row.key for row in dashboard.recent_debts.rows] == ["d1"]

    def test_summary_refresh_only_fetches_summary(self, dashboard, backend):
        stub_dashboard(backend)

        dashboard.dispatch("summary:refresh")

        assert [r.path for r in backend.requests] == ["/summary"]

    def test_unknown_event(self, dashboard):
        with pytest.raises(KeyError):
            dashboard.dispatch("nope")

    def test_unsubscribe(self, dashboard, backend):
        stub_dashboard(backend)
        sections = []
        dashboard.subscribe(sections.append)
        dashboard.unsubscribe(sections.append)

        dashboard.dispatch("summary:refresh")

        assert sections == []
