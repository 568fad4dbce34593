"""UI views (notebook tabs)."""

from finance_dashboard.ui.views.dashboard import DashboardView
from finance_dashboard.ui.views.manage import ManageView

__all__ = ["DashboardView", "ManageView"]
