"""REST client for the finance tracking service."""

from finance_dashboard.api.client import FinanceAPI

__all__ = ["FinanceAPI"]
