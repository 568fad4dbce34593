"""API schemas package."""

from finance_dashboard.api.schemas.asset import Asset, AssetHistory, AssetCreate, AssetUpdate
from finance_dashboard.api.schemas.debt import Debt, DebtCreate, DebtUpdate
from finance_dashboard.api.schemas.summary import NetWorth, Summary, HealthStatus
from finance_dashboard.api.schemas.transfer import ImportResult

__all__ = [
    "Asset",
    "AssetHistory",
    "AssetCreate",
    "AssetUpdate",
    "Debt",
    "DebtCreate",
    "DebtUpdate",
    "NetWorth",
    "Summary",
    "HealthStatus",
    "ImportResult",
]
