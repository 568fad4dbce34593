"""Domain enumerations."""

from finance_dashboard.domain.enums import (
    AssetType,
    AssetSource,
    DebtType,
    ExportFormat,
    TransferTarget,
)

__all__ = [
    "AssetType",
    "AssetSource",
    "DebtType",
    "ExportFormat",
    "TransferTarget",
]
