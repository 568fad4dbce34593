"""Dialog windows."""

from finance_dashboard.ui.dialogs.entity_dialog import AssetDialog, DebtDialog, EntityDialog
from finance_dashboard.ui.dialogs.history_dialog import HistoryDialog

__all__ = ["EntityDialog", "AssetDialog", "DebtDialog", "HistoryDialog"]
