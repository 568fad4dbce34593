"""Page controllers: data fetching, render models, forms and transfers.

Nothing in this package imports Tkinter; the desktop UI draws what the
controllers compute.
"""

from finance_dashboard.controllers.base import MutationResult, PageController
from finance_dashboard.controllers.dashboard import DashboardController, SummaryFigures
from finance_dashboard.controllers.forms import (
    AssetFormController,
    DebtFormController,
    FormField,
    ModalState,
)
from finance_dashboard.controllers.manage import ManageController
from finance_dashboard.controllers.notifications import (
    NotificationLevel,
    Notifier,
    handle_error,
)
from finance_dashboard.controllers.transfer import TransferController

__all__ = [
    "MutationResult",
    "PageController",
    "DashboardController",
    "SummaryFigures",
    "AssetFormController",
    "DebtFormController",
    "FormField",
    "ModalState",
    "ManageController",
    "NotificationLevel",
    "Notifier",
    "handle_error",
    "TransferController",
]
