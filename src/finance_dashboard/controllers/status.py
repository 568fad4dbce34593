"""Connection status and net worth shown in the window header."""

import logging
from dataclasses import dataclass

from finance_dashboard.api.client import FinanceAPI
from finance_dashboard.core.exceptions import AppError
from finance_dashboard.core.formatting import format_currency

logger = logging.getLogger(__name__)


@dataclass
class HeaderStatus:
    online: bool
    net_worth: str = "--"
    positive: bool = True

    @property
    def status_text(self) -> str:
        return "API online" if self.online else "API offline"


def load_header_status(api: FinanceAPI) -> HeaderStatus:
    """
    Probe the service and fetch net worth.

    Never raises: an unreachable service reports offline with "--".
    """
    try:
        api.health_check()
    except AppError as e:
        logger.warning("Health check failed: %s", e.message)
        return HeaderStatus(online=False)

    try:
        net_worth = api.get_net_worth()
    except AppError as e:
        logger.warning("Could not load net worth: %s", e.message)
        return HeaderStatus(online=True)

    return HeaderStatus(
        online=True,
        net_worth=format_currency(net_worth.net_worth, net_worth.currency),
        positive=net_worth.net_worth >= 0,
    )
