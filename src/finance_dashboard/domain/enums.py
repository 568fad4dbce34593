"""Enumerations shared by payloads, forms and transfers."""

from enum import Enum


class AssetType(str, Enum):
    """Kinds of tracked assets."""

    STOCK = "stock"
    PROPERTY = "property"
    CAR = "car"
    CASH = "cash"
    INVESTMENT = "investment"


class AssetSource(str, Enum):
    """Provenance of an asset's current value."""

    MANUAL = "manual"
    MARKET_API = "market_api"


class DebtType(str, Enum):
    """Kinds of tracked debts."""

    CREDIT_CARD = "credit_card"
    LOAN = "loan"
    MORTGAGE = "mortgage"
    OTHER = "other"


class ExportFormat(str, Enum):
    """File formats accepted by the import/export endpoints."""

    JSON = "json"
    CSV = "csv"

    @property
    def content_type(self) -> str:
        """MIME type used when uploading a file of this format."""
        return "application/json" if self is ExportFormat.JSON else "text/csv"


class TransferTarget(str, Enum):
    """Record collections that can be exported or imported."""

    ASSETS = "assets"
    DEBTS = "debts"
    ALL = "all"  # export only, JSON only
