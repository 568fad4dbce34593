"""Pydantic schemas for asset endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_dashboard.core.formatting import calculate_profit_loss, calculate_total_value
from finance_dashboard.domain.enums import AssetType, AssetSource


class Asset(BaseModel):
    """Asset record as returned by the service."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: str
    buy_price: float = 0.0
    current_value: Optional[float] = None
    quantity: float = 0.0
    currency: str = "USD"
    purchase_date: Optional[str] = None
    source: str = AssetSource.MANUAL.value
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def total_value(self) -> Optional[float]:
        """Current total value; None while the current value is unknown."""
        if self.current_value is None:
            return None
        return calculate_total_value(self.current_value, self.quantity)

    @property
    def profit_loss(self) -> Optional[float]:
        """Unrealised profit/loss; None while the current value is unknown."""
        if self.current_value is None:
            return None
        return calculate_profit_loss(self.buy_price, self.current_value, self.quantity)

    @property
    def invested(self) -> float:
        return self.buy_price * self.quantity


class AssetHistory(BaseModel):
    """A historical value point of an asset."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    asset_id: Optional[str] = None
    value: float = 0.0
    date: Optional[str] = None
    created_at: Optional[str] = None


class AssetCreate(BaseModel):
    """Request schema for creating an asset."""

    name: str = Field(..., min_length=1)
    type: AssetType
    buy_price: float
    current_value: Optional[float] = None
    quantity: float
    currency: str = "USD"
    purchase_date: str
    source: AssetSource = AssetSource.MANUAL


class AssetUpdate(BaseModel):
    """Request schema for editing an asset (mutable fields only)."""

    name: Optional[str] = None
    current_value: Optional[float] = None
    quantity: Optional[float] = None
    source: Optional[AssetSource] = None
