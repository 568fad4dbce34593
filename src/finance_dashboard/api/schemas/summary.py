"""Pydantic schemas for aggregate endpoints."""

from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict


def _none_as_zero(value):
    return 0.0 if value is None else value


# Missing figures display as zero instead of failing the whole response
Figure = Annotated[float, BeforeValidator(_none_as_zero)]


class NetWorth(BaseModel):
    """Net worth snapshot computed by the service."""

    model_config = ConfigDict(extra="ignore")

    total_assets: Figure = 0.0
    total_debts: Figure = 0.0
    net_worth: Figure = 0.0
    currency: str = "USD"
    calculated_at: Optional[str] = None


class Summary(BaseModel):
    """Dashboard summary computed by the service."""

    model_config = ConfigDict(extra="ignore")

    date: Optional[str] = None
    total_assets: Figure = 0.0
    total_debts: Figure = 0.0
    net_worth: Figure = 0.0
    daily_profit_loss: Figure = 0.0
    total_profit_loss: Figure = 0.0
    currency: str = "USD"


class HealthStatus(BaseModel):
    """Health check response; any successful reply counts as healthy."""

    model_config = ConfigDict(extra="allow")

    status: Optional[str] = None
