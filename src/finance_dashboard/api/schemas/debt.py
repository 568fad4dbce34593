"""Pydantic schemas for debt endpoints."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from finance_dashboard.domain.enums import DebtType


class Debt(BaseModel):
    """Debt record as returned by the service."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: str
    principal: float = 0.0
    current_value: float = 0.0
    interest_rate: float = 0.0
    currency: str = "USD"
    start_date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class DebtCreate(BaseModel):
    """Request schema for creating a debt."""

    name: str = Field(..., min_length=1)
    type: DebtType
    principal: float
    current_value: Optional[float] = None
    currency: str = "USD"
    interest_rate: Optional[float] = None
    start_date: str


class DebtUpdate(BaseModel):
    """Request schema for editing a debt (mutable fields only)."""

    name: Optional[str] = None
    current_value: Optional[float] = None
    interest_rate: Optional[float] = None
