from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from shopledger.schemas.base import Amount, ApiModel


class SupplierCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    contact: str = Field(default="", max_length=50)
    opening_debt: float = Field(default=0, ge=0, le=10_000_000)


class SupplierResponse(ApiModel):
    id: str
    name: str
    contact: str
    debt: float
    credit_balance: float
    created_at: datetime
    updated_at: datetime


class SupplierDebtCreate(ApiModel):
    """Something bought from (or owed to) the supplier."""
    amount: Amount
    type: Literal["purchase", "expense", "initial_debt"] = "purchase"
    description: Optional[str] = Field(default=None, max_length=500)
