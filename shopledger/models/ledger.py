"""
Running-account ledger for hotel customers.

DebtAdjustment is a stored manual correction. HotelLedgerEntry is never
stored: entries are rebuilt from orders, payments and adjustments in creation
order, so replaying them always lands on the customer's pending amount.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from shopledger.models.base import MongoModel, coerce_money
from shopledger.models.enums import AdjustmentType, LedgerEntryType


class Allocation(BaseModel):
    order_id: str
    amount: float


class DebtAdjustment(MongoModel):
    model_config = ConfigDict(frozen=True)

    customer_id: str
    type: AdjustmentType
    amount: float
    reason: str
    adjusted_by: str = "System"
    order_id: Optional[str] = None          # debit: the order carrying the charge
    allocations: List[Allocation] = []      # credit: how it was spread over orders

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return coerce_money(value)


class HotelLedgerEntry(BaseModel):
    entry_type: LedgerEntryType
    reference_id: str
    description: str
    debit: float = 0.0
    credit: float = 0.0
    running_balance: float
    created_at: datetime
