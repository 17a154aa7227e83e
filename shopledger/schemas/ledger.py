from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shopledger.models.enums import AdjustmentType, LedgerEntryType
from shopledger.schemas.base import Amount, ApiModel
from shopledger.schemas.customer import CustomerResponse


class DebtAdjustmentCreate(ApiModel):
    type: AdjustmentType
    amount: Amount
    reason: str = Field(..., min_length=1, max_length=500)
    adjusted_by: str = Field(default="System", max_length=100)


class AllocationResponse(ApiModel):
    order_id: str
    amount: float


class DebtAdjustmentResponse(ApiModel):
    id: str
    customer_id: str
    type: AdjustmentType
    amount: float
    reason: str
    adjusted_by: str
    order_id: Optional[str] = None
    allocations: List[AllocationResponse] = []
    created_at: datetime


class AdjustmentResultResponse(ApiModel):
    adjustment: DebtAdjustmentResponse
    customer: CustomerResponse


class LedgerEntryResponse(ApiModel):
    entry_type: LedgerEntryType
    reference_id: str
    description: str
    debit: float
    credit: float
    running_balance: float
    created_at: datetime


class HotelLedgerResponse(ApiModel):
    customer: CustomerResponse
    entries: List[LedgerEntryResponse]
    closing_balance: float
    is_balanced: bool
