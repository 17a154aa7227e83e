from datetime import datetime

from pydantic import Field

from shopledger.models.enums import CustomerType
from shopledger.schemas.base import ApiModel


class CustomerCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)
    contact: str = Field(default="", max_length=50)
    type: CustomerType = CustomerType.RANDOM
    opening_balance: float = Field(default=0, ge=0, le=10_000_000)


class CustomerResponse(ApiModel):
    id: str
    name: str
    contact: str
    type: CustomerType
    pending_amount: float
    credit_balance: float
    created_at: datetime
    updated_at: datetime
