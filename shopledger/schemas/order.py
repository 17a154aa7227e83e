from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shopledger.models.enums import OrderStatus, PaymentStatus
from shopledger.schemas.base import ApiModel


class OrderItemSchema(ApiModel):
    type: str = Field(..., min_length=1, max_length=50)
    quantity: float = Field(..., gt=0, le=10_000)
    rate: float = Field(..., ge=0, le=100_000)
    details: Optional[str] = Field(default=None, max_length=200)


class OrderCreate(ApiModel):
    customer_id: str = Field(..., min_length=1, max_length=100)
    items: List[OrderItemSchema] = Field(..., min_length=1, max_length=50)
    order_status: OrderStatus = OrderStatus.CONFIRMED
    # Backdated orders keep their place in the payment queue
    created_at: Optional[datetime] = None


class OrderItemResponse(ApiModel):
    type: str
    quantity: float
    rate: float
    details: Optional[str] = None


class OrderResponse(ApiModel):
    id: str
    customer_id: str
    items: List[OrderItemResponse]
    total_amount: float
    paid_amount: float
    payment_status: PaymentStatus
    order_status: OrderStatus
    adjustment_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
