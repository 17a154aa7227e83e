from typing import List, Optional

from pydantic import BaseModel, computed_field, field_validator

from shopledger.models.base import MongoModel, coerce_money
from shopledger.models.enums import OrderStatus, PaymentStatus
from shopledger.utils.currency import calculate_order_balance, determine_payment_status

# Item types for orders the shop did not sell over the counter
ADJUSTMENT_ITEM = "adjustment"
OPENING_BALANCE_ITEM = "opening_balance"


class OrderItem(BaseModel):
    type: str  # chicken, goat, leg-piece, ...
    quantity: float
    rate: float
    details: Optional[str] = None

    @field_validator("quantity", "rate", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return coerce_money(value)


class Order(MongoModel):
    """
    A customer's order.

    Invariants:
    - paid_amount <= total_amount
    - payment_status is derived from the amounts, never stored on its own
    - paid_amount only changes through payment allocation (or repair)
    """
    customer_id: str
    items: List[OrderItem] = []
    total_amount: float = 0.0
    paid_amount: float = 0.0
    order_status: OrderStatus = OrderStatus.CONFIRMED
    adjustment_id: Optional[str] = None

    @field_validator("total_amount", "paid_amount", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return coerce_money(value)

    @computed_field
    @property
    def payment_status(self) -> PaymentStatus:
        return determine_payment_status(self.total_amount, self.paid_amount)

    def balance(self) -> float:
        """How much remains unpaid."""
        return calculate_order_balance(self.total_amount, self.paid_amount)

    def is_outstanding(self) -> bool:
        return self.balance() > 0
