from pydantic import field_validator

from shopledger.models.base import MongoModel, coerce_money
from shopledger.models.enums import CustomerType


class Customer(MongoModel):
    """
    pending_amount caches sum(total_amount - paid_amount) over the customer's
    orders. credit_balance holds payments received beyond what was owed.
    """
    name: str
    contact: str = ""
    type: CustomerType = CustomerType.RANDOM
    pending_amount: float = 0.0
    credit_balance: float = 0.0

    @field_validator("pending_amount", "credit_balance", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return coerce_money(value)

    @property
    def is_hotel(self) -> bool:
        return self.type == CustomerType.HOTEL
