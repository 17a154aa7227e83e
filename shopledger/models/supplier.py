from pydantic import field_validator

from shopledger.models.base import MongoModel, coerce_money


class Supplier(MongoModel):
    """debt caches purchases + expenses + initial debt - supplier payments."""
    name: str
    contact: str = ""
    debt: float = 0.0
    credit_balance: float = 0.0

    @field_validator("debt", "credit_balance", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return coerce_money(value)
