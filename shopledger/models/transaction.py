from typing import List

from pydantic import ConfigDict, field_validator

from shopledger.models.base import MongoModel, coerce_money
from shopledger.models.enums import EntityType, TransactionType


class Transaction(MongoModel):
    """
    Audit record for a payment or debt change.

    Created once and never updated. amount is what was applied to the
    entity's balance; credit_amount is any excess kept as credit.
    """
    model_config = ConfigDict(frozen=True)

    entity_id: str
    entity_type: EntityType
    type: TransactionType
    amount: float
    description: str = ""
    credit_amount: float = 0.0
    order_ids: List[str] = []

    @field_validator("amount", "credit_amount", mode="before")
    @classmethod
    def coerce_amounts(cls, value):
        return coerce_money(value)
