from datetime import datetime
from typing import List, Optional

from pydantic import Field

from shopledger.models.enums import EntityType, TransactionType
from shopledger.schemas.base import Amount, ApiModel
from shopledger.schemas.customer import CustomerResponse
from shopledger.schemas.supplier import SupplierResponse


class PaymentRequest(ApiModel):
    """
    Payment body. amount is range- and precision-checked by the service so
    customers and suppliers reject bad amounts the same way (400). Non-numbers fail here (422).
    """
    amount: Amount
    description: Optional[str] = Field(default=None, max_length=500)
    target_order_id: Optional[str] = Field(default=None, max_length=100)


class TransactionResponse(ApiModel):
    id: str
    entity_id: str
    entity_type: EntityType
    type: TransactionType
    amount: float
    credit_amount: float
    description: str
    order_ids: List[str]
    created_at: datetime


class CustomerPaymentResponse(ApiModel):
    message: str = "Payment processed successfully"
    customer: CustomerResponse
    transaction: TransactionResponse
    applied_amount: float
    remaining_credit: float
    updated_orders: List[str]
    total_orders_updated: int


class SupplierPaymentResponse(ApiModel):
    message: str = "Payment processed successfully"
    supplier: SupplierResponse
    transaction: TransactionResponse
    applied_amount: float
    remaining_credit: float


class SupplierDebtResponse(ApiModel):
    supplier: SupplierResponse
    transaction: TransactionResponse
