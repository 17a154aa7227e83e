from typing import List

from shopledger.schemas.base import ApiModel
from shopledger.schemas.order import OrderResponse


class IntegrityReportResponse(ApiModel):
    entity_id: str
    entity_type: str
    is_valid: bool
    issues: List[str]
    repairs: List[str]
    stored_amount: float
    calculated_amount: float
    message: str


class CustomerRepairResponse(IntegrityReportResponse):
    customer_id: str


class SupplierRepairResponse(IntegrityReportResponse):
    supplier_id: str


class OrderRepairResponse(ApiModel):
    order_id: str
    was_corrupted: bool
    repairs: List[str]
    order: OrderResponse
    message: str
