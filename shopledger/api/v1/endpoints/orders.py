from fastapi import APIRouter, Depends, status

from shopledger.api.deps import get_order_service
from shopledger.api.errors import http_error
from shopledger.core.errors import LedgerError
from shopledger.models.order import OrderItem
from shopledger.schemas.order import OrderCreate, OrderResponse
from shopledger.services.order_service import OrderService

router = APIRouter()


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_in: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """Create an unpaid order; the total is computed from the items."""
    items = [OrderItem(**item.model_dump()) for item in order_in.items]
    try:
        order = await service.create_order(
            order_in.customer_id,
            items,
            order_status=order_in.order_status,
            created_at=order_in.created_at,
        )
    except LedgerError as exc:
        raise http_error(exc)
    return OrderResponse.model_validate(order)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    try:
        order = await service.get_order(order_id)
    except LedgerError as exc:
        raise http_error(exc)
    return OrderResponse.model_validate(order)
