from typing import List

from fastapi import APIRouter, Depends, status

from shopledger.api.deps import get_account_service, get_order_service, get_payment_service
from shopledger.api.errors import http_error
from shopledger.core.errors import LedgerError
from shopledger.schemas.customer import CustomerCreate, CustomerResponse
from shopledger.schemas.order import OrderResponse
from shopledger.schemas.payment import CustomerPaymentResponse, PaymentRequest, TransactionResponse
from shopledger.services.account_service import AccountService
from shopledger.services.order_service import OrderService
from shopledger.services.payment_service import PaymentService

router = APIRouter()


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_in: CustomerCreate,
    service: AccountService = Depends(get_account_service)
):
    """Create a customer, optionally with an opening balance."""
    try:
        customer = await service.create_customer(
            name=customer_in.name.strip(),
            contact=customer_in.contact.strip(),
            type=customer_in.type,
            opening_balance=customer_in.opening_balance,
        )
    except LedgerError as exc:
        raise http_error(exc)
    return CustomerResponse.model_validate(customer)


@router.get("", response_model=List[CustomerResponse])
async def list_customers(service: AccountService = Depends(get_account_service)):
    try:
        customers = await service.list_customers()
    except LedgerError as exc:
        raise http_error(exc)
    return [CustomerResponse.model_validate(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: str,
    service: AccountService = Depends(get_account_service)
):
    try:
        customer = await service.get_customer(customer_id)
    except LedgerError as exc:
        raise http_error(exc)
    return CustomerResponse.model_validate(customer)


@router.get("/{customer_id}/orders", response_model=List[OrderResponse])
async def list_customer_orders(
    customer_id: str,
    service: OrderService = Depends(get_order_service)
):
    """Orders of a customer, oldest first (the order payments are applied in)."""
    try:
        orders = await service.list_customer_orders(customer_id)
    except LedgerError as exc:
        raise http_error(exc)
    return [OrderResponse.model_validate(order) for order in orders]


@router.post(
    "/{customer_id}/payment",
    response_model=CustomerPaymentResponse,
    status_code=status.HTTP_201_CREATED
)
async def pay_customer(
    customer_id: str,
    payment: PaymentRequest,
    service: PaymentService = Depends(get_payment_service)
):
    """Apply a payment to the customer's unpaid orders, oldest first."""
    try:
        result = await service.pay_customer(
            customer_id,
            payment.amount,
            description=payment.description,
            target_order_id=payment.target_order_id,
        )
    except LedgerError as exc:
        raise http_error(exc)

    return CustomerPaymentResponse(
        customer=CustomerResponse.model_validate(result.customer),
        transaction=TransactionResponse.model_validate(result.transaction),
        applied_amount=result.applied_amount,
        remaining_credit=result.remaining_credit,
        updated_orders=[order.id for order in result.updated_orders],
        total_orders_updated=len(result.updated_orders),
    )
