from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from shopledger.api.deps import get_account_service, get_payment_service
from shopledger.api.errors import http_error
from shopledger.core.errors import LedgerError
from shopledger.schemas.payment import (
    PaymentRequest,
    SupplierDebtResponse,
    SupplierPaymentResponse,
    TransactionResponse,
)
from shopledger.schemas.supplier import SupplierCreate, SupplierDebtCreate, SupplierResponse
from shopledger.services.account_service import AccountService
from shopledger.services.payment_service import PaymentService

router = APIRouter()


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(
    supplier_in: SupplierCreate,
    service: AccountService = Depends(get_account_service)
):
    """Create a supplier, optionally with an opening debt."""
    try:
        supplier = await service.create_supplier(
            name=supplier_in.name.strip(),
            contact=supplier_in.contact.strip(),
            opening_debt=supplier_in.opening_debt,
        )
    except LedgerError as exc:
        raise http_error(exc)
    return SupplierResponse.model_validate(supplier)


@router.get("", response_model=List[SupplierResponse])
async def list_suppliers(service: AccountService = Depends(get_account_service)):
    try:
        suppliers = await service.list_suppliers()
    except LedgerError as exc:
        raise http_error(exc)
    return [SupplierResponse.model_validate(s) for s in suppliers]


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: str,
    service: AccountService = Depends(get_account_service)
):
    try:
        supplier = await service.get_supplier(supplier_id)
    except LedgerError as exc:
        raise http_error(exc)
    return SupplierResponse.model_validate(supplier)


@router.post(
    "/{supplier_id}/purchases",
    response_model=SupplierDebtResponse,
    status_code=status.HTTP_201_CREATED
)
async def record_supplier_debt(
    supplier_id: str,
    debt_in: SupplierDebtCreate,
    service: AccountService = Depends(get_account_service)
):
    """Record a purchase, expense or initial debt owed to the supplier."""
    try:
        supplier, transaction = await service.record_supplier_debt(
            supplier_id,
            debt_in.amount,
            type=debt_in.type,
            description=debt_in.description,
        )
    except LedgerError as exc:
        raise http_error(exc)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return SupplierDebtResponse(
        supplier=SupplierResponse.model_validate(supplier),
        transaction=TransactionResponse.model_validate(transaction),
    )


@router.post(
    "/{supplier_id}/payment",
    response_model=SupplierPaymentResponse,
    status_code=status.HTTP_201_CREATED
)
async def pay_supplier(
    supplier_id: str,
    payment: PaymentRequest,
    service: PaymentService = Depends(get_payment_service)
):
    """Pay down a supplier's debt."""
    try:
        result = await service.pay_supplier(
            supplier_id,
            payment.amount,
            description=payment.description,
        )
    except LedgerError as exc:
        raise http_error(exc)

    return SupplierPaymentResponse(
        supplier=SupplierResponse.model_validate(result.supplier),
        transaction=TransactionResponse.model_validate(result.transaction),
        applied_amount=result.applied_amount,
        remaining_credit=result.remaining_credit,
    )
