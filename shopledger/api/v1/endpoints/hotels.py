from fastapi import APIRouter, Depends, HTTPException, status

from shopledger.api.deps import get_ledger_service
from shopledger.api.errors import http_error
from shopledger.core.errors import LedgerError
from shopledger.schemas.customer import CustomerResponse
from shopledger.schemas.ledger import (
    AdjustmentResultResponse,
    DebtAdjustmentCreate,
    DebtAdjustmentResponse,
    HotelLedgerResponse,
    LedgerEntryResponse,
)
from shopledger.services.ledger_service import LedgerService

router = APIRouter()


@router.get("/{customer_id}/ledger", response_model=HotelLedgerResponse)
async def get_hotel_ledger(
    customer_id: str,
    service: LedgerService = Depends(get_ledger_service)
):
    """Orders, payments and adjustments of a hotel with running balances."""
    try:
        ledger = await service.hotel_ledger(customer_id)
    except LedgerError as exc:
        raise http_error(exc)

    return HotelLedgerResponse(
        customer=CustomerResponse.model_validate(ledger.customer),
        entries=[LedgerEntryResponse.model_validate(entry) for entry in ledger.entries],
        closing_balance=ledger.closing_balance,
        is_balanced=ledger.is_balanced,
    )


@router.post(
    "/{customer_id}/debt-adjustments",
    response_model=AdjustmentResultResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_debt_adjustment(
    customer_id: str,
    adjustment_in: DebtAdjustmentCreate,
    service: LedgerService = Depends(get_ledger_service)
):
    try:
        result = await service.add_adjustment(
            customer_id,
            adjustment_in.type,
            adjustment_in.amount,
            reason=adjustment_in.reason,
            adjusted_by=adjustment_in.adjusted_by,
        )
    except LedgerError as exc:
        raise http_error(exc)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    return AdjustmentResultResponse(
        adjustment=DebtAdjustmentResponse.model_validate(result.adjustment),
        customer=CustomerResponse.model_validate(result.customer),
    )
