from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from shopledger.api.deps import get_account_service
from shopledger.api.errors import http_error
from shopledger.core.errors import LedgerError
from shopledger.schemas.payment import TransactionResponse
from shopledger.services.account_service import AccountService

router = APIRouter()


@router.get("", response_model=List[TransactionResponse])
async def list_transactions(
    entity_id: Optional[str] = Query(None, alias="entityId", description="Only this customer's or supplier's records"),
    limit: int = Query(100, ge=1, le=1000),
    service: AccountService = Depends(get_account_service)
):
    """Transaction log, newest first."""
    try:
        transactions = await service.list_transactions(entity_id=entity_id, limit=limit)
    except LedgerError as exc:
        raise http_error(exc)
    return [TransactionResponse.model_validate(t) for t in transactions]
