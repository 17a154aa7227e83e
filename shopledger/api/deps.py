from fastapi import Depends, Request

from shopledger.core.config import settings
from shopledger.repositories.storage import Storage
from shopledger.services.account_service import AccountService
from shopledger.services.integrity_service import IntegrityService
from shopledger.services.ledger_service import LedgerService
from shopledger.services.locks import EntityLocks
from shopledger.services.order_service import OrderService
from shopledger.services.payment_service import PaymentService


def get_storage(request: Request) -> Storage:
    """Storage opened at startup for this app instance."""
    return request.app.state.storage


def get_locks(request: Request) -> EntityLocks:
    return request.app.state.locks


def get_payment_service(
    storage: Storage = Depends(get_storage),
    locks: EntityLocks = Depends(get_locks),
) -> PaymentService:
    return PaymentService(
        storage,
        locks,
        max_payment_amount=settings.MAX_PAYMENT_AMOUNT,
        allow_credit=settings.allow_credit,
        currency_symbol=settings.CURRENCY_SYMBOL,
    )


def get_account_service(
    storage: Storage = Depends(get_storage),
    locks: EntityLocks = Depends(get_locks),
) -> AccountService:
    return AccountService(storage, locks)


def get_order_service(
    storage: Storage = Depends(get_storage),
    locks: EntityLocks = Depends(get_locks),
) -> OrderService:
    return OrderService(storage, locks)


def get_integrity_service(
    storage: Storage = Depends(get_storage),
    locks: EntityLocks = Depends(get_locks),
) -> IntegrityService:
    return IntegrityService(storage, locks, repair_limit=settings.REPAIR_MAX_DIFFERENCE)


def get_ledger_service(
    storage: Storage = Depends(get_storage),
    locks: EntityLocks = Depends(get_locks),
) -> LedgerService:
    return LedgerService(
        storage,
        locks,
        max_amount=settings.MAX_PAYMENT_AMOUNT,
        currency_symbol=settings.CURRENCY_SYMBOL,
    )
