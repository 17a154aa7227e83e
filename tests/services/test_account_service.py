import pytest

from factories import seed_supplier
from shopledger.core.errors import EntityNotFound, InvalidAmount
from shopledger.models.enums import CustomerType, TransactionType
from shopledger.models.order import OPENING_BALANCE_ITEM


@pytest.mark.asyncio
async def test_create_customer_with_opening_balance(storage, account_service):
    customer = await account_service.create_customer("Hotel Taj", "9876543210", CustomerType.HOTEL, opening_balance=2500)

    assert customer.pending_amount == 2500
    assert customer.is_hotel
    orders = await storage.get_orders_by_customer(customer.id)
    assert len(orders) == 1
    assert orders[0].items[0].type == OPENING_BALANCE_ITEM
    assert orders[0].total_amount == 2500


@pytest.mark.asyncio
async def test_create_customer_without_balance(storage, account_service):
    customer = await account_service.create_customer("Walk-in")

    assert customer.pending_amount == 0
    assert not customer.is_hotel
    assert await storage.get_orders_by_customer(customer.id) == []
    assert [c.id for c in await account_service.list_customers()] == [customer.id]


@pytest.mark.asyncio
async def test_get_missing_accounts(account_service):
    with pytest.raises(EntityNotFound):
        await account_service.get_customer("missing")
    with pytest.raises(EntityNotFound):
        await account_service.get_supplier("missing")


@pytest.mark.asyncio
async def test_create_supplier_logs_initial_debt(storage, account_service):
    supplier = await account_service.create_supplier("Farm Fresh", opening_debt=1500)

    assert supplier.debt == 1500
    transactions = await storage.get_transactions_by_entity(supplier.id)
    assert [t.type for t in transactions] == [TransactionType.INITIAL_DEBT]
    assert transactions[0].amount == 1500


@pytest.mark.asyncio
async def test_record_supplier_debt(storage, account_service):
    supplier = await seed_supplier(storage, debt=100)

    updated, transaction = await account_service.record_supplier_debt(supplier.id, 450.25)

    assert updated.debt == 550.25
    assert transaction.type == TransactionType.PURCHASE
    assert (await storage.get_supplier(supplier.id)).debt == 550.25

    updated, transaction = await account_service.record_supplier_debt(
        supplier.id, 49.75, type=TransactionType.EXPENSE, description="Transport"
    )
    assert updated.debt == 600
    assert transaction.description == "Transport"


@pytest.mark.asyncio
async def test_record_supplier_debt_rejects_bad_input(storage, account_service):
    supplier = await seed_supplier(storage)

    with pytest.raises(ValueError):
        await account_service.record_supplier_debt(supplier.id, 10, type=TransactionType.SUPPLIER_PAYMENT)
    with pytest.raises(InvalidAmount):
        await account_service.record_supplier_debt(supplier.id, -10)
    with pytest.raises(EntityNotFound):
        await account_service.record_supplier_debt("missing", 10)


@pytest.mark.asyncio
async def test_list_transactions_newest_first(storage, account_service):
    supplier = await seed_supplier(storage)
    for amount in (10, 20, 30):
        await account_service.record_supplier_debt(supplier.id, amount)

    amounts = [t.amount for t in await account_service.list_transactions(entity_id=supplier.id)]
    assert amounts == [30, 20, 10]
    assert [t.amount for t in await account_service.list_transactions(limit=2)] == [30, 20]
