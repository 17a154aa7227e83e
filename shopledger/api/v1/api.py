from fastapi import APIRouter
from shopledger.api.v1.endpoints import admin, customers, hotels, orders, suppliers, transactions

api_router = APIRouter()

api_router.include_router(customers.router, prefix="/customers", tags=["customers"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(suppliers.router, prefix="/suppliers", tags=["suppliers"])
api_router.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
api_router.include_router(hotels.router, prefix="/hotels", tags=["hotels"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
