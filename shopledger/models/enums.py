from enum import Enum


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"


class OrderStatus(str, Enum):
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CustomerType(str, Enum):
    HOTEL = "hotel"
    RANDOM = "random"


class EntityType(str, Enum):
    SUPPLIER = "supplier"
    CUSTOMER = "customer"


class TransactionType(str, Enum):
    CUSTOMER_PAYMENT = "customer_payment"
    SUPPLIER_PAYMENT = "supplier_payment"
    PURCHASE = "purchase"
    EXPENSE = "expense"
    INITIAL_DEBT = "initial_debt"
    STOCK_ADJUSTMENT = "stock_adjustment"


# Transaction types that add to a supplier's debt
DEBT_INCREASING_TYPES = (
    TransactionType.PURCHASE,
    TransactionType.EXPENSE,
    TransactionType.INITIAL_DEBT,
)


class AdjustmentType(str, Enum):
    DEBIT = "debit"    # adds to what the hotel owes
    CREDIT = "credit"  # reduces what the hotel owes


class LedgerEntryType(str, Enum):
    ORDER = "order"
    PAYMENT = "payment"
    DEBIT_ADJUSTMENT = "debit_adjustment"
    CREDIT_ADJUSTMENT = "credit_adjustment"
