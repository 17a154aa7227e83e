"""Currency arithmetic with two-decimal precision.

Every function takes raw numeric input (which may be missing, None or not a
number at all) and never raises: bad input counts as 0. Results are rounded to
the cent with epsilon correction so binary floating point residue such as
0.1 + 0.2 == 0.30000000000000004 never reaches the store.
"""
import math
import sys
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Iterable

from shopledger.models.enums import PaymentStatus

EPSILON = sys.float_info.epsilon
WHOLE = Decimal("1")
HUNDRED = Decimal("100")
# Enough digits for the integer part of any finite double times 100
PRECISION = 400


def to_number(value: Any) -> float:
    """Coerce value to a finite float, or 0.0 when that is not possible."""
    if value is None or isinstance(value, bool):
        return 0.0
    if not isinstance(value, (int, float, Decimal, str)):
        return 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round_currency(amount: Any) -> float:
    """Round to 2 decimal places, half away from zero, after adding EPSILON."""
    scaled = (to_number(amount) + EPSILON) * 100
    if not math.isfinite(scaled):
        # Overflowed doubles are far past cent precision already
        return to_number(amount)
    with localcontext() as ctx:
        ctx.prec = PRECISION
        cents = Decimal(scaled).quantize(WHOLE, rounding=ROUND_HALF_UP)
        return float(cents / HUNDRED)


def add_currency(a: Any, b: Any) -> float:
    return round_currency(to_number(a) + to_number(b))


def subtract_currency(a: Any, b: Any) -> float:
    return round_currency(to_number(a) - to_number(b))


def multiply_currency(amount: Any, multiplier: Any) -> float:
    return round_currency(to_number(amount) * to_number(multiplier))


def calculate_item_total(quantity: Any, rate: Any) -> float:
    """Line total for an order item (quantity in kg times rate per kg)."""
    return multiply_currency(quantity, rate)


def calculate_order_total(items: Iterable[Any]) -> float:
    """Sum of rounded line totals. Items may be dicts or objects."""
    total = 0.0
    for item in items or []:
        if isinstance(item, dict):
            quantity, rate = item.get("quantity"), item.get("rate")
        else:
            quantity, rate = getattr(item, "quantity", 0), getattr(item, "rate", 0)
        total = add_currency(total, calculate_item_total(quantity, rate))
    return round_currency(total)


def calculate_order_balance(total_amount: Any, paid_amount: Any) -> float:
    return subtract_currency(total_amount, paid_amount)


def determine_payment_status(total_amount: Any, paid_amount: Any) -> PaymentStatus:
    """
    Classify an order by its amounts.

    A zero or negative total is always pending, whatever was paid. Ties go to
    paid (paid >= total).
    """
    total = round_currency(total_amount)
    paid = round_currency(paid_amount)

    if total <= 0:
        return PaymentStatus.PENDING
    if paid <= 0:
        return PaymentStatus.PENDING
    if paid >= total:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIALLY_PAID


def format_currency(amount: Any, symbol: str = "₹") -> str:
    return f"{symbol}{round_currency(amount):,.2f}"


def parse_currency(value: Any) -> float:
    """Parse user input such as "1,250.50" or " 80 ", 0.0 on failure."""
    if isinstance(value, str):
        value = value.replace(",", "")
    return round_currency(value)
