"""Payment amount validation.

Unlike the currency helpers, validation is strict: an amount either is a
positive base-10 value with at most two decimal places within the configured
maximum, or the request is rejected. Nothing is truncated or coerced.
"""
import math
from decimal import Decimal, InvalidOperation

from shopledger.core.errors import InvalidAmount
from shopledger.utils.currency import format_currency

CENT = Decimal("0.01")
DEFAULT_MAX_PAYMENT = 1_000_000


def validate_payment_amount(amount, max_amount: float = DEFAULT_MAX_PAYMENT, symbol: str = "₹") -> float:
    """
    Validate a payment amount and return it as a float.

    Rules:
    - must be an int, float or Decimal (bools are not numbers here)
    - must be finite and greater than 0
    - must not exceed max_amount
    - at most 2 decimal places, checked on the shortest decimal repr so that
      10.1 passes and 10.555 fails
    """
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        raise InvalidAmount("Payment amount must be a number")
    if isinstance(amount, float) and not math.isfinite(amount):
        raise InvalidAmount("Payment amount must be a finite number")

    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidAmount("Payment amount must be a number")
    if not value.is_finite():
        raise InvalidAmount("Payment amount must be a finite number")

    if value <= 0:
        raise InvalidAmount("Payment amount must be greater than 0")
    if value > Decimal(str(max_amount)):
        raise InvalidAmount(
            f"Payment amount cannot exceed {format_currency(max_amount, symbol)}"
        )
    if value != value.quantize(CENT):
        raise InvalidAmount("Payment amount can only have up to 2 decimal places")

    return float(value)
