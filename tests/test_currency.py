"""
Tests for the two-decimal currency helpers.
"""
from decimal import Decimal

import pytest

from shopledger.models.enums import PaymentStatus
from shopledger.models.order import OrderItem
from shopledger.utils.currency import (
    add_currency,
    calculate_item_total,
    calculate_order_balance,
    calculate_order_total,
    determine_payment_status,
    format_currency,
    multiply_currency,
    parse_currency,
    round_currency,
    subtract_currency,
    to_number,
)


def test_float_residue_is_removed():
    assert 0.1 + 0.2 != 0.3
    assert add_currency(0.1, 0.2) == 0.3
    assert subtract_currency(0.3, 0.1) == 0.2


@pytest.mark.parametrize("amount,expected", [
    (1.005, 1.01),
    (10.554, 10.55),
    (99.999, 100.0),
    (-1.234, -1.23),
    (0, 0.0),
])
def test_round_currency(amount, expected):
    assert round_currency(amount) == expected


@pytest.mark.parametrize("value", [None, "abc", float("nan"), float("inf"), True, object()])
def test_malformed_input_counts_as_zero(value):
    assert to_number(value) == 0.0
    assert round_currency(value) == 0.0
    assert add_currency(value, 5) == 5.0


def test_numeric_strings_are_accepted():
    assert to_number(" 12.5 ") == 12.5
    assert add_currency("10.10", "0.20") == 10.3


def test_multiply_and_item_total():
    assert multiply_currency(2.5, 180) == 450.0
    assert calculate_item_total(1.333, 3) == 4.0
    assert calculate_item_total(None, 200) == 0.0


def test_order_total_from_dicts_and_models():
    items = [{"quantity": 2, "rate": 180.5}, {"quantity": "1.5", "rate": 220}]
    assert calculate_order_total(items) == 691.0

    models = [OrderItem(type="chicken", quantity=2, rate=180.5), OrderItem(type="goat", quantity=1.5, rate=220)]
    assert calculate_order_total(models) == 691.0

    assert calculate_order_total([]) == 0.0
    assert calculate_order_total(None) == 0.0


def test_order_balance():
    assert calculate_order_balance(100, 33.33) == 66.67
    assert calculate_order_balance(100, "junk") == 100.0


@pytest.mark.parametrize("total,paid,expected", [
    (100, 0, PaymentStatus.PENDING),
    (100, -5, PaymentStatus.PENDING),
    (100, 50, PaymentStatus.PARTIALLY_PAID),
    (100, 99.99, PaymentStatus.PARTIALLY_PAID),
    (100, 100, PaymentStatus.PAID),
    (100, 120, PaymentStatus.PAID),
    (0, 0, PaymentStatus.PENDING),
    (0, 10, PaymentStatus.PENDING),
    (-10, 5, PaymentStatus.PENDING),
    (0.1 + 0.2, 0.3, PaymentStatus.PAID),
])
def test_determine_payment_status(total, paid, expected):
    assert determine_payment_status(total, paid) == expected


def test_format_and_parse():
    assert format_currency(1250.5) == "₹1,250.50"
    assert format_currency(3, "$") == "$3.00"
    assert parse_currency("1,250.50") == 1250.5
    assert parse_currency("not money") == 0.0


@pytest.mark.parametrize("value", ["1e30", 1e300, -1.7e308, Decimal("1e40")])
def test_huge_values_round_without_raising(value):
    assert round_currency(value) == pytest.approx(float(value))


def test_values_beyond_float_range_count_as_zero():
    assert to_number(10 ** 400) == 0.0
    assert round_currency(10 ** 400) == 0.0
    assert add_currency(1.7e308, 1.7e308) == 0.0
