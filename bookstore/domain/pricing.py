# bookstore/domain/pricing.py
"""
Money helpers.

Every amount is a Decimal with two places, rounded half-up
(12.345 -> 12.35, never banker's rounding).
"""
from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def locked_unit_price(price, discount_percentage) -> Decimal:
    """price * (1 - discount/100), rounded to cents."""
    price = Decimal(str(price))
    discount = Decimal(str(discount_percentage or 0))
    return to_money(price * (Decimal(1) - discount / Decimal(100)))


def line_total(unit_price, count: int) -> Decimal:
    return to_money(Decimal(str(unit_price)) * count)
