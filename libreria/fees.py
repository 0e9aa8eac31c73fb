"""Rental and late fee arithmetic.

Amounts are ``Decimal`` quantized to cents with ``ROUND_HALF_UP`` so that
values computed here match the ones already stored in ``NUMERIC(10, 2)``
columns.
"""
from decimal import ROUND_HALF_UP, Decimal

LATE_FEE_RATE = Decimal("0.15")  # of the book price, per day late

_CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def compute_total_fee(daily_rate, rental_days: int | None) -> Decimal:
    if daily_rate is None or rental_days is None:
        return ZERO
    total = _to_decimal(daily_rate) * Decimal(rental_days)
    return total.quantize(_CENTS, rounding=ROUND_HALF_UP)


def compute_late_fee(book_price, days_late: int) -> Decimal:
    if book_price is None or days_late <= 0:
        return ZERO
    fee = _to_decimal(book_price) * LATE_FEE_RATE * Decimal(days_late)
    return fee.quantize(_CENTS, rounding=ROUND_HALF_UP)
