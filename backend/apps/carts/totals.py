from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Tuple, Union

CENTS = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def fits_money(value: Number, max_digits: int) -> bool:
    """True when ``value`` rounded to cents fits a ``DecimalField(max_digits, 2)``."""
    try:
        amount = to_money(value)
    except (InvalidOperation, ValueError):
        return False
    return abs(amount) < Decimal(10) ** (max_digits - 2)


def line_subtotal(price: Number, quantity: int) -> Decimal:
    return to_money(to_money(price) * quantity)


def compute_total(lines: Iterable[Tuple[Number, int]]) -> Decimal:
    """Sum of price * quantity over ``(price, quantity)`` pairs, in cents."""
    total = Decimal("0.00")
    for price, quantity in lines:
        total += line_subtotal(price, quantity)
    return to_money(total)
