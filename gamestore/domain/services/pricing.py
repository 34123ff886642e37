from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from gamestore.domain.entities.cart import PricedCartLine


CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        # floats come back from stores without a native decimal type
        amount = Decimal(repr(value))
    else:
        amount = Decimal(str(value))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(*, price: Decimal, quantity: int) -> Decimal:
    return to_money(price * quantity)


def cart_total(lines: Iterable[PricedCartLine]) -> Decimal:
    total = sum(
        (line_total(price=line.unit_price, quantity=line.quantity) for line in lines),
        ZERO,
    )
    return to_money(total)
