from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class AddToCartInput:
    user_id: int
    game_id: int
    quantity: int = 1


@dataclass(frozen=True)
class RemoveFromCartInput:
    user_id: int
    line_id: int | None = None
    game_id: int | None = None


@dataclass(frozen=True)
class RemoveFromCartOutput:
    removed: bool


@dataclass(frozen=True)
class CartLineOutput:
    line_id: int
    game_id: int
    title: str
    image_url: str | None
    unit_price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class CartOutput:
    user_id: int
    lines: list[CartLineOutput]
    total: Decimal


@dataclass(frozen=True)
class SetCartQuantityInput:
    user_id: int
    game_id: int
    quantity: int
