from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from gamestore.domain.entities.cart import MAX_CART_QUANTITY


class AddToCartRequest(BaseModel):
    game_id: int
    quantity: int = Field(default=1, le=MAX_CART_QUANTITY)


class SetCartQuantityRequest(BaseModel):
    quantity: int = Field(..., le=MAX_CART_QUANTITY)


class CartLineResponse(BaseModel):
    line_id: int
    game_id: int
    title: str
    image_url: str | None = None
    unit_price: Decimal
    quantity: int
    line_total: Decimal


class CartResponse(BaseModel):
    lines: list[CartLineResponse]
    total: Decimal


class RemoveFromCartResponse(BaseModel):
    removed: bool
