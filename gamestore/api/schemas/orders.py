from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class CheckoutResponse(BaseModel):
    purchase_id: int
    total: Decimal
    created_at: datetime
    item_count: int


class PaymentResponse(BaseModel):
    purchase_id: int
    paid: bool
    newly_paid: bool
    granted_game_ids: list[int]


class PurchaseSummaryResponse(BaseModel):
    id: int
    created_at: datetime
    total: Decimal
    paid: bool
    item_count: int


class PurchaseLineResponse(BaseModel):
    game_id: int
    title: str | None = None
    price: Decimal
    quantity: int
    line_total: Decimal


class PurchaseDetailResponse(BaseModel):
    id: int
    created_at: datetime
    total: Decimal
    paid: bool
    lines: list[PurchaseLineResponse]
