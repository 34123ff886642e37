from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class CheckoutOutput:
    purchase_id: int
    total: Decimal
    created_at: datetime
    item_count: int


@dataclass(frozen=True)
class FinalizePaymentInput:
    purchase_id: int
    user_id: int


@dataclass(frozen=True)
class FinalizePaymentOutput:
    purchase_id: int
    paid: bool
    newly_paid: bool
    granted_game_ids: list[int]


@dataclass(frozen=True)
class PurchaseSummaryOutput:
    id: int
    created_at: datetime
    total: Decimal
    paid: bool
    item_count: int


@dataclass(frozen=True)
class PurchaseLineOutput:
    game_id: int
    title: str | None
    price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class PurchaseDetailOutput:
    id: int
    created_at: datetime
    total: Decimal
    paid: bool
    lines: list[PurchaseLineOutput]
