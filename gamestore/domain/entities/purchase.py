from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Purchase:
    id: int
    user_id: int
    total: Decimal
    created_at: datetime
    paid: bool


@dataclass(frozen=True)
class PurchaseLine:
    id: int
    purchase_id: int
    game_id: int
    price: Decimal
    quantity: int


@dataclass(frozen=True)
class PurchaseLineDetail:
    line: PurchaseLine
    title: str | None


@dataclass(frozen=True)
class PurchaseSummary:
    purchase: Purchase
    item_count: int
