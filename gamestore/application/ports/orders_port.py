from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable, Protocol, TypeVar

from gamestore.domain.entities.cart import PricedCartLine
from gamestore.domain.entities.purchase import (
    Purchase,
    PurchaseLine,
    PurchaseLineDetail,
    PurchaseSummary,
)


TOrdersResult = TypeVar("TOrdersResult")


class OrdersPort(Protocol):
    def execute_in_transaction(self, fn: Callable[[OrdersPort], TOrdersResult]) -> TOrdersResult:
        ...

    def take_cart_lines(self, *, user_id: int) -> list[PricedCartLine]:
        """Delete the customer's priced cart lines and return them at current catalog prices.

        Lines whose game is no longer in the catalog stay in the cart.
        """
        ...

    def create_purchase(self, *, user_id: int, total: Decimal, created_at: datetime) -> Purchase:
        ...

    def add_purchase_line(
        self,
        *,
        purchase_id: int,
        game_id: int,
        price: Decimal,
        quantity: int,
    ) -> PurchaseLine:
        ...

    def get_purchase(self, *, purchase_id: int) -> Purchase | None:
        ...

    def mark_purchase_paid(self, *, purchase_id: int) -> bool:
        """Flip `paid` to true only if it is still false; report whether this call did it."""
        ...

    def list_purchase_lines(self, *, purchase_id: int) -> list[PurchaseLineDetail]:
        ...

    def grant_entitlement(self, *, user_id: int, game_id: int) -> bool:
        ...

    def list_purchase_summaries(self, *, user_id: int) -> list[PurchaseSummary]:
        ...
