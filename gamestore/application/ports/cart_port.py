from __future__ import annotations

from typing import Protocol

from gamestore.domain.entities.cart import MAX_CART_QUANTITY, CartLine, PricedCartLine


class CartPort(Protocol):
    def upsert_cart_line(
        self, *, user_id: int, game_id: int, quantity: int, max_quantity: int = MAX_CART_QUANTITY
    ) -> CartLine | None:
        """Insert the line or add `quantity` to the stored one, in one statement.

        Returns None, leaving the stored line untouched, when the merged
        quantity would pass `max_quantity`.
        """
        ...

    def set_cart_line_quantity(self, *, user_id: int, game_id: int, quantity: int) -> CartLine:
        ...

    def delete_cart_line(self, *, user_id: int, line_id: int) -> bool:
        ...

    def delete_cart_game(self, *, user_id: int, game_id: int) -> bool:
        ...

    def list_priced_cart_lines(self, *, user_id: int) -> list[PricedCartLine]:
        ...
