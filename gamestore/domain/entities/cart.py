from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from gamestore.domain.entities.game import Game


MAX_CART_QUANTITY = 99


@dataclass(frozen=True)
class CartLine:
    id: int
    user_id: int
    game_id: int
    quantity: int


@dataclass(frozen=True)
class PricedCartLine:
    """Cart line joined with the game as it is in the catalog right now."""

    line_id: int
    game: Game
    quantity: int

    @property
    def unit_price(self) -> Decimal:
        return self.game.price
