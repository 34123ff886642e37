from __future__ import annotations

import logging

from gamestore.application.dto.cart import CartOutput, SetCartQuantityInput
from gamestore.application.ports.cart_port import CartPort
from gamestore.application.ports.catalog_port import CatalogPort
from gamestore.application.ports.customer_port import CustomerPort
from gamestore.domain.entities.cart import MAX_CART_QUANTITY
from gamestore.domain.exceptions import InvalidProductError, InvalidQuantityError

from .cart_common import build_cart_output, ensure_customer


logger = logging.getLogger(__name__)


class SetCartQuantityUseCase:
    """Set an absolute quantity for a game; zero or less removes the line."""

    def __init__(
        self,
        *,
        customer_port: CustomerPort,
        catalog_port: CatalogPort,
        cart_port: CartPort,
    ):
        self._customer_port = customer_port
        self._catalog_port = catalog_port
        self._cart_port = cart_port

    def execute(self, command: SetCartQuantityInput) -> CartOutput:
        user_id = ensure_customer(customer_port=self._customer_port, user_id=command.user_id)

        if isinstance(command.quantity, bool) or not isinstance(command.quantity, int):
            raise InvalidQuantityError("quantity must be an integer.")
        if command.quantity > MAX_CART_QUANTITY:
            raise InvalidQuantityError(f"quantity must be at most {MAX_CART_QUANTITY}.")

        if command.quantity <= 0:
            removed = self._cart_port.delete_cart_game(user_id=user_id, game_id=command.game_id)
            logger.debug(
                "set_cart_quantity: line_removed user_id=%s game_id=%s removed=%s",
                user_id,
                command.game_id,
                removed,
            )
        else:
            if self._catalog_port.get_game_by_id(game_id=command.game_id) is None:
                raise InvalidProductError(f"Game {command.game_id} is not in the catalog.")
            self._cart_port.set_cart_line_quantity(
                user_id=user_id,
                game_id=command.game_id,
                quantity=command.quantity,
            )

        return build_cart_output(
            user_id=user_id,
            lines=self._cart_port.list_priced_cart_lines(user_id=user_id),
        )
