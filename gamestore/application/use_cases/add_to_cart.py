from __future__ import annotations

import logging

from gamestore.application.dto.cart import AddToCartInput, CartOutput
from gamestore.application.ports.cart_port import CartPort
from gamestore.application.ports.catalog_port import CatalogPort
from gamestore.application.ports.customer_port import CustomerPort
from gamestore.domain.entities.cart import MAX_CART_QUANTITY
from gamestore.domain.exceptions import InvalidProductError, InvalidQuantityError

from .cart_common import build_cart_output, ensure_customer


logger = logging.getLogger(__name__)


class AddToCartUseCase:
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

    def execute(self, command: AddToCartInput) -> CartOutput:
        user_id = ensure_customer(customer_port=self._customer_port, user_id=command.user_id)

        if isinstance(command.quantity, bool) or not isinstance(command.quantity, int) or command.quantity < 1:
            raise InvalidQuantityError("quantity must be a positive integer.")
        if command.quantity > MAX_CART_QUANTITY:
            raise InvalidQuantityError(f"quantity must be at most {MAX_CART_QUANTITY}.")

        if self._catalog_port.get_game_by_id(game_id=command.game_id) is None:
            raise InvalidProductError(f"Game {command.game_id} is not in the catalog.")

        line = self._cart_port.upsert_cart_line(
            user_id=user_id,
            game_id=command.game_id,
            quantity=command.quantity,
            max_quantity=MAX_CART_QUANTITY,
        )
        if line is None:
            raise InvalidQuantityError(f"A cart line holds at most {MAX_CART_QUANTITY} copies.")
        logger.debug(
            "add_to_cart: line_upserted user_id=%s game_id=%s added=%s quantity=%s",
            user_id,
            command.game_id,
            command.quantity,
            line.quantity,
        )
        return build_cart_output(
            user_id=user_id,
            lines=self._cart_port.list_priced_cart_lines(user_id=user_id),
        )
