from __future__ import annotations

import logging

from gamestore.application.dto.cart import RemoveFromCartInput, RemoveFromCartOutput
from gamestore.application.ports.cart_port import CartPort
from gamestore.application.ports.customer_port import CustomerPort

from .cart_common import ensure_customer


logger = logging.getLogger(__name__)


class RemoveFromCartUseCase:
    def __init__(self, *, customer_port: CustomerPort, cart_port: CartPort):
        self._customer_port = customer_port
        self._cart_port = cart_port

    def execute(self, command: RemoveFromCartInput) -> RemoveFromCartOutput:
        user_id = ensure_customer(customer_port=self._customer_port, user_id=command.user_id)

        if (command.line_id is None) == (command.game_id is None):
            raise ValueError("Exactly one of line_id or game_id is required.")

        # every delete is scoped to the caller, another customer's line is never touched
        if command.line_id is not None:
            removed = self._cart_port.delete_cart_line(user_id=user_id, line_id=command.line_id)
        else:
            removed = self._cart_port.delete_cart_game(user_id=user_id, game_id=command.game_id)

        logger.debug(
            "remove_from_cart: user_id=%s line_id=%s game_id=%s removed=%s",
            user_id,
            command.line_id,
            command.game_id,
            removed,
        )
        return RemoveFromCartOutput(removed=removed)
