from __future__ import annotations

from gamestore.application.dto.cart import CartOutput
from gamestore.application.ports.cart_port import CartPort

from .cart_common import build_cart_output


class GetCartUseCase:
    def __init__(self, *, cart_port: CartPort):
        self._cart_port = cart_port

    def execute(self, *, user_id: int) -> CartOutput:
        lines = self._cart_port.list_priced_cart_lines(user_id=user_id)
        return build_cart_output(user_id=user_id, lines=lines)
