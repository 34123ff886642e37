from __future__ import annotations

from gamestore.application.dto.cart import CartLineOutput, CartOutput
from gamestore.application.ports.customer_port import CustomerPort
from gamestore.domain.entities.cart import PricedCartLine
from gamestore.domain.exceptions import NotAuthenticatedError
from gamestore.domain.services.pricing import cart_total, line_total


def ensure_customer(*, customer_port: CustomerPort, user_id: int | None) -> int:
    if not user_id:
        raise NotAuthenticatedError("Login required.")
    if customer_port.get_customer_by_id(customer_id=user_id) is None:
        raise NotAuthenticatedError("Customer not found.")
    return user_id


def build_cart_output(*, user_id: int, lines: list[PricedCartLine]) -> CartOutput:
    return CartOutput(
        user_id=user_id,
        lines=[
            CartLineOutput(
                line_id=line.line_id,
                game_id=line.game.id,
                title=line.game.title,
                image_url=line.game.image_url,
                unit_price=line.unit_price,
                quantity=line.quantity,
                line_total=line_total(price=line.unit_price, quantity=line.quantity),
            )
            for line in lines
        ],
        total=cart_total(lines),
    )
