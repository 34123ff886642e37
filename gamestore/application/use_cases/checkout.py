from __future__ import annotations

import logging

from gamestore.application.dto.orders import CheckoutOutput
from gamestore.application.ports.orders_port import OrdersPort
from gamestore.domain.exceptions import EmptyCartError
from gamestore.domain.services.pricing import cart_total

from .auth_common import utcnow


logger = logging.getLogger(__name__)


class CheckoutUseCase:
    """Turns the customer's cart into an unpaid purchase.

    Taking the cart lines, writing the purchase with its frozen lines and
    emptying the cart happen in one transaction. Any failure leaves both
    the cart and the purchase history exactly as they were.
    """

    def __init__(self, *, orders_port: OrdersPort):
        self._orders_port = orders_port

    def execute(self, *, user_id: int) -> CheckoutOutput:
        def _tx(orders_port: OrdersPort) -> CheckoutOutput:
            lines = orders_port.take_cart_lines(user_id=user_id)
            if not lines:
                raise EmptyCartError("Cart is empty.")

            total = cart_total(lines)
            purchase = orders_port.create_purchase(user_id=user_id, total=total, created_at=utcnow())
            for line in lines:
                orders_port.add_purchase_line(
                    purchase_id=purchase.id,
                    game_id=line.game.id,
                    price=line.unit_price,
                    quantity=line.quantity,
                )
            return CheckoutOutput(
                purchase_id=purchase.id,
                total=purchase.total,
                created_at=purchase.created_at,
                item_count=sum(line.quantity for line in lines),
            )

        output = self._orders_port.execute_in_transaction(_tx)
        logger.info(
            "checkout: purchase_created purchase_id=%s user_id=%s total=%s items=%s",
            output.purchase_id,
            user_id,
            output.total,
            output.item_count,
        )
        return output
