from __future__ import annotations

from gamestore.application.dto.orders import PurchaseDetailOutput, PurchaseLineOutput
from gamestore.application.ports.orders_port import OrdersPort
from gamestore.domain.services.pricing import line_total
from gamestore.domain.services.purchase_state import ensure_owned_purchase


class GetPurchaseUseCase:
    def __init__(self, *, orders_port: OrdersPort):
        self._orders_port = orders_port

    def execute(self, *, purchase_id: int, user_id: int) -> PurchaseDetailOutput:
        purchase = ensure_owned_purchase(
            purchase=self._orders_port.get_purchase(purchase_id=purchase_id),
            purchase_id=purchase_id,
            user_id=user_id,
        )
        details = self._orders_port.list_purchase_lines(purchase_id=purchase.id)
        return PurchaseDetailOutput(
            id=purchase.id,
            created_at=purchase.created_at,
            total=purchase.total,
            paid=purchase.paid,
            lines=[
                PurchaseLineOutput(
                    game_id=detail.line.game_id,
                    title=detail.title,
                    price=detail.line.price,
                    quantity=detail.line.quantity,
                    line_total=line_total(price=detail.line.price, quantity=detail.line.quantity),
                )
                for detail in details
            ],
        )
