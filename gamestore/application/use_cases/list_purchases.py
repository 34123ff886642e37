from __future__ import annotations

from gamestore.application.dto.orders import PurchaseSummaryOutput
from gamestore.application.ports.orders_port import OrdersPort


class ListPurchasesUseCase:
    def __init__(self, *, orders_port: OrdersPort):
        self._orders_port = orders_port

    def execute(self, *, user_id: int) -> list[PurchaseSummaryOutput]:
        return [
            PurchaseSummaryOutput(
                id=summary.purchase.id,
                created_at=summary.purchase.created_at,
                total=summary.purchase.total,
                paid=summary.purchase.paid,
                item_count=summary.item_count,
            )
            for summary in self._orders_port.list_purchase_summaries(user_id=user_id)
        ]
