from __future__ import annotations

import logging

from gamestore.application.dto.orders import FinalizePaymentInput, FinalizePaymentOutput
from gamestore.application.ports.orders_port import OrdersPort
from gamestore.domain.services.purchase_state import ensure_owned_purchase


logger = logging.getLogger(__name__)


class FinalizePaymentUseCase:
    """Mock payment: marks a purchase paid and adds its games to the library.

    Created(unpaid) -> Paid is the only transition. Confirming an already
    paid purchase succeeds without granting anything again.
    """

    def __init__(self, *, orders_port: OrdersPort):
        self._orders_port = orders_port

    def execute(self, command: FinalizePaymentInput) -> FinalizePaymentOutput:
        purchase = ensure_owned_purchase(
            purchase=self._orders_port.get_purchase(purchase_id=command.purchase_id),
            purchase_id=command.purchase_id,
            user_id=command.user_id,
        )
        if purchase.paid:
            logger.info("finalize_payment: already_paid purchase_id=%s", purchase.id)
            return FinalizePaymentOutput(
                purchase_id=purchase.id,
                paid=True,
                newly_paid=False,
                granted_game_ids=[],
            )

        def _tx(orders_port: OrdersPort) -> FinalizePaymentOutput:
            # the conditional update is the de-duplication point for concurrent confirmations
            if not orders_port.mark_purchase_paid(purchase_id=purchase.id):
                return FinalizePaymentOutput(
                    purchase_id=purchase.id,
                    paid=True,
                    newly_paid=False,
                    granted_game_ids=[],
                )

            granted: list[int] = []
            for detail in orders_port.list_purchase_lines(purchase_id=purchase.id):
                if orders_port.grant_entitlement(user_id=purchase.user_id, game_id=detail.line.game_id):
                    granted.append(detail.line.game_id)
            return FinalizePaymentOutput(
                purchase_id=purchase.id,
                paid=True,
                newly_paid=True,
                granted_game_ids=granted,
            )

        output = self._orders_port.execute_in_transaction(_tx)
        logger.info(
            "finalize_payment: purchase_id=%s user_id=%s newly_paid=%s granted=%s",
            output.purchase_id,
            command.user_id,
            output.newly_paid,
            output.granted_game_ids,
        )
        return output
