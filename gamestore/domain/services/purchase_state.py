from __future__ import annotations

from gamestore.domain.entities.purchase import Purchase
from gamestore.domain.exceptions import ForbiddenError, PurchaseNotFoundError


def ensure_owned_purchase(*, purchase: Purchase | None, purchase_id: int, user_id: int) -> Purchase:
    if purchase is None:
        raise PurchaseNotFoundError(f"Purchase {purchase_id} not found.")
    if purchase.user_id != user_id:
        raise ForbiddenError("Purchase belongs to another customer.")
    return purchase
