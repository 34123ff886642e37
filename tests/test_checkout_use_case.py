from __future__ import annotations

from decimal import Decimal

import pytest

from gamestore.application.use_cases.checkout import CheckoutUseCase
from gamestore.application.use_cases.get_purchase import GetPurchaseUseCase
from gamestore.domain.exceptions import EmptyCartError
from tests.fakes import FakeStore


def test_checkout_with_empty_cart_creates_nothing():
    store = FakeStore()
    customer = store.add_customer()

    with pytest.raises(EmptyCartError):
        CheckoutUseCase(orders_port=store).execute(user_id=customer.id)

    assert store.purchases == {}
    assert store.purchase_lines == {}


def test_checkout_freezes_lines_and_empties_cart():
    store = FakeStore()
    customer = store.add_customer()
    first = store.add_game("Starfall Tactics", "9.99")
    second = store.add_game("Pixel Harbor", "4.50")
    store.upsert_cart_line(user_id=customer.id, game_id=first.id, quantity=2)
    store.upsert_cart_line(user_id=customer.id, game_id=second.id, quantity=1)

    output = CheckoutUseCase(orders_port=store).execute(user_id=customer.id)

    assert output.total == Decimal("24.48")
    assert output.item_count == 3
    assert store.cart_lines == {}
    purchase = store.purchases[output.purchase_id]
    assert purchase.paid is False
    lines = sorted(store.purchase_lines.values(), key=lambda line: line.game_id)
    assert [(line.game_id, line.price, line.quantity) for line in lines] == [
        (first.id, Decimal("9.99"), 2),
        (second.id, Decimal("4.50"), 1),
    ]


def test_purchase_total_ignores_later_price_changes():
    store = FakeStore()
    customer = store.add_customer()
    game = store.add_game("Starfall Tactics", "9.99")
    store.upsert_cart_line(user_id=customer.id, game_id=game.id, quantity=1)
    output = CheckoutUseCase(orders_port=store).execute(user_id=customer.id)

    store.set_price(game.id, "19.99")
    detail = GetPurchaseUseCase(orders_port=store).execute(purchase_id=output.purchase_id, user_id=customer.id)

    assert detail.total == Decimal("9.99")
    assert detail.lines[0].price == Decimal("9.99")
    assert detail.lines[0].title == "Starfall Tactics"


def test_checkout_failure_keeps_cart_and_creates_no_purchase():
    store = FakeStore()
    customer = store.add_customer()
    game = store.add_game("Starfall Tactics", "9.99")
    store.upsert_cart_line(user_id=customer.id, game_id=game.id, quantity=1)
    store.fail_on_add_purchase_line = True

    with pytest.raises(RuntimeError):
        CheckoutUseCase(orders_port=store).execute(user_id=customer.id)

    assert store.purchases == {}
    assert len(store.cart_lines) == 1
