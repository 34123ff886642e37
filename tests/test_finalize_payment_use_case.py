from __future__ import annotations

from decimal import Decimal

import pytest

from gamestore.application.dto.cart import AddToCartInput
from gamestore.application.dto.orders import FinalizePaymentInput
from gamestore.application.use_cases.add_to_cart import AddToCartUseCase
from gamestore.application.use_cases.checkout import CheckoutUseCase
from gamestore.application.use_cases.finalize_payment import FinalizePaymentUseCase
from gamestore.application.use_cases.get_purchase import GetPurchaseUseCase
from gamestore.application.use_cases.list_library import ListLibraryUseCase
from gamestore.application.use_cases.list_purchases import ListPurchasesUseCase
from gamestore.domain.exceptions import ForbiddenError, PurchaseNotFoundError
from tests.fakes import FakeStore


def _checked_out(store: FakeStore):
    customer = store.add_customer()
    game = store.add_game("Starfall Tactics", "9.99")
    store.upsert_cart_line(user_id=customer.id, game_id=game.id, quantity=1)
    output = CheckoutUseCase(orders_port=store).execute(user_id=customer.id)
    return customer, game, output.purchase_id


def test_finalize_payment_twice_grants_once():
    store = FakeStore()
    customer, game, purchase_id = _checked_out(store)
    use_case = FinalizePaymentUseCase(orders_port=store)

    first = use_case.execute(FinalizePaymentInput(purchase_id=purchase_id, user_id=customer.id))
    second = use_case.execute(FinalizePaymentInput(purchase_id=purchase_id, user_id=customer.id))

    assert first.newly_paid is True
    assert first.granted_game_ids == [game.id]
    assert second.paid is True
    assert second.newly_paid is False
    assert second.granted_game_ids == []
    assert store.user_games == [(customer.id, game.id)]


def test_finalize_payment_by_other_customer_is_forbidden_and_changes_nothing():
    store = FakeStore()
    _customer, _game, purchase_id = _checked_out(store)
    intruder = store.add_customer("mallory")

    with pytest.raises(ForbiddenError):
        FinalizePaymentUseCase(orders_port=store).execute(
            FinalizePaymentInput(purchase_id=purchase_id, user_id=intruder.id)
        )

    assert store.purchases[purchase_id].paid is False
    assert store.user_games == []


def test_finalize_payment_unknown_purchase():
    store = FakeStore()
    customer = store.add_customer()

    with pytest.raises(PurchaseNotFoundError):
        FinalizePaymentUseCase(orders_port=store).execute(FinalizePaymentInput(purchase_id=9, user_id=customer.id))


def test_finalize_payment_does_not_duplicate_already_owned_game():
    store = FakeStore()
    customer, game, purchase_id = _checked_out(store)
    store.grant_entitlement(user_id=customer.id, game_id=game.id)

    output = FinalizePaymentUseCase(orders_port=store).execute(
        FinalizePaymentInput(purchase_id=purchase_id, user_id=customer.id)
    )

    assert output.newly_paid is True
    assert output.granted_game_ids == []
    assert store.user_games == [(customer.id, game.id)]


def test_order_lifecycle_end_to_end():
    store = FakeStore()
    customer = store.add_customer()
    starfall = store.add_game("Starfall Tactics", "9.99")
    harbor = store.add_game("Pixel Harbor", "4.50")
    add = AddToCartUseCase(customer_port=store, catalog_port=store, cart_port=store)

    add.execute(AddToCartInput(user_id=customer.id, game_id=starfall.id, quantity=1))
    add.execute(AddToCartInput(user_id=customer.id, game_id=starfall.id, quantity=1))
    cart = add.execute(AddToCartInput(user_id=customer.id, game_id=harbor.id, quantity=1))
    assert cart.total == Decimal("24.48")

    checkout = CheckoutUseCase(orders_port=store).execute(user_id=customer.id)
    assert checkout.total == Decimal("24.48")

    FinalizePaymentUseCase(orders_port=store).execute(
        FinalizePaymentInput(purchase_id=checkout.purchase_id, user_id=customer.id)
    )

    purchases = ListPurchasesUseCase(orders_port=store).execute(user_id=customer.id)
    assert [(row.id, row.paid, row.total, row.item_count) for row in purchases] == [
        (checkout.purchase_id, True, Decimal("24.48"), 3)
    ]
    library = ListLibraryUseCase(library_port=store).execute(user_id=customer.id)
    assert [row.title for row in library] == ["Pixel Harbor", "Starfall Tactics"]


def test_get_purchase_checks_ownership():
    store = FakeStore()
    _customer, _game, purchase_id = _checked_out(store)
    intruder = store.add_customer("mallory")

    with pytest.raises(ForbiddenError):
        GetPurchaseUseCase(orders_port=store).execute(purchase_id=purchase_id, user_id=intruder.id)
