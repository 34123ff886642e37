from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from gamestore.api.deps import (
    get_add_to_cart_use_case,
    get_current_customer,
    get_get_cart_use_case,
    get_remove_from_cart_use_case,
    get_set_cart_quantity_use_case,
)
from gamestore.api.schemas.cart import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    RemoveFromCartResponse,
    SetCartQuantityRequest,
)
from gamestore.application.dto.cart import (
    AddToCartInput,
    CartOutput,
    RemoveFromCartInput,
    SetCartQuantityInput,
)
from gamestore.application.use_cases.add_to_cart import AddToCartUseCase
from gamestore.application.use_cases.get_cart import GetCartUseCase
from gamestore.application.use_cases.remove_from_cart import RemoveFromCartUseCase
from gamestore.application.use_cases.set_cart_quantity import SetCartQuantityUseCase
from gamestore.domain.entities.customer import Customer
from gamestore.domain.exceptions import (
    InvalidProductError,
    InvalidQuantityError,
    NotAuthenticatedError,
)


router = APIRouter()


def _to_response(cart: CartOutput) -> CartResponse:
    return CartResponse(
        lines=[
            CartLineResponse(
                line_id=line.line_id,
                game_id=line.game_id,
                title=line.title,
                image_url=line.image_url,
                unit_price=line.unit_price,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in cart.lines
        ],
        total=cart.total,
    )


@router.get("/v1/cart", response_model=CartResponse)
def get_cart(
    current_customer: Customer = Depends(get_current_customer),
    use_case: GetCartUseCase = Depends(get_get_cart_use_case),
):
    return _to_response(use_case.execute(user_id=current_customer.id))


@router.post("/v1/cart/items", response_model=CartResponse)
def add_to_cart(
    req: AddToCartRequest,
    current_customer: Customer = Depends(get_current_customer),
    use_case: AddToCartUseCase = Depends(get_add_to_cart_use_case),
):
    try:
        cart = use_case.execute(
            AddToCartInput(
                user_id=current_customer.id,
                game_id=req.game_id,
                quantity=req.quantity,
            )
        )
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except (InvalidProductError, InvalidQuantityError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(cart)


@router.put("/v1/cart/games/{game_id}", response_model=CartResponse)
def set_cart_quantity(
    game_id: int,
    req: SetCartQuantityRequest,
    current_customer: Customer = Depends(get_current_customer),
    use_case: SetCartQuantityUseCase = Depends(get_set_cart_quantity_use_case),
):
    try:
        cart = use_case.execute(
            SetCartQuantityInput(
                user_id=current_customer.id,
                game_id=game_id,
                quantity=req.quantity,
            )
        )
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except (InvalidProductError, InvalidQuantityError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(cart)


def _remove(use_case: RemoveFromCartUseCase, command: RemoveFromCartInput) -> RemoveFromCartResponse:
    try:
        output = use_case.execute(command)
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return RemoveFromCartResponse(removed=output.removed)


@router.delete("/v1/cart/items/{line_id}", response_model=RemoveFromCartResponse)
def remove_cart_line(
    line_id: int,
    current_customer: Customer = Depends(get_current_customer),
    use_case: RemoveFromCartUseCase = Depends(get_remove_from_cart_use_case),
):
    return _remove(use_case, RemoveFromCartInput(user_id=current_customer.id, line_id=line_id))


@router.delete("/v1/cart/games/{game_id}", response_model=RemoveFromCartResponse)
def remove_cart_game(
    game_id: int,
    current_customer: Customer = Depends(get_current_customer),
    use_case: RemoveFromCartUseCase = Depends(get_remove_from_cart_use_case),
):
    return _remove(use_case, RemoveFromCartInput(user_id=current_customer.id, game_id=game_id))
