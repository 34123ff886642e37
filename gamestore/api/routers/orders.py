from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from gamestore.api.deps import (
    get_checkout_use_case,
    get_current_customer,
    get_finalize_payment_use_case,
    get_get_purchase_use_case,
    get_list_purchases_use_case,
)
from gamestore.api.schemas.orders import (
    CheckoutResponse,
    PaymentResponse,
    PurchaseDetailResponse,
    PurchaseLineResponse,
    PurchaseSummaryResponse,
)
from gamestore.application.dto.orders import FinalizePaymentInput
from gamestore.application.use_cases.checkout import CheckoutUseCase
from gamestore.application.use_cases.finalize_payment import FinalizePaymentUseCase
from gamestore.application.use_cases.get_purchase import GetPurchaseUseCase
from gamestore.application.use_cases.list_purchases import ListPurchasesUseCase
from gamestore.domain.entities.customer import Customer
from gamestore.domain.exceptions import EmptyCartError, ForbiddenError, NotFoundError


router = APIRouter()


@router.post("/v1/checkout", response_model=CheckoutResponse, status_code=201)
def checkout(
    current_customer: Customer = Depends(get_current_customer),
    use_case: CheckoutUseCase = Depends(get_checkout_use_case),
):
    try:
        output = use_case.execute(user_id=current_customer.id)
    except EmptyCartError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return CheckoutResponse(
        purchase_id=output.purchase_id,
        total=output.total,
        created_at=output.created_at,
        item_count=output.item_count,
    )


@router.get("/v1/purchases", response_model=list[PurchaseSummaryResponse])
def list_purchases(
    current_customer: Customer = Depends(get_current_customer),
    use_case: ListPurchasesUseCase = Depends(get_list_purchases_use_case),
):
    return [
        PurchaseSummaryResponse(
            id=row.id,
            created_at=row.created_at,
            total=row.total,
            paid=row.paid,
            item_count=row.item_count,
        )
        for row in use_case.execute(user_id=current_customer.id)
    ]


@router.get("/v1/purchases/{purchase_id}", response_model=PurchaseDetailResponse)
def get_purchase(
    purchase_id: int,
    current_customer: Customer = Depends(get_current_customer),
    use_case: GetPurchaseUseCase = Depends(get_get_purchase_use_case),
):
    try:
        output = use_case.execute(purchase_id=purchase_id, user_id=current_customer.id)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return PurchaseDetailResponse(
        id=output.id,
        created_at=output.created_at,
        total=output.total,
        paid=output.paid,
        lines=[
            PurchaseLineResponse(
                game_id=line.game_id,
                title=line.title,
                price=line.price,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in output.lines
        ],
    )


@router.post("/v1/purchases/{purchase_id}/pay", response_model=PaymentResponse)
def pay_purchase(
    purchase_id: int,
    current_customer: Customer = Depends(get_current_customer),
    use_case: FinalizePaymentUseCase = Depends(get_finalize_payment_use_case),
):
    try:
        output = use_case.execute(
            FinalizePaymentInput(
                purchase_id=purchase_id,
                user_id=current_customer.id,
            )
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    return PaymentResponse(
        purchase_id=output.purchase_id,
        paid=output.paid,
        newly_paid=output.newly_paid,
        granted_game_ids=output.granted_game_ids,
    )
