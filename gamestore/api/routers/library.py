from __future__ import annotations

from fastapi import APIRouter, Depends

from gamestore.api.deps import get_current_customer, get_list_library_use_case
from gamestore.api.schemas.library import OwnedGameResponse
from gamestore.application.use_cases.list_library import ListLibraryUseCase
from gamestore.domain.entities.customer import Customer


router = APIRouter()


@router.get("/v1/library", response_model=list[OwnedGameResponse])
def list_library(
    current_customer: Customer = Depends(get_current_customer),
    use_case: ListLibraryUseCase = Depends(get_list_library_use_case),
):
    return [
        OwnedGameResponse(game_id=row.game_id, title=row.title, image_url=row.image_url)
        for row in use_case.execute(user_id=current_customer.id)
    ]
