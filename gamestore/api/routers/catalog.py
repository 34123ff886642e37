from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from gamestore.api.deps import get_get_game_use_case, get_list_games_use_case
from gamestore.api.schemas.catalog import GameResponse
from gamestore.application.dto.catalog import GameOutput
from gamestore.application.use_cases.get_game import GetGameUseCase
from gamestore.application.use_cases.list_games import ListGamesUseCase
from gamestore.domain.exceptions import GameNotFoundError


router = APIRouter()


def _to_response(game: GameOutput) -> GameResponse:
    return GameResponse(
        id=game.id,
        title=game.title,
        description=game.description,
        price=game.price,
        image_url=game.image_url,
    )


@router.get("/v1/games", response_model=list[GameResponse])
def list_games(
    use_case: ListGamesUseCase = Depends(get_list_games_use_case),
):
    return [_to_response(game) for game in use_case.execute()]


@router.get("/v1/games/{game_id}", response_model=GameResponse)
def get_game(
    game_id: int,
    use_case: GetGameUseCase = Depends(get_get_game_use_case),
):
    try:
        game = use_case.execute(game_id=game_id)
    except GameNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _to_response(game)
