from __future__ import annotations

from gamestore.application.dto.catalog import GameOutput
from gamestore.application.ports.catalog_port import CatalogPort
from gamestore.domain.exceptions import GameNotFoundError

from .catalog_common import build_game_output


class GetGameUseCase:
    def __init__(self, *, catalog_port: CatalogPort):
        self._catalog_port = catalog_port

    def execute(self, *, game_id: int) -> GameOutput:
        game = self._catalog_port.get_game_by_id(game_id=game_id)
        if game is None:
            raise GameNotFoundError(f"Game {game_id} not found.")
        return build_game_output(game)
