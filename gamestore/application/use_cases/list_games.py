from __future__ import annotations

from gamestore.application.dto.catalog import GameOutput
from gamestore.application.ports.catalog_port import CatalogPort

from .catalog_common import build_game_output


class ListGamesUseCase:
    def __init__(self, *, catalog_port: CatalogPort):
        self._catalog_port = catalog_port

    def execute(self) -> list[GameOutput]:
        return [build_game_output(game) for game in self._catalog_port.list_games()]
