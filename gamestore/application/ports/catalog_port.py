from __future__ import annotations

from typing import Protocol

from gamestore.domain.entities.game import Game


class CatalogPort(Protocol):
    def get_game_by_id(self, *, game_id: int) -> Game | None:
        ...

    def list_games(self) -> list[Game]:
        ...
