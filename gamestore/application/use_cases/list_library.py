from __future__ import annotations

from gamestore.application.dto.library import OwnedGameOutput
from gamestore.application.ports.library_port import LibraryPort


class ListLibraryUseCase:
    def __init__(self, *, library_port: LibraryPort):
        self._library_port = library_port

    def execute(self, *, user_id: int) -> list[OwnedGameOutput]:
        return [
            OwnedGameOutput(game_id=owned.game_id, title=owned.title, image_url=owned.image_url)
            for owned in self._library_port.list_owned_games(user_id=user_id)
        ]
