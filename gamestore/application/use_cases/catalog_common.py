from __future__ import annotations

from gamestore.application.dto.catalog import GameOutput
from gamestore.domain.entities.game import Game


def build_game_output(game: Game) -> GameOutput:
    return GameOutput(
        id=game.id,
        title=game.title,
        description=game.description,
        price=game.price,
        image_url=game.image_url,
    )
