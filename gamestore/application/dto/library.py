from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OwnedGameOutput:
    game_id: int
    title: str
    image_url: str | None
