from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OwnedGame:
    game_id: int
    title: str
    image_url: str | None
