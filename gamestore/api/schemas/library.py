from __future__ import annotations

from pydantic import BaseModel


class OwnedGameResponse(BaseModel):
    game_id: int
    title: str
    image_url: str | None = None
