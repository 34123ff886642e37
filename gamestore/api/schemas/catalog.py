from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class GameResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    price: Decimal
    image_url: str | None = None
