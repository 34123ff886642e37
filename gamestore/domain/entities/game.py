from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Game:
    id: int
    title: str
    description: str | None
    price: Decimal
    image_url: str | None
