from __future__ import annotations

from typing import Protocol

from gamestore.domain.entities.entitlement import OwnedGame


class LibraryPort(Protocol):
    def list_owned_games(self, *, user_id: int) -> list[OwnedGame]:
        ...
