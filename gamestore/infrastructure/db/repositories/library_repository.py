from __future__ import annotations

from sqlalchemy import text

from gamestore.application.ports.library_port import LibraryPort
from gamestore.infrastructure.db.mappers.store_mapper import map_row_to_owned_game

from .base import SqlRepository


class SqlLibraryRepository(SqlRepository, LibraryPort):
    def list_owned_games(self, *, user_id: int):
        sql = """
            SELECT ug.game_id, g.title, g.image_url
            FROM user_games ug
            JOIN games g ON g.id = ug.game_id
            WHERE ug.user_id = :user_id
            ORDER BY g.title, g.id
        """
        with self._read() as conn:
            rows = conn.execute(text(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_owned_game(row) for row in rows]
