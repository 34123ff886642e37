from __future__ import annotations

from sqlalchemy import text

from gamestore.application.ports.catalog_port import CatalogPort
from gamestore.infrastructure.db.mappers.store_mapper import map_row_to_game

from .base import SqlRepository


class SqlCatalogRepository(SqlRepository, CatalogPort):
    def get_game_by_id(self, *, game_id: int):
        sql = """
            SELECT id, title, description, price, image_url
            FROM games
            WHERE id = :game_id
            LIMIT 1
        """
        with self._read() as conn:
            row = conn.execute(text(sql), {"game_id": game_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_game(row)

    def list_games(self):
        sql = """
            SELECT id, title, description, price, image_url
            FROM games
            ORDER BY id DESC
        """
        with self._read() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_game(row) for row in rows]
