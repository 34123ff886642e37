from __future__ import annotations

from sqlalchemy import text

from gamestore.application.ports.cart_port import CartPort
from gamestore.domain.entities.cart import MAX_CART_QUANTITY
from gamestore.infrastructure.db.mappers.store_mapper import (
    map_row_to_cart_line,
    map_row_to_priced_cart_line,
)

from .base import SqlRepository


PRICED_CART_LINES_SQL = """
    SELECT
        c.id AS line_id,
        c.quantity AS quantity,
        g.id AS game_id,
        g.title AS game_title,
        g.description AS game_description,
        g.price AS game_price,
        g.image_url AS game_image_url
    FROM cart_items c
    JOIN games g ON g.id = c.game_id
    WHERE c.user_id = :user_id
    ORDER BY c.id
"""


class SqlCartRepository(SqlRepository, CartPort):
    def upsert_cart_line(self, *, user_id: int, game_id: int, quantity: int, max_quantity: int = MAX_CART_QUANTITY):
        # A merge past the cap matches no row, so nothing is updated or returned.
        sql = """
            INSERT INTO cart_items (user_id, game_id, quantity)
            VALUES (:user_id, :game_id, :quantity)
            ON CONFLICT (user_id, game_id) DO UPDATE
            SET quantity = cart_items.quantity + excluded.quantity
            WHERE cart_items.quantity + excluded.quantity <= :max_quantity
            RETURNING id, user_id, game_id, quantity
        """
        with self._write() as conn:
            row = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "game_id": game_id,
                    "quantity": quantity,
                    "max_quantity": max_quantity,
                },
            ).mappings().one_or_none()
        if row is None:
            return None
        return map_row_to_cart_line(row)

    def set_cart_line_quantity(self, *, user_id: int, game_id: int, quantity: int):
        sql = """
            INSERT INTO cart_items (user_id, game_id, quantity)
            VALUES (:user_id, :game_id, :quantity)
            ON CONFLICT (user_id, game_id) DO UPDATE
            SET quantity = excluded.quantity
            RETURNING id, user_id, game_id, quantity
        """
        with self._write() as conn:
            row = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "game_id": game_id,
                    "quantity": quantity,
                },
            ).mappings().one()
        return map_row_to_cart_line(row)

    def delete_cart_line(self, *, user_id: int, line_id: int) -> bool:
        sql = """
            DELETE FROM cart_items
            WHERE id = :line_id
              AND user_id = :user_id
        """
        with self._write() as conn:
            result = conn.execute(text(sql), {"user_id": user_id, "line_id": line_id})
        return result.rowcount > 0

    def delete_cart_game(self, *, user_id: int, game_id: int) -> bool:
        sql = """
            DELETE FROM cart_items
            WHERE game_id = :game_id
              AND user_id = :user_id
        """
        with self._write() as conn:
            result = conn.execute(text(sql), {"user_id": user_id, "game_id": game_id})
        return result.rowcount > 0

    def list_priced_cart_lines(self, *, user_id: int):
        with self._read() as conn:
            rows = conn.execute(text(PRICED_CART_LINES_SQL), {"user_id": user_id}).mappings().all()
        return [map_row_to_priced_cart_line(row) for row in rows]
