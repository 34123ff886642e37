from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Numeric, bindparam, text

from gamestore.application.ports.orders_port import OrdersPort
from gamestore.domain.entities.cart import PricedCartLine
from gamestore.infrastructure.db.mappers.store_mapper import (
    map_row_to_game,
    map_row_to_purchase,
    map_row_to_purchase_line,
    map_row_to_purchase_line_detail,
    map_row_to_purchase_summary,
)

from .base import SqlRepository


logger = logging.getLogger(__name__)

PURCHASE_COLUMNS = "id, user_id, total, created_at, paid"


class SqlOrdersRepository(SqlRepository, OrdersPort):
    def take_cart_lines(self, *, user_id: int) -> list[PricedCartLine]:
        # Lines whose game left the catalog stay in the cart; only priced lines are claimed.
        priced_sql = """
            SELECT
                c.id AS line_id,
                g.id AS id,
                g.title AS title,
                g.description AS description,
                g.price AS price,
                g.image_url AS image_url
            FROM cart_items c
            JOIN games g ON g.id = c.game_id
            WHERE c.user_id = :user_id
        """
        # Deleting claims the lines: a concurrent checkout of the same cart gets nothing back.
        claim_sql = text(
            """
            DELETE FROM cart_items
            WHERE user_id = :user_id
              AND id IN :line_ids
            RETURNING id, game_id, quantity
            """
        ).bindparams(bindparam("line_ids", expanding=True))

        with self._write() as conn:
            priced = conn.execute(text(priced_sql), {"user_id": user_id}).mappings().all()
            if not priced:
                return []
            games = {int(row["line_id"]): map_row_to_game(row) for row in priced}
            claimed = conn.execute(
                claim_sql,
                {"user_id": user_id, "line_ids": sorted(games)},
            ).mappings().all()

        if len(claimed) < len(games):
            logger.info(
                "checkout: lines_already_claimed user_id=%s expected=%s claimed=%s",
                user_id,
                len(games),
                len(claimed),
            )
        return [
            PricedCartLine(line_id=int(row["id"]), game=games[int(row["id"])], quantity=int(row["quantity"]))
            for row in sorted(claimed, key=lambda item: int(item["id"]))
        ]

    def create_purchase(self, *, user_id: int, total: Decimal, created_at: datetime):
        sql = text(
            f"""
            INSERT INTO purchases (user_id, total, created_at, paid)
            VALUES (:user_id, :total, :created_at, :paid)
            RETURNING {PURCHASE_COLUMNS}
            """
        ).bindparams(
            bindparam("total", type_=Numeric(10, 2)),
            bindparam("created_at", type_=DateTime(timezone=True)),
            bindparam("paid", type_=Boolean()),
        )
        with self._write() as conn:
            row = conn.execute(
                sql,
                {
                    "user_id": user_id,
                    "total": total,
                    "created_at": created_at,
                    "paid": False,
                },
            ).mappings().one()
        return map_row_to_purchase(row)

    def add_purchase_line(
        self,
        *,
        purchase_id: int,
        game_id: int,
        price: Decimal,
        quantity: int,
    ):
        sql = text(
            """
            INSERT INTO purchase_items (purchase_id, game_id, price, quantity)
            VALUES (:purchase_id, :game_id, :price, :quantity)
            RETURNING id, purchase_id, game_id, price, quantity
            """
        ).bindparams(bindparam("price", type_=Numeric(10, 2)))
        with self._write() as conn:
            row = conn.execute(
                sql,
                {
                    "purchase_id": purchase_id,
                    "game_id": game_id,
                    "price": price,
                    "quantity": quantity,
                },
            ).mappings().one()
        return map_row_to_purchase_line(row)

    def get_purchase(self, *, purchase_id: int):
        sql = f"""
            SELECT {PURCHASE_COLUMNS}
            FROM purchases
            WHERE id = :purchase_id
            LIMIT 1
        """
        with self._read() as conn:
            row = conn.execute(text(sql), {"purchase_id": purchase_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_purchase(row)

    def mark_purchase_paid(self, *, purchase_id: int) -> bool:
        sql = text(
            """
            UPDATE purchases
            SET paid = :paid
            WHERE id = :purchase_id
              AND paid = :unpaid
            """
        ).bindparams(
            bindparam("paid", type_=Boolean()),
            bindparam("unpaid", type_=Boolean()),
        )
        with self._write() as conn:
            result = conn.execute(sql, {"purchase_id": purchase_id, "paid": True, "unpaid": False})
        return result.rowcount == 1

    def list_purchase_lines(self, *, purchase_id: int):
        sql = """
            SELECT pi.id, pi.purchase_id, pi.game_id, pi.price, pi.quantity, g.title
            FROM purchase_items pi
            LEFT JOIN games g ON g.id = pi.game_id
            WHERE pi.purchase_id = :purchase_id
            ORDER BY pi.id
        """
        with self._read() as conn:
            rows = conn.execute(text(sql), {"purchase_id": purchase_id}).mappings().all()
        return [map_row_to_purchase_line_detail(row) for row in rows]

    def grant_entitlement(self, *, user_id: int, game_id: int) -> bool:
        sql = """
            INSERT INTO user_games (user_id, game_id)
            VALUES (:user_id, :game_id)
            ON CONFLICT (user_id, game_id) DO NOTHING
        """
        with self._write() as conn:
            result = conn.execute(text(sql), {"user_id": user_id, "game_id": game_id})
        return result.rowcount == 1

    def list_purchase_summaries(self, *, user_id: int):
        sql = """
            SELECT
                p.id,
                p.user_id,
                p.total,
                p.created_at,
                p.paid,
                COALESCE(SUM(pi.quantity), 0) AS item_count
            FROM purchases p
            LEFT JOIN purchase_items pi ON pi.purchase_id = p.id
            WHERE p.user_id = :user_id
            GROUP BY p.id, p.user_id, p.total, p.created_at, p.paid
            ORDER BY p.created_at DESC, p.id DESC
        """
        with self._read() as conn:
            rows = conn.execute(text(sql), {"user_id": user_id}).mappings().all()
        return [map_row_to_purchase_summary(row) for row in rows]
