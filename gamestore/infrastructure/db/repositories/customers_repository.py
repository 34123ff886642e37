from __future__ import annotations

from functools import lru_cache

from sqlalchemy import inspect, text

from gamestore.application.ports.customer_port import CustomerPort
from gamestore.domain.exceptions import UsernameAlreadyExistsError
from gamestore.infrastructure.db.mappers.store_mapper import map_row_to_customer

from .base import SqlRepository


@lru_cache(maxsize=8)
def _has_legacy_password_column(engine) -> bool:
    # first store revision keeps a NOT NULL `password` column next to `password_hash`
    return "password" in {column["name"] for column in inspect(engine).get_columns("customers")}


class SqlCustomersRepository(SqlRepository, CustomerPort):
    def get_customer_by_id(self, *, customer_id: int):
        sql = """
            SELECT id, username, password_hash
            FROM customers
            WHERE id = :customer_id
            LIMIT 1
        """
        with self._read() as conn:
            row = conn.execute(text(sql), {"customer_id": customer_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_customer(row)

    def get_customer_by_username(self, *, username: str):
        sql = """
            SELECT id, username, password_hash
            FROM customers
            WHERE username = :username
            LIMIT 1
        """
        with self._read() as conn:
            row = conn.execute(text(sql), {"username": username}).mappings().first()
        if row is None:
            return None
        return map_row_to_customer(row)

    def create_customer(self, *, username: str, password_hash: str):
        with self._write() as conn:
            columns = "username, password_hash"
            values = ":username, :password_hash"
            if _has_legacy_password_column(self._engine):
                columns += ", password"
                values += ", :password_hash"
            sql = f"""
                INSERT INTO customers ({columns})
                VALUES ({values})
                ON CONFLICT (username) DO NOTHING
                RETURNING id, username, password_hash
            """
            row = conn.execute(
                text(sql),
                {
                    "username": username,
                    "password_hash": password_hash,
                },
            ).mappings().first()
        if row is None:
            raise UsernameAlreadyExistsError("Username already taken.")
        return map_row_to_customer(row)

    def update_customer_password_hash(self, *, customer_id: int, password_hash: str) -> None:
        sql = """
            UPDATE customers
            SET password_hash = :password_hash
            WHERE id = :customer_id
        """
        with self._write() as conn:
            conn.execute(
                text(sql),
                {
                    "customer_id": customer_id,
                    "password_hash": password_hash,
                },
            )
