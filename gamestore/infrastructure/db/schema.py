from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy import Boolean, DateTime, bindparam, inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError

from gamestore.infrastructure.db.mappers.store_mapper import as_utc_datetime
from gamestore.infrastructure.db.models.store import STORE_TABLES, SchemaMigrationModel


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MigrationStep:
    version: int
    name: str
    apply: Callable[[Connection], None]


@dataclass(frozen=True)
class SchemaReport:
    applied: tuple[str, ...]
    skipped: tuple[str, ...]
    failed: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.failed


def _columns(conn: Connection, table: str) -> set[str]:
    inspector = inspect(conn)
    if not inspector.has_table(table):
        return set()
    return {column["name"] for column in inspector.get_columns(table)}


def _quote(conn: Connection, name: str) -> str:
    return conn.dialect.identifier_preparer.quote(name)


def _create_core_tables(conn: Connection) -> None:
    for table in STORE_TABLES:
        table.create(conn, checkfirst=True)


def _add_missing_columns(conn: Connection) -> None:
    for table in STORE_TABLES:
        existing = _columns(conn, table.name)
        if not existing:
            continue
        for column in table.columns:
            if column.name in existing or column.primary_key:
                continue
            ddl = "ALTER TABLE {table} ADD COLUMN {column} {type}".format(
                table=_quote(conn, table.name),
                column=_quote(conn, column.name),
                type=column.type.compile(dialect=conn.dialect),
            )
            if column.server_default is not None:
                default = column.server_default.arg
                if not isinstance(default, str):
                    default = str(
                        default.compile(dialect=conn.dialect, compile_kwargs={"literal_binds": True})
                    )
                ddl += f" DEFAULT {default}"
            conn.execute(text(ddl))
            logger.info("schema: column added table=%s column=%s", table.name, column.name)


def _backfill_legacy_columns(conn: Connection) -> None:
    purchases = _columns(conn, "purchases")
    if "customer_id" in purchases:
        conn.execute(text("UPDATE purchases SET user_id = customer_id WHERE user_id IS NULL"))
    if "purchase_date" in purchases:
        conn.execute(text("UPDATE purchases SET created_at = purchase_date WHERE created_at IS NULL"))
    conn.execute(
        text("UPDATE purchases SET created_at = :now WHERE created_at IS NULL").bindparams(
            bindparam("now", type_=DateTime(timezone=True))
        ),
        {"now": datetime.now(timezone.utc)},
    )
    conn.execute(
        text("UPDATE purchases SET paid = :unpaid WHERE paid IS NULL").bindparams(
            bindparam("unpaid", type_=Boolean())
        ),
        {"unpaid": False},
    )

    # First-revision lines carried no price snapshot; the catalog price is the best available.
    conn.execute(
        text(
            """
            UPDATE purchase_items
            SET price = (SELECT g.price FROM games g WHERE g.id = purchase_items.game_id)
            WHERE price IS NULL
            """
        )
    )
    conn.execute(text("UPDATE purchase_items SET quantity = 1 WHERE quantity IS NULL"))
    conn.execute(
        text(
            """
            UPDATE purchases
            SET total = COALESCE(
                (SELECT SUM(pi.price * pi.quantity) FROM purchase_items pi WHERE pi.purchase_id = purchases.id),
                0
            )
            WHERE total IS NULL
            """
        )
    )

    if "password" in _columns(conn, "customers"):
        conn.execute(text("UPDATE customers SET password_hash = password WHERE password_hash IS NULL"))


def _cart_items_unique_line(conn: Connection) -> None:
    conn.execute(text("DELETE FROM cart_items WHERE user_id IS NULL OR game_id IS NULL"))
    conn.execute(text("UPDATE cart_items SET quantity = 1 WHERE quantity IS NULL"))
    conn.execute(
        text(
            """
            UPDATE cart_items
            SET quantity = (
                SELECT SUM(c2.quantity)
                FROM cart_items c2
                WHERE c2.user_id = cart_items.user_id
                  AND c2.game_id = cart_items.game_id
            )
            WHERE id IN (
                SELECT MIN(id)
                FROM cart_items
                GROUP BY user_id, game_id
                HAVING COUNT(*) > 1
            )
            """
        )
    )
    conn.execute(
        text(
            """
            DELETE FROM cart_items
            WHERE id NOT IN (
                SELECT keep_id FROM (
                    SELECT MIN(id) AS keep_id
                    FROM cart_items
                    GROUP BY user_id, game_id
                ) keep
            )
            """
        )
    )
    conn.execute(text("DELETE FROM cart_items WHERE quantity <= 0"))
    conn.execute(
        text("CREATE UNIQUE INDEX IF NOT EXISTS uq_cart_items_user_game ON cart_items (user_id, game_id)")
    )


def _user_games_unique_entry(conn: Connection) -> None:
    conn.execute(text("DELETE FROM user_games WHERE user_id IS NULL OR game_id IS NULL"))
    conn.execute(
        text(
            """
            DELETE FROM user_games
            WHERE id NOT IN (
                SELECT keep_id FROM (
                    SELECT MIN(id) AS keep_id
                    FROM user_games
                    GROUP BY user_id, game_id
                ) keep
            )
            """
        )
    )
    conn.execute(
        text("CREATE UNIQUE INDEX IF NOT EXISTS uq_user_games_user_game ON user_games (user_id, game_id)")
    )


def _import_legacy_library(conn: Connection) -> None:
    columns = _columns(conn, "library")
    if not {"customer_id", "game_id"} <= columns:
        return
    result = conn.execute(
        text(
            """
            INSERT INTO user_games (user_id, game_id)
            SELECT DISTINCT customer_id, game_id
            FROM library
            WHERE customer_id IS NOT NULL
              AND game_id IS NOT NULL
            ON CONFLICT (user_id, game_id) DO NOTHING
            """
        )
    )
    logger.info("schema: legacy library imported rows=%s", result.rowcount)


def _normalize_legacy_timestamps(conn: Connection) -> None:
    # SQLite keeps timestamps as text, so RFC 3339 values from the first
    # revision must share the stored format to sort correctly.
    if conn.dialect.name != "sqlite":
        return
    rows = conn.execute(
        text("SELECT id, created_at FROM purchases WHERE created_at LIKE '%T%'")
    ).all()
    update = text("UPDATE purchases SET created_at = :created_at WHERE id = :id").bindparams(
        bindparam("created_at", type_=DateTime(timezone=True))
    )
    normalized = 0
    for purchase_id, created_at in rows:
        try:
            value = as_utc_datetime(created_at)
        except ValueError:
            logger.warning("schema: unreadable timestamp purchase_id=%s value=%r", purchase_id, created_at)
            continue
        conn.execute(update, {"id": purchase_id, "created_at": value})
        normalized += 1
    logger.info("schema: legacy timestamps normalized rows=%s", normalized)


MIGRATIONS: tuple[MigrationStep, ...] = (
    MigrationStep(1, "create_core_tables", _create_core_tables),
    MigrationStep(2, "add_missing_columns", _add_missing_columns),
    MigrationStep(3, "backfill_legacy_columns", _backfill_legacy_columns),
    MigrationStep(4, "cart_items_unique_line", _cart_items_unique_line),
    MigrationStep(5, "user_games_unique_entry", _user_games_unique_entry),
    MigrationStep(6, "import_legacy_library", _import_legacy_library),
    MigrationStep(7, "normalize_legacy_timestamps", _normalize_legacy_timestamps),
)


def _applied_versions(engine) -> set[int]:
    with engine.begin() as conn:
        SchemaMigrationModel.__table__.create(conn, checkfirst=True)
        rows = conn.execute(text("SELECT version FROM schema_migrations")).scalars().all()
    return {int(version) for version in rows}


def _record(conn: Connection, step: MigrationStep) -> None:
    conn.execute(
        text(
            """
            INSERT INTO schema_migrations (version, name, applied_at)
            VALUES (:version, :name, :applied_at)
            ON CONFLICT (version) DO NOTHING
            """
        ).bindparams(bindparam("applied_at", type_=DateTime(timezone=True))),
        {
            "version": step.version,
            "name": step.name,
            "applied_at": datetime.now(timezone.utc),
        },
    )


def ensure_schema(engine, *, migrations: tuple[MigrationStep, ...] = MIGRATIONS) -> SchemaReport:
    """Apply every pending migration step, each in its own transaction.

    A failing step is logged and left unrecorded so the next call retries it.
    Later steps still run; operations that depend on the missing structure fail
    on their own.
    """
    try:
        done = _applied_versions(engine)
    except SQLAlchemyError:
        logger.exception("schema: migration ledger unavailable")
        return SchemaReport(applied=(), skipped=(), failed=tuple(step.name for step in migrations))

    applied: list[str] = []
    skipped: list[str] = []
    failed: list[str] = []
    for step in sorted(migrations, key=lambda item: item.version):
        if step.version in done:
            skipped.append(step.name)
            continue
        try:
            with engine.begin() as conn:
                step.apply(conn)
                _record(conn, step)
        except SQLAlchemyError:
            logger.exception("schema: step failed version=%s name=%s", step.version, step.name)
            failed.append(step.name)
            continue
        logger.info("schema: step applied version=%s name=%s", step.version, step.name)
        applied.append(step.name)

    return SchemaReport(applied=tuple(applied), skipped=tuple(skipped), failed=tuple(failed))
