from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import inspect, text

from gamestore.application.dto.cart import AddToCartInput
from gamestore.application.dto.orders import FinalizePaymentInput
from gamestore.application.use_cases.add_to_cart import AddToCartUseCase
from gamestore.application.use_cases.finalize_payment import FinalizePaymentUseCase
from gamestore.application.use_cases.get_purchase import GetPurchaseUseCase
from gamestore.application.use_cases.list_library import ListLibraryUseCase
from gamestore.application.use_cases.list_purchases import ListPurchasesUseCase
from gamestore.infrastructure.db.repositories.cart_repository import SqlCartRepository
from gamestore.infrastructure.db.repositories.catalog_repository import SqlCatalogRepository
from gamestore.infrastructure.db.repositories.customers_repository import SqlCustomersRepository
from gamestore.infrastructure.db.repositories.library_repository import SqlLibraryRepository
from gamestore.infrastructure.db.repositories.orders_repository import SqlOrdersRepository
from gamestore.infrastructure.db.schema import MIGRATIONS, MigrationStep, ensure_schema


STEP_NAMES = tuple(step.name for step in MIGRATIONS)

# Layout written by the first store revision: no cart, no paid flag, a
# separate library table and plain sha256 passwords.
FIRST_REVISION_DDL = (
    """
    CREATE TABLE games (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT,
        price REAL NOT NULL,
        image_url TEXT
    )
    """,
    """
    CREATE TABLE customers (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE purchases (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        customer_id INTEGER,
        total REAL,
        purchase_date DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE purchase_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        purchase_id INTEGER,
        game_id INTEGER,
        quantity INTEGER DEFAULT 1
    )
    """,
    """
    CREATE TABLE library (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        customer_id INTEGER,
        game_id INTEGER,
        purchase_id INTEGER
    )
    """,
    """
    CREATE TABLE cart_items (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        game_id INTEGER,
        quantity INTEGER DEFAULT 1
    )
    """,
    """
    CREATE TABLE user_games (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER,
        game_id INTEGER
    )
    """,
)

SHA256_SECRET = "fcf730b6d95236ecd3c9fc2d92d7b6b2bb061514961aec041d6c7a7192f592e4"


def _seed_first_revision(engine) -> None:
    with engine.begin() as conn:
        for ddl in FIRST_REVISION_DDL:
            conn.execute(text(ddl))
        conn.execute(text("INSERT INTO games (id, title, price) VALUES (1, 'Starfall Tactics', 9.99)"))
        conn.execute(text("INSERT INTO games (id, title, price) VALUES (2, 'Pixel Harbor', 4.5)"))
        conn.execute(
            text("INSERT INTO customers (id, username, password) VALUES (1, 'legacy', :password)"),
            {"password": SHA256_SECRET},
        )
        conn.execute(
            text(
                "INSERT INTO purchases (id, customer_id, total, purchase_date) "
                "VALUES (1, 1, 9.99, '2023-05-01 10:00:00')"
            )
        )
        conn.execute(text("INSERT INTO purchase_items (purchase_id, game_id, quantity) VALUES (1, 1, 1)"))
        conn.execute(text("INSERT INTO library (customer_id, game_id, purchase_id) VALUES (1, 1, 1)"))
        conn.execute(text("INSERT INTO library (customer_id, game_id, purchase_id) VALUES (1, 1, 1)"))
        conn.execute(text("INSERT INTO cart_items (user_id, game_id, quantity) VALUES (1, 2, 1)"))
        conn.execute(text("INSERT INTO cart_items (user_id, game_id, quantity) VALUES (1, 2, 2)"))
        conn.execute(text("INSERT INTO cart_items (user_id, game_id, quantity) VALUES (1, 1, 0)"))
        conn.execute(text("INSERT INTO user_games (user_id, game_id) VALUES (1, 2)"))
        conn.execute(text("INSERT INTO user_games (user_id, game_id) VALUES (1, 2)"))


def test_fresh_database_gets_every_table_and_ledger_entry(raw_engine):
    report = ensure_schema(raw_engine)

    assert report.applied == STEP_NAMES
    assert report.failed == ()
    tables = set(inspect(raw_engine).get_table_names())
    assert {
        "games",
        "customers",
        "cart_items",
        "purchases",
        "purchase_items",
        "user_games",
        "schema_migrations",
    } <= tables
    with raw_engine.connect() as conn:
        versions = conn.execute(text("SELECT version FROM schema_migrations ORDER BY version")).scalars().all()
    assert versions == [step.version for step in MIGRATIONS]


def test_second_run_skips_recorded_steps(raw_engine):
    ensure_schema(raw_engine)

    report = ensure_schema(raw_engine)

    assert report.applied == ()
    assert report.skipped == STEP_NAMES
    assert report.ok


def test_failing_step_is_logged_skipped_and_retried(raw_engine, caplog):
    calls = []

    def _broken(conn):
        calls.append("broken")
        conn.execute(text("ALTER TABLE missing_table ADD COLUMN x INTEGER"))

    def _fine(conn):
        calls.append("fine")

    steps = (MigrationStep(1, "broken", _broken), MigrationStep(2, "fine", _fine))

    first = ensure_schema(raw_engine, migrations=steps)
    second = ensure_schema(raw_engine, migrations=steps)

    assert first.failed == ("broken",)
    assert first.applied == ("fine",)
    assert second.failed == ("broken",)
    assert second.skipped == ("fine",)
    assert calls == ["broken", "fine", "broken"]
    assert "step failed" in caplog.text


def test_first_revision_database_converges(raw_engine):
    _seed_first_revision(raw_engine)

    report = ensure_schema(raw_engine)

    assert report.failed == ()
    columns = {column["name"] for column in inspect(raw_engine).get_columns("purchases")}
    assert {"user_id", "created_at", "paid"} <= columns

    with raw_engine.connect() as conn:
        cart_rows = conn.execute(text("SELECT user_id, game_id, quantity FROM cart_items")).all()
        owned = conn.execute(text("SELECT user_id, game_id FROM user_games ORDER BY game_id")).all()
        line_price = conn.execute(text("SELECT price FROM purchase_items")).scalar_one()
    assert [tuple(row) for row in cart_rows] == [(1, 2, 3)]
    assert [tuple(row) for row in owned] == [(1, 1), (1, 2)]
    assert Decimal(str(line_price)) == Decimal("9.99")

    customer = SqlCustomersRepository(raw_engine).get_customer_by_username(username="legacy")
    assert customer.password_hash == SHA256_SECRET

    purchases = ListPurchasesUseCase(orders_port=SqlOrdersRepository(raw_engine)).execute(user_id=1)
    assert [(row.id, row.paid, row.total, row.item_count) for row in purchases] == [
        (1, False, Decimal("9.99"), 1)
    ]
    assert purchases[0].created_at.year == 2023

    library = ListLibraryUseCase(library_port=SqlLibraryRepository(raw_engine)).execute(user_id=1)
    assert [row.title for row in library] == ["Pixel Harbor", "Starfall Tactics"]


def test_first_revision_database_accepts_new_writes(raw_engine):
    _seed_first_revision(raw_engine)
    ensure_schema(raw_engine)

    created = SqlCustomersRepository(raw_engine).create_customer(username="newcomer", password_hash="$argon2$x")
    add = AddToCartUseCase(
        customer_port=SqlCustomersRepository(raw_engine),
        catalog_port=SqlCatalogRepository(raw_engine),
        cart_port=SqlCartRepository(raw_engine),
    )
    cart = add.execute(AddToCartInput(user_id=1, game_id=2, quantity=1))

    assert created.password_hash == "$argon2$x"
    assert [(line.game_id, line.quantity) for line in cart.lines] == [(2, 4)]


def test_purchases_stamped_by_first_revision_checkout_are_readable_and_ordered(raw_engine):
    _seed_first_revision(raw_engine)
    # Later first-revision checkouts stamped rows with RFC 3339 text.
    with raw_engine.begin() as conn:
        conn.execute(text("ALTER TABLE purchases ADD COLUMN user_id INTEGER"))
        conn.execute(text("ALTER TABLE purchases ADD COLUMN paid INTEGER DEFAULT 0"))
        conn.execute(text("ALTER TABLE purchases ADD COLUMN created_at DATETIME"))
        conn.execute(
            text(
                "INSERT INTO purchases (id, user_id, total, paid, created_at) "
                "VALUES (2, 1, 4.5, 0, '2024-05-01T10:00:00Z')"
            )
        )
        conn.execute(
            text(
                "INSERT INTO purchases (id, user_id, total, paid, created_at) "
                "VALUES (3, 1, 4.5, 0, '2024-05-01T12:30:00+02:00')"
            )
        )
        conn.execute(text("INSERT INTO purchase_items (purchase_id, game_id, quantity) VALUES (2, 2, 1)"))
        conn.execute(text("INSERT INTO purchase_items (purchase_id, game_id, quantity) VALUES (3, 2, 1)"))

    report = ensure_schema(raw_engine)
    orders = SqlOrdersRepository(raw_engine)
    orders.create_purchase(
        user_id=1,
        total=Decimal("9.99"),
        created_at=datetime(2024, 5, 1, 11, 0, tzinfo=timezone.utc),
    )

    assert report.failed == ()
    purchases = ListPurchasesUseCase(orders_port=orders).execute(user_id=1)
    assert [row.id for row in purchases] == [4, 3, 2, 1]
    assert purchases[1].created_at == datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)
    assert purchases[2].created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    detail = GetPurchaseUseCase(orders_port=orders).execute(purchase_id=2, user_id=1)
    assert detail.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    paid = FinalizePaymentUseCase(orders_port=orders).execute(FinalizePaymentInput(purchase_id=2, user_id=1))
    assert paid.newly_paid is True
