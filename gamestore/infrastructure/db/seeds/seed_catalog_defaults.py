from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Numeric, bindparam, text


DEFAULT_GAMES = (
    {
        "title": "Starfall Tactics",
        "description": "Turn-based squad tactics across a collapsing star system.",
        "price": Decimal("9.99"),
        "image_url": "/static/img/starfall-tactics.jpg",
    },
    {
        "title": "Pixel Harbor",
        "description": "A cozy fishing village builder.",
        "price": Decimal("4.50"),
        "image_url": "/static/img/pixel-harbor.jpg",
    },
    {
        "title": "Neon Drift",
        "description": "Arcade racing through a rain-soaked city.",
        "price": Decimal("14.99"),
        "image_url": "/static/img/neon-drift.jpg",
    },
)


def seed_catalog_defaults(engine, *, games=DEFAULT_GAMES) -> None:
    """Upsert demo games by title for local runs."""
    update_sql = text(
        """
        UPDATE games
        SET description = :description,
            price = :price,
            image_url = :image_url
        WHERE id = :id
        """
    ).bindparams(bindparam("price", type_=Numeric(10, 2)))
    insert_sql = text(
        """
        INSERT INTO games (title, description, price, image_url)
        VALUES (:title, :description, :price, :image_url)
        """
    ).bindparams(bindparam("price", type_=Numeric(10, 2)))

    with engine.begin() as conn:
        for game in games:
            game_id = conn.execute(
                text("SELECT id FROM games WHERE title = :title ORDER BY id LIMIT 1"),
                {"title": game["title"]},
            ).scalar()
            if game_id is None:
                conn.execute(insert_sql, game)
            else:
                conn.execute(update_sql, {**game, "id": game_id})
