from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from gamestore.domain.entities.cart import CartLine, PricedCartLine
from gamestore.domain.entities.customer import Customer
from gamestore.domain.entities.entitlement import OwnedGame
from gamestore.domain.entities.game import Game
from gamestore.domain.entities.purchase import (
    Purchase,
    PurchaseLine,
    PurchaseLineDetail,
    PurchaseSummary,
)
from gamestore.domain.services.pricing import ZERO, to_money


def as_utc_datetime(value: Any) -> datetime:
    """Timestamp column value as an aware UTC datetime.

    SQLite hands timestamps back as text: `YYYY-MM-DD HH:MM:SS.ffffff` for
    rows written here, RFC 3339 (`...Z` or `...+02:00`) for rows written by
    the first store revision. Naive values are UTC.
    """
    if isinstance(value, str):
        raw = value.strip().replace(" ", "T", 1)
        if raw[-1:] in ("Z", "z"):
            raw = raw[:-1] + "+00:00"
        value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _as_money(value: Any):
    if value is None:
        return ZERO
    return to_money(value)


def map_row_to_customer(row: Mapping[str, Any]) -> Customer:
    return Customer(
        id=int(row["id"]),
        username=row["username"],
        password_hash=row.get("password_hash"),
    )


def map_row_to_game(row: Mapping[str, Any], *, prefix: str = "") -> Game:
    return Game(
        id=int(row[f"{prefix}id"]),
        title=row[f"{prefix}title"],
        description=row.get(f"{prefix}description"),
        price=_as_money(row[f"{prefix}price"]),
        image_url=row.get(f"{prefix}image_url"),
    )


def map_row_to_cart_line(row: Mapping[str, Any]) -> CartLine:
    return CartLine(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        game_id=int(row["game_id"]),
        quantity=int(row["quantity"]),
    )


def map_row_to_priced_cart_line(row: Mapping[str, Any]) -> PricedCartLine:
    return PricedCartLine(
        line_id=int(row["line_id"]),
        game=map_row_to_game(row, prefix="game_"),
        quantity=int(row["quantity"]),
    )


def map_row_to_purchase(row: Mapping[str, Any]) -> Purchase:
    return Purchase(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        total=_as_money(row["total"]),
        created_at=as_utc_datetime(row["created_at"]),
        paid=bool(row["paid"]),
    )


def map_row_to_purchase_line(row: Mapping[str, Any]) -> PurchaseLine:
    return PurchaseLine(
        id=int(row["id"]),
        purchase_id=int(row["purchase_id"]),
        game_id=int(row["game_id"]),
        price=_as_money(row["price"]),
        quantity=int(row["quantity"]),
    )


def map_row_to_purchase_line_detail(row: Mapping[str, Any]) -> PurchaseLineDetail:
    return PurchaseLineDetail(
        line=map_row_to_purchase_line(row),
        title=row.get("title"),
    )


def map_row_to_purchase_summary(row: Mapping[str, Any]) -> PurchaseSummary:
    return PurchaseSummary(
        purchase=map_row_to_purchase(row),
        item_count=int(row["item_count"] or 0),
    )


def map_row_to_owned_game(row: Mapping[str, Any]) -> OwnedGame:
    return OwnedGame(
        game_id=int(row["game_id"]),
        title=row["title"],
        image_url=row.get("image_url"),
    )
