from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _connect_args(dsn: str) -> dict:
    # SQLite allows one writer at a time; wait for the lock instead of failing fast.
    if dsn.startswith("sqlite"):
        return {"timeout": 30}
    return {}


@lru_cache(maxsize=4)
def get_engine(dsn: str):
    return create_engine(dsn, future=True, pool_pre_ping=True, connect_args=_connect_args(dsn))
