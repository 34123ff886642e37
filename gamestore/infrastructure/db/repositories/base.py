from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, TypeVar

from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from gamestore.domain.exceptions import DomainError, StorageFailureError


logger = logging.getLogger(__name__)

TResult = TypeVar("TResult")


def _is_retryable(exc: SQLAlchemyError) -> bool:
    if isinstance(exc, OperationalError):
        return True
    return isinstance(exc, DBAPIError) and bool(exc.connection_invalidated)


def storage_failure(exc: SQLAlchemyError) -> StorageFailureError:
    retryable = _is_retryable(exc)
    logger.warning("storage: failure retryable=%s error=%s", retryable, exc.__class__.__name__)
    return StorageFailureError("Storage operation failed.", retryable=retryable)


class SqlRepository:
    """Shared connection handling for the SQL adapters.

    Outside a transaction every call gets its own connection. Inside
    `execute_in_transaction` the repository is rebound to the open
    connection so all calls share one commit or rollback.
    """

    def __init__(self, engine, *, connection: Connection | None = None):
        self._engine = engine
        self._connection = connection

    @contextmanager
    def _read(self) -> Iterator[Connection]:
        if self._connection is not None:
            yield self._connection
            return
        try:
            with self._engine.connect() as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise storage_failure(exc) from exc

    @contextmanager
    def _write(self) -> Iterator[Connection]:
        if self._connection is not None:
            yield self._connection
            return
        try:
            with self._engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise storage_failure(exc) from exc

    def execute_in_transaction(self, fn: Callable[..., TResult]) -> TResult:
        if self._connection is not None:
            return fn(self)
        try:
            with self._engine.begin() as conn:
                return fn(type(self)(self._engine, connection=conn))
        except DomainError:
            raise
        except SQLAlchemyError as exc:
            raise storage_failure(exc) from exc
