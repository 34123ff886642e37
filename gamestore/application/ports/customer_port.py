from __future__ import annotations

from typing import Callable, Protocol, TypeVar

from gamestore.domain.entities.customer import Customer


TCustomerResult = TypeVar("TCustomerResult")


class CustomerPort(Protocol):
    def execute_in_transaction(self, fn: Callable[[CustomerPort], TCustomerResult]) -> TCustomerResult:
        ...

    def get_customer_by_id(self, *, customer_id: int) -> Customer | None:
        ...

    def get_customer_by_username(self, *, username: str) -> Customer | None:
        ...

    def create_customer(self, *, username: str, password_hash: str) -> Customer:
        ...

    def update_customer_password_hash(self, *, customer_id: int, password_hash: str) -> None:
        ...
