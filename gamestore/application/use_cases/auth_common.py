from __future__ import annotations

from datetime import datetime, timezone

from gamestore.application.dto.auth import CustomerOutput
from gamestore.domain.entities.customer import Customer


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_username(username: str) -> str:
    return username.strip()


def build_customer_output(customer: Customer) -> CustomerOutput:
    return CustomerOutput(id=customer.id, username=customer.username)
