from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CustomerOutput:
    id: int
    username: str


@dataclass(frozen=True)
class RegisterCustomerInput:
    username: str
    password: str


@dataclass(frozen=True)
class RegisterCustomerOutput:
    customer: CustomerOutput


@dataclass(frozen=True)
class LoginCustomerInput:
    username: str
    password: str


@dataclass(frozen=True)
class AccessTokenOutput:
    customer: CustomerOutput
    access_token: str
    access_expires_at: datetime


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: int
