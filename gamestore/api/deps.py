from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import Header, HTTPException

from gamestore.application.use_cases.add_to_cart import AddToCartUseCase
from gamestore.application.use_cases.checkout import CheckoutUseCase
from gamestore.application.use_cases.finalize_payment import FinalizePaymentUseCase
from gamestore.application.use_cases.get_cart import GetCartUseCase
from gamestore.application.use_cases.get_game import GetGameUseCase
from gamestore.application.use_cases.get_purchase import GetPurchaseUseCase
from gamestore.application.use_cases.list_games import ListGamesUseCase
from gamestore.application.use_cases.list_library import ListLibraryUseCase
from gamestore.application.use_cases.list_purchases import ListPurchasesUseCase
from gamestore.application.use_cases.login_customer import LoginCustomerUseCase
from gamestore.application.use_cases.register_customer import RegisterCustomerUseCase
from gamestore.application.use_cases.remove_from_cart import RemoveFromCartUseCase
from gamestore.application.use_cases.set_cart_quantity import SetCartQuantityUseCase
from gamestore.domain.entities.customer import Customer
from gamestore.infrastructure.db.engine import get_engine
from gamestore.infrastructure.db.repositories.cart_repository import SqlCartRepository
from gamestore.infrastructure.db.repositories.catalog_repository import SqlCatalogRepository
from gamestore.infrastructure.db.repositories.customers_repository import SqlCustomersRepository
from gamestore.infrastructure.db.repositories.library_repository import SqlLibraryRepository
from gamestore.infrastructure.db.repositories.orders_repository import SqlOrdersRepository
from gamestore.infrastructure.db.schema import ensure_schema
from gamestore.infrastructure.security.password_hasher import PasswordHasher
from gamestore.infrastructure.security.token_service import JwtTokenService
from gamestore.shared.config import get_settings


logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _schema_ready(dsn: str) -> bool:
    report = ensure_schema(get_engine(dsn))
    if report.failed:
        logger.warning("deps: schema degraded failed=%s", ",".join(report.failed))
    return report.ok


def _get_db_engine():
    settings = get_settings()
    if not settings.database_dsn:
        raise HTTPException(status_code=500, detail="DATABASE_DSN is required.")
    _schema_ready(settings.database_dsn)
    return get_engine(settings.database_dsn)


def _get_customers_repository() -> SqlCustomersRepository:
    return SqlCustomersRepository(_get_db_engine())


def _get_catalog_repository() -> SqlCatalogRepository:
    return SqlCatalogRepository(_get_db_engine())


def _get_cart_repository() -> SqlCartRepository:
    return SqlCartRepository(_get_db_engine())


def _get_orders_repository() -> SqlOrdersRepository:
    return SqlOrdersRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def get_register_customer_use_case() -> RegisterCustomerUseCase:
    return RegisterCustomerUseCase(
        customer_port=_get_customers_repository(),
        password_hasher=_get_password_hasher(),
    )


def get_login_customer_use_case() -> LoginCustomerUseCase:
    return LoginCustomerUseCase(
        customer_port=_get_customers_repository(),
        password_hasher=_get_password_hasher(),
        token_port=_get_token_service(),
    )


def get_list_games_use_case() -> ListGamesUseCase:
    return ListGamesUseCase(catalog_port=_get_catalog_repository())


def get_get_game_use_case() -> GetGameUseCase:
    return GetGameUseCase(catalog_port=_get_catalog_repository())


def get_get_cart_use_case() -> GetCartUseCase:
    return GetCartUseCase(cart_port=_get_cart_repository())


def get_add_to_cart_use_case() -> AddToCartUseCase:
    return AddToCartUseCase(
        customer_port=_get_customers_repository(),
        catalog_port=_get_catalog_repository(),
        cart_port=_get_cart_repository(),
    )


def get_set_cart_quantity_use_case() -> SetCartQuantityUseCase:
    return SetCartQuantityUseCase(
        customer_port=_get_customers_repository(),
        catalog_port=_get_catalog_repository(),
        cart_port=_get_cart_repository(),
    )


def get_remove_from_cart_use_case() -> RemoveFromCartUseCase:
    return RemoveFromCartUseCase(
        customer_port=_get_customers_repository(),
        cart_port=_get_cart_repository(),
    )


def get_checkout_use_case() -> CheckoutUseCase:
    return CheckoutUseCase(orders_port=_get_orders_repository())


def get_finalize_payment_use_case() -> FinalizePaymentUseCase:
    return FinalizePaymentUseCase(orders_port=_get_orders_repository())


def get_list_purchases_use_case() -> ListPurchasesUseCase:
    return ListPurchasesUseCase(orders_port=_get_orders_repository())


def get_get_purchase_use_case() -> GetPurchaseUseCase:
    return GetPurchaseUseCase(orders_port=_get_orders_repository())


def get_list_library_use_case() -> ListLibraryUseCase:
    return ListLibraryUseCase(library_port=SqlLibraryRepository(_get_db_engine()))


def get_current_customer(
    authorization: str | None = Header(default=None),
) -> Customer:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    token_service = _get_token_service()
    customer_port = _get_customers_repository()

    try:
        payload = token_service.decode_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    customer = customer_port.get_customer_by_id(customer_id=payload.user_id)
    if customer is None:
        raise HTTPException(status_code=401, detail="Customer not found.")
    return customer
