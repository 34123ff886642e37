from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamestore.api.routers import auth, cart, catalog, health, library, orders
from gamestore.domain.exceptions import StorageFailureError
from gamestore.infrastructure.db.engine import get_engine
from gamestore.infrastructure.db.schema import ensure_schema
from gamestore.shared.config import get_settings


logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    settings = get_settings()
    if settings.schema_on_startup and settings.database_dsn:
        report = ensure_schema(get_engine(settings.database_dsn))
        logger.info(
            "startup: schema applied=%s skipped=%s failed=%s",
            len(report.applied),
            len(report.skipped),
            len(report.failed),
        )
    yield


async def _storage_failure_handler(request: Request, exc: StorageFailureError) -> JSONResponse:
    status_code = 503 if exc.retryable else 500
    return JSONResponse(status_code=status_code, content={"detail": "Storage unavailable, try again later."})


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(title="Game Store API", lifespan=_lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StorageFailureError, _storage_failure_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(catalog.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(library.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gamestore.main:app", host="0.0.0.0", port=8000)
