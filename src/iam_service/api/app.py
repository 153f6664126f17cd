"""
iam_service.api.app

FastAPI app factory for the identity service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Build the token issuer, access gate and services once per process.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Map domain error kinds to HTTP responses in one place.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from iam_service import __version__
from iam_service.api.routers.auth import router as auth_router
from iam_service.api.routers.health import router as health_router
from iam_service.api.routers.roles import router as roles_router
from iam_service.api.routers.users import router as users_router
from iam_service.auth.gate import AccessGate
from iam_service.auth.jwt import Clock, TokenIssuer, utcnow
from iam_service.db.identity_store import SqlIdentityStore
from iam_service.db.init_db import init_db
from iam_service.db.session import create_engine, create_sessionmaker
from iam_service.errors import IamError
from iam_service.observability.logging import configure_logging, get_logger
from iam_service.observability.middleware import RequestContextMiddleware
from iam_service.services.auth_service import AuthService
from iam_service.services.bootstrap import seed_identity_store
from iam_service.services.role_admin import RoleAdminService
from iam_service.services.user_admin import UserAdminService
from iam_service.settings import Settings

log = get_logger(__name__)


async def _iam_error_handler(request: Request, exc: IamError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("request_failed", code=exc.code, error=exc.message)
        message = "Internal server error"
    else:
        message = exc.message
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": {"code": exc.code, "message": message}},
        headers=headers,
    )


def create_app(*, settings: Settings, clock: Clock = utcnow) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    issuer = TokenIssuer.from_settings(settings, clock=clock)
    gate = AccessGate(issuer=issuer, admin_roles=settings.admin_roles)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        try:
            if settings.env in ("dev", "test"):
                # Dev/test convenience: create tables automatically. Prod uses Alembic.
                await init_db(engine)

            store = SqlIdentityStore(
                app.state.sessionmaker,
                password_hash_rounds=settings.password_hash_rounds,
            )
            await seed_identity_store(store, settings)

            app.state.auth_service = AuthService(store=store, issuer=issuer)
            app.state.user_admin = UserAdminService(store=store, gate=gate)
            app.state.role_admin = RoleAdminService(store=store, gate=gate)
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Identity and Access Management Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.gate = gate

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(IamError, _iam_error_handler)
    app.include_router(health_router, tags=["health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(roles_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business rules live in services and the gate.
