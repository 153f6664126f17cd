"""
iam_service.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and services.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam_service.services.auth_service import AuthService
from iam_service.services.role_admin import RoleAdminService
from iam_service.services.user_admin import UserAdminService


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created in the app lifespan (`iam_service.api.app`).
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


def auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service  # type: ignore[attr-defined]


def user_admin_service(request: Request) -> UserAdminService:
    return request.app.state.user_admin  # type: ignore[attr-defined]


def role_admin_service(request: Request) -> RoleAdminService:
    return request.app.state.role_admin  # type: ignore[attr-defined]


# --- Module Notes -----------------------------------------------------------
# Services are built once per process in the lifespan; they hold no per-request state.
