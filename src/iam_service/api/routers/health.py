"""
iam_service.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Liveness probe (`/healthz`), no dependencies touched.
- Readiness probe (`/readyz`): the identity tables must be reachable.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from iam_service import __version__
from iam_service.api.deps import db_session
from iam_service.db.models import Role

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str | int]:
    # Counting roles proves both connectivity and that the schema exists.
    roles = (await session.execute(select(func.count()).select_from(Role))).scalar_one()
    return {"status": "ready", "roles": roles}


# --- Module Notes -----------------------------------------------------------
# `/readyz` touches the database; `/healthz` never does.
