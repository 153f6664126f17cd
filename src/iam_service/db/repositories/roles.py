"""
iam_service.db.repositories.roles

Repository for `Role` entities.

Responsibilities:
- Create, rename, delete and list roles (unique by name).
- Resolve role names to rows for membership assignment.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam_service.db.models import Role, UserRole
from iam_service.errors import BadRequest, Conflict


class RoleRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, role_id: str) -> Role | None:
        return await self._session.get(Role, role_id)

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(Role).where(Role.name == name)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[Role]:
        stmt = select(Role).order_by(Role.name)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(self, name: str) -> Role:
        if await self.get_by_name(name) is not None:
            raise Conflict(f"Role already exists: {name}")
        role = Role(name=name)
        self._session.add(role)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise Conflict(f"Role already exists: {name}") from e
        return role

    async def rename(self, role_id: str, name: str) -> int:
        clash = await self.get_by_name(name)
        if clash is not None and clash.id != role_id:
            raise Conflict(f"Role already exists: {name}")
        try:
            result = await self._session.execute(
                update(Role).where(Role.id == role_id).values(name=name)
            )
        except IntegrityError as e:
            raise Conflict(f"Role already exists: {name}") from e
        return result.rowcount or 0

    async def delete(self, role_id: str) -> int:
        # Memberships go with the role; identities simply stop listing it.
        await self._session.execute(delete(UserRole).where(UserRole.role_id == role_id))
        result = await self._session.execute(delete(Role).where(Role.id == role_id))
        return result.rowcount or 0

    async def resolve(self, names: Sequence[str]) -> list[Role]:
        """
        Return the roles for `names` in the given order.

        Raises BadRequest naming every unknown role.
        """

        if not names:
            return []
        stmt = select(Role).where(Role.name.in_(names))
        by_name = {role.name: role for role in (await self._session.execute(stmt)).scalars()}
        missing = [name for name in names if name not in by_name]
        if missing:
            raise BadRequest(f"Unknown role(s): {', '.join(missing)}")
        return [by_name[name] for name in names]


# --- Module Notes -----------------------------------------------------------
# Role names are matched exactly (case-sensitive), as they appear in token claims.
