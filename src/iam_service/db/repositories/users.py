"""
iam_service.db.repositories.users

Repository for `UserAccount` entities and their role memberships.

Responsibilities:
- Create, look up, update and delete user rows (unique by username).
- Read and replace ordered role memberships.
- Stamp login and profile-update times.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam_service.db.models import Role, UserAccount, UserRole, utcnow_naive
from iam_service.errors import Conflict


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> UserAccount | None:
        return await self._session.get(UserAccount, user_id)

    async def get_by_username(self, username: str) -> UserAccount | None:
        stmt = select(UserAccount).where(UserAccount.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def id_for_username(self, username: str) -> str | None:
        stmt = select(UserAccount.id).where(UserAccount.username == username)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def list_all(self) -> list[UserAccount]:
        stmt = select(UserAccount).order_by(UserAccount.username)
        return list((await self._session.execute(stmt)).scalars().all())

    async def create(
        self,
        *,
        username: str,
        full_name: str,
        email: str,
        password_hash: str,
    ) -> UserAccount:
        if await self.id_for_username(username) is not None:
            raise Conflict(f"Username already exists: {username}")
        user = UserAccount(
            username=username,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
        )
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent insert of the same username.
            raise Conflict(f"Username already exists: {username}") from e
        return user

    async def delete(self, user_id: str) -> int:
        await self._session.execute(delete(UserRole).where(UserRole.user_id == user_id))
        result = await self._session.execute(delete(UserAccount).where(UserAccount.id == user_id))
        return result.rowcount or 0

    async def update_profile(self, user_id: str, *, full_name: str, email: str) -> int:
        stmt = (
            update(UserAccount)
            .where(UserAccount.id == user_id)
            .values(full_name=full_name, email=email, updated_at=utcnow_naive())
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def record_login(self, user: UserAccount) -> None:
        user.last_login_at = utcnow_naive()
        await self._session.flush()

    async def role_names(self, user_id: str) -> tuple[str, ...]:
        stmt = (
            select(Role.name)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(UserRole.position)
        )
        return tuple((await self._session.execute(stmt)).scalars().all())

    async def role_names_by_user(self) -> dict[str, tuple[str, ...]]:
        stmt = (
            select(UserRole.user_id, Role.name)
            .join(Role, UserRole.role_id == Role.id)
            .order_by(UserRole.user_id, UserRole.position)
        )
        grouped: dict[str, list[str]] = defaultdict(list)
        for user_id, name in (await self._session.execute(stmt)).all():
            grouped[user_id].append(name)
        return {user_id: tuple(names) for user_id, names in grouped.items()}

    async def replace_roles(self, user_id: str, roles: Sequence[Role]) -> None:
        # Replace, not merge: the new list becomes the complete membership.
        await self._session.execute(delete(UserRole).where(UserRole.user_id == user_id))
        self._session.add_all(
            UserRole(user_id=user_id, role_id=role.id, position=position)
            for position, role in enumerate(roles)
        )
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# Callers own the transaction; methods only flush.
