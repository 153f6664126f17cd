"""
iam_service.db.identity_store

SQL-backed Identity Store.

Responsibilities:
- Implement the `IdentityStore` contract on top of the user/role repositories.
- Own one session (and transaction) per contract call, so each call is atomic.
- Hash and verify passwords with bcrypt off the event loop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from iam_service.auth.passwords import hash_password, make_dummy_hash, verify_password
from iam_service.db.models import UserAccount
from iam_service.db.repositories.roles import RoleRepo
from iam_service.db.repositories.users import UserRepo
from iam_service.identity.models import Identity, RoleSummary, UserSummary


class SqlIdentityStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        password_hash_rounds: int = 12,
    ) -> None:
        self._session_factory = session_factory
        self._rounds = password_hash_rounds
        self._dummy_hash = make_dummy_hash(rounds=password_hash_rounds)

    # --- credentials --------------------------------------------------------

    async def verify_credentials(self, username: str, password: str) -> bool:
        async with self._session_factory.begin() as session:
            users = UserRepo(session)
            user = await users.get_by_username(username)
            if user is None:
                # Run bcrypt anyway so response time does not reveal unknown usernames.
                await asyncio.to_thread(verify_password, password, self._dummy_hash)
                return False
            if not await asyncio.to_thread(verify_password, password, user.password_hash):
                return False
            await users.record_login(user)
            return True

    # --- users --------------------------------------------------------------

    async def resolve_id(self, username: str) -> str | None:
        async with self._session_factory() as session:
            return await UserRepo(session).id_for_username(username)

    async def get_identity(self, user_id: str) -> Identity | None:
        async with self._session_factory() as session:
            users = UserRepo(session)
            user = await users.get(user_id)
            if user is None:
                return None
            return _identity(user, await users.role_names(user.id))

    async def get_identity_by_username(self, username: str) -> Identity | None:
        async with self._session_factory() as session:
            users = UserRepo(session)
            user = await users.get_by_username(username)
            if user is None:
                return None
            return _identity(user, await users.role_names(user.id))

    async def create_user(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        roles: Sequence[str],
    ) -> str:
        password_hash = await asyncio.to_thread(hash_password, password, rounds=self._rounds)
        async with self._session_factory.begin() as session:
            # Validate roles before inserting so an unknown role leaves nothing behind.
            resolved = await RoleRepo(session).resolve(roles)
            users = UserRepo(session)
            user = await users.create(
                username=username,
                full_name=full_name,
                email=email,
                password_hash=password_hash,
            )
            await users.replace_roles(user.id, resolved)
            return user.id

    async def delete_user(self, user_id: str) -> int:
        async with self._session_factory.begin() as session:
            return await UserRepo(session).delete(user_id)

    async def list_users(self) -> list[UserSummary]:
        async with self._session_factory() as session:
            return [
                UserSummary(id=u.id, username=u.username, full_name=u.full_name, email=u.email)
                for u in await UserRepo(session).list_all()
            ]

    async def list_identities(self) -> list[Identity]:
        async with self._session_factory() as session:
            users = UserRepo(session)
            roles_by_user = await users.role_names_by_user()
            return [_identity(u, roles_by_user.get(u.id, ())) for u in await users.list_all()]

    async def set_roles(self, username: str, roles: Sequence[str]) -> int:
        async with self._session_factory.begin() as session:
            users = UserRepo(session)
            user_id = await users.id_for_username(username)
            if user_id is None:
                return 0
            await users.replace_roles(user_id, await RoleRepo(session).resolve(roles))
            return 1

    async def update_profile(
        self,
        user_id: str,
        *,
        full_name: str,
        email: str,
        roles: Sequence[str],
    ) -> int:
        async with self._session_factory.begin() as session:
            resolved = await RoleRepo(session).resolve(roles)
            users = UserRepo(session)
            count = await users.update_profile(user_id, full_name=full_name, email=email)
            if count:
                await users.replace_roles(user_id, resolved)
            return count

    # --- roles --------------------------------------------------------------

    async def create_role(self, name: str) -> str:
        async with self._session_factory.begin() as session:
            return (await RoleRepo(session).create(name)).id

    async def list_roles(self) -> list[RoleSummary]:
        async with self._session_factory() as session:
            return [RoleSummary(id=r.id, name=r.name) for r in await RoleRepo(session).list_all()]

    async def get_role(self, role_id: str) -> RoleSummary | None:
        async with self._session_factory() as session:
            role = await RoleRepo(session).get(role_id)
            return None if role is None else RoleSummary(id=role.id, name=role.name)

    async def delete_role(self, role_id: str) -> int:
        async with self._session_factory.begin() as session:
            return await RoleRepo(session).delete(role_id)

    async def update_role(self, role_id: str, name: str) -> int:
        async with self._session_factory.begin() as session:
            return await RoleRepo(session).rename(role_id, name)


def _identity(user: UserAccount, roles: Sequence[str]) -> Identity:
    return Identity(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        email=user.email,
        roles=tuple(roles),
    )


# --- Module Notes -----------------------------------------------------------
# A cancelled request unwinds through `session_factory.begin()`, which rolls the
# transaction back; there is never a half-applied call to clean up.
