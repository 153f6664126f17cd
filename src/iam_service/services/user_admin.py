"""
iam_service.services.user_admin

User administration.

Responsibilities:
- Gate every operation on the administrative role set.
- Enforce request-level preconditions (target/payload id match) before the store call.
- Turn "zero rows affected" into `NotFound`.

Role assignment replaces the user's role set; it never merges.
"""

from __future__ import annotations

from collections.abc import Sequence

from iam_service.auth.gate import AccessGate
from iam_service.auth.passwords import ensure_password_fits
from iam_service.errors import BadRequest, NotFound
from iam_service.identity.models import (
    ProfileUpdate,
    UserDetails,
    UserSummary,
    normalize_roles,
    normalize_username,
)
from iam_service.identity.store import IdentityStore
from iam_service.observability.logging import get_logger

log = get_logger(__name__)


class UserAdminService:
    def __init__(self, *, store: IdentityStore, gate: AccessGate) -> None:
        self._store = store
        self._gate = gate

    async def create_user(
        self,
        token: str | None,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        roles: Sequence[str] = (),
    ) -> str:
        actor = self._gate.authorize_admin(token)
        username = normalize_username(username)
        if not username or not password:
            raise BadRequest("Username and password are required")
        ensure_password_fits(password)
        user_id = await self._store.create_user(
            username=username,
            password=password,
            email=email,
            full_name=full_name,
            roles=normalize_roles(roles),
        )
        log.info("user_created", actor=actor.subject, user_id=user_id, username=username)
        return user_id

    async def delete_user(self, token: str | None, user_id: str) -> int:
        actor = self._gate.authorize_admin(token)
        count = await self._store.delete_user(user_id)
        if count == 0:
            raise NotFound(f"User not found: {user_id}")
        log.info("user_deleted", actor=actor.subject, user_id=user_id)
        return count

    async def list_users(self, token: str | None) -> list[UserSummary]:
        self._gate.authorize_admin(token)
        return await self._store.list_users()

    async def list_user_details(self, token: str | None) -> list[UserDetails]:
        self._gate.authorize_admin(token)
        return await self._store.list_identities()

    async def get_user_details(self, token: str | None, user_id: str) -> UserDetails:
        self._gate.authorize_admin(token)
        identity = await self._store.get_identity(user_id)
        if identity is None:
            raise NotFound(f"User not found: {user_id}")
        return identity

    async def get_user_details_by_username(self, token: str | None, username: str) -> UserDetails:
        self._gate.authorize_admin(token)
        username = normalize_username(username)
        identity = await self._store.get_identity_by_username(username)
        if identity is None:
            raise NotFound(f"User not found: {username}")
        return identity

    async def assign_roles(self, token: str | None, username: str, roles: Sequence[str]) -> int:
        actor = self._gate.authorize_admin(token)
        username = normalize_username(username)
        normalized = normalize_roles(roles)
        count = await self._store.set_roles(username, normalized)
        if count == 0:
            raise NotFound(f"User not found: {username}")
        log.info("user_roles_set", actor=actor.subject, username=username, roles=list(normalized))
        return count

    async def edit_user_roles(self, token: str | None, username: str, roles: Sequence[str]) -> int:
        return await self.assign_roles(token, username, roles)

    async def edit_user_profile(
        self, token: str | None, user_id: str, payload: ProfileUpdate
    ) -> int:
        actor = self._gate.authorize_admin(token)
        if user_id != payload.id:
            raise BadRequest("User id in path does not match payload")
        count = await self._store.update_profile(
            user_id,
            full_name=payload.full_name,
            email=payload.email,
            roles=normalize_roles(payload.roles),
        )
        if count == 0:
            raise NotFound(f"User not found: {user_id}")
        log.info("user_profile_updated", actor=actor.subject, user_id=user_id)
        return count


# --- Module Notes -----------------------------------------------------------
# Already-issued tokens keep their role snapshot; changes here apply from the
# user's next login.
