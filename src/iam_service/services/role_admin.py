"""
iam_service.services.role_admin

Role administration.

Responsibilities:
- Gate every operation on the administrative role set.
- Normalize role names before they reach the store.
- Turn "zero rows affected" into `NotFound`.
"""

from __future__ import annotations

from iam_service.auth.gate import AccessGate
from iam_service.errors import BadRequest, NotFound
from iam_service.identity.models import RoleSummary, RoleUpdate, normalize_roles
from iam_service.identity.store import IdentityStore
from iam_service.observability.logging import get_logger

log = get_logger(__name__)


def _role_name(name: str) -> str:
    (normalized,) = normalize_roles([name])
    return normalized


class RoleAdminService:
    def __init__(self, *, store: IdentityStore, gate: AccessGate) -> None:
        self._store = store
        self._gate = gate

    async def create_role(self, token: str | None, name: str) -> str:
        actor = self._gate.authorize_admin(token)
        role_id = await self._store.create_role(_role_name(name))
        log.info("role_created", actor=actor.subject, role_id=role_id)
        return role_id

    async def get_roles(self, token: str | None) -> list[RoleSummary]:
        self._gate.authorize_admin(token)
        return await self._store.list_roles()

    async def get_role_by_id(self, token: str | None, role_id: str) -> RoleSummary:
        self._gate.authorize_admin(token)
        role = await self._store.get_role(role_id)
        if role is None:
            raise NotFound(f"Role not found: {role_id}")
        return role

    async def delete_role(self, token: str | None, role_id: str) -> int:
        actor = self._gate.authorize_admin(token)
        count = await self._store.delete_role(role_id)
        if count == 0:
            raise NotFound(f"Role not found: {role_id}")
        log.info("role_deleted", actor=actor.subject, role_id=role_id)
        return count

    async def edit_role(self, token: str | None, role_id: str, payload: RoleUpdate) -> int:
        actor = self._gate.authorize_admin(token)
        if role_id != payload.id:
            raise BadRequest("Role id in path does not match payload")
        count = await self._store.update_role(role_id, _role_name(payload.name))
        if count == 0:
            raise NotFound(f"Role not found: {role_id}")
        log.info("role_renamed", actor=actor.subject, role_id=role_id)
        return count


# --- Module Notes -----------------------------------------------------------
# Renaming a role changes what future tokens carry; issued tokens keep the old name.
