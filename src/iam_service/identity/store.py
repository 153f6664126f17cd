"""
iam_service.identity.store

Identity Store contract.

Responsibilities:
- Describe every persistence operation the auth flow and administration need.
- Fix the return conventions (None for "absent", affected counts for mutations).

Implementations own their concurrency control (unique usernames, role names) and
raise `Conflict` / `BadRequest` from `iam_service.errors` themselves. Each call is
atomic from the caller's point of view.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from iam_service.identity.models import Identity, RoleSummary, UserSummary


class IdentityStore(Protocol):
    async def verify_credentials(self, username: str, password: str) -> bool: ...

    async def resolve_id(self, username: str) -> str | None: ...

    async def get_identity(self, user_id: str) -> Identity | None: ...

    async def get_identity_by_username(self, username: str) -> Identity | None: ...

    async def create_user(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
        roles: Sequence[str],
    ) -> str: ...

    async def delete_user(self, user_id: str) -> int: ...

    async def list_users(self) -> list[UserSummary]: ...

    async def list_identities(self) -> list[Identity]: ...

    async def set_roles(self, username: str, roles: Sequence[str]) -> int: ...

    async def update_profile(
        self,
        user_id: str,
        *,
        full_name: str,
        email: str,
        roles: Sequence[str],
    ) -> int: ...

    async def create_role(self, name: str) -> str: ...

    async def list_roles(self) -> list[RoleSummary]: ...

    async def get_role(self, role_id: str) -> RoleSummary | None: ...

    async def delete_role(self, role_id: str) -> int: ...

    async def update_role(self, role_id: str, name: str) -> int: ...


# --- Module Notes -----------------------------------------------------------
# `list_users` / `list_identities` are unpaginated; callers get the full table.
