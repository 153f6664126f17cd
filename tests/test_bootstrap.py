"""
tests.test_bootstrap

Startup seeding of roles and the bootstrap admin.
"""

from __future__ import annotations

import pytest

from iam_service.db.identity_store import SqlIdentityStore
from iam_service.services.bootstrap import seed_identity_store
from iam_service.settings import Settings


@pytest.mark.asyncio
async def test_seeding_is_idempotent(sql_store: SqlIdentityStore, settings: Settings) -> None:
    await seed_identity_store(sql_store, settings)
    await seed_identity_store(sql_store, settings)

    assert sorted(r.name for r in await sql_store.list_roles()) == ["admin", "management", "user"]
    users = await sql_store.list_users()
    assert [u.username for u in users] == ["root"]
    admin = await sql_store.get_identity_by_username("root")
    assert admin is not None and admin.roles == ("admin", "management")
    assert await sql_store.verify_credentials("root", "root-password") is True


@pytest.mark.asyncio
async def test_no_admin_without_credentials(sql_store: SqlIdentityStore, settings: Settings) -> None:
    bare = settings.model_copy(update={"bootstrap_admin_password": None})

    await seed_identity_store(sql_store, bare)

    assert await sql_store.list_users() == []
    assert len(await sql_store.list_roles()) == 3
