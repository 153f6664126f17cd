"""
iam_service.services.bootstrap

Startup seeding.

Responsibilities:
- Make sure the configured bootstrap roles exist.
- Create the bootstrap admin account once, when credentials are configured.

Runs against the store directly: there is no caller token at process start.
"""

from __future__ import annotations

from iam_service.errors import Conflict
from iam_service.identity.models import normalize_roles
from iam_service.identity.store import IdentityStore
from iam_service.observability.logging import get_logger
from iam_service.settings import Settings

log = get_logger(__name__)


async def seed_identity_store(store: IdentityStore, settings: Settings) -> None:
    existing = {role.name for role in await store.list_roles()}
    wanted = normalize_roles([*settings.bootstrap_roles, *settings.admin_roles])
    for name in wanted:
        if name in existing:
            continue
        try:
            await store.create_role(name)
            log.info("bootstrap_role_created", role=name)
        except Conflict:
            # Another worker seeded it first.
            log.info("bootstrap_role_exists", role=name)

    username = settings.bootstrap_admin_username
    password = settings.bootstrap_admin_password
    if not username or not password:
        return
    if await store.resolve_id(username) is not None:
        return
    try:
        user_id = await store.create_user(
            username=username,
            password=password,
            email="",
            full_name=username,
            roles=normalize_roles(settings.admin_roles),
        )
    except Conflict:
        return
    log.info("bootstrap_admin_created", user_id=user_id, username=username)


# --- Module Notes -----------------------------------------------------------
# Idempotent: safe to run on every startup and from several workers at once.
