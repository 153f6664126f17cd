"""
iam_service.services.auth_service

Auth flow controller.

Responsibilities:
- Verify credentials against the Identity Store.
- Resolve the canonical identity and mint a token for it.
- Report failures as `InvalidCredentials` (client) or `IdentityNotFound` (server).
"""

from __future__ import annotations

from dataclasses import dataclass

from iam_service.auth.jwt import TokenIssuer
from iam_service.auth.models import Token
from iam_service.errors import IdentityNotFound, InvalidCredentials
from iam_service.identity.models import Credential, normalize_username
from iam_service.identity.store import IdentityStore
from iam_service.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AuthResult:
    user_id: str
    name: str
    token: Token


class AuthService:
    def __init__(self, *, store: IdentityStore, issuer: TokenIssuer) -> None:
        self._store = store
        self._issuer = issuer

    async def authenticate(self, credential: Credential) -> AuthResult:
        username = normalize_username(credential.username)
        if not await self._store.verify_credentials(username, credential.password):
            # Unverified usernames stay out of the log.
            log.info("login_failed")
            raise InvalidCredentials()

        user_id = await self._store.resolve_id(username)
        identity = await self._store.get_identity(user_id) if user_id is not None else None
        if identity is None:
            # Verified a moment ago; the record vanished or the store is inconsistent.
            log.error("identity_lookup_failed", username=username, user_id=user_id)
            raise IdentityNotFound()

        token = self._issuer.issue(identity.id, identity.username, identity.roles)
        log.info("login_succeeded", user_id=identity.id, roles=list(identity.roles))
        return AuthResult(user_id=identity.id, name=identity.full_name, token=token)


# --- Module Notes -----------------------------------------------------------
# The token's roles are whatever the store reported at lookup time; nothing here
# reads them again later.
