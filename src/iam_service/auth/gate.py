"""
iam_service.auth.gate

Access Control Gate.

Responsibilities:
- Turn a bearer token string into a verified `Principal`.
- Allow the call only when the principal holds at least one required role.

An empty required-role set means "any authenticated caller".
"""

from __future__ import annotations

from collections.abc import Iterable

from iam_service.auth.jwt import TokenIssuer
from iam_service.auth.models import Principal
from iam_service.errors import Forbidden, Unauthenticated
from iam_service.observability.logging import get_logger

log = get_logger(__name__)

AUTHENTICATED_ONLY: frozenset[str] = frozenset()


class AccessGate:
    def __init__(self, *, issuer: TokenIssuer, admin_roles: Iterable[str]) -> None:
        self._issuer = issuer
        self._admin_roles = frozenset(admin_roles)
        if not self._admin_roles:
            raise ValueError("admin role set must not be empty")

    @property
    def admin_roles(self) -> frozenset[str]:
        return self._admin_roles

    def authenticate(self, token: str | None) -> Principal:
        if not token:
            raise Unauthenticated("Missing bearer token")
        return Principal.from_claims(self._issuer.verify(token))

    def authorize(self, token: str | None, required_roles: Iterable[str]) -> Principal:
        principal = self.authenticate(token)
        required = frozenset(required_roles)
        if required and not principal.has_any_role(required):
            log.info(
                "access_denied",
                subject=principal.subject,
                required_roles=sorted(required),
            )
            raise Forbidden()
        return principal

    def authorize_admin(self, token: str | None) -> Principal:
        return self.authorize(token, self._admin_roles)


# --- Module Notes -----------------------------------------------------------
# The gate is the only component that decodes tokens; routers pass the raw
# bearer string through untouched.
