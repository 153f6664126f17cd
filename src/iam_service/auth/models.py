"""
iam_service.auth.models

Auth domain models.

Responsibilities:
- Define the decoded token claims (`TokenClaims`) and the encoded `Token`.
- Define the authenticated identity type (`Principal`) handed to operations.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TokenClaims:
    subject: str
    username: str
    roles: tuple[str, ...]
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class Token:
    """
    A signed credential and the claims it asserts.

    `value` is the compact JWT; the signature lives inside it.
    """

    value: str
    claims: TokenClaims


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, as asserted by a verified token.
    """

    subject: str
    username: str
    roles: tuple[str, ...]

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> Principal:
        return cls(subject=claims.subject, username=claims.username, roles=claims.roles)

    def has_any_role(self, required: Iterable[str]) -> bool:
        return not set(self.roles).isdisjoint(required)


# --- Module Notes -----------------------------------------------------------
# Roles on a Principal are a snapshot taken at issuance; they are never refreshed
# from the store.
