"""
iam_service.identity.models

Identity domain models.

Responsibilities:
- Define the value types read from and written to the Identity Store.
- Normalize usernames and role-name collections before they reach the store.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from iam_service.errors import BadRequest

MAX_ROLE_NAME_LENGTH = 64


@dataclass(frozen=True, slots=True)
class Credential:
    """
    Login input. Transient: never persisted, never logged.
    """

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class Identity:
    id: str
    username: str
    full_name: str
    email: str
    roles: tuple[str, ...] = ()


# Administration reads return the full identity record.
UserDetails = Identity


@dataclass(frozen=True, slots=True)
class UserSummary:
    id: str
    username: str
    full_name: str
    email: str


@dataclass(frozen=True, slots=True)
class RoleSummary:
    id: str
    name: str


@dataclass(frozen=True, slots=True)
class ProfileUpdate:
    # `id` must match the target id the caller addressed.
    id: str
    full_name: str
    email: str
    roles: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class RoleUpdate:
    id: str
    name: str


def normalize_username(username: str) -> str:
    # Usernames are stored stripped; every lookup must strip the same way.
    return username.strip()


def normalize_roles(roles: Iterable[str]) -> tuple[str, ...]:
    """
    Strip whitespace and drop duplicates while keeping first-seen order.

    Raises BadRequest for blank or oversized names.
    """

    seen: dict[str, None] = {}
    for raw in roles:
        name = str(raw).strip()
        if not name or len(name) > MAX_ROLE_NAME_LENGTH:
            raise BadRequest(f"Invalid role name: {raw!r}")
        seen.setdefault(name, None)
    return tuple(seen)


# --- Module Notes -----------------------------------------------------------
# Role names are free-form but admin-defined: stores validate them against the
# role table on assignment.
