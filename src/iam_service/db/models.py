"""
iam_service.db.models

Persistence schema for identities and roles.

Responsibilities:
- Define ORM models:
  - UserAccount: login identity with bcrypt password hash
  - Role: admin-defined role, unique by name
  - UserRole: membership link, `position` keeps the assignment order
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from iam_service.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow_naive() -> datetime:
    # Persist naive UTC timestamps; SQLite has no tz-aware type.
    return datetime.now(UTC).replace(tzinfo=None)


class UserAccount(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    username: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    full_name: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    email: Mapped[str] = mapped_column(String(320), nullable=False, default="")
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow_naive)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow_naive, onupdate=utcnow_naive)
    last_login_at: Mapped[datetime | None] = mapped_column(nullable=True)


class Role(Base):
    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_user_roles_user_position", "user_id", "position"),
        Index("ix_user_roles_role", "role_id"),
    )


# --- Module Notes -----------------------------------------------------------
# No ORM relationships: memberships are read and replaced with explicit statements,
# which keeps every access explicit under AsyncSession (no lazy loads).
