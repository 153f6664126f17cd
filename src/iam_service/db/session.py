"""
iam_service.db.session

Async SQLAlchemy engine + session factory helpers.

Responsibilities:
- Create the async engine from settings.
- Create the async sessionmaker with safe defaults.
"""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from iam_service.settings import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    # pool_pre_ping helps detect stale connections in long-lived processes.
    engine = create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False avoids surprising lazy loads after commits.
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        autoflush=False,
    )


# --- Module Notes -----------------------------------------------------------
# One engine per process, created in the app lifespan and disposed on shutdown.
