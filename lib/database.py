# =============================================================================
# lib/database.py - Relational Store for Contacts
# =============================================================================
# This module owns everything SQL:
# - ContactRow: the `contacts` table (SQLAlchemy declarative model)
# - Database: async engine + session factory, table creation, health ping
#
# The table's UNIQUE constraint on email is the source of truth for the
# uniqueness invariant; services check first only to produce a friendlier
# error than a raw constraint violation.
#
# Usage:
#   from lib.database import Database
#   database = Database("sqlite+aiosqlite:///./contacts.db")
#   await database.create_tables()
#   async with database.session() as session:
#       ...
# =============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import Column, DateTime, Integer, String, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import func

logger = logging.getLogger(__name__)

Base = declarative_base()

# Largest id a signed 64-bit INTEGER column can hold
MAX_CONTACT_ID = 2**63 - 1


class ContactRow(Base):
    """
    One stored contact.

    Column names match the JSON wire names (firstName, createdAt, ...);
    Python attributes are snake_case.
    """

    __tablename__ = "contacts"
    # AUTOINCREMENT keeps SQLite from handing out a deleted contact's id again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column("firstName", String, nullable=False)
    last_name = Column("lastName", String, nullable=False)
    address = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    phone = Column(String, nullable=False)
    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<ContactRow id={self.id} email={self.email!r}>"


def _engine_options(url: str) -> dict[str, Any]:
    """Extra create_async_engine kwargs for the given URL."""
    if url.startswith("sqlite") and (":memory:" in url or url.endswith("://")):
        # One shared connection, otherwise every checkout sees an empty database
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    if url.startswith("sqlite"):
        # Writers wait for each other's locks instead of failing with "database is locked"
        return {"connect_args": {"timeout": 30}}
    return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}


class Database:
    """
    Async engine and session factory for one database URL.

    The API creates one instance per application (in the lifespan handler)
    and hands out a fresh AsyncSession per request.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.engine = create_async_engine(url, echo=echo, **_engine_options(url))
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Create the contacts table if it doesn't exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database ready: {self.engine.url.render_as_string(hide_password=True)}")

    async def ping(self) -> None:
        """Run a trivial query; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that is always closed afterwards."""
        async with self.session_factory() as session:
            try:
                yield session
            finally:
                await session.close()
