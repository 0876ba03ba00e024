#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Read-only access to the source MediaWiki database.

The legacy ``cur`` / ``categorylinks`` tables belong to MediaWiki; nothing
here creates, migrates or writes them.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import get_settings


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

class Base(DeclarativeBase):
    """Declarative base for the legacy MediaWiki tables."""


# -----------------------------------------------------------------------------

_source_sessions: async_sessionmaker[AsyncSession] | None = None


def init_db(url: str | None = None) -> None:
    """Bind the session factory to the source wiki.  Called from the app lifespan."""
    global _source_sessions
    settings = get_settings()
    source_url = url or settings.database_url

    if source_url.startswith("sqlite"):
        pool_args: dict = {"connect_args": {"check_same_thread": False}}
    else:
        pool_args = {"pool_size": settings.db_pool_size, "max_overflow": settings.db_max_overflow}

    engine = create_async_engine(source_url, echo=settings.db_echo, **pool_args)
    _source_sessions = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    log.info("Source database: %s", engine.url.render_as_string(hide_password=True))


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, never committed."""
    if _source_sessions is None:
        init_db()
    async with _source_sessions() as session:
        try:
            yield session
        finally:
            await session.rollback()


# -----------------------------------------------------------------------------
