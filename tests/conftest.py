#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for mw2deki tests.
Uses an in-memory SQLite database standing in for the MediaWiki source.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mw2deki.core.database import Base, get_db
from mw2deki.main import create_app
from mw2deki.models import CategoryLink, CurPage


# -----------------------------------------------------------------------------

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


# -----------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session_factory(db_engine):
    """Shared sessionmaker — both client and db_session use this."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(db_session_factory):
    """Direct DB session for seeding source pages."""
    async with db_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(db_engine, db_session_factory):
    """HTTP test client wired to an isolated in-memory DB."""
    async def override_get_db():
        async with db_session_factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Helper functions for tests
# -----------------------------------------------------------------------------

SEED_PAGES = [
    # id, namespace, title, text
    (1, 0,  "Main_Page",    "Welcome -- see {{Template:Note}} and {{Missing}}\n== Usage ==\n[[Category:Docs]]"),
    (2, 10, "Note",         "'''Note:''' {{{1}}}"),
    (3, 1,  "Main_Page",    "Talk about [[Main Page]]"),
    (4, 4,  "About",        "[[Mono:About|About]]"),
    (5, 14, "Docs",         "Documentation pages"),
    (6, 8,  "Sidebar",      "* navigation"),
    (7, 0,  "Empty",        None),
]


async def seed_pages(session: AsyncSession) -> None:
    for page_id, ns, title, text in SEED_PAGES:
        session.add(CurPage(
            cur_id=page_id,
            cur_namespace=ns,
            cur_title=title,
            cur_text=text,
            cur_comment=b"imported",
            cur_user=42,
            cur_touched="20090304050607",
            cur_timestamp="20080102030405",
        ))
    session.add_all([
        CategoryLink(cl_from=1, cl_to="Mono", cl_sortkey="Main Page"),
        CategoryLink(cl_from=1, cl_to="Docs", cl_sortkey="Main Page"),
    ])
    await session.commit()


# -----------------------------------------------------------------------------
