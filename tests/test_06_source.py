#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for reading the legacy MediaWiki tables."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest
from fastapi import HTTPException
from sqlalchemy import text

from mw2deki.core import database
from mw2deki.services import source as source_svc
from tests.conftest import seed_pages


# -----------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_load_template_catalog(db_session):
    await seed_pages(db_session)
    catalog = await source_svc.load_template_catalog(db_session)
    assert list(catalog) == ["Template:Note"]


@pytest.mark.asyncio
async def test_load_template_catalog_empty_db(db_session):
    catalog = await source_svc.load_template_catalog(db_session)
    assert len(catalog) == 0


@pytest.mark.asyncio
async def test_list_pages_ordered_by_id(db_session):
    await seed_pages(db_session)
    pages = await source_svc.list_pages(db_session)
    assert [p.id for p in pages] == [1, 2, 3, 4, 5, 6, 7]


@pytest.mark.asyncio
async def test_list_pages_namespace_filter(db_session):
    await seed_pages(db_session)
    pages = await source_svc.list_pages(db_session, namespaces=[1, 4])
    assert [(p.id, p.namespace) for p in pages] == [(3, 1), (4, 4)]


@pytest.mark.asyncio
async def test_list_pages_skip_and_limit(db_session):
    await seed_pages(db_session)
    pages = await source_svc.list_pages(db_session, skip=2, limit=2)
    assert [p.id for p in pages] == [3, 4]


@pytest.mark.asyncio
async def test_list_pages_without_ignored(db_session):
    await seed_pages(db_session)
    pages = await source_svc.list_pages(db_session, limit=5, include_ignored=False)
    assert [p.id for p in pages] == [1, 2, 3, 4, 7]


@pytest.mark.asyncio
async def test_get_page_decodes_comment(db_session):
    await seed_pages(db_session)
    page = await source_svc.get_page(db_session, 1)
    assert page.title == "Main_Page"
    assert page.comment == "imported"
    assert page.user == 42
    assert page.timestamp == "20080102030405"


@pytest.mark.asyncio
async def test_get_missing_page_raises_404(db_session):
    with pytest.raises(HTTPException) as info:
        await source_svc.get_page(db_session, 999)
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_resolve_categories_sorted(db_session):
    await seed_pages(db_session)
    assert await source_svc.resolve_categories(db_session, 1) == ["Docs", "Mono"]
    assert await source_svc.resolve_categories(db_session, 2) == []


@pytest.mark.asyncio
async def test_get_db_yields_source_session():
    database.init_db("sqlite+aiosqlite:///:memory:")
    sessions = database.get_db()
    session = await anext(sessions)
    assert (await session.execute(text("SELECT 1"))).scalar_one() == 1
    await sessions.aclose()


# -----------------------------------------------------------------------------
