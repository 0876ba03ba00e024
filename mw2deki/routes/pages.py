#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pages router
============
GET    /api/v1/pages          — list converted pages from the source wiki
GET    /api/v1/pages/{id}     — one converted page, with categories
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from mw2deki.core.config import get_settings
from mw2deki.core.database import get_db
from mw2deki.schemas import PageResponse, PageSummary
from mw2deki.services import source as source_svc
from mw2deki.services.pages import MigratedPage, convert_page


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/pages", tags=["pages"])


# -----------------------------------------------------------------------------

def _summary(page: MigratedPage) -> PageSummary:
    return PageSummary(
        id=page.id,
        namespace=page.namespace,
        deki_namespace=page.deki_namespace.label,
        title=page.title,
        ignore=page.ignore,
        magic_words=page.magic_words,
    )


# ── List ─────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[PageSummary])
async def list_pages(
    namespace:       Optional[list[int]] = Query(None),
    skip:            int                 = Query(0, ge=0),
    limit:           int                 = Query(100, ge=1, le=500),
    include_ignored: bool                = Query(False),
    db: AsyncSession                     = Depends(get_db),
):
    settings = get_settings()
    catalog = await source_svc.load_template_catalog(db)
    pages = await source_svc.list_pages(
        db, namespaces=namespace, skip=skip, limit=limit, include_ignored=include_ignored,
    )
    return [_summary(convert_page(p, catalog, settings.project_title_prefix)) for p in pages]


# ── Read ──────────────────────────────────────────────────────────────────────

@router.get("/{page_id}", response_model=PageResponse)
async def get_page(page_id: int, db: AsyncSession = Depends(get_db)):
    settings = get_settings()
    source = await source_svc.get_page(db, page_id)
    catalog = await source_svc.load_template_catalog(db)
    categories = await source_svc.resolve_categories(db, page_id)
    page = convert_page(source, catalog, settings.project_title_prefix, categories=categories)
    return PageResponse(
        **_summary(page).model_dump(),
        text=page.text,
        comment=page.comment,
        user=page.user,
        last_modified=page.last_modified,
        created=page.created,
        categories=page.categories,
    )


# -----------------------------------------------------------------------------
