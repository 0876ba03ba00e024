#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Source wiki access — read pages, templates and categories from the legacy
MediaWiki database.

The template catalog must be loaded before any page is converted: a template
discovered later cannot resolve magic words already reported as unresolved.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mw2deki.models import CategoryLink, CurPage
from .namespaces import IGNORED_NAMESPACES, DekiNamespace
from .pages import SourcePage
from .transcoder import TemplateCatalog


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _blob_to_str(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def to_source_page(row: CurPage) -> SourcePage:
    return SourcePage(
        id=row.cur_id,
        namespace=row.cur_namespace,
        title=row.cur_title or "",
        text=row.cur_text,
        comment=_blob_to_str(row.cur_comment),
        user=row.cur_user or 0,
        touched=row.cur_touched,
        timestamp=row.cur_timestamp,
    )


# -----------------------------------------------------------------------------
# Queries
# -----------------------------------------------------------------------------

async def load_template_catalog(db: AsyncSession) -> TemplateCatalog:
    result = await db.execute(
        select(CurPage.cur_title).where(CurPage.cur_namespace == DekiNamespace.TEMPLATE.value)
    )
    catalog = TemplateCatalog.from_titles(result.scalars().all())
    log.info("Loaded %d template(s)", len(catalog))
    return catalog


async def list_pages(
    db: AsyncSession,
    namespaces: Optional[list[int]] = None,
    skip: int = 0,
    limit: Optional[int] = None,
    include_ignored: bool = True,
) -> list[SourcePage]:
    stmt = select(CurPage).order_by(CurPage.cur_id).offset(skip)
    if namespaces:
        stmt = stmt.where(CurPage.cur_namespace.in_(namespaces))
    if not include_ignored:
        # Applied before offset/limit
        stmt = stmt.where(CurPage.cur_namespace.not_in([ns.value for ns in IGNORED_NAMESPACES]))
    if limit is not None:
        stmt = stmt.limit(limit)
    result = await db.execute(stmt)
    return [to_source_page(row) for row in result.scalars().all()]


async def get_page(db: AsyncSession, page_id: int) -> SourcePage:
    row = await db.get(CurPage, page_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"Page {page_id} not found")
    return to_source_page(row)


async def resolve_categories(db: AsyncSession, page_id: int) -> list[str]:
    """Sorted, distinct category names the page belongs to."""
    result = await db.execute(
        select(CategoryLink.cl_to).where(CategoryLink.cl_from == page_id).distinct()
    )
    return sorted(result.scalars().all())


# -----------------------------------------------------------------------------
