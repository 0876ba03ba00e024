#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Convert endpoint — transcode a snippet of MediaWiki markup.

POST /api/v1/convert   {"content": "...", "templates": [...], "is_template": false}
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter

from mw2deki.schemas import ConvertRequest, ConvertResponse
from mw2deki.services.transcoder import TemplateCatalog, transform


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/convert", tags=["convert"])


# -----------------------------------------------------------------------------

@router.post("", response_model=ConvertResponse)
async def convert(data: ConvertRequest):
    """Return Deki markup plus the magic words no listed template resolves."""
    result = transform(data.content, TemplateCatalog(data.templates), is_template=data.is_template)
    return ConvertResponse(text=result.text, magic_words=result.magic_words)


# -----------------------------------------------------------------------------
