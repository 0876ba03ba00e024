#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Page conversion
===============
Turns one raw MediaWiki page record into a migrated Deki page: namespace
mapping, title prefix, converted body, timestamps and unresolved magic words.

Categories are looked up separately (see ``source.resolve_categories``) and
attached by the caller.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .namespaces import DekiNamespace, is_ignored, title_prefix
from .transcoder import TemplateCatalog, transform


log = logging.getLogger(__name__)

MW_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


# -----------------------------------------------------------------------------
# Records
# -----------------------------------------------------------------------------

@dataclass
class SourcePage:
    id: int
    namespace: int
    title: str          # namespace-local title, underscores for spaces
    text: Optional[str]
    comment: str = ""
    user: int = 0
    touched: Optional[str] = None      # YYYYMMDDHHMMSS
    timestamp: Optional[str] = None    # YYYYMMDDHHMMSS


@dataclass
class MigratedPage:
    id: int
    namespace: int
    deki_namespace: DekiNamespace
    title: str
    text: str
    comment: str
    user: int
    last_modified: Optional[datetime]
    created: Optional[datetime]
    categories: list[str] = field(default_factory=list)
    magic_words: list[str] = field(default_factory=list)

    @property
    def ignore(self) -> bool:
        return is_ignored(self.deki_namespace)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def parse_mw_timestamp(value: str | bytes | None) -> Optional[datetime]:
    """Parse a MediaWiki ``YYYYMMDDHHMMSS`` timestamp as UTC."""
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="replace")
    if not value:
        return None
    try:
        parsed = datetime.strptime(value.strip(), MW_TIMESTAMP_FORMAT)
    except ValueError:
        log.debug("Unparseable timestamp %r", value)
        return None
    return parsed.replace(tzinfo=timezone.utc)


# -----------------------------------------------------------------------------
# Conversion
# -----------------------------------------------------------------------------

def convert_page(
    source: SourcePage,
    catalog: TemplateCatalog,
    project_prefix: str = "Project_Mono_",
    categories: list[str] | None = None,
) -> MigratedPage:
    deki_ns = DekiNamespace.from_number(source.namespace)
    result = transform(source.text, catalog, is_template=deki_ns is DekiNamespace.TEMPLATE)

    page = MigratedPage(
        id=source.id,
        namespace=source.namespace,
        deki_namespace=deki_ns,
        title=title_prefix(deki_ns, project_prefix) + source.title,
        text=result.text,
        comment=source.comment or "",
        user=source.user,
        last_modified=parse_mw_timestamp(source.touched),
        created=parse_mw_timestamp(source.timestamp),
        categories=sorted(categories or []),
        magic_words=result.magic_words,
    )
    if page.magic_words:
        log.info("Page %r has %d unresolved magic word(s)", page.title, len(page.magic_words))
    return page


# -----------------------------------------------------------------------------
