#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
MediaWiki XML export reader.

Produces the same ``SourcePage`` records as the database reader so a dump
file can be migrated without access to the original MySQL server.  Any
export schema version is accepted; element names are matched without their
XML namespace.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Optional

from .namespaces import DekiNamespace
from .pages import MW_TIMESTAMP_FORMAT, SourcePage
from .transcoder import TemplateCatalog


log = logging.getLogger(__name__)


# ── XML helpers ───────────────────────────────────────────────────────────────

def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(elem: ET.Element, name: str) -> Optional[ET.Element]:
    for c in elem:
        if _local(c.tag) == name:
            return c
    return None


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [c for c in elem if _local(c.tag) == name]


def _text(elem: Optional[ET.Element]) -> str:
    return (elem.text or "") if elem is not None else ""


def _mw_timestamp(iso: str) -> Optional[str]:
    """``2008-01-01T12:00:00Z`` → ``20080101120000``."""
    if not iso:
        return None
    try:
        parsed = datetime.fromisoformat(iso.strip().replace("Z", "+00:00"))
    except ValueError:
        log.debug("Unparseable revision timestamp %r", iso)
        return None
    return parsed.strftime(MW_TIMESTAMP_FORMAT)


# ── Parsing ───────────────────────────────────────────────────────────────────

def iter_export(xml_path: Path) -> Iterator[SourcePage]:
    """Stream pages with their latest revision from a MediaWiki XML export."""
    # iterparse keeps memory flat on large dumps
    for _event, elem in ET.iterparse(str(xml_path), events=("end",)):
        if _local(elem.tag) != "page":
            continue

        title_el = _child(elem, "title")
        ns_el    = _child(elem, "ns")
        revisions = _children(elem, "revision")
        if title_el is None or not revisions:
            elem.clear()
            continue

        full_title = _text(title_el).strip()
        mw_ns = int(_text(ns_el) or "0")

        # "Help:Foo bar" -> "Foo_bar"
        local_title = full_title
        if ":" in full_title and mw_ns != DekiNamespace.MAIN:
            local_title = full_title.split(":", 1)[1].strip()
        local_title = local_title.replace(" ", "_")

        rev = revisions[-1]
        contrib_el = _child(rev, "contributor")
        user_id = _text(_child(contrib_el, "id")) if contrib_el is not None else ""
        timestamp = _mw_timestamp(_text(_child(rev, "timestamp")))
        text_el = _child(rev, "text")

        yield SourcePage(
            id=int(_text(_child(elem, "id")) or "0"),
            namespace=mw_ns,
            title=local_title,
            text=text_el.text if text_el is not None else None,
            comment=_text(_child(rev, "comment")),
            user=int(user_id) if user_id.isdigit() else 0,
            touched=timestamp,
            timestamp=timestamp,
        )
        elem.clear()


def parse_export(xml_path: Path) -> list[SourcePage]:
    return list(iter_export(xml_path))


def build_template_catalog(pages: Iterable[SourcePage]) -> TemplateCatalog:
    return TemplateCatalog.from_titles(
        p.title for p in pages if p.namespace == DekiNamespace.TEMPLATE
    )


# -----------------------------------------------------------------------------
