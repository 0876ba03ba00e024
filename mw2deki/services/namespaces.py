#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Namespace mapping — MediaWiki namespace numbers to Deki namespaces.

The numbers are shared between the two wikis for 0-15; anything else maps to
``DekiNamespace.INVALID``.  Pages in some namespaces get a title prefix on the
Deki side because Deki keeps them in the main tree.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import IntEnum


# -----------------------------------------------------------------------------

class DekiNamespace(IntEnum):
    INVALID        = -1
    MAIN           = 0
    TALK           = 1
    USER           = 2
    USER_TALK      = 3
    PROJECT        = 4
    PROJECT_TALK   = 5
    IMAGE          = 6
    IMAGE_TALK     = 7
    MEDIAWIKI      = 8
    MEDIAWIKI_TALK = 9
    TEMPLATE       = 10
    TEMPLATE_TALK  = 11
    HELP           = 12
    HELP_TALK      = 13
    CATEGORY       = 14
    CATEGORY_TALK  = 15

    @classmethod
    def from_number(cls, number: int | None) -> "DekiNamespace":
        if number is None or not cls.MAIN <= number <= cls.CATEGORY_TALK:
            return cls.INVALID
        return cls(number)

    @property
    def label(self) -> str:
        """MediaWiki-style name, e.g. ``User_talk``."""
        return self.name.capitalize()


# -----------------------------------------------------------------------------

_PREFIXED = {
    DekiNamespace.TALK,
    DekiNamespace.USER,
    DekiNamespace.USER_TALK,
    DekiNamespace.HELP,
}

# Configuration / taxonomy pages that have no Deki counterpart
IGNORED_NAMESPACES = frozenset({
    DekiNamespace.MEDIAWIKI,
    DekiNamespace.MEDIAWIKI_TALK,
    DekiNamespace.CATEGORY,
    DekiNamespace.CATEGORY_TALK,
})


# -----------------------------------------------------------------------------

def title_prefix(ns: DekiNamespace, project_prefix: str = "Project_Mono_") -> str:
    if ns in _PREFIXED:
        return ns.label + "_"
    if ns is DekiNamespace.PROJECT:
        return project_prefix
    return ""


def is_ignored(ns: DekiNamespace) -> bool:
    return ns in IGNORED_NAMESPACES


# -----------------------------------------------------------------------------
