#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
ORM mapping of the legacy MediaWiki tables
==========================================

Tables
------
cur             — current revision of every page (MediaWiki 1.4 schema)
categorylinks   — page → category membership

Only the columns the migration reads are mapped.  Timestamps are stored as
14-character ``YYYYMMDDHHMMSS`` strings, as MediaWiki does.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

from sqlalchemy import Integer, LargeBinary, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mw2deki.core.database import Base


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# cur
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class CurPage(Base):
    __tablename__ = "cur"

    cur_id:        Mapped[int]          = mapped_column(Integer, primary_key=True, autoincrement=True)
    cur_namespace: Mapped[int]          = mapped_column(Integer, nullable=False, default=0, index=True)
    cur_title:     Mapped[str]          = mapped_column(String(255), nullable=False, default="")
    cur_text:      Mapped[str | None]   = mapped_column(Text, nullable=True)
    # tinyblob in MySQL
    cur_comment:   Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True)
    cur_user:      Mapped[int]          = mapped_column(Integer, nullable=False, default=0)
    cur_touched:   Mapped[str]          = mapped_column(String(14), nullable=False, default="")
    cur_timestamp: Mapped[str]          = mapped_column(String(14), nullable=False, default="")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# categorylinks
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class CategoryLink(Base):
    __tablename__ = "categorylinks"

    cl_from:    Mapped[int] = mapped_column(Integer, primary_key=True)
    cl_to:      Mapped[str] = mapped_column(String(255), primary_key=True)
    cl_sortkey: Mapped[str] = mapped_column(String(255), nullable=False, default="")
