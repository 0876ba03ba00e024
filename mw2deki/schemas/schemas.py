#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 schemas for request validation and response serialisation.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Conversion
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConvertRequest(BaseModel):
    content: Optional[str] = Field(default="", max_length=10_000_000)
    templates: list[str] = Field(default_factory=list)
    is_template: bool = False

    @field_validator("templates")
    @classmethod
    def strip_blank(cls, v: list[str]) -> list[str]:
        return [t for t in v if t.strip()]


# -----------------------------------------------------------------------------

class ConvertResponse(BaseModel):
    text: str
    magic_words: list[str]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class PageSummary(BaseModel):
    id: int
    namespace: int
    deki_namespace: str
    title: str
    ignore: bool
    magic_words: list[str]


# -----------------------------------------------------------------------------

class PageResponse(PageSummary):
    text: str
    comment: str
    user: int
    last_modified: Optional[datetime]
    created: Optional[datetime]
    categories: list[str]
