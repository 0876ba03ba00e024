#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Markup transcoder
=================
Rewrites MediaWiki page bodies into Deki (MindTouch) markup.

The conversion is a fixed sequence of passes over the page text; each pass
consumes the previous pass's output:

  1. category links stripped
  2. ``--`` escaped as ``<nowiki>--</nowiki>``
  3. TOC placeholder inserted / relocated (``__TOC__`` / ``__NOTOC__``)
  4. static phrase replacements (cross-namespace link prefixes, #REDIRECT)
  5. links: ``[[target|text]]`` / ``[target text]`` → ``[target|text]``
  6. pipe tables: heading rows after the first become plain cell rows
  7. headings promoted by one level
  8. ``<csharp>`` / ``<bash>`` / ``<xml>`` → ``@@`` fenced blocks
  9. ``{{magic words}}`` resolved against the known templates

Passes that rewrite matches walk the text with a cursor, copying unmatched
spans verbatim and appending the rewritten spans, so replaced text is never
scanned again.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field


log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Patterns
# -----------------------------------------------------------------------------

_CATEGORY_LINK_RE = re.compile(r"(\[\[Category:.+?\]\])|(\[Category:.+?\])", re.IGNORECASE | re.DOTALL)
_DASHES_RE        = re.compile(r"-{2}")
_LINK_RE          = re.compile(r"(\[\[.+?\]\])|(\[.+?\])")
_URL_RE           = re.compile(r"\w.+://")
_TABLE_RE         = re.compile(r"\{\|( [^\n]*)?\n.+?\|\}", re.DOTALL)
_HEADING_RE       = re.compile(r"^={1,4}.+?={1,4}\n?", re.MULTILINE)
_MAGIC_WORD_RE    = re.compile(r"\{\{.+?\}\}", re.DOTALL)
_NOTOC_RE         = re.compile(r"__NOTOC__", re.IGNORECASE)

TOC_MARKER      = "__TOC__"
TOC_PLACEHOLDER = "{TOC}"
TEMPLATE_PREFIX = "Template:"

# Link bodies that are left alone entirely
_EMPTY_LINKS = frozenset({"[]", "[[]]", "[[]"})


# -----------------------------------------------------------------------------
# Replacement tables
# -----------------------------------------------------------------------------
#
# Applied in order.  A key that is a prefix of another key must come after it,
# otherwise the longer form is never seen.

PHRASE_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("[Mono:About", "[About_Mono"),
    ("[Mono:Runtime:Documentation:ThreadSafety", "[Project_Mono_Runtime_Documentation_ThreadSafety"),
    ("[Mono:Runtime:Documentation:MemoryManagement", "[Project_Mono_Runtime_Documentation_MemoryMangement"),
    ("[Mono:Runtime:Documentation:GenericSharing", "[Project_Mono_Runtime_Documentation_GenericSharing"),
    ("[Mono:Runtime:Documentation:Generics", "[Project_Mono_Runtime_Documentation_Generics"),
    ("[Mono:Runtime:Documentation:RegisterAllocation", "[Project_Mono_Runtime_Documentation_RegisterAllocation"),
    ("[Mono:Runtime:Documentation:SoftDebugger", "[Project_Mono_Runtime_Documentation_SoftDebugger"),
    ("[Mono:Runtime:Documentation:mono-llvm.diff", "[Project_Mono_Runtime_Documentation_mono-llvm.diff"),
    ("[Mono:Runtime:Documentation:LLVM", "[Project_Mono_Runtime_Documentation_LLVM"),
    ("[Mono:Runtime:Documentation:XDEBUG", "[Project_Mono_Runtime_Documentation_XDEBUG"),
    ("[Mono:Runtime:Documentation:MiniPorting", "[Project_Mono_Runtime_Documentation_MiniPorting"),
    ("[Mono:Runtime:Documentation:AOT", "[Project_Mono_Runtime_Documentation_AOT"),
    ("[Mono:Runtime:Documentation:Trampolines", "[Project_Mono_Runtime_Documentation_Trampolines"),
    ("[Mono:Runtime:Documentation", "[Project_Mono_Runtime_Documentation"),
    ("[Mono:", "[Project_Mono_"),   # pages in the Project namespace (4)
    ("[Talk:", "[Talk_"),
    ("[User:", "[User_"),
    ("[Help:", "[Help_"),
    ("[Mono_Runtime", "[Runtime"),
    ("#REDIRECT", ">>>"),
)

CODE_BLOCK_MARKERS: tuple[tuple[str, str], ...] = (
    ("<csharp>", "\n@@ csharp\n"),
    ("</csharp>", "\n@@\n"),
    ("<bash>", "\n@@ bash\n"),
    ("</bash>", "\n@@\n"),
    ("<xml>", "\n@@ xml\n"),
    ("</xml>", "\n@@\n"),
)


# -----------------------------------------------------------------------------
# Template catalog / result
# -----------------------------------------------------------------------------

def normalize_name(name: str) -> str:
    """Normalize a template or magic-word name: trimmed, spaces as underscores."""
    return name.strip().replace(" ", "_")


class TemplateCatalog:
    """Read-only set of known template names in ``Namespace:Name`` form.

    Matching is exact and case-sensitive.  ``knows()`` also accepts a
    ``Template:``-qualified name whose bare form is listed.
    """

    def __init__(self, names: Iterable[str] = ()):
        self._names = frozenset(names)

    @classmethod
    def from_titles(cls, titles: Iterable[str]) -> "TemplateCatalog":
        """Build a catalog from the titles of pages in the Template namespace."""
        return cls(TEMPLATE_PREFIX + normalize_name(t) for t in titles)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"TemplateCatalog({len(self._names)} names)"

    def knows(self, name: str) -> bool:
        if name in self._names:
            return True
        return _has_template_prefix(name) and name[len(TEMPLATE_PREFIX):] in self._names


def _has_template_prefix(name: str) -> bool:
    return name[:len(TEMPLATE_PREFIX)].lower() == TEMPLATE_PREFIX.lower()


@dataclass(frozen=True)
class TransformResult:
    text: str
    magic_words: list[str] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _sub_forward(pattern: re.Pattern, text: str, rewrite: Callable[[re.Match], str | None]) -> str:
    """Walk *pattern* matches left to right, splicing in ``rewrite(match)``.

    ``rewrite`` returns the replacement, or None to keep the match unchanged.
    """
    out: list[str] = []
    cursor = 0
    for m in pattern.finditer(text):
        replacement = rewrite(m)
        if replacement is None:
            continue
        out.append(text[cursor:m.start()])
        out.append(replacement)
        cursor = m.end()
    if not out:
        return text
    out.append(text[cursor:])
    return "".join(out)


def _sanitize_target(target: str) -> str:
    return target.strip().replace(":", "_").replace("&", "_").replace(" ", "_")


# -----------------------------------------------------------------------------
# Passes
# -----------------------------------------------------------------------------

def strip_category_links(text: str) -> str:
    return _CATEGORY_LINK_RE.sub("", text)


def escape_dashes(text: str) -> str:
    """Wrap every ``--`` in nowiki so Deki does not turn it into a dash."""
    return _DASHES_RE.sub("<nowiki>--</nowiki>", text)


def normalize_toc(text: str, is_template: bool = False) -> str:
    """Place the Deki ``{TOC}`` placeholder.

    Template pages never get one.  ``__NOTOC__`` (any case) is removed and
    suppresses the placeholder; otherwise a page with headings gets
    ``{TOC}`` in place of ``__TOC__``, or at the top when there is no marker.
    """
    if is_template:
        return text
    if _NOTOC_RE.search(text):
        return _NOTOC_RE.sub("", text)
    if not _HEADING_RE.search(text):
        return text
    if TOC_MARKER in text:
        return text.replace(TOC_MARKER, TOC_PLACEHOLDER)
    return TOC_PLACEHOLDER + "\n" + text


def apply_replacements(text: str, table: Iterable[tuple[str, str]]) -> str:
    for old, new in table:
        text = text.replace(old, new)
    return text


def _rewrite_link(m: re.Match) -> str | None:
    value = m.group(0)
    if value in _EMPTY_LINKS:
        return None

    if m.group(1) is not None:
        body = value[2:-2].strip()
    else:
        body = value[1:-1].strip()

    if "|" in body:
        fields = body.split("|")
        fields[0] = _sanitize_target(fields[0])
        return "[" + "|".join(fields) + "]"

    if " " in body:
        # [url://host label] keeps its scheme, [Some:Page label] is sanitized
        target, _, label = body.partition(" ")
        if not _URL_RE.search(target):
            target = _sanitize_target(target)
        return f"[{target}|{label}]"

    if ":" in body or "&" in body:
        return "[" + _sanitize_target(body) + "]"
    return None


def rewrite_links(text: str) -> str:
    """Rewrite ``[[...]]`` / ``[...]`` links to Deki's ``[target|text]`` form."""
    return _sub_forward(_LINK_RE, text, _rewrite_link)


def translate_table(table: str) -> str:
    """Rewrite one ``{| ... |}`` block.

    Deki only accepts ``!`` heading cells on the first row after the table
    opening (and caption); later ``!`` rows become ordinary ``|`` rows.  A
    row ending in ``||`` needs content in its last cell, so it gets
    ``&nbsp;``.
    """
    lines = [line for line in table.split("\n") if line]
    if len(lines) < 3:
        return table

    out = [lines[0]]
    start = 1
    if lines[1].strip().startswith("|+"):
        # Caption
        out.append(lines[1])
        start += 1

    for i in range(start, len(lines) - 1):
        line = lines[i]
        trimmed = line.strip()
        if trimmed.startswith("!") and i != start:
            idx = line.index("!")
            line = line[:idx] + "|" + line[idx + 1:]
        if trimmed.endswith("||"):
            line += " &nbsp;"
        out.append(line)

    out.append(lines[-1])
    return "\n".join(out)


def rewrite_tables(text: str) -> str:
    return _sub_forward(_TABLE_RE, text, lambda m: translate_table(m.group(0)))


def _rewrite_heading(m: re.Match) -> str:
    value = m.group(0).strip()
    leading  = len(value) - len(value.lstrip("="))
    trailing = len(value) - len(value.rstrip("="))

    heading = ("\n" if leading >= 4 else "\n=") + value
    if trailing < 4:
        heading += "="
    return heading


def rewrite_headings(text: str) -> str:
    """Shift ``=`` heading markers one level up, capping each side at four."""
    return _sub_forward(_HEADING_RE, text, _rewrite_heading)


def rewrite_code_blocks(text: str) -> str:
    return apply_replacements(text, CODE_BLOCK_MARKERS)


def resolve_magic_words(text: str, catalog: TemplateCatalog) -> tuple[str, list[str]]:
    """Turn known ``{{Template}}`` calls into ``{s:Template}``.

    Returns the new text and the unresolved names, in order of appearance
    and with duplicates.
    """
    unresolved: list[str] = []

    def _resolve(m: re.Match) -> str | None:
        name = normalize_name(m.group(0).lstrip("{").rstrip("}"))
        if not catalog.knows(name):
            unresolved.append(name)
            return None
        if _has_template_prefix(name):
            name = name[len(TEMPLATE_PREFIX):]
        return "{s:" + name + "}"

    return _sub_forward(_MAGIC_WORD_RE, text, _resolve), unresolved


# -----------------------------------------------------------------------------
# Public entry point
# -----------------------------------------------------------------------------

def transform(
    content: str | None,
    catalog: TemplateCatalog | Iterable[str] | None = None,
    *,
    is_template: bool = False,
) -> TransformResult:
    """
    Convert one MediaWiki page body to Deki markup.

    Parameters
    ----------
    content     : raw page text; None or "" yields an empty result
    catalog     : known template names (a TemplateCatalog or any iterable)
    is_template : True when the page itself lives in the Template namespace
    """
    if not content:
        return TransformResult("", [])
    if not isinstance(catalog, TemplateCatalog):
        catalog = TemplateCatalog(catalog or ())

    text = strip_category_links(content)
    text = escape_dashes(text)
    text = normalize_toc(text, is_template=is_template)
    text = apply_replacements(text, PHRASE_REPLACEMENTS)
    text = rewrite_links(text)
    text = rewrite_tables(text)
    text = rewrite_headings(text)
    text = rewrite_code_blocks(text)
    text, magic_words = resolve_magic_words(text, catalog)

    if magic_words:
        log.debug("%d unresolved magic word(s): %s", len(magic_words), ", ".join(magic_words))
    return TransformResult(text, magic_words)


# -----------------------------------------------------------------------------
