#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""Tests for magic-word resolution, the template catalog and full page transforms."""
# -----------------------------------------------------------------------------

from __future__ import annotations

import pytest

from mw2deki.services.transcoder import (
    TemplateCatalog,
    TransformResult,
    normalize_name,
    resolve_magic_words,
    transform,
)


# =============================================================================
# Template catalog
# =============================================================================

def test_catalog_from_titles_normalizes():
    catalog = TemplateCatalog.from_titles(["Info box", " Note "])
    assert "Template:Info_box" in catalog
    assert "Template:Note" in catalog
    assert len(catalog) == 2


def test_catalog_is_case_sensitive():
    catalog = TemplateCatalog(["Template:Note"])
    assert catalog.knows("Template:Note")
    assert not catalog.knows("Template:note")


def test_catalog_strips_template_prefix_for_lookup():
    assert TemplateCatalog(["Infobox"]).knows("Template:Infobox")
    assert TemplateCatalog(["Infobox"]).knows("template:Infobox")
    assert TemplateCatalog(["Template:Infobox"]).knows("Template:Infobox")


def test_catalog_never_qualifies_bare_names():
    assert not TemplateCatalog(["Template:Infobox"]).knows("Infobox")


def test_normalize_name():
    assert normalize_name("  Some template ") == "Some_template"


# =============================================================================
# Magic words
# =============================================================================

def test_unresolved_magic_words_kept_with_duplicates():
    text, words = resolve_magic_words("{{Foo}} bar {{Foo}}", TemplateCatalog())
    assert text == "{{Foo}} bar {{Foo}}"
    assert words == ["Foo", "Foo"]


def test_unresolved_order_is_encounter_order():
    _, words = resolve_magic_words("{{B}} {{A}} {{B}}", TemplateCatalog())
    assert words == ["B", "A", "B"]


def test_known_template_rewritten():
    text, words = resolve_magic_words("{{Template:Infobox}}", TemplateCatalog(["Infobox"]))
    assert text == "{s:Infobox}"
    assert words == []


def test_qualified_template_call_rewritten():
    catalog = TemplateCatalog.from_titles(["Some template"])
    text, words = resolve_magic_words("x {{ Template:Some template }} y", catalog)
    assert text == "x {s:Some_template} y"
    assert words == []


def test_bare_call_unresolved_against_qualified_catalog():
    text, words = resolve_magic_words("x {{ Some template }} y", TemplateCatalog(["Template:Some_template"]))
    assert text == "x {{ Some template }} y"
    assert words == ["Some_template"]


def test_template_prefix_stripped_any_case():
    text, _ = resolve_magic_words("{{template:Foo}}", TemplateCatalog(["template:Foo"]))
    assert text == "{s:Foo}"


def test_known_and_unknown_mixed():
    catalog = TemplateCatalog(["Known"])
    text, words = resolve_magic_words("{{Known}} {{PAGENAME}} {{Known}}", catalog)
    assert text == "{s:Known} {{PAGENAME}} {s:Known}"
    assert words == ["PAGENAME"]


def test_magic_word_may_span_lines():
    _, words = resolve_magic_words("{{Foo\n|a=1}}", TemplateCatalog())
    assert words == ["Foo\n|a=1"]


# =============================================================================
# Whole-page transform
# =============================================================================

def test_none_input_gives_empty_result():
    assert transform(None) == TransformResult("", [])


def test_empty_input_gives_empty_result():
    result = transform("", ["Template:Foo"])
    assert result.text == ""
    assert result.magic_words == []


@pytest.mark.parametrize("src", [
    "[", "]]", "{{", "}}", "{|", "|}", "====", "\n", "[[]]", "{{}}", "--",
    "=", "[[|]]", "{|\n|}", "{{{{", "[[[[x]]]]", "= =\n= =", "\t \r\n",
])
def test_transform_is_total(src):
    result = transform(src, TemplateCatalog(["Template:x"]))
    assert isinstance(result.text, str)
    assert isinstance(result.magic_words, list)


def test_category_stripping_through_transform():
    assert transform("Hello [[Category:Foo]] World").text == "Hello  World"


def test_duplicate_magic_words_through_transform():
    result = transform("{{Foo}} bar {{Foo}}")
    assert result.text == "{{Foo}} bar {{Foo}}"
    assert result.magic_words == ["Foo", "Foo"]


def test_known_template_through_transform():
    result = transform("{{Template:Infobox}}", ["Infobox"])
    assert result.text == "{s:Infobox}"
    assert result.magic_words == []


def test_heading_page_gets_toc():
    assert transform("===Title===\n").text == "{TOC}\n\n====Title===="


def test_template_page_heading_without_toc():
    assert transform("===Title===\n", is_template=True).text == "\n====Title===="


def test_redirect_page():
    result = transform("#REDIRECT [[Mono:Runtime:Documentation:AOT]]")
    assert result.text == ">>> [[Project_Mono_Runtime_Documentation_AOT]]"


def test_full_page():
    src = (
        "Intro -- see [[Help:Contents|help]].\n"
        "== Usage ==\n"
        "<bash>ls</bash>\n"
        "{{Template:Note}}\n"
        "[[Category:Docs]]"
    )
    result = transform(src, TemplateCatalog(["Template:Note"]))
    assert result.text == (
        "{TOC}\n"
        "Intro <nowiki>--</nowiki> see [Help_Contents|help].\n"
        "\n=== Usage ==="
        "\n@@ bash\nls\n@@\n"
        "\n{s:Note}\n"
    )
    assert result.magic_words == []


def test_bare_call_reported_through_transform():
    result = transform("{{Infobox}}", TemplateCatalog(["Template:Infobox"]))
    assert result.text == "{{Infobox}}"
    assert result.magic_words == ["Infobox"]


def test_transform_is_pure():
    catalog = TemplateCatalog(["Template:A"])
    src = "{{A}} {{B}}\n== H ==\n[[x:y]]"
    assert transform(src, catalog) == transform(src, catalog)


def test_table_through_transform():
    src = "{|\n!A!!B\n|-\n|}"
    assert transform(src).text == src


# -----------------------------------------------------------------------------
