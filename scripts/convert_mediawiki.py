#!/usr/bin/env python
"""
Convert pages from a MediaWiki XML export to Deki markup.

Usage:
    .venv/bin/python scripts/convert_mediawiki.py <export.xml> [options]

Options:
    --output DIR         Directory for converted pages (default: ./converted)
    --include-ignored    Also convert MediaWiki: and Category: pages
    --dry-run            Convert and report without writing any files
    --limit N            Only convert the first N pages (useful for testing)
    --verbose            Debug logging

Every page is written to <output>/<Title>.txt.  Magic words that no template
in the export resolves are listed in <output>/magic_words.txt, one
"<Title>: <name>" line each, for manual follow-up.

Example:
    .venv/bin/python scripts/convert_mediawiki.py ~/export.xml --dry-run --limit 10
    .venv/bin/python scripts/convert_mediawiki.py ~/export.xml --output /tmp/deki
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# Ensure the package is importable when run from the project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from mw2deki.core.config import get_settings
from mw2deki.core.logging import configure_logging
from mw2deki.services.export import build_template_catalog, parse_export
from mw2deki.services.pages import MigratedPage, convert_page


log = logging.getLogger("mw2deki.scripts.convert")


# ── Output helpers ────────────────────────────────────────────────────────────

def page_filename(title: str) -> str:
    """Deki titles may contain '/', which is not allowed in a file name."""
    return title.replace("/", "%2F") + ".txt"


def write_page(output_dir: Path, page: MigratedPage) -> Path:
    path = output_dir / page_filename(page.title)
    path.write_text(page.text, encoding="utf-8")
    return path


def write_magic_words(output_dir: Path, pages: list[MigratedPage]) -> Path:
    path = output_dir / "magic_words.txt"
    lines = [f"{p.title}: {name}" for p in pages for name in p.magic_words]
    path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return path


# ── Conversion ────────────────────────────────────────────────────────────────

def convert_export(
    xml_path: Path,
    output_dir: Path,
    include_ignored: bool,
    dry_run: bool,
    limit: Optional[int],
) -> dict[str, int]:
    settings = get_settings()

    print(f"Parsing {xml_path} …")
    all_pages = parse_export(xml_path)
    print(f"Found {len(all_pages)} pages in export.")

    # Templates from every page in the export, before any page is converted
    catalog = build_template_catalog(all_pages)
    print(f"Known templates: {len(catalog)}")

    sources = all_pages[:limit] if limit is not None else all_pages

    counts = {"converted": 0, "ignored": 0, "error": 0, "magic_words": 0}
    converted: list[MigratedPage] = []

    if not dry_run:
        output_dir.mkdir(parents=True, exist_ok=True)

    for src in sources:
        try:
            page = convert_page(src, catalog, settings.project_title_prefix)
        except Exception as exc:
            log.error("Error converting %r: %s", src.title, exc)
            counts["error"] += 1
            continue

        if page.ignore and not include_ignored:
            counts["ignored"] += 1
            continue

        converted.append(page)
        counts["converted"] += 1
        counts["magic_words"] += len(page.magic_words)

        if dry_run:
            print(f"  [{page.deki_namespace.label}] {page.title!r}  "
                  f"({len(page.magic_words)} unresolved magic words)")
        else:
            write_page(output_dir, page)

    if not dry_run:
        write_magic_words(output_dir, converted)

    print(
        f"\n{'[DRY RUN] ' if dry_run else ''}Conversion complete: "
        f"{counts['converted']} converted, "
        f"{counts['ignored']} ignored, "
        f"{counts['error']} errors, "
        f"{counts['magic_words']} unresolved magic words."
    )
    return counts


# ── CLI ───────────────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Convert pages from a MediaWiki XML export to Deki markup.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("xml_file", help="Path to the MediaWiki XML export file")
    parser.add_argument("--output", default=None, metavar="DIR",
                        help="Directory for converted pages (default: ./converted)")
    parser.add_argument("--include-ignored", action="store_true",
                        help="Also convert MediaWiki: and Category: pages")
    parser.add_argument("--dry-run", action="store_true",
                        help="Convert and report without writing any files")
    parser.add_argument("--limit", type=int, default=None, metavar="N",
                        help="Only convert the first N pages")
    parser.add_argument("--verbose", action="store_true",
                        help="Debug logging")
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else None)

    xml_path = Path(args.xml_file).expanduser().resolve()
    if not xml_path.exists():
        print(f"Error: file not found: {xml_path}", file=sys.stderr)
        sys.exit(1)

    output_dir = Path(args.output).expanduser() if args.output else get_settings().output_dir

    convert_export(
        xml_path=xml_path,
        output_dir=output_dir,
        include_ignored=args.include_ignored,
        dry_run=args.dry_run,
        limit=args.limit,
    )


if __name__ == "__main__":
    main()
