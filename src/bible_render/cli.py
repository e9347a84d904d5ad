#!/usr/bin/env python3
"""
CLI for Bible Render - Renders verses from SWORD modules and OSIS files.

Usage:
    python -m bible_render modules                     # List installed modules
    python -m bible_render render KJV "John 3"         # Render a chapter
    python -m bible_render render KJV "John 3:16-18"   # Render a verse range
    python -m bible_render render KJV "John 3" --off Footnotes  # Without footnotes
    python -m bible_render index KJV                   # Books, chapters, verse counts
    python -m bible_render osis kjv.osis.xml Gen.1     # Render a chapter of an OSIS file
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .formatting import AddedWordStyle, format_verse
from .library import OFF, RENDER_OPTIONS, BibleRenderError, ModuleLibrary, SwordLibrary
from .osis_document import parse_books, parse_chapter, parse_version


LOG = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

DEFAULT_SWORD_PATH = os.environ.get("SWORD_PATH", "~/.sword")
LOG_FORMAT = "%(message)s"


# =============================================================================
# Commands
# =============================================================================

def _print_json(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_modules(args, library: ModuleLibrary) -> int:
    modules = library.get_modules()
    if not modules:
        print("No modules installed")
        return 0

    for info in sorted(modules, key=lambda m: (m.category, m.name)):
        print(f"{info.name:<12} {info.category:<16} {info.language:<6} {info.description}")
    return 0


def cmd_render(args, library: ModuleLibrary) -> int:
    if library.get_module(args.module) is None:
        print(f"❌ Unknown module: {args.module}", file=sys.stderr)
        return 1

    for option in args.off or []:
        library.set_global_option(option, OFF)

    dialect = "html" if args.html else "osis"
    verses = library.render(args.module, args.reference, dialect)
    if not verses:
        print(f"Nothing found for {args.reference}")
        return 0

    if args.json:
        _print_json([verse.to_dict() for verse in verses])
        return 0

    added_style = AddedWordStyle.ITALIC if args.italic else AddedWordStyle.BRACKETS
    for verse in verses:
        print(format_verse(verse, added_style, show_strongs=args.strongs))
    return 0


def cmd_index(args, library: ModuleLibrary) -> int:
    if library.get_module(args.module) is None:
        print(f"❌ Unknown module: {args.module}", file=sys.stderr)
        return 1

    books = library.index(args.module)
    if args.json:
        _print_json([book.to_dict() for book in books])
        return 0

    for book in books:
        print(f"{book.name}: {len(book.chapters)} chapters, {book.verse_count:,} verses")
    return 0


def cmd_osis(args) -> int:
    path = Path(args.file)
    try:
        xml = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"❌ Could not read {path}: {e}", file=sys.stderr)
        return 1

    if not args.chapter:
        version = parse_version(xml)
        if version:
            print(f"📖 {version.title or version.osis_id} ({version.ref_system})")
        for book in parse_books(xml):
            print(f"{book.osis_id:<8} {book.title} ({len(book.chapters)} chapters)")
        return 0

    verses = parse_chapter(xml, args.chapter)
    if not verses:
        print(f"Nothing found for {args.chapter}")
        return 0

    if args.json:
        _print_json([verse.to_dict() for verse in verses])
        return 0

    added_style = AddedWordStyle.ITALIC if args.italic else AddedWordStyle.BRACKETS
    for verse in verses:
        print(format_verse(verse, added_style, show_strongs=args.strongs))
    return 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render Bible text from SWORD modules and OSIS files."
    )
    parser.add_argument(
        "--path", "-p",
        type=str,
        default=DEFAULT_SWORD_PATH,
        help=f"SWORD data directory or module zip (default: {DEFAULT_SWORD_PATH})"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="count",
        default=0,
        help="More output (-v info, -vv debug)"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("modules", help="List installed modules")

    render = commands.add_parser("render", help="Render a chapter or verse range")
    render.add_argument("module", help="Module name (e.g., 'KJV')")
    render.add_argument("reference", help="Reference (e.g., 'Gen 1', 'John 3:16-18')")
    render.add_argument("--html", action="store_true", help="Use the HTML rendering of entries")
    render.add_argument(
        "--off",
        action="append",
        choices=RENDER_OPTIONS,
        metavar="OPTION",
        help="Switch a render option off (repeatable): " + ", ".join(RENDER_OPTIONS)
    )

    index = commands.add_parser("index", help="List books, chapters and verse counts")
    index.add_argument("module", help="Module name (e.g., 'KJV')")
    index.add_argument("--json", action="store_true", help="Output JSON")

    osis = commands.add_parser("osis", help="Read an OSIS XML file")
    osis.add_argument("file", help="OSIS document")
    osis.add_argument("chapter", nargs="?", help="Chapter osisID (e.g., 'Gen.1'); omit to list books")

    for sub in (render, osis):
        sub.add_argument("--json", action="store_true", help="Output JSON")
        sub.add_argument("--italic", action="store_true", help="Mark added words *like this* instead of [like this]")
        sub.add_argument("--strongs", action="store_true", help="Show Strong's numbers")

    return parser


def main(argv: Optional[list[str]] = None, library: Optional[ModuleLibrary] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(format=LOG_FORMAT)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.getLogger("bible_render").setLevel(level)

    if args.command == "osis":
        return cmd_osis(args)

    if library is None:
        try:
            library = SwordLibrary(args.path)
        except BibleRenderError as e:
            print(f"❌ {e}", file=sys.stderr)
            return 1

    handlers = {
        "modules": cmd_modules,
        "render": cmd_render,
        "index": cmd_index,
    }
    return handlers[args.command](args, library)


if __name__ == "__main__":
    exit(main())
