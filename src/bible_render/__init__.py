"""
Bible Render - Turns OSIS and rendered-HTML verse markup into styled words, verses and chapters.
"""

from .models import (
    SegmentStyle,
    LexicalInfo,
    Word,
    Verse,
    Chapter,
    Book,
    ModuleChapter,
    ModuleBook,
    ModuleInfo,
    BibleVersion,
)
from .lexical import decode_morph, parse_strongs, parse_tr_lemma, strongs_from_href
from .walker import MarkupWalker, OsisWalker, HtmlWalker, WalkContext, get_walker
from .notes import extract_notes
from .grouping import mark_groups
from .modules import ModuleHandle, InMemoryModule
from .navigator import render, index_module, collect_books, build_verse
from .library import ModuleLibrary, SwordLibrary, BibleRenderError, apply_render_options
from .osis_document import parse_version, parse_books, parse_chapter

__all__ = [
    "SegmentStyle",
    "LexicalInfo",
    "Word",
    "Verse",
    "Chapter",
    "Book",
    "ModuleChapter",
    "ModuleBook",
    "ModuleInfo",
    "BibleVersion",
    "decode_morph",
    "parse_strongs",
    "parse_tr_lemma",
    "strongs_from_href",
    "MarkupWalker",
    "OsisWalker",
    "HtmlWalker",
    "WalkContext",
    "get_walker",
    "extract_notes",
    "mark_groups",
    "ModuleHandle",
    "InMemoryModule",
    "render",
    "index_module",
    "collect_books",
    "build_verse",
    "ModuleLibrary",
    "SwordLibrary",
    "BibleRenderError",
    "apply_render_options",
    "parse_version",
    "parse_books",
    "parse_chapter",
]

__version__ = "0.1.0"
