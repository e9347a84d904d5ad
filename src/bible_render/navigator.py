"""Walks a module's key cursor to render chapters and index its structure."""

import logging
import re
from typing import Optional

from .grouping import mark_groups
from .models import Book, Chapter, ModuleBook, ModuleChapter, Verse
from .modules import ModuleHandle
from .notes import extract_notes
from .walker import get_walker


LOG = logging.getLogger(__name__)


# =============================================================================
# Key Parsing
# =============================================================================

_KEY_SEPARATORS = re.compile(r"[:.]")
_VERSE_RANGE_RE = re.compile(r"^(?P<start>.+?[:.]\d+)\s*-\s*(?P<end>\d+)$")

PARAGRAPH_MARKERS = ('type="paragraph"', 'type="x-p"')


def chapter_boundary(key: str) -> str:
    """Everything before the first ``:`` or ``.`` (``"Gen 1:3"`` -> ``"Gen 1"``)."""
    return _KEY_SEPARATORS.split(key, 1)[0]


def verse_number(key: str) -> int:
    """The number after the last ``:`` or ``.``, or 0."""
    try:
        return int(_KEY_SEPARATORS.split(key)[-1])
    except ValueError:
        return 0


def split_verse_range(reference: str) -> tuple[str, Optional[int]]:
    """
    Split ``"John 3:16-18"`` into ``("John 3:16", 18)``.

    References without a range come back unchanged with None.
    """
    match = _VERSE_RANGE_RE.match(reference.strip())
    if not match:
        return reference, None
    return match.group("start"), int(match.group("end"))


def split_key(key: str) -> tuple[str, int]:
    """
    Split a key into book name and chapter number.

    The last whitespace token is the chapter:verse part, everything before
    it is the book name, so ``"1 John 2:3"`` gives ``("1 John", 2)``.
    Dotted OSIS keys (``"Gen.1.1"``) are split on the dots instead.
    """
    parts = key.split()
    if len(parts) >= 2:
        book, chapter_verse = " ".join(parts[:-1]), parts[-1]
    elif "." in key:
        book, _, chapter_verse = key.partition(".")
    else:
        return key, 0

    try:
        chapter = int(_KEY_SEPARATORS.split(chapter_verse)[0])
    except ValueError:
        chapter = 0
    return book, chapter


def is_paragraph_start(markup: str, number: int) -> bool:
    return number == 1 or any(marker in markup for marker in PARAGRAPH_MARKERS)


# =============================================================================
# Verse Building
# =============================================================================

def build_verse(key: str, markup: str, dialect: str = "osis") -> Verse:
    """
    Parse one verse of markup into a Verse.

    Runs the word walk, attaches notes to the words, then marks group
    boundaries.
    """
    walker = get_walker(dialect)
    root = walker.parse(markup)
    words = walker.walk(root)
    notes = extract_notes(root, words)
    mark_groups(words)

    number = verse_number(key)
    return Verse(
        osis_id=key,
        number=number,
        words=words,
        notes=notes,
        is_paragraph_start=is_paragraph_start(markup or "", number),
    )


def read_entry(module: ModuleHandle, dialect: str) -> Optional[str]:
    """Current entry in the markup ``dialect`` expects."""
    if dialect == "html":
        return module.render_text()
    return module.get_raw_entry()


# =============================================================================
# Public API
# =============================================================================

def render(
    module: Optional[ModuleHandle], reference: str, dialect: str = "osis"
) -> list[Verse]:
    """
    Render the chapter containing ``reference``.

    Rendering starts at the key the module resolves ``reference`` to and
    runs to the end of that chapter, or to the end of the range for
    references like ``"John 3:16-18"``.

    The chapter ends where ``chapter_boundary`` of the key changes. For
    dotted OSIS keys (``"Gen.1.1"``) that boundary is the book, so a module
    keyed that way renders to the end of the book.

    Args:
        module: Module handle (None renders nothing)
        reference: e.g. "Gen 1", "John 3:16", "John 3:16-18"
        dialect: "osis" for raw entries, "html" for rendered text

    Returns:
        Verses in key order; empty when the module or reference can't be
        resolved
    """
    if module is None:
        return []

    start, last_verse = split_verse_range(reference)
    module.set_key(start)
    initial_key = module.get_key()
    if initial_key is None:
        LOG.debug("%s: nothing found for %r", module.name, reference)
        return []

    boundary = chapter_boundary(initial_key)
    verses: list[Verse] = []

    while True:
        key = module.get_key()
        if key is None or chapter_boundary(key) != boundary:
            break

        number = verse_number(key)
        if last_verse is not None and number > last_verse:
            break

        markup = read_entry(module, dialect)
        if markup is None:
            break

        LOG.debug("[%s] %s", key, markup)
        verses.append(build_verse(key, markup, dialect))

        module.advance()
        if module.pop_error():
            break

    return verses


def index_module(module: Optional[ModuleHandle]) -> list[ModuleBook]:
    """
    Count the verses of every chapter of every book in a module.

    Only the keys are read, never the entries.
    """
    books: list[ModuleBook] = []
    if module is None:
        return books

    module.begin()

    current_book: Optional[str] = None
    chapters: list[ModuleChapter] = []
    current_chapter = 0
    verse_count = 0

    while True:
        if module.pop_error():
            break
        key = module.get_key()
        if key is None:
            break

        book_name, chapter = split_key(key)

        # Book transition
        if book_name != current_book:
            if current_book is not None:
                if verse_count > 0:
                    chapters.append(ModuleChapter(current_chapter, verse_count))
                books.append(ModuleBook(current_book, chapters))
            current_book = book_name
            chapters = []
            current_chapter = chapter
            verse_count = 0

        # Chapter transition
        if chapter != current_chapter:
            if verse_count > 0:
                chapters.append(ModuleChapter(current_chapter, verse_count))
            current_chapter = chapter
            verse_count = 0

        verse_count += 1
        module.advance()

    # Final flush: the last chapter of the last book
    if current_book is not None:
        if verse_count > 0:
            chapters.append(ModuleChapter(current_chapter, verse_count))
        books.append(ModuleBook(current_book, chapters))

    return books


def collect_books(module: Optional[ModuleHandle], dialect: str = "osis") -> list[Book]:
    """Render a whole module into books, chapters and verses."""
    books: list[Book] = []
    if module is None:
        return books

    module.begin()
    while True:
        if module.pop_error():
            break
        key = module.get_key()
        if key is None:
            break

        book_name, chapter = split_key(key)
        if not books or books[-1].osis_id != book_name:
            books.append(Book(osis_id=book_name, title=book_name))
        book = books[-1]

        if not book.chapters or book.chapters[-1].number != str(chapter):
            book.chapters.append(Chapter(
                osis_ref=f"{book_name} {chapter}",
                number=str(chapter),
            ))

        markup = read_entry(module, dialect)
        if markup is not None:
            book.chapters[-1].verses.append(build_verse(key, markup, dialect))
        module.advance()

    return books
