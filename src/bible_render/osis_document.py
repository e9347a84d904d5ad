"""
Reading whole OSIS documents: header, book structure and single chapters.

Verses may be containers (``<verse osisID="Gen.1.1">...</verse>``) or
milestone pairs (``<verse sID="..."/>...<verse eID="..."/>``), as written
by USFM to OSIS converters.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .models import BibleVersion, Book, Chapter, Verse
from .navigator import build_verse


LOG = logging.getLogger(__name__)

_MILESTONE_RE = re.compile(
    r'<verse\b[^>]*?\bsID="(?P<sid>[^"]+)"[^>]*/>'
    r'(?P<body>.*?)'
    r'<verse\b[^>]*?\beID="(?P=sid)"[^>]*/>',
    re.S,
)
_OSIS_ID_RE = re.compile(r'\bosisID="([^"]+)"')
_PARAGRAPH_RE = re.compile(r'<p\b|type="(?:paragraph|x-p)"')


def _soup(xml: str) -> BeautifulSoup:
    return BeautifulSoup(xml, "xml")


def _text(el: Optional[Tag]) -> str:
    return el.get_text(" ", strip=True) if el is not None else ""


def _first_id(osis_id: str) -> str:
    """``osisID`` can list several ids; the first one names the verse."""
    parts = osis_id.split()
    return parts[0] if parts else ""


# =============================================================================
# Header & Structure
# =============================================================================

def parse_version(xml: str) -> Optional[BibleVersion]:
    """Return the header ``work`` describing a Bible, if there is one."""
    header = _soup(xml).find("header")
    if header is None:
        return None

    for work in header.find_all("work"):
        ref_system = _text(work.find("refSystem"))
        if not ref_system.startswith("Bible."):
            continue
        return BibleVersion(
            osis_id=work.get("osisWork", ""),
            title=_text(work.find("title")),
            identifier=_text(work.find("identifier")),
            scope=_text(work.find("scope")),
            ref_system=ref_system,
        )
    return None


def parse_books(xml: str) -> list[Book]:
    """List the books of a document with their chapters (no verses)."""
    books: list[Book] = []
    for div in _soup(xml).find_all("div", attrs={"type": "book"}):
        chapters: list[Chapter] = []
        for chapter in div.find_all("chapter"):
            osis_ref = chapter.get("osisID") or chapter.get("sID") or ""
            if not osis_ref:
                continue  # closing milestone
            osis_ref = _first_id(osis_ref)
            chapters.append(Chapter(
                osis_ref=osis_ref,
                number=chapter.get("n") or osis_ref.rsplit(".", 1)[-1],
                title=chapter.get("chapterTitle", ""),
            ))

        books.append(Book(
            osis_id=div.get("osisID", ""),
            title=_text(div.find("title")),
            chapters=chapters,
            canonical=div.get("canonical", "true") != "false",
        ))
    return books


# =============================================================================
# Chapters
# =============================================================================

def _container_verses(soup: BeautifulSoup, target_chapter: str) -> list[Verse]:
    verses: list[Verse] = []
    prefix = target_chapter + "."

    for el in soup.find_all("verse"):
        osis_id = _first_id(el.get("osisID", ""))
        if el.get("sID") or el.get("eID") or not osis_id.startswith(prefix):
            continue

        markup = el.decode_contents()
        verse = build_verse(osis_id, markup, "osis")

        paragraph = el.find_parent("p")
        if paragraph is not None and paragraph.find("verse") is el:
            verse.is_paragraph_start = True
        verses.append(verse)
    return verses


def _milestone_verses(xml: str, target_chapter: str) -> list[Verse]:
    verses: list[Verse] = []
    prefix = target_chapter + "."
    previous_end = 0

    for match in _MILESTONE_RE.finditer(xml):
        start_tag = xml[match.start():match.start("body")]
        id_match = _OSIS_ID_RE.search(start_tag)
        osis_id = _first_id(id_match.group(1) if id_match else match.group("sid"))
        gap = xml[previous_end:match.start()]
        previous_end = match.end()

        if not osis_id.startswith(prefix):
            continue

        verse = build_verse(osis_id, match.group("body"), "osis")
        if _PARAGRAPH_RE.search(gap):
            verse.is_paragraph_start = True
        verses.append(verse)
    return verses


def parse_chapter(xml: str, target_chapter: str) -> list[Verse]:
    """
    Render one chapter of an OSIS document.

    Args:
        xml: The whole document
        target_chapter: Chapter osisID, e.g. "Gen.1"

    Returns:
        The chapter's verses in document order; empty if it isn't there
    """
    verses = _container_verses(_soup(xml), target_chapter)
    if not verses:
        verses = _milestone_verses(xml, target_chapter)
    LOG.debug("%s: %d verses", target_chapter, len(verses))
    return verses
