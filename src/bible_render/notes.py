"""Footnote and cross-reference extraction from a parsed verse."""

import logging

from bs4 import Tag

from .models import Word


LOG = logging.getLogger(__name__)

CROSS_REFERENCE = "crossReference"
ELLIPSIS = "…"
CROSS_REFERENCE_PREFIX = "[Cross-Ref: "


def note_body(note: Tag) -> str:
    """All text under a note element, joined with single spaces."""
    return note.get_text(" ", strip=True)


def format_cross_reference(osis_ref: str, body: str) -> str:
    """Display form of a cross-reference note."""
    if osis_ref:
        return f"{CROSS_REFERENCE_PREFIX}{osis_ref}] {body}"
    return body


def is_cross_reference(note: str) -> bool:
    return note.startswith(CROSS_REFERENCE_PREFIX)


def normalize_catch_word(text: str) -> str:
    return text.replace(ELLIPSIS, "").lower().strip()


def attach_to_catch_word(words: list[Word], catch_word: str, body: str) -> bool:
    """
    Attach ``body`` to the first word containing ``catch_word``.

    Matching is a case-insensitive substring test and the first hit wins,
    even when a later word is a closer match. Returns False when no word
    matched.
    """
    if not catch_word:
        return False
    for word in words:
        if catch_word in word.text.lower():
            word.note = body
            return True
    return False


def extract_notes(root: Tag, words: list[Word]) -> list[str]:
    """
    Collect the notes of a verse, attaching footnotes to words when possible.

    Cross-references always go to the returned list. Other notes go to the
    first word matching their ``catchWord``, or to the list when there is no
    catch word or nothing matches.

    Args:
        root: The parsed verse (the same tree the words were walked from)
        words: The verse's words; matched words get their ``note`` set

    Returns:
        Verse-level notes in document order
    """
    verse_notes: list[str] = []

    for note in root.find_all("note"):
        note_type = note.get("type") or ""
        osis_ref = note.get("osisRef") or note.get("osisref") or ""
        body = note_body(note)

        if note_type == CROSS_REFERENCE or osis_ref:
            verse_notes.append(format_cross_reference(osis_ref, body))
            continue

        catch_node = note.find(["catchWord", "catchword"])
        if catch_node is None:
            verse_notes.append(body)
            continue

        catch_word = normalize_catch_word(catch_node.get_text())
        if not attach_to_catch_word(words, catch_word, body):
            LOG.debug("No word matches catch word %r", catch_word)
            verse_notes.append(body)

    return verse_notes
