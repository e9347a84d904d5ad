"""Plain-text presentation of rendered verses."""

from enum import Enum

from .models import SegmentStyle, Verse, Word


class AddedWordStyle(str, Enum):
    ITALIC = "italic"  # *word*
    BRACKETS = "brackets"  # [word]


def format_word(word: Word, added_style: AddedWordStyle = AddedWordStyle.BRACKETS) -> str:
    """
    Text of a single word with added-word marks.

    In bracket style only the edges of an added run get a bracket, so
    ``[was made]`` stays one bracketed phrase.
    """
    text = word.text
    if word.style == SegmentStyle.ADDED:
        if added_style == AddedWordStyle.BRACKETS:
            open_ = "[" if word.is_first_in_group else ""
            close = "]" if word.is_last_in_group else ""
            text = f"{open_}{text}{close}"
        else:
            text = f"*{text}*"
    return text


def format_verse(
    verse: Verse,
    added_style: AddedWordStyle = AddedWordStyle.BRACKETS,
    show_strongs: bool = False,
    show_notes: bool = True,
) -> str:
    """
    One verse as a line of text, followed by its notes.

    Punctuation is glued to the word before it. With ``show_strongs`` each
    tagged word is followed by its numbers, e.g. ``beginning<H7225>``.
    """
    parts: list[str] = []
    attached: list[str] = []

    for word in verse.words:
        text = format_word(word, added_style)
        if show_strongs and word.lex and word.lex.strongs:
            text += "".join(f"<{number}>" for number in word.lex.strongs)
        if word.note:
            attached.append(f"{word.text}: {word.note}")

        if word.is_punctuation and parts:
            parts[-1] += text
        else:
            parts.append(text)

    marker = "¶ " if verse.is_paragraph_start else ""
    lines = [f"{marker}{verse.number} {' '.join(parts)}".rstrip()]
    if show_notes:
        lines.extend(f"    - {note}" for note in attached + verse.notes)
    return "\n".join(lines)
