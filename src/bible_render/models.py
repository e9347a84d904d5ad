"""Data models for rendered Bible text."""

import json
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional


class SegmentStyle(str, Enum):
    """How a word should be rendered or interpreted."""

    PLAIN = "plain"
    ADDED = "added"  # Supplied words (italics / brackets)
    RED_LETTER = "red_letter"  # Words of Christ
    NOTE = "note"  # Footnotes or annotations, never emitted as a word


@dataclass
class LexicalInfo:
    """Lexical metadata attached to a single word."""

    strongs: list[str] = field(default_factory=list)  # e.g. ["G3056"]
    lemma: Optional[str] = None  # e.g. "λόγος"
    gloss: Optional[str] = None  # e.g. "word, speech"
    morph: Optional[str] = None  # e.g. "Noun, Nominative, Singular, Masculine"
    morph_code: Optional[str] = None  # e.g. "robinson:N-NSM"

    def copy(self) -> "LexicalInfo":
        """Return an independent copy (the strongs list is not shared)."""
        return LexicalInfo(
            strongs=list(self.strongs),
            lemma=self.lemma,
            gloss=self.gloss,
            morph=self.morph,
            morph_code=self.morph_code,
        )

    def add_strongs(self, numbers: list[str]):
        """Append Strong's numbers, skipping ones this word already has."""
        for number in numbers:
            if number not in self.strongs:
                self.strongs.append(number)


@dataclass
class Word:
    """A single renderable word or punctuation mark."""

    text: str
    style: SegmentStyle = SegmentStyle.PLAIN
    is_red: bool = False
    is_italic: bool = False
    is_bold: bool = False

    # Lexicon & dictionary hooks
    lex: Optional[LexicalInfo] = None
    note: Optional[str] = None

    # Grouping flags (for Added / red-letter spans)
    is_first_in_group: bool = False
    is_last_in_group: bool = False

    # Layout hint
    is_punctuation: bool = False


@dataclass
class Verse:
    """A full verse, UI-agnostic."""

    osis_id: str  # e.g. "John 3:16" or "John.3.16"
    number: int
    words: list[Word] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    is_paragraph_start: bool = False  # Paragraph indentation hint

    @property
    def text(self) -> str:
        """Plain text of the verse, punctuation glued to the preceding word."""
        parts: list[str] = []
        for word in self.words:
            if word.is_punctuation and parts:
                parts[-1] += word.text
            else:
                parts.append(word.text)
        return " ".join(parts)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class Chapter:
    """A chapter and the verses rendered for it."""

    osis_ref: str  # e.g. "Gen.1" or "Genesis 1"
    number: str
    title: str = ""
    verses: list[Verse] = field(default_factory=list)


@dataclass
class Book:
    """A book and its chapters."""

    osis_id: str
    title: str = ""
    chapters: list[Chapter] = field(default_factory=list)
    canonical: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class ModuleChapter:
    """Verse count of one chapter, derived from a module's keys."""

    number: int
    verse_count: int


@dataclass
class ModuleBook:
    """Chapter layout of one book, derived from a module's keys."""

    name: str  # e.g. "1 John"
    chapters: list[ModuleChapter] = field(default_factory=list)

    @property
    def verse_count(self) -> int:
        return sum(chapter.verse_count for chapter in self.chapters)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ModuleInfo:
    """Descriptive metadata of an installed module."""

    name: str
    description: str = "Unknown"
    category: str = "Unknown"  # e.g. "Biblical Texts", "Commentaries"
    language: str = "Unknown"


@dataclass
class BibleVersion:
    """Header information of an OSIS Bible document."""

    osis_id: str  # e.g. "KJV"
    title: str = ""  # e.g. "King James Version (1769)"
    identifier: str = ""  # e.g. "Bible.KJV"
    scope: str = ""  # e.g. "Gen-Rev"
    ref_system: str = ""  # e.g. "Bible.KJV"
