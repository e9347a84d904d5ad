"""SWORD modules read from disk with pysword."""

import html
import logging
from pathlib import Path
from typing import Optional, Union

from pysword.modules import SwordModules

from .modules import KeyListCursor, key_variants
from .models import ModuleInfo


LOG = logging.getLogger(__name__)

TESTAMENTS = ("ot", "nt")


def _conf_value(conf: dict, name: str, default: str = "Unknown") -> str:
    """Read a .conf entry whether or not the parser lowercased its keys."""
    value = conf.get(name, conf.get(name.lower()))
    return value if value else default


def module_info(name: str, conf: dict) -> ModuleInfo:
    return ModuleInfo(
        name=name,
        description=_conf_value(conf, "Description"),
        category=_conf_value(conf, "Category", default="Biblical Texts"),
        language=_conf_value(conf, "Lang"),
    )


class PySwordModule(KeyListCursor):
    """
    A SWORD Bible module as a key cursor.

    Keys look like ``"Genesis 1:1"`` and follow the module's versification.
    References may use the book's full name, OSIS name or abbreviation.
    """

    def __init__(self, name: str, bible, info: Optional[ModuleInfo] = None):
        super().__init__()
        self.name = name
        self.bible = bible
        self.info = info or ModuleInfo(name=name)
        self._keys: Optional[list[str]] = None
        self._refs: list[tuple[str, int, int]] = []
        self._aliases: dict[str, str] = {}

    def _load_structure(self):
        keys: list[str] = []
        books = self.bible.get_structure().get_books()
        for testament in TESTAMENTS:
            for book in books.get(testament, []):
                for alias in (book.name, book.osis_name, book.preferred_abbreviation):
                    if alias:
                        self._aliases[alias.lower()] = book.name
                for chapter, length in enumerate(book.chapter_lengths, start=1):
                    for verse in range(1, length + 1):
                        keys.append(f"{book.name} {chapter}:{verse}")
                        self._refs.append((book.osis_name, chapter, verse))
        self._keys = keys
        self._error = not keys
        LOG.debug("%s: %d keys", self.name, len(keys))

    @property
    def keys(self) -> list[str]:
        if self._keys is None:
            self._load_structure()
        return self._keys

    def _canonical_reference(self, reference: str) -> str:
        """Replace the book part of a reference with the module's book name."""
        if self._keys is None:
            self._load_structure()
        for variant in key_variants(reference):
            head, sep, tail = variant.rpartition(" ")
            book = self._aliases.get(head.lower()) if sep else None
            if book:
                return f"{book} {tail}"
            book = self._aliases.get(variant.lower())
            if book:
                return book
        return reference

    def resolve(self, reference: str) -> Optional[int]:
        return super().resolve(self._canonical_reference(reference))

    def _get(self, index: int, clean: bool) -> Optional[str]:
        book, chapter, verse = self._refs[index]
        try:
            return self.bible.get(books=[book], chapters=[chapter], verses=[verse], clean=clean)
        except (ValueError, IndexError) as e:
            LOG.warning("%s: could not read %s: %s", self.name, self.keys[index], e)
            return ""

    def entry_at(self, index: int) -> Optional[str]:
        return self._get(index, clean=False)

    def html_at(self, index: int) -> Optional[str]:
        text = self._get(index, clean=True)
        return html.escape(text) if text else text

    def __repr__(self) -> str:
        return f"PySwordModule({self.name!r})"


def load_sword_modules(path: Union[str, Path]) -> list[PySwordModule]:
    """
    Open every Bible module found at ``path``.

    Args:
        path: A SWORD data directory or a module zip file

    Returns:
        One PySwordModule per readable Bible module; other module types
        are skipped
    """
    modules = SwordModules(str(path))
    found = modules.parse_modules()

    handles: list[PySwordModule] = []
    for name, conf in found.items():
        try:
            bible = modules.get_bible_from_module(name)
        except (ValueError, KeyError, OSError) as e:
            LOG.info("Skipping %s: %s", name, e)
            continue
        handles.append(PySwordModule(name, bible, module_info(name, conf)))
    return handles
