"""Registry of installed modules with serialized access to their cursors."""

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .grouping import mark_groups
from .models import Book, ModuleBook, ModuleInfo, Verse
from .modules import ModuleHandle
from .navigator import collect_books, index_module, render
from .notes import is_cross_reference
from .sword import load_sword_modules


LOG = logging.getLogger(__name__)


# =============================================================================
# Configuration
# =============================================================================

ON = "On"
OFF = "Off"

RENDER_OPTIONS = (
    "Strong's Numbers",
    "Morphological Tags",
    "Footnotes",
    "Cross-references",
    "Words of Christ in Red",
)

BIBLE_CATEGORIES = ("Biblical Texts", "Bibles")
COMMENTARY_CATEGORIES = ("Commentaries",)
DICTIONARY_CATEGORIES = ("Lexicons", "Dictionaries")
BOOK_CATEGORIES = ("Generic Books",)
MAP_CATEGORIES = ("Images", "Maps")


class BibleRenderError(Exception):
    """Raised when a library can't be set up."""


# =============================================================================
# Render Options
# =============================================================================

def apply_render_options(verses: list[Verse], options: dict[str, str]) -> list[Verse]:
    """
    Strip from ``verses`` whatever the switched-off options hide, in place.

    Options missing from ``options`` count as on.
    """
    def off(option: str) -> bool:
        return options.get(option, ON) == OFF

    for verse in verses:
        if off("Footnotes"):
            verse.notes = [note for note in verse.notes if is_cross_reference(note)]
        if off("Cross-references"):
            verse.notes = [note for note in verse.notes if not is_cross_reference(note)]

        for word in verse.words:
            if off("Footnotes"):
                word.note = None
            if word.lex is not None:
                if off("Strong's Numbers"):
                    word.lex.strongs = []
                if off("Morphological Tags"):
                    word.lex.morph = None
                    word.lex.morph_code = None
            if off("Words of Christ in Red"):
                word.is_red = False

        if off("Words of Christ in Red"):
            for word in verse.words:
                word.is_first_in_group = word.is_last_in_group = False
            mark_groups(verse.words)

    return verses


# =============================================================================
# Library
# =============================================================================

class ModuleLibrary:
    """
    Installed modules by name, plus the global render options.

    Module cursors are stateful, so every request made through the library
    holds ``lock`` until it has finished.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.options: dict[str, str] = {"UTF8": "true"}
        self.options.update((option, ON) for option in RENDER_OPTIONS)
        self._modules: dict[str, ModuleHandle] = {}
        self._infos: dict[str, ModuleInfo] = {}

    def add_module(self, module: ModuleHandle, info: Optional[ModuleInfo] = None):
        """Register a module handle under its name."""
        info = info or getattr(module, "info", None) or ModuleInfo(name=module.name)
        self._modules[module.name] = module
        self._infos[module.name] = info

    def get_module(self, name: str) -> Optional[ModuleHandle]:
        """Look up a module by name, ignoring case as a fallback."""
        if name in self._modules:
            return self._modules[name]
        for key, module in self._modules.items():
            if key.lower() == name.lower():
                return module
        return None

    def get_modules(self) -> list[ModuleInfo]:
        return list(self._infos.values())

    def get_modules_by_category(self, categories) -> list[ModuleInfo]:
        return [info for info in self._infos.values() if info.category in categories]

    def get_bible_modules(self) -> list[ModuleInfo]:
        return self.get_modules_by_category(BIBLE_CATEGORIES)

    def get_commentary_modules(self) -> list[ModuleInfo]:
        return self.get_modules_by_category(COMMENTARY_CATEGORIES)

    def get_dictionary_modules(self) -> list[ModuleInfo]:
        return self.get_modules_by_category(DICTIONARY_CATEGORIES)

    def get_book_modules(self) -> list[ModuleInfo]:
        return self.get_modules_by_category(BOOK_CATEGORIES)

    def get_map_modules(self) -> list[ModuleInfo]:
        return self.get_modules_by_category(MAP_CATEGORIES)

    def set_global_option(self, option: str, value: str):
        """Set a render option ("On" / "Off") for every later request."""
        with self.lock:
            self.options[option] = value

    def render(self, module_name: str, reference: str, dialect: str = "osis") -> list[Verse]:
        """
        Render a chapter (or verse range) of a named module.

        Returns an empty list when the module isn't installed.
        """
        with self.lock:
            module = self.get_module(module_name)
            if module is None:
                LOG.info("No module named %r", module_name)
            return apply_render_options(render(module, reference, dialect), self.options)

    def index(self, module_name: str) -> list[ModuleBook]:
        """Book / chapter / verse-count layout of a named module."""
        with self.lock:
            return index_module(self.get_module(module_name))

    def collect(self, module_name: str, dialect: str = "osis") -> list[Book]:
        """Every verse of a named module, grouped into books and chapters."""
        with self.lock:
            books = collect_books(self.get_module(module_name), dialect)
            for book in books:
                for chapter in book.chapters:
                    apply_render_options(chapter.verses, self.options)
            return books


class SwordLibrary(ModuleLibrary):
    """A library populated from a SWORD data directory or module zip."""

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path).expanduser()
        if not self.path.exists():
            raise BibleRenderError(f"SWORD path not found: {self.path}")

        for module in load_sword_modules(self.path):
            self.add_module(module)
        LOG.info("Loaded %d modules from %s", len(self._modules), self.path)
