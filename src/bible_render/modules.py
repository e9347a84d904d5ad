"""
Module cursor interface and the key-list cursor behind the bundled modules.

A module handle is a stateful cursor over reference keys (``"Gen 1:1"``).
It is not reentrant: one request at a time per handle.
"""

import re
from typing import Iterable, Optional, Protocol

from .models import ModuleInfo


class ModuleHandle(Protocol):
    """What the renderer needs from a text module."""

    name: str

    def set_key(self, reference: str) -> None:
        """Position the cursor at ``reference``."""

    def get_key(self) -> Optional[str]:
        """Current normalized key, or None past the end."""

    def get_raw_entry(self) -> Optional[str]:
        """Current entry in the module's native OSIS markup."""

    def render_text(self) -> Optional[str]:
        """Current entry rendered to HTML."""

    def advance(self) -> None:
        """Step to the next key."""

    def pop_error(self) -> bool:
        """Return and clear the end-of-data / bad-key condition."""

    def begin(self) -> None:
        """Rewind to the first key."""


_OSIS_KEY_RE = re.compile(r"^(.+?)\.(\d+)(?:\.(\d+))?$")
_TEXT_KEY_RE = re.compile(r"^(.+?) (\d+)(?::(\d+))?$")


def key_variants(reference: str) -> list[str]:
    """
    The reference as given plus its OSIS / human-readable counterpart.

    >>> key_variants("Gen.1.1")
    ['Gen.1.1', 'Gen 1:1']
    """
    reference = " ".join(reference.split())
    variants = [reference]

    match = _OSIS_KEY_RE.match(reference)
    if match:
        book, chapter, verse = match.groups()
        variants.append(f"{book} {chapter}:{verse}" if verse else f"{book} {chapter}")
        return variants

    match = _TEXT_KEY_RE.match(reference)
    if match:
        book, chapter, verse = match.groups()
        if " " not in book:
            variants.append(f"{book}.{chapter}.{verse}" if verse else f"{book}.{chapter}")
    return variants


# =============================================================================
# Key List Cursor
# =============================================================================

class KeyListCursor:
    """
    Cursor over a fixed, ordered list of keys.

    Subclasses provide the entries through ``entry_at`` / ``html_at``.
    Setting an unknown reference parks the cursor past the end and raises
    the error flag, so rendering it yields nothing.
    """

    name = ""

    def __init__(self):
        self._index = 0
        self._error = False

    @property
    def keys(self) -> list[str]:
        raise NotImplementedError

    def entry_at(self, index: int) -> Optional[str]:
        raise NotImplementedError

    def html_at(self, index: int) -> Optional[str]:
        return self.entry_at(index)

    def resolve(self, reference: str) -> Optional[int]:
        """Index of the key ``reference`` points at, or None."""
        keys = self.keys
        variants = key_variants(reference)
        for variant in variants:
            if variant in keys:
                return keys.index(variant)

        # Chapter or book reference: first key inside it
        for variant in variants:
            prefixes = (variant + ":", variant + ".", variant + " ")
            for idx, key in enumerate(keys):
                if key.startswith(prefixes):
                    return idx
        return None

    def _at_end(self) -> bool:
        return self._index >= len(self.keys)

    def set_key(self, reference: str) -> None:
        idx = self.resolve(reference)
        if idx is None:
            self._index = len(self.keys)
            self._error = True
        else:
            self._index = idx
            self._error = False

    def get_key(self) -> Optional[str]:
        if self._at_end():
            return None
        return self.keys[self._index]

    def get_raw_entry(self) -> Optional[str]:
        if self._at_end():
            return None
        return self.entry_at(self._index)

    def render_text(self) -> Optional[str]:
        if self._at_end():
            return None
        return self.html_at(self._index)

    def advance(self) -> None:
        if not self._at_end():
            self._index += 1
        if self._at_end():
            self._error = True

    def pop_error(self) -> bool:
        error, self._error = self._error, False
        return error

    def begin(self) -> None:
        self._index = 0
        self._error = self._at_end()


# =============================================================================
# In-Memory Module
# =============================================================================

class InMemoryModule(KeyListCursor):
    """
    A module backed by an ordered list of ``(key, raw_markup)`` entries.

    ``html`` optionally maps keys to pre-rendered HTML; keys without one
    render as their raw entry.
    """

    def __init__(
        self,
        name: str,
        entries: Iterable[tuple[str, str]],
        html: Optional[dict[str, str]] = None,
        info: Optional[ModuleInfo] = None,
    ):
        super().__init__()
        self.name = name
        self.entries = list(entries)
        self.html = dict(html or {})
        self.info = info or ModuleInfo(name=name, category="Biblical Texts")
        self._keys = [key for key, _ in self.entries]
        self._error = not self.entries

    @property
    def keys(self) -> list[str]:
        return self._keys

    def entry_at(self, index: int) -> Optional[str]:
        return self.entries[index][1]

    def html_at(self, index: int) -> Optional[str]:
        return self.html.get(self._keys[index], self.entries[index][1])

    def __repr__(self) -> str:
        return f"InMemoryModule({self.name!r}, {len(self.entries)} entries)"
