"""
Recursive markup walkers that turn one verse of OSIS or HTML into words.

Both dialects share the same traversal: style state is an immutable
``WalkContext`` handed down by value, so a change made for one element is
seen by its descendants only and never by its siblings.
"""

import logging
import re
import string
from dataclasses import dataclass, field, replace
from html.entities import name2codepoint
from typing import Callable, Optional

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup, Tag
from bs4.element import PreformattedString

from .lexical import lexical_info_from_attrs, strongs_from_href
from .models import LexicalInfo, SegmentStyle, Word


LOG = logging.getLogger(__name__)

FRAGMENT_ROOT = "fragment"

XML_ENTITIES = ("amp", "lt", "gt", "quot", "apos")
_HTML_ENTITY_RE = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")


# =============================================================================
# Walk State
# =============================================================================

@dataclass(frozen=True)
class WalkContext:
    """Style state inherited from enclosing elements."""

    lex: Optional[LexicalInfo] = None
    is_red: bool = False
    is_added: bool = False
    is_italic: bool = False
    is_bold: bool = False
    in_note: bool = False


@dataclass
class _WordSink:
    """Output of a single walk, plus Strong's numbers waiting for a word."""

    words: list[Word] = field(default_factory=list)
    pending_strongs: list[str] = field(default_factory=list)


ElementRule = Callable[[Tag, WalkContext], WalkContext]


def is_punctuation(text: str) -> bool:
    """True when every character is ASCII punctuation."""
    return bool(text) and all(c in string.punctuation for c in text)


def _classes(el: Tag) -> list[str]:
    value = el.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return list(value)


# =============================================================================
# Walker Base
# =============================================================================

class MarkupWalker:
    """
    Walks a parsed verse fragment and produces its word list.

    Subclasses set ``parser`` (a BeautifulSoup tree builder) and ``rules``,
    a table of element name to context update. Elements missing from the
    table leave the context unchanged, but their children are still walked.
    """

    dialect = ""
    parser = "html.parser"
    rules: dict[str, ElementRule] = {}

    def parse(self, markup: str) -> BeautifulSoup:
        """Parse a verse fragment, wrapped in a synthetic root element."""
        wrapped = f"<{FRAGMENT_ROOT}>{markup or ''}</{FRAGMENT_ROOT}>"
        try:
            return BeautifulSoup(wrapped, self.parser)
        except ParserRejectedMarkup as e:
            LOG.debug("Markup rejected by %s: %s", self.parser, e)
            return BeautifulSoup("", self.parser)

    def walk(self, root: Tag, context: Optional[WalkContext] = None) -> list[Word]:
        """Return the words under ``root`` in document order."""
        sink = _WordSink()
        self._walk(root, context or WalkContext(), sink)
        return sink.words

    def _walk(self, node, context: WalkContext, sink: _WordSink):
        if isinstance(node, NavigableString):
            if not isinstance(node, PreformattedString):
                self._emit_text(str(node), context, sink)
            return

        if not isinstance(node, Tag):
            return

        child_context = self.enter_element(node, context, sink)
        if child_context is None:
            return
        for child in node.children:
            self._walk(child, child_context, sink)

    def enter_element(
        self, el: Tag, context: WalkContext, sink: _WordSink
    ) -> Optional[WalkContext]:
        """Context for the children of ``el``, or None to skip them."""
        rule = self.rules.get(el.name)
        if rule is None:
            return context
        return rule(el, context)

    def _emit_text(self, text: str, context: WalkContext, sink: _WordSink):
        if context.in_note:
            return

        style = SegmentStyle.ADDED if context.is_added else SegmentStyle.PLAIN
        for piece in text.split():
            punctuation = is_punctuation(piece)
            lex = context.lex.copy() if context.lex else None

            if sink.pending_strongs and not punctuation:
                lex = lex or LexicalInfo()
                lex.add_strongs(sink.pending_strongs)
                sink.pending_strongs.clear()

            sink.words.append(Word(
                text=piece,
                style=style,
                is_red=context.is_red,
                is_italic=context.is_italic,
                is_bold=context.is_bold,
                lex=lex,
                is_punctuation=punctuation,
            ))


# =============================================================================
# OSIS Dialect
# =============================================================================

def _osis_w(el: Tag, context: WalkContext) -> WalkContext:
    lemma = el.get("lemma")
    morph = el.get("morph")
    if not lemma and not morph:
        return context
    return replace(context, lex=lexical_info_from_attrs(lemma, morph))


def _osis_q(el: Tag, context: WalkContext) -> WalkContext:
    if el.get("who") == "Jesus":
        return replace(context, is_red=True)
    return context


def _osis_trans_change(el: Tag, context: WalkContext) -> WalkContext:
    if el.get("type") == "added":
        return replace(context, is_added=True)
    return context


def _osis_hi(el: Tag, context: WalkContext) -> WalkContext:
    hi_type = el.get("type")
    if hi_type == "italic":
        return replace(context, is_italic=True)
    if hi_type == "bold":
        return replace(context, is_bold=True)
    return context


def _note(el: Tag, context: WalkContext) -> WalkContext:
    return replace(context, in_note=True)


class OsisWalker(MarkupWalker):
    """Walker for raw OSIS entries."""

    dialect = "osis"
    parser = "xml"
    rules = {
        "w": _osis_w,
        "q": _osis_q,
        "transChange": _osis_trans_change,
        "hi": _osis_hi,
        "note": _note,
    }

    def parse(self, markup: str) -> BeautifulSoup:
        return super().parse(_HTML_ENTITY_RE.sub(_numeric_entity, markup or ""))


def _numeric_entity(match: re.Match) -> str:
    """``&nbsp;`` -> ``&#160;``; the XML builder drops undeclared entities."""
    name = match.group(1)
    if name in XML_ENTITIES:
        return match.group(0)
    codepoint = name2codepoint.get(name)
    if codepoint is None:
        LOG.debug("Unknown entity &%s; left as is", name)
        return match.group(0)
    return f"&#{codepoint};"


# =============================================================================
# HTML Dialect
# =============================================================================

def _html_span(el: Tag, context: WalkContext) -> WalkContext:
    classes = _classes(el)
    if "wordsOfJesus" in classes:
        context = replace(context, is_red=True)
    if "transChange-added" in classes:
        context = replace(context, is_added=True)
    return context


def _html_italic(el: Tag, context: WalkContext) -> WalkContext:
    return replace(context, is_italic=True)


def _html_bold(el: Tag, context: WalkContext) -> WalkContext:
    return replace(context, is_bold=True)


class HtmlWalker(MarkupWalker):
    """
    Walker for entries pre-rendered to HTML.

    Rendered HTML carries Strong's numbers as separate links instead of
    attributes, so a number found in a link is held back and given to the
    next real word.
    """

    dialect = "html"
    parser = "html.parser"
    rules = {
        "span": _html_span,
        "i": _html_italic,
        "em": _html_italic,
        "b": _html_bold,
        "strong": _html_bold,
        "note": _note,
    }

    def enter_element(
        self, el: Tag, context: WalkContext, sink: _WordSink
    ) -> Optional[WalkContext]:
        if el.name == "a":
            number = strongs_from_href(el.get("href"))
            if number:
                if number not in sink.pending_strongs:
                    sink.pending_strongs.append(number)
                return None
        return super().enter_element(el, context, sink)


# =============================================================================
# Dialect Lookup
# =============================================================================

WALKERS: dict[str, MarkupWalker] = {
    OsisWalker.dialect: OsisWalker(),
    HtmlWalker.dialect: HtmlWalker(),
}


def get_walker(dialect: str) -> MarkupWalker:
    """Return the walker for ``"osis"`` or ``"html"``."""
    try:
        return WALKERS[dialect]
    except KeyError:
        raise ValueError(f"Unknown markup dialect: {dialect!r}") from None
