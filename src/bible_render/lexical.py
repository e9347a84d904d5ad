"""Strong's number, lemma and morphology extraction from markup attributes."""

import logging
import re
from typing import Optional

from .models import LexicalInfo


LOG = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

STRONG_PREFIX = "strong:"
TR_LEMMA_PREFIX = "lemma.TR:"

PARTS_OF_SPEECH = {
    "N": "Noun",
    "V": "Verb",
    "A": "Adjective",
    "R": "Pronoun",
    "D": "Adverb",
    "P": "Preposition",
    "C": "Conjunction",
    "I": "Interjection",
}

# Case, number and gender markers after the part of speech
MORPH_MARKERS = {
    "N": "Nominative",
    "G": "Genitive",
    "D": "Dative",
    "A": "Accusative",
    "S": "Singular",
    "P": "Plural",
    "M": "Masculine",
    "F": "Feminine",
}

NEUTER = "Neuter"

_HREF_STRONG_RE = re.compile(r"(\d+)\s*$")


# =============================================================================
# Strong's Numbers & Lemmas
# =============================================================================

def parse_strongs(lemma_attr: Optional[str]) -> list[str]:
    """
    Extract Strong's numbers from an OSIS ``lemma`` attribute.

    >>> parse_strongs("strong:G3588 lemma.TR:ὁ strong:G3056")
    ['G3588', 'G3056']
    """
    strongs: list[str] = []
    for token in (lemma_attr or "").split():
        if not token.startswith(STRONG_PREFIX):
            continue
        number = token[len(STRONG_PREFIX):]
        if number and number not in strongs:
            strongs.append(number)
    return strongs


def parse_tr_lemma(lemma_attr: Optional[str]) -> Optional[str]:
    """Return the Textus Receptus lemma from a ``lemma`` attribute, if any."""
    for token in (lemma_attr or "").split():
        if token.startswith(TR_LEMMA_PREFIX):
            return token[len(TR_LEMMA_PREFIX):] or None
    return None


def strongs_from_href(href: Optional[str]) -> Optional[str]:
    """
    Turn a rendered-HTML Strong's link into a Strong's number.

    Ids with a leading zero are Hebrew, everything else Greek:
    ``...showStrongs&type=Hebrew&value=07225`` gives ``H07225``.
    """
    if not href or "showStrong" not in href:
        return None
    match = _HREF_STRONG_RE.search(href)
    if not match:
        return None
    number = match.group(1)
    prefix = "H" if number.startswith("0") else "G"
    return f"{prefix}{number}"


# =============================================================================
# Morphology
# =============================================================================

def decode_morph(code: Optional[str]) -> str:
    """
    Decode a morphological code into a readable description.

    Only the part after the final ``:`` is decoded. The first character is
    the part of speech, the rest are read one by one as case, number and
    gender markers. ``N`` is ambiguous: in the last position of a noun code
    it means Neuter, anywhere else Nominative.

    >>> decode_morph("robinson:N-DSM")
    'Noun, Dative, Singular, Masculine'
    """
    if not code:
        return code or ""

    body = code.rsplit(":", 1)[-1]
    if not body:
        return ""

    parts: list[str] = []
    pos = PARTS_OF_SPEECH.get(body[0])
    if pos:
        parts.append(pos)

    rest = body[1:]
    if rest.count("N") > 1:
        LOG.debug("Morph code %r has more than one ambiguous 'N'", code)

    last = len(rest) - 1
    for idx, char in enumerate(rest):
        if char == "N" and idx == last and "Noun" in parts:
            parts.append(NEUTER)
            continue
        marker = MORPH_MARKERS.get(char)
        if marker:
            parts.append(marker)

    return ", ".join(parts)


# =============================================================================
# Attribute Bundles
# =============================================================================

def lexical_info_from_attrs(
    lemma_attr: Optional[str], morph_attr: Optional[str]
) -> LexicalInfo:
    """Build the lexical info carried by an OSIS ``w`` element."""
    morph = decode_morph(morph_attr) if morph_attr else None
    return LexicalInfo(
        strongs=parse_strongs(lemma_attr),
        lemma=parse_tr_lemma(lemma_attr),
        morph=morph or None,
        morph_code=morph_attr or None,
    )
