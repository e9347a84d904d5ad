"""Marks the first and last word of each added or red-letter run."""

from .models import SegmentStyle, Word


def _is_added(word: Word) -> bool:
    return word.style == SegmentStyle.ADDED


def _is_red(word: Word) -> bool:
    return word.is_red


def mark_groups(words: list[Word]) -> list[Word]:
    """
    Set ``is_first_in_group`` / ``is_last_in_group`` in place.

    Added words are grouped with their added neighbours. Only words that are
    not added are grouped by red-letter status, so an added word inside a
    red-letter quote forms its own group.
    """
    last = len(words) - 1
    for i, word in enumerate(words):
        same = _is_added if _is_added(word) else _is_red
        if not same(word):
            continue
        if i == 0 or not same(words[i - 1]):
            word.is_first_in_group = True
        if i == last or not same(words[i + 1]):
            word.is_last_in_group = True
    return words
