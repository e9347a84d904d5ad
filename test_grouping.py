"""Tests for added / red-letter group boundaries."""

from bible_render import SegmentStyle, Word, build_verse, mark_groups


ADDED = SegmentStyle.ADDED


def flags(words):
    return [(w.is_first_in_group, w.is_last_in_group) for w in words]


def test_added_run():
    words = [Word("the"), Word("was", ADDED), Word("made", ADDED), Word("light")]
    mark_groups(words)
    assert flags(words) == [(False, False), (True, False), (False, True), (False, False)]


def test_single_word_groups_at_edges():
    words = [Word("it", ADDED), Word("is"), Word("finished", is_red=True)]
    mark_groups(words)
    assert flags(words) == [(True, True), (False, False), (True, True)]


def test_red_run_around_added_word():
    words = [
        Word("Peace", is_red=True),
        Word("be", ADDED, is_red=True),
        Word("unto", is_red=True),
        Word("you", is_red=True),
    ]
    mark_groups(words)
    # The added word is its own group; the red run continues across it
    assert flags(words) == [(True, False), (True, True), (False, False), (False, True)]


def test_empty_list():
    assert mark_groups([]) == []


def test_first_in_group_follows_a_different_word():
    verse = build_verse(
        "Matt 5:3",
        'And he said, <q who="Jesus">Blessed <transChange type="added">are</transChange> the poor '
        'in spirit</q> for <transChange type="added">theirs</transChange> <transChange type="added">is</transChange> the kingdom',
    )
    words = verse.words
    for i, word in enumerate(words):
        if not word.is_first_in_group or i == 0:
            continue
        previous = words[i - 1]
        if word.style == ADDED:
            assert previous.style != ADDED
        else:
            assert not previous.is_red

    theirs, is_ = words[-4], words[-3]
    assert (theirs.text, is_.text) == ("theirs", "is")
    assert theirs.is_first_in_group and not theirs.is_last_in_group
    assert is_.is_last_in_group and not is_.is_first_in_group
