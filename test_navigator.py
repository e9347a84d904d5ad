"""Tests for chapter rendering and module structure scans."""

from bible_render import InMemoryModule, ModuleBook, ModuleChapter, collect_books, index_module, render
from bible_render.navigator import chapter_boundary, split_key, split_verse_range, verse_number


def keys_only(*keys):
    return InMemoryModule("TEST", [(key, f"text of {key}") for key in keys])


# =============================================================================
# Key Parsing
# =============================================================================

def test_chapter_boundary():
    assert chapter_boundary("Gen 1:3") == "Gen 1"
    assert chapter_boundary("Gen.1.3") == "Gen"
    assert chapter_boundary("Gen 1") == "Gen 1"


def test_verse_number():
    assert verse_number("John 3:16") == 16
    assert verse_number("John.3.16") == 16
    assert verse_number("John 3") == 0
    assert verse_number("Intro") == 0


def test_split_verse_range():
    assert split_verse_range("John 3:16-18") == ("John 3:16", 18)
    assert split_verse_range("Gen.1.1 - 3") == ("Gen.1.1", 3)
    assert split_verse_range("John 3") == ("John 3", None)


def test_split_key():
    assert split_key("1 John 2:3") == ("1 John", 2)
    assert split_key("Song of Solomon 4:7") == ("Song of Solomon", 4)
    assert split_key("Gen.1.1") == ("Gen", 1)
    assert split_key("Jude 1") == ("Jude", 1)
    assert split_key("Intro") == ("Intro", 0)


# =============================================================================
# Rendering
# =============================================================================

def test_render_stops_at_chapter_boundary():
    module = keys_only("Gen 1:1", "Gen 1:2", "Gen 2:1")
    verses = render(module, "Gen 1")
    assert [v.osis_id for v in verses] == ["Gen 1:1", "Gen 1:2"]
    assert module.get_key() == "Gen 2:1"


def test_render_from_a_verse_runs_to_chapter_end(genesis):
    verses = render(genesis, "Gen 1:2")
    assert [v.number for v in verses] == [2, 3]


def test_render_verse_range(john):
    verses = render(john, "John 3:16-17")
    assert [v.number for v in verses] == [16, 17]


def test_render_last_chapter_of_module():
    module = keys_only("Rev 22:20", "Rev 22:21")
    verses = render(module, "Rev 22")
    assert [v.number for v in verses] == [20, 21]


def test_render_osis_style_reference(genesis):
    assert len(render(genesis, "Gen.1")) == 3


def test_render_dotted_keys_runs_to_end_of_book():
    module = keys_only("Gen.1.1", "Gen.1.2", "Gen.2.1", "Exod.1.1")
    verses = render(module, "Gen.1")
    assert [v.osis_id for v in verses] == ["Gen.1.1", "Gen.1.2", "Gen.2.1"]


def test_render_without_module():
    assert render(None, "Gen 1") == []


def test_render_unresolvable_reference(genesis):
    assert render(genesis, "Exod 1") == []


def test_verse_contents(genesis):
    first, second, third = render(genesis, "Gen 1")

    assert first.is_paragraph_start
    assert [w.text for w in first.words[:3]] == ["In", "the", "beginning"]
    assert first.words[2].lex.strongs == ["H07225"]
    assert first.words[-1].text == "." and first.words[-1].is_punctuation

    was = [w for w in second.words if w.text == "was"]
    assert was[1].style.value == "added"
    assert second.notes == ["without form… Heb. empty"]
    assert not second.is_paragraph_start

    assert third.text == "And God said, Let there be light: and there was light."


def test_paragraph_milestone_starts_paragraph():
    module = InMemoryModule("TEST", [
        ("Gen 1:1", "one"),
        ("Gen 1:2", "two"),
        ("Gen 1:3", '<milestone marker="¶" type="x-p"/>three'),
    ])
    assert [v.is_paragraph_start for v in render(module, "Gen 1")] == [True, False, True]


def test_render_html_dialect():
    module = InMemoryModule(
        "TEST",
        [("John 11:35", '<q who="Jesus">raw</q>')],
        html={"John 11:35": 'Jesus <span class="transChange-added">wept</span>.'},
    )
    verse, = render(module, "John 11", dialect="html")
    assert [w.text for w in verse.words] == ["Jesus", "wept", "."]
    assert verse.text == "Jesus wept."
    assert verse.words[1].style.value == "added"


def test_render_can_repeat(genesis):
    assert len(render(genesis, "Gen 1")) == 3
    assert len(render(genesis, "Gen 1")) == 3


# =============================================================================
# Structure Scans
# =============================================================================

def test_index_flushes_final_book():
    module = keys_only("Rev 22:20", "Rev 22:21")
    assert index_module(module) == [ModuleBook("Rev", [ModuleChapter(22, 2)])]


def test_index_books_with_spaces():
    module = keys_only("Jude 1:1", "Jude 1:2", "1 John 1:1", "1 John 2:1", "1 John 2:2")
    books = index_module(module)
    assert books == [
        ModuleBook("Jude", [ModuleChapter(1, 2)]),
        ModuleBook("1 John", [ModuleChapter(1, 1), ModuleChapter(2, 2)]),
    ]
    assert books[1].verse_count == 3


def test_index_after_exhausting_cursor(genesis):
    render(genesis, "Gen 2")
    books = index_module(genesis)
    assert books == [ModuleBook("Gen", [ModuleChapter(1, 3), ModuleChapter(2, 1)])]


def test_index_empty_module():
    assert index_module(keys_only()) == []
    assert index_module(None) == []


def test_collect_books(genesis):
    books = collect_books(genesis)
    assert len(books) == 1
    book = books[0]
    assert book.osis_id == "Gen"
    assert [c.number for c in book.chapters] == ["1", "2"]
    assert [len(c.verses) for c in book.chapters] == [3, 1]
    assert book.chapters[1].verses[0].osis_id == "Gen 2:1"
