"""Tests for text formatting and the command line interface."""

import json

from bible_render import build_verse
from bible_render.cli import main
from bible_render.formatting import AddedWordStyle, format_verse, format_word

from test_osis_document import CONTAINER_DOC


# =============================================================================
# Formatting
# =============================================================================

def test_brackets_wrap_the_whole_added_run():
    verse = build_verse(
        "Gen 1:2",
        'darkness <transChange type="added">was made</transChange> upon the deep.',
    )
    assert format_verse(verse) == "2 darkness [was made] upon the deep."


def test_italic_marks_every_added_word():
    verse = build_verse("Gen 1:2", 'darkness <transChange type="added">was</transChange> upon')
    assert format_verse(verse, AddedWordStyle.ITALIC) == "2 darkness *was* upon"


def test_format_word_plain():
    verse = build_verse("Gen 1:3", "light")
    assert format_word(verse.words[0]) == "light"


def test_strongs_and_notes_and_paragraph_marker():
    verse = build_verse(
        "Gen 1:1",
        '<w lemma="strong:H0430">God</w> created '
        '<note><catchWord>created</catchWord>Heb. bara</note>'
        '<note type="crossReference" osisRef="John.1.3">John 1:3</note>',
    )
    assert format_verse(verse, show_strongs=True).splitlines() == [
        "¶ 1 God<H0430> created",
        "    - created: created Heb. bara",
        "    - [Cross-Ref: John.1.3] John 1:3",
    ]


def test_punctuation_is_glued():
    verse = build_verse("Gen 1:3", "light ; and there was light .")
    assert format_verse(verse) == "3 light; and there was light."


# =============================================================================
# CLI
# =============================================================================

def test_cli_render(library, capsys):
    assert main(["render", "KJV", "Gen 1:2-3"], library=library) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("2 And the earth was without form, and void; and darkness [was] upon")
    assert out[-1] == "3 And God said, Let there be light: and there was light."


def test_cli_render_option_off(library, capsys):
    assert main(["render", "KJV", "Gen 1:2-2"], library=library) == 0
    assert len(capsys.readouterr().out.splitlines()) == 2

    assert main(["render", "KJV", "Gen 1:2-2", "--off", "Footnotes"], library=library) == 0
    assert len(capsys.readouterr().out.splitlines()) == 1


def test_cli_render_json(library, capsys):
    assert main(["render", "KJV", "Gen 2", "--json"], library=library) == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0]["osis_id"] == "Gen 2:1"
    assert data[0]["words"][0]["style"] == "plain"


def test_cli_render_nothing_found(library, capsys):
    assert main(["render", "KJV", "Exod 1"], library=library) == 0
    assert "Nothing found" in capsys.readouterr().out


def test_cli_unknown_module(library, capsys):
    assert main(["render", "NOPE", "Gen 1"], library=library) == 1
    assert "Unknown module" in capsys.readouterr().err


def test_cli_modules(library, capsys):
    assert main(["modules"], library=library) == 0
    out = capsys.readouterr().out
    assert "KJV" in out and "Commentaries" in out


def test_cli_index(library, capsys):
    assert main(["index", "KJV"], library=library) == 0
    assert capsys.readouterr().out.strip() == "Gen: 2 chapters, 4 verses"


def test_cli_missing_sword_path(tmp_path, capsys):
    assert main(["--path", str(tmp_path / "nowhere"), "modules"]) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_osis(tmp_path, capsys):
    path = tmp_path / "kjv.osis.xml"
    path.write_text(CONTAINER_DOC, encoding="utf-8")

    assert main(["osis", str(path)]) == 0
    out = capsys.readouterr().out
    assert "King James Version (1769)" in out
    assert "Gen" in out and "GENESIS" in out

    assert main(["osis", str(path), "Gen.1", "--strongs"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "¶ 1 In<H07225> the<H07225> beginning<H07225> God created the heaven and the earth."


def test_cli_osis_missing_file(tmp_path, capsys):
    assert main(["osis", str(tmp_path / "missing.xml")]) == 1
