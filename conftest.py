"""Shared fixtures: small in-memory modules with KJV-style OSIS entries."""

import pytest

from bible_render import InMemoryModule, ModuleInfo, ModuleLibrary


GEN_1_1 = (
    '<div type="paragraph" sID="gen1"/>'
    '<w lemma="strong:H07225" morph="strongMorph:TH8799">In the beginning</w> '
    '<w lemma="strong:H0430">God</w> '
    '<w lemma="strong:H0853 strong:H01254" morph="strongMorph:TH8804">created</w> '
    '<w lemma="strong:H08064">the heaven</w> and <w lemma="strong:H0776">the earth</w>.'
)

GEN_1_2 = (
    'And the earth was without form, and void; and darkness '
    '<transChange type="added">was</transChange> upon the face of the deep.'
    '<note type="translation" n="a"><catchWord>without form…</catchWord>Heb. empty</note>'
)

GEN_1_3 = 'And God said, Let there be light: and there was light.'

GEN_2_1 = 'Thus the heavens and the earth were finished, and all the host of them.'

JOHN_3 = [
    ("John 3:15", 'That whosoever believeth in him should not perish.'),
    ("John 3:16", '<q who="Jesus">For God so loved the world, that he gave his only begotten Son</q>'),
    ("John 3:17", '<q who="Jesus">For God sent not his Son into the world to condemn the world</q>'
                  '<note type="crossReference" osisRef="Luke.9.56">Luke 9:56</note>'),
    ("John 3:18", '<q who="Jesus">He that believeth on him is not condemned</q>'),
]


@pytest.fixture
def genesis():
    return InMemoryModule("KJV", [
        ("Gen 1:1", GEN_1_1),
        ("Gen 1:2", GEN_1_2),
        ("Gen 1:3", GEN_1_3),
        ("Gen 2:1", GEN_2_1),
    ])


@pytest.fixture
def john():
    return InMemoryModule("KJV", JOHN_3)


@pytest.fixture
def library(genesis):
    library = ModuleLibrary()
    library.add_module(genesis)
    library.add_module(InMemoryModule(
        "MHC",
        [("Gen 1:1", "The first verse of the Bible gives us a ...")],
        info=ModuleInfo(name="MHC", category="Commentaries", language="en"),
    ))
    return library
