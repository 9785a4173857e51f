# coding: utf-8

from tests.shared import getEmptyCol


def test_basic():
    deck = getEmptyCol()
    # we start with a standard deck
    assert deck.decks.count() == 1
    # it should have an id of 1
    assert deck.decks.name(1) == "Default"
    # create a new deck
    parent = deck.decks.byName("new deck", create=True)
    assert parent
    parentId = parent['id']
    assert deck.decks.count() == 2
    # should get the same id
    assert deck.decks.id("new deck") == parentId
    # names are compared ignoring case
    assert deck.decks.id("NEW DECK") == parentId
    assert deck.decks.byName("New Deck")['name'] == "new deck"
    # without creating
    assert deck.decks.id("other", create=False) is None
    assert deck.decks.count() == 2

def test_names():
    d = getEmptyCol()
    assert d.decks.name(12345) == "[no deck]"
    assert d.decks.name(12345, default=True) == "Default"
    assert d.decks.get(12345, default=False) is None
    assert not d.decks.have(12345)
    # quotes are removed
    did = d.decks.id('"quoted"')
    assert d.decks.name(did) == "quoted"
    assert sorted(d.decks.allNames()) == ["Default", "quoted"]

def test_persisted():
    d = getEmptyCol()
    did = d.decks.id("Kept")
    d2 = getEmptyCol(d.storage)
    assert d2.decks.id("kept", create=False) == did
    # ids are not reused
    assert d2.decks.id("New") not in (1, did)
