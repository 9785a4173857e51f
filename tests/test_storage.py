# coding: utf-8

from microdote.cards import Card
from microdote.errors import StorageError
from microdote.notes import Note
from microdote.storage import MemoryStorage
from microdote.utils import stripHTML
from tests.shared import assertException


def _card(id, nid):
    card = Card(id)
    card.nid = nid
    card.did = 1
    card.templateName = "Card 1"
    card.srs = dict(due=1)
    return card

def test_notes():
    s = MemoryStorage()
    note = Note(typeName="Basic", fields={'Front': "a"}, tags=["x"], id=s.nextID("note"))
    s.addNote(note.row())
    assertException(StorageError, lambda: s.addNote(note.row()))
    loaded = Note().load(s.getNote(note.id))
    assert loaded.fields == {'Front': "a"}
    assert loaded.tags == ["x"]
    assert s.getNote(999) is None
    assert [row['id'] for row in s.getNotesByType("Basic")] == [note.id]
    assert s.getNotesByType("Cloze") == []
    s.remNote(note.id)
    assertException(StorageError, lambda: s.remNote(note.id))
    assertException(StorageError, lambda: s.updateNote(note.row()))

def test_cards():
    s = MemoryStorage()
    s.createCard(_card(5, 1).row())
    s.createCard(_card(2, 1).row())
    s.createCard(_card(3, 2).row())
    # in id order
    assert [row['id'] for row in s.getCardsByNote(1)] == [2, 5]
    # ids given by the caller are not handed out again
    assert s.nextID("card") == 6
    assertException(StorageError, lambda: s.createCard(_card(5, 1).row()))
    assertException(StorageError, lambda: s.deleteCard(42))
    assertException(StorageError, lambda: s.updateCard(_card(42, 1).row()))
    assertException(StorageError, lambda: s.nextID("model"))

def test_rowsAreCopied():
    s = MemoryStorage()
    card = _card(1, 1)
    s.createCard(card.row())
    row = s.getCard(1)
    row['srs']['due'] = 100
    assert s.getCard(1)['srs']['due'] == 1
    loaded = Card().load(s.getCard(1))
    loaded.srs['due'] = 50
    assert s.getCard(1)['srs']['due'] == 1

def test_tags():
    note = Note(typeName="Basic")
    note.addTag("Verb")
    note.addTag("verb")
    assert note.tags == ["Verb"]
    assert note.hasTag("VERB")
    note.addTag("noun")
    assert note.stringTags() == "Verb noun"
    note.delTag("verb")
    assert note.tags == ["noun"]

def test_stripHTML():
    assert stripHTML("<b>a</b>&nbsp;&amp;<!-- c --><style>x</style>") == "a &"
