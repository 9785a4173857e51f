# coding: utf-8

import os

from microdote.consts import CARD_NEW, QUEUE_NEW, RATING_GOOD
from microdote.errors import MicrodoteError, StorageError
from microdote.hooks import addHook, remHook
from microdote.notes import Note
from microdote.sched import Scheduler
from microdote.storage import MemoryStorage
from tests.shared import addNote, assertException, getEmptyCol


class FailingStorage(MemoryStorage):
    "Storage refusing to write the cards of some notes."

    def __init__(self):
        super().__init__()
        self.failing = set()

    def _check(self, row):
        if row['nid'] in self.failing:
            raise StorageError("disk full")

    def createCard(self, row):
        self._check(row)
        super().createCard(row)

    def updateCard(self, row):
        self._check(row)
        super().updateCard(row)


class ReviewScheduler(Scheduler):
    name = "review"

    def answer(self, state, rating, now):
        state = dict(state, reps=state['reps'] + 1, due=now + 86400)
        return state, dict(ease=rating, time=now)


def test_create():
    d = getEmptyCol()
    assert d.decks.name(1) == "Default"
    assert d.conf['curDeck'] == 1
    assert d.models.current()
    assert d.noteCount() == 0

def test_addNote():
    d = getEmptyCol()
    note = d.newNote(d.models.byName("Basic"))
    assert note.keys() == ["Front", "Back"]
    note['Front'] = "one"
    note['Back'] = "two"
    assert d.addNote(note, now=1000) == 1
    assert note.id
    assert d.conf['curModel'] == "Basic"
    (card,) = d.cardsOfNote(note.id)
    assert card.nid == note.id
    assert card.did == 1
    assert card.front == "Q: one"
    assert card.back == "A: two"
    assert card.srs['queue'] == QUEUE_NEW
    assert card.srs['type'] == CARD_NEW
    assert card.srs['due'] == 1000
    assert d.getCard(card.id).front == "Q: one"

def test_addNoteWithoutCards():
    d = getEmptyCol()
    note = addNote(d, "Cloze", Text="no deletion")
    assert d.cardsOfNote(note.id) == []
    assert d.getNote(note.id)['Text'] == "no deletion"

def test_addNoteUnknownType():
    d = getEmptyCol()
    note = Note(typeName="Nope", fields={'Front': "x"})
    assertException(MicrodoteError, lambda: d.addNote(note))
    assert d.noteCount() == 0

def test_addNoteDeck():
    d = getEmptyCol()
    did = d.decks.id("Spanish")
    note = addNote(d, "Basic (and reversed card)", did=did, Front="a", Back="b")
    assert [c.did for c in d.cardsOfNote(note.id)] == [did, did]
    d.conf['curDeck'] = did
    note = addNote(d, "Basic", Front="c")
    assert d.cardsOfNote(note.id)[0].did == did

def test_updateNote():
    d = getEmptyCol()
    note = addNote(d, "Cloze", Text="{{c1::a}} {{c2::b}}")
    c1, c2 = d.cardsOfNote(note.id)
    note['Text'] = "{{c1::a}} c {{c3::d}}"
    rec = d.updateNote(note)
    assert [c.ord for c in rec.toCreate] == [3]
    assert [c.ord for c in rec.toDelete] == [2]
    assert [c.ord for c in rec.toUpdate] == [1]
    cards = d.cardsOfNote(note.id)
    assert [c.ord for c in cards] == [1, 3]
    assert cards[0].id == c1.id
    assert cards[0].srs == c1.srs
    assert "c" in cards[0].back
    # updating again changes nothing
    rec = d.updateNote(note)
    assert rec == ([], [], [])

def test_updateUnknownNote():
    d = getEmptyCol()
    note = Note(typeName="Basic", fields={}, id=77)
    assertException(MicrodoteError, lambda: d.updateNote(note))
    assertException(MicrodoteError, lambda: d.getNote(77))
    assertException(MicrodoteError, lambda: d.getCard(77))

def test_updateNoteUnknownType():
    d = getEmptyCol()
    note = addNote(d, "Basic", Front="a", Back="b")
    note.typeName = "Nope"
    note["Front"] = "changed"
    assertException(MicrodoteError, lambda: d.updateNote(note))
    # nothing was written
    stored = d.getNote(note.id)
    assert stored.typeName == "Basic"
    assert stored["Front"] == "a"

def test_regenerationUsesDeckOfFirstCard():
    d = getEmptyCol()
    did = d.decks.id("Other")
    note = addNote(d, "Basic (optional reversed card)", did=did, Front="a", Back="b")
    note['Add Reverse'] = "y"
    d.updateNote(note)
    assert [c.did for c in d.cardsOfNote(note.id)] == [did, did]

def test_regenerateCards():
    d = getEmptyCol()
    notes = [addNote(d, "Basic", Front=str(i), Back="b") for i in range(3)]
    m = d.models.byName("Basic")
    reports = []
    def onRegen(model, report):
        reports.append((model.getName(), report))
    addHook("cardsRegenerated", onRegen)
    try:
        report = d.models.updateTemplate(m, "Card 1", qfmt="{{Front}}!")
    finally:
        remHook("cardsRegenerated", onRegen)
    assert report.total == 3
    assert report.succeeded == 3
    assert report.failed == 0
    assert not report.cancelled
    assert reports == [("Basic", report)]
    assert [d.cardsOfNote(n.id)[0].front for n in notes] == ["0!", "1!", "2!"]

def test_regenerateCardsPartialFailure():
    storage = FailingStorage()
    d = getEmptyCol(storage)
    notes = [addNote(d, "Basic", Front=str(i), Back="b") for i in range(3)]
    storage.failing.add(notes[1].id)
    m = d.models.byName("Basic")
    report = d.models.updateTemplate(m, "Card 1", qfmt="{{Front}}!")
    assert report.total == 3
    assert report.succeeded == 2
    assert report.failed == 1
    assert report.errors[0][0] == notes[1].id
    assert "disk full" in report.errors[0][1]
    # the others were regenerated anyway
    assert d.cardsOfNote(notes[0].id)[0].front == "0!"
    assert d.cardsOfNote(notes[1].id)[0].front == "Q: 1"
    assert d.cardsOfNote(notes[2].id)[0].front == "2!"

def test_regenerateCardsCancelled():
    d = getEmptyCol()
    d.conf['regenOnEdit'] = False
    notes = [addNote(d, "Basic", Front=str(i), Back="b") for i in range(3)]
    m = d.models.byName("Basic")
    d.models.updateTemplate(m, "Card 1", qfmt="{{Front}}!")
    calls = []
    def shouldCancel():
        calls.append(1)
        return len(calls) > 2
    report = d.regenerateCards(m, shouldCancel=shouldCancel)
    assert report.cancelled
    assert report.total == 3
    assert report.succeeded == 2
    assert report.failed == 0
    assert d.cardsOfNote(notes[1].id)[0].front == "1!"
    # the last note was left as it was
    assert d.cardsOfNote(notes[2].id)[0].front == "Q: 2"

def test_unreadableNoteCountsAsFailure():
    d = getEmptyCol()
    notes = [addNote(d, "Basic", Front=str(i), Back="b") for i in range(2)]
    d.storage.notes[notes[0].id]['flds'] = "{broken"
    report = d.regenerateCards(d.models.byName("Basic"))
    assert (report.succeeded, report.failed) == (1, 1)

def test_nonTextFieldCountsAsFailure():
    d = getEmptyCol()
    notes = [addNote(d, "Basic", Front=str(i), Back="b") for i in range(2)]
    d.storage.notes[notes[0].id]["flds"] = '{"Front": 5, "Back": "1"}'
    report = d.regenerateCards(d.models.byName("Basic"))
    assert (report.total, report.succeeded, report.failed) == (2, 1, 1)
    assert report.errors[0][0] == notes[0].id
    assertException(ValueError, lambda: d.getNote(notes[0].id))

def test_remNotes():
    d = getEmptyCol()
    note = addNote(d, "Basic (and reversed card)", Front="a", Back="b")
    removed = []
    def onRem(col, cids):
        removed.extend(cids)
    addHook("remCards", onRem)
    try:
        d.remNotes([note.id])
    finally:
        remHook("remCards", onRem)
    assert len(removed) == 2
    assert d.storage.getNote(note.id) is None
    assert d.cardsOfNote(note.id) == []

def test_remCardsRemovesEmptyNotes():
    d = getEmptyCol()
    note = addNote(d, "Basic (and reversed card)", Front="a", Back="b")
    c1, c2 = d.cardsOfNote(note.id)
    d.remCards([c1.id])
    assert d.getNote(note.id)
    d.remCards([c2.id])
    assert d.storage.getNote(note.id) is None

def test_flags():
    d = getEmptyCol()
    note = addNote(d, "Basic", Front="a", Back="b")
    card = d.cardsOfNote(note.id)[0]
    d.setUserFlag(2, [card.id])
    assert d.getCard(card.id).userFlag() == 2
    d.setUserFlag(0, [card.id])
    assert d.getCard(card.id).userFlag() == 0
    assertException(AssertionError, lambda: d.setUserFlag(8, [card.id]))
    d.markCards([card.id])
    d.suspendCards([card.id])
    card = d.getCard(card.id)
    assert card.marked and card.suspended
    # content and identity are untouched
    assert (card.front, card.templateName, card.ord) == ("Q: a", "Card 1", 0)
    # and survive regeneration
    note['Front'] = "changed"
    d.updateNote(note)
    card = d.getCard(card.id)
    assert card.marked and card.suspended
    assert card.front == "Q: changed"
    d.markCards([card.id], mark=False)
    assert not d.getCard(card.id).marked

def test_answerCard():
    d = getEmptyCol(sched=ReviewScheduler())
    note = addNote(d, "Basic", Front="a", Back="b")
    card = d.cardsOfNote(note.id)[0]
    d.answerCard(card, RATING_GOOD, now=5000)
    card = d.getCard(card.id)
    assert card.srs['reps'] == 1
    assert card.srs['due'] == 5000 + 86400
    assert d.storage.revlog == [(card.id, dict(ease=RATING_GOOD, time=5000))]
    # the state survives content changes
    note['Back'] = "other"
    d.updateNote(note)
    assert d.getCard(card.id).srs['reps'] == 1

def test_answerWithoutBackend():
    d = getEmptyCol()
    note = addNote(d, "Basic", Front="a", Back="b")
    card = d.cardsOfNote(note.id)[0]
    assertException(NotImplementedError, lambda: d.answerCard(card, RATING_GOOD))

def test_usn():
    d = getEmptyCol()
    assert d.usn() == 0
    note = addNote(d, "Basic", Front="a", Back="b")
    card = d.cardsOfNote(note.id)[0]
    assert card.usn == d.usn() > 0
    # a content change takes a new usn
    before = card.usn
    note["Front"] = "changed"
    d.updateNote(note)
    card = d.getCard(card.id)
    assert card.usn > before
    assert d.getNote(note.id).usn > before
    # so do user actions
    before = card.usn
    d.markCards([card.id])
    assert d.getCard(card.id).usn > before
    before = d.usn()
    d.setUserFlag(1, [card.id])
    d.suspendCards([card.id])
    assert d.getCard(card.id).usn == before + 2

def test_usnUnchangedCards():
    d = getEmptyCol()
    note = addNote(d, "Basic (and reversed card)", Front="a", Back="b")
    c1, c2 = d.cardsOfNote(note.id)
    note.addTag("x")
    d.updateNote(note)
    assert [c.usn for c in d.cardsOfNote(note.id)] == [c1.usn, c2.usn]
    # only the cards showing Back change
    note["Back"] = "other"
    d.updateNote(note)
    n1, n2 = d.cardsOfNote(note.id)
    assert n1.usn > c1.usn
    assert n2.usn > c2.usn
    d.models.updateTemplate(d.models.byName("Basic (and reversed card)"),
                            "Card 1", qfmt="{{Front}}?")
    assert d.cardsOfNote(note.id)[1].usn == n2.usn
    assert d.cardsOfNote(note.id)[0].usn > n1.usn

def test_log(tmp_path):
    path = str(tmp_path / "collection.log")
    d = getEmptyCol(logPath=path)
    addNote(d, "Basic", Front="a", Back="b")
    d.close()
    with open(path, encoding="utf8") as file:
        log = file.read()
    assert "open collection" in log
    assert "added with 1 cards" in log

def test_logRotation(tmp_path):
    path = str(tmp_path / "collection.log")
    with open(path, "w") as file:
        file.write("x" * (10*1024*1024 + 1))
    d = getEmptyCol(logPath=path)
    d.close()
    assert os.path.exists(path + ".old")
    assert os.path.getsize(path) < 1024
