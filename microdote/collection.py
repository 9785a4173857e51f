# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import copy
import os
import pprint
import traceback
from collections import namedtuple

import microdote.find
from microdote.cards import Card
from microdote.compiler import CardCompiler
from microdote.consts import FLAG_MAX, RATING_AGAIN, RATING_EASY
from microdote.decks import DeckManager
from microdote.errors import MicrodoteError, StorageError
from microdote.hooks import runHook
from microdote.models import ModelManager
from microdote.notes import Note
from microdote.reconcile import ReconciliationEngine
from microdote.sched import Scheduler
from microdote.stdmodels import addStdModels
from microdote.storage import MemoryStorage
from microdote.utils import devMode, intTime

defaultConf = {
    'curDeck': 1,
    'curModel': None,
    'nextPos': 1,
    'regenOnEdit': True,
}

RegenReport = namedtuple("RegenReport", "total succeeded failed cancelled errors")
"""The outcome of regenerating the cards of every note of a note type.

total -- number of notes of the type
succeeded, failed -- number of notes whose cards were, or couldn't be,
                     regenerated
cancelled -- whether the regeneration stopped before the last note
errors -- list of (note id, message), one for each failure
"""

class Collection:
    """A collection is, basically, everything that composed an account.

    This object is usually denoted col

    storage -- where notes, cards, decks and the note type registry are
    sched -- the scheduler, which gives new cards their scheduling state
    conf -- configuration options, see below
    models -- the note type manager
    decks -- the deck manager

    conf:
    "curDeck": "The id of the deck new cards go to when none is given",
    "curModel": "The name of the last note type used to add a note",
    "nextPos": "The position the next new card would take",
    "regenOnEdit": "Whether editing a note type regenerates its cards"
    """

    def __init__(self, storage=None, sched=None, logPath=None):
        self.storage = storage or MemoryStorage()
        self.sched = sched or Scheduler()
        self.path = logPath
        self._debugLog = bool(logPath)
        self._usn = 0
        self.conf = copy.deepcopy(defaultConf)
        self._openLog()
        self.compiler = CardCompiler()
        self.reconciler = ReconciliationEngine(self)
        self.decks = DeckManager(self)
        self.models = ModelManager(self)
        self.load()

    def load(self):
        json_ = self.storage.getModels()
        self.models.load(json_)
        if json_ is None:
            addStdModels(self)
            self.models.flush()
        self.log("open collection with %d note types" % len(self.models.all()))

    def save(self):
        "Write the note type registry to storage if it changed."
        self.models.flush()

    def close(self, save=True):
        "Save if asked, and stop logging."
        if save:
            self.save()
        self._closeLog()

    def usn(self):
        """The update sequence number of the last modification. It only
        grows: each modification of a note or a card takes the next one."""
        return self._usn

    def _nextUsn(self):
        self._usn += 1
        return self._usn

    # Notes
    ##########################################################################

    def newNote(self, model=None):
        "Return a new note with the fields of model, or of the current note type."
        model = model or self.models.current()
        return Note(typeName=model.getName(),
                    fields=dict((name, "") for name in model['flds']))

    def getNote(self, nid):
        row = self.storage.getNote(nid)
        if row is None:
            raise MicrodoteError("unknownNote", id=nid)
        return Note().load(row)

    def addNote(self, note, did=None, now=None):
        """Add a note to the collection, and create its cards. Return
        number of new cards.

        A note which generates no card is added anyway.

        Keyword arguments:
        did -- deck of the cards whose template has no deck override.
               Default conf['curDeck']
        now -- creation time of the cards. Default now
        """
        model = self.models.byName(note.typeName)
        if model is None:
            raise MicrodoteError("unknownNoteType", name=note.typeName)
        did = did or self.conf['curDeck']
        now = now or intTime()
        note.id = self.storage.nextID("note")
        note.crt = note.mod = now
        drafts = self.compiler.compile(model, note)
        note.usn = self._nextUsn()
        self.storage.addNote(note.row())
        # nothing to preserve: every draft is new
        for draft in drafts:
            card = self.reconciler.newCard(draft, model, did, now, note.usn)
            self.storage.createCard(card.row())
        self.conf['curModel'] = model.getName()
        self.conf['nextPos'] += 1
        self.log("note %d added with %d cards" % (note.id, len(drafts)))
        return len(drafts)

    def updateNote(self, note, now=None):
        """Save the edited fields and tags of note, and reconcile its
        cards with them. Return the Reconciliation applied."""
        if self.storage.getNote(note.id) is None:
            raise MicrodoteError("unknownNote", id=note.id)
        model = self.models.byName(note.typeName)
        if model is None:
            raise MicrodoteError("unknownNoteType", name=note.typeName)
        note.mod = intTime()
        note.usn = self._nextUsn()
        self.storage.updateNote(note.row())
        return self.regenerateNote(note, model, now)

    def remNotes(self, ids):
        """Removes the notes whose id is in ids and all their cards."""
        cids = []
        for nid in ids:
            cids += [row['id'] for row in self.storage.getCardsByNote(nid)]
        self.remCards(cids, notes=False)
        self._remNotes(ids)

    def _remNotes(self, ids):
        "Bulk delete notes by ID. Don't call this directly."
        if not ids:
            return
        runHook("remNotes", self, ids)
        for nid in ids:
            self.storage.remNote(nid)

    def noteCount(self):
        return sum(self.models.useCount(model) for model in self.models.all())

    # Card generation
    ##########################################################################

    def regenerateNote(self, note, model=None, now=None):
        """Make the cards of note those its note type currently generates.

        New cards go to the deck of the note's first card, or to
        conf['curDeck'] if it has none. Return the Reconciliation
        applied."""
        model = model or self.models.byName(note.typeName)
        existing = self.cardsOfNote(note.id)
        did = existing[0].did if existing else self.conf['curDeck']
        drafts = self.compiler.compile(model, note)
        # cards only take a new usn if something changed
        rec = self.reconciler.reconcile(existing, drafts, model, did,
                                        now or intTime(), self._usn + 1)
        if any(rec):
            self._nextUsn()
        for card in rec.toCreate:
            self.storage.createCard(card.row())
        for card in rec.toUpdate:
            self.storage.updateCard(card.row())
        self.remCards([card.id for card in rec.toDelete], notes=False)
        return rec

    def regenerateCards(self, model, shouldCancel=None, now=None):
        """Regenerate the cards of every note of note type model, one
        note at a time. Return a RegenReport.

        A note whose cards can't be stored is counted as failed, and
        the next notes are still regenerated.

        Keyword arguments:
        shouldCancel -- a function without argument, called before each
                        note. When it returns true, the remaining notes are
                        left as they are
        """
        rows = self.storage.getNotesByType(model.getName())
        succeeded = 0
        errors = []
        cancelled = False
        for row in rows:
            if shouldCancel and shouldCancel():
                cancelled = True
                break
            try:
                self.regenerateNote(Note().load(row), model, now)
            except (StorageError, ValueError) as e:
                self.log("failed to regenerate cards of note %s: %s" % (row['id'], e))
                errors.append((row['id'], str(e)))
            else:
                succeeded += 1
        report = RegenReport(len(rows), succeeded, len(errors), cancelled, errors)
        self.log("regenerated cards of %s" % model.getName(), report)
        runHook("cardsRegenerated", model, report)
        return report

    # Cards
    ##########################################################################

    def getCard(self, id):
        row = self.storage.getCard(id)
        if row is None:
            raise MicrodoteError("unknownCard", id=id)
        return Card().load(row)

    def cardsOfNote(self, nid):
        """The cards of note nid, oldest first."""
        return [Card().load(row) for row in self.storage.getCardsByNote(nid)]

    def remCards(self, ids, notes=True):
        """Bulk delete cards by ID.

        keyword arguments:
        notes -- whether note without cards should be deleted."""
        if not ids:
            return
        nids = set(self.getCard(cid).nid for cid in ids)
        runHook("remCards", self, ids)
        for cid in ids:
            self.storage.deleteCard(cid)
        # then notes
        if not notes:
            return
        self._remNotes([nid for nid in sorted(nids)
                        if not self.storage.getCardsByNote(nid)])

    def emptyCards(self):
        """The cards with nothing left to study. See find.findEmptyCards."""
        return microdote.find.findEmptyCards(self)

    def remEmptyCards(self, cids):
        """Delete the cards in cids, keeping their notes.

        Return a pair (number of deleted cards, list of error messages)."""
        deleted = 0
        failed = []
        runHook("remCards", self, cids)
        for cid in cids:
            try:
                self.storage.deleteCard(cid)
            except StorageError as e:
                self.log("couldn't delete empty card %s: %s" % (cid, e))
                failed.append("card %s: %s" % (cid, e.description))
            else:
                deleted += 1
        return deleted, failed

    def findDupes(self, *args, **kwargs):
        return microdote.find.findDupes(self, *args, **kwargs)

    # Card user actions
    ##########################################################################

    def _updateCards(self, cids, fn):
        for cid in cids:
            card = self.getCard(cid)
            fn(card)
            card.usn = self._nextUsn()
            self.storage.updateCard(card.row())

    def setUserFlag(self, flag, cids):
        assert 0 <= flag <= FLAG_MAX
        self._updateCards(cids, lambda card: card.setUserFlag(flag))

    def markCards(self, cids, mark=True):
        def setMarked(card):
            card.marked = mark
        self._updateCards(cids, setMarked)

    def suspendCards(self, cids, suspend=True):
        def setSuspended(card):
            card.suspended = suspend
        self._updateCards(cids, setSuspended)

    def answerCard(self, card, rating, now=None):
        """Answer card with rating, from RATING_AGAIN to RATING_EASY.

        The scheduler computes the new state; it is saved with the review
        log entry."""
        assert RATING_AGAIN <= rating <= RATING_EASY
        state, entry = self.sched.answer(card.srs, rating, now or intTime())
        card.srs = state
        card.usn = self._nextUsn()
        self.storage.updateCard(card.row())
        self.storage.addRevlog(card.id, entry)
        return card

    # Logging
    ##########################################################################

    def log(self, *args, **kwargs):
        """Generate the string [time] path:fn(): args list

        if args is not string, it is represented using pprint.pformat

        if self._debugLog is True, it is added to _logHnd
        if devMode is True, this string is printed
        """
        if not self._debugLog and not devMode:
            return
        def customRepr(arg):
            if isinstance(arg, str):
                return arg
            return pprint.pformat(arg)
        path, num, fn, y = traceback.extract_stack(
            limit=2+kwargs.get("stack", 0))[0]
        buf = "[%s] %s:%s(): %s" % (intTime(), os.path.basename(path), fn,
                                     ", ".join([customRepr(arg) for arg in args]))
        if self._debugLog:
            self._logHnd.write(buf + "\n")
        if devMode:
            print(buf)

    def _openLog(self):
        if not self._debugLog:
            return
        lpath = self.path
        if os.path.exists(lpath) and os.path.getsize(lpath) > 10*1024*1024:
            lpath2 = lpath + ".old"
            if os.path.exists(lpath2):
                os.unlink(lpath2)
            os.rename(lpath, lpath2)
        self._logHnd = open(lpath, "a", encoding="utf8")

    def _closeLog(self):
        if not self._debugLog:
            return
        self._logHnd.close()
        self._logHnd = None
