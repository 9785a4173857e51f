# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import copy

from microdote.errors import StorageError

"""Storage keeps rows: plain dicts, as described in notes.Note.row and
cards.Card.row. A row handed to storage is copied, and so is a row handed
back, so that no object is shared between the storage and its callers.

A note row is composed of:
id, type -- the name of its note type,
flds -- json object from field name to content,
tags -- json array of tags,
crt, mod, usn

A card row is composed of:
id, nid, did, tmpl -- the name of its template,
ord, front, back, srs -- scheduling state,
flags, marked, suspended, usn

A deck row is composed of id and name.
"""

class Storage:
    """The repositories the collection reads from and writes to.

    Every method may raise StorageError."""

    # Ids
    ##########################################################################

    def nextID(self, type):
        "A new id for an object of type 'note', 'card' or 'deck'."
        raise NotImplementedError

    # Note types
    ##########################################################################

    def getModels(self):
        "The JSON registry of note types, or None if never saved."
        raise NotImplementedError

    def setModels(self, json_):
        raise NotImplementedError

    # Decks
    ##########################################################################

    def allDecks(self):
        raise NotImplementedError

    def addDeck(self, row):
        raise NotImplementedError

    # Notes
    ##########################################################################

    def addNote(self, row):
        raise NotImplementedError

    def getNote(self, nid):
        "The row of note nid, or None."
        raise NotImplementedError

    def updateNote(self, row):
        raise NotImplementedError

    def remNote(self, nid):
        raise NotImplementedError

    def getNotesByType(self, typeName):
        "The rows of the notes of this type, in id order."
        raise NotImplementedError

    # Cards
    ##########################################################################

    def createCard(self, row):
        raise NotImplementedError

    def getCard(self, cid):
        "The row of card cid, or None."
        raise NotImplementedError

    def updateCard(self, row):
        raise NotImplementedError

    def deleteCard(self, cid):
        raise NotImplementedError

    def getCardsByNote(self, nid):
        "The rows of the cards of note nid, in id order."
        raise NotImplementedError

    # Review log
    ##########################################################################

    def addRevlog(self, cid, entry):
        raise NotImplementedError


class MemoryStorage(Storage):
    """Storage in dicts, with an increasing integer id per kind of
    object."""

    def __init__(self):
        self._nextIds = {'note': 1, 'card': 1, 'deck': 1}
        self.models = None
        self.decks = {}
        self.notes = {}
        self.cards = {}
        self.revlog = []

    def nextID(self, type):
        if type not in self._nextIds:
            raise StorageError("no ids for %s" % type)
        id = self._nextIds[type]
        self._nextIds[type] = id + 1
        return id

    def _reserve(self, type, id):
        # ids chosen by the caller must not be handed out later
        self._nextIds[type] = max(self._nextIds[type], id + 1)

    # Note types
    ##########################################################################

    def getModels(self):
        return self.models

    def setModels(self, json_):
        self.models = json_

    # Decks
    ##########################################################################

    def allDecks(self):
        return [copy.deepcopy(row) for row in self.decks.values()]

    def addDeck(self, row):
        self.decks[row['id']] = copy.deepcopy(row)
        self._reserve('deck', row['id'])

    # Notes
    ##########################################################################

    def addNote(self, row):
        if row['id'] in self.notes:
            raise StorageError("note %d already exists" % row['id'])
        self.notes[row['id']] = copy.deepcopy(row)
        self._reserve('note', row['id'])

    def getNote(self, nid):
        row = self.notes.get(nid)
        return copy.deepcopy(row) if row is not None else None

    def updateNote(self, row):
        if row['id'] not in self.notes:
            raise StorageError("no note %s" % row['id'])
        self.notes[row['id']] = copy.deepcopy(row)

    def remNote(self, nid):
        if nid not in self.notes:
            raise StorageError("no note %s" % nid)
        del self.notes[nid]

    def getNotesByType(self, typeName):
        return [copy.deepcopy(self.notes[nid]) for nid in sorted(self.notes)
                if self.notes[nid]['type'] == typeName]

    # Cards
    ##########################################################################

    def createCard(self, row):
        if row['id'] in self.cards:
            raise StorageError("card %d already exists" % row['id'])
        self.cards[row['id']] = copy.deepcopy(row)
        self._reserve('card', row['id'])

    def getCard(self, cid):
        row = self.cards.get(cid)
        return copy.deepcopy(row) if row is not None else None

    def updateCard(self, row):
        if row['id'] not in self.cards:
            raise StorageError("no card %s" % row['id'])
        self.cards[row['id']] = copy.deepcopy(row)

    def deleteCard(self, cid):
        if cid not in self.cards:
            raise StorageError("no card %s" % cid)
        del self.cards[cid]

    def getCardsByNote(self, nid):
        return [copy.deepcopy(self.cards[cid]) for cid in sorted(self.cards)
                if self.cards[cid]['nid'] == nid]

    # Review log
    ##########################################################################

    def addRevlog(self, cid, entry):
        self.revlog.append((cid, copy.deepcopy(entry)))
