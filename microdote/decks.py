# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import unicodedata

from microdote.consts import DEFAULT_DECK_ID, DEFAULT_DECK_NAME

"""This module deals with decks. Card generation only needs to turn the
name of a template's deck override into a deck id.

A deck is a dict composed of:
id -- integer, 1 for the default deck
name -- name of the deck; compared ignoring case
"""

class DeckManager:

    """
    col -- the collection associated to this Deck manager
    decks -- associating to each id its deck
    decksByNames -- associating to each normalized name its deck
    """

    def __init__(self, col):
        """State that the collection of the created object is the first argument."""
        self.col = col
        self.load()

    def load(self):
        self.decks = {}
        self.decksByNames = {}
        for deck in self.col.storage.allDecks():
            self._index(deck)
        if DEFAULT_DECK_ID not in self.decks:
            self._add(dict(id=DEFAULT_DECK_ID, name=DEFAULT_DECK_NAME))

    def _index(self, deck):
        self.decks[deck['id']] = deck
        self.decksByNames[self.normalizeName(deck['name'])] = deck

    def _add(self, deck):
        self.col.storage.addDeck(deck)
        self._index(deck)
        return deck

    # Deck save/load
    #############################################################

    def id(self, name, create=True):
        """Returns a deck's id with a given name. Potentially creates it.

        Keyword arguments:
        name -- the name of the deck. " are removed.
        create -- States whether the deck must be created if it does
        not exists. Default true, otherwise return None
        """
        deck = self.byName(name, create=create)
        if deck:
            return int(deck['id'])

    def byName(self, name, create=False):
        """Get deck with NAME, ignoring case."""
        name = name.replace('"', '')
        name = unicodedata.normalize("NFC", name)
        normalized = self.normalizeName(name)
        if normalized in self.decksByNames:
            return self.decksByNames[normalized]
        if not create:
            return None
        return self._add(dict(id=self.col.storage.nextID("deck"), name=name))

    def get(self, did, default=True):
        """Returns the deck objects whose id is did.

        If Default, return the default deck, otherwise None.

        """
        if did in self.decks:
            return self.decks[did]
        elif default:
            return self.decks[DEFAULT_DECK_ID]

    def have(self, did):
        return did in self.decks

    def name(self, did, default=False):
        """The name of the deck whose id is did.

        If no such deck exists: if default is set to true, then return
        default deck's name. Otherwise return "[no deck]".
        """
        deck = self.get(did, default=default)
        if deck:
            return deck['name']
        return "[no deck]"

    def allNames(self):
        return [deck['name'] for deck in self.decks.values()]

    def count(self):
        """The number of decks."""
        return len(self.decks)

    @staticmethod
    def normalizeName(name):
        return unicodedata.normalize("NFC", name.lower())
