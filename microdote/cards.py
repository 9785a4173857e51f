# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import copy
from collections import namedtuple

from microdote.consts import FLAG_MAX, FLAG_NONE

CardDraft = namedtuple("CardDraft", "nid templateName ord front back")
"""A card as the templates would render it, before it has an id, a deck
or a scheduling state."""


class Card:

    """
    Cards are what you review.
    There can be multiple cards for each note, as determined by the templates.

    id -- the id of the card
    nid -- The card's note's id
    did -- The card's deck id
    templateName -- name of the template which generated the card
    ord -- 0 for a card of a standard template, the cloze number otherwise.
        -- (templateName, ord) identifies the card among its note's cards
    front -- the rendered question
    back -- the rendered answer
    srs -- scheduling state. Only the scheduler reads it
    flags -- 0 for no flag, 1 to 7 for a colored flag
    marked -- whether the user marked the card
    suspended -- whether the card is excluded from study
    usn -- update sequence number
    """

    def __init__(self, id=None):
        self.id = id
        self.nid = None
        self.did = None
        self.templateName = None
        self.ord = 0
        self.front = ""
        self.back = ""
        self.srs = None
        self.flags = FLAG_NONE
        self.marked = False
        self.suspended = False
        self.usn = 0

    def load(self, row):
        """Fill the card from a storage row."""
        (self.id,
         self.nid,
         self.did,
         self.templateName,
         self.ord,
         self.front,
         self.back,
         self.flags,
         self.marked,
         self.suspended,
         self.usn) = (row['id'], row['nid'], row['did'], row['tmpl'],
                      row['ord'], row['front'], row['back'], row['flags'],
                      row['marked'], row['suspended'], row['usn'])
        self.srs = copy.deepcopy(row['srs'])
        return self

    def row(self):
        """The storage row of this card."""
        return dict(id=self.id, nid=self.nid, did=self.did,
                    tmpl=self.templateName, ord=self.ord, front=self.front,
                    back=self.back, srs=copy.deepcopy(self.srs),
                    flags=self.flags, marked=self.marked,
                    suspended=self.suspended, usn=self.usn)

    def key(self):
        """The identity of the card among its note's cards."""
        return (self.templateName, self.ord)

    def userFlag(self):
        return self.flags & 0b111

    def setUserFlag(self, flag):
        assert 0 <= flag <= FLAG_MAX
        self.flags = (self.flags & ~0b111) | flag

    def __repr__(self):
        return "<Card %s of note %s: %s/%d>" % (
            self.id, self.nid, self.templateName, self.ord)
