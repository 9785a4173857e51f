# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from collections import namedtuple

from microdote.cards import Card
from microdote.consts import CLOZE_FIELD
from microdote.notes import Note
from microdote.template import extractOrdinals
from microdote.utils import stripHTML

NoteBrief = namedtuple("NoteBrief", "id typeName fields")

EmptyCard = namedtuple("EmptyCard", "cid nid did templateName ord front back reason")

def _notes(col, typeName):
    """The notes of type typeName, skipping the ones whose stored fields
    can't be read."""
    for row in col.storage.getNotesByType(typeName):
        try:
            yield Note().load(row)
        except ValueError as e:
            col.log("skipping note %s: %s" % (row.get('id'), e))

# Find duplicates
##########################################################################

def _normalize(value):
    return (value or "").strip().lower()

def findDupes(col, typeName, fieldName, value, did=None):
    """The notes of type typeName whose field fieldName holds value.

    Values are compared after stripping surrounding white space and
    ignoring case. A blank value is never a duplicate. If did is given,
    only notes with a card in deck did count.

    Return a list of NoteBrief, in note id order.
    """
    value = _normalize(value)
    # empty does not count as duplicate
    if not value:
        return []
    dupes = []
    for note in _notes(col, typeName):
        if fieldName not in note or _normalize(note[fieldName]) != value:
            continue
        if did is not None and not _hasCardInDeck(col, note.id, did):
            continue
        dupes.append(NoteBrief(note.id, note.typeName, dict(note.fields)))
    return dupes

def _hasCardInDeck(col, nid, did):
    return any(row['did'] == did for row in col.storage.getCardsByNote(nid))

# Empty cards
##########################################################################

def findEmptyCards(col):
    """The cards with nothing left to study, as a list of EmptyCard.

    A cloze card is empty when its cloze number is no longer in the note's
    cloze field. Another card is empty when both its sides are blank once
    HTML is removed. Notes whose type is unknown are ignored."""
    empty = []
    for model in col.models.all():
        for note in _notes(col, model.getName()):
            ords = None
            for row in col.storage.getCardsByNote(note.id):
                card = Card().load(row)
                template = model.getTemplate(card.templateName)
                if template is not None and template.isCloze():
                    if ords is None:
                        ords = extractOrdinals(note[CLOZE_FIELD])
                    if card.ord in ords:
                        continue
                    reason = "Cloze deletion c%d no longer exists in note" % card.ord
                elif not stripHTML(card.front).strip() and not stripHTML(card.back).strip():
                    reason = "Card has no content (both front and back are empty)"
                else:
                    continue
                empty.append(EmptyCard(card.id, card.nid, card.did,
                                       card.templateName, card.ord,
                                       card.front, card.back, reason))
    return empty
