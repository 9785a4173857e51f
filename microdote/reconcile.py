# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from collections import namedtuple

from microdote.cards import Card

Reconciliation = namedtuple("Reconciliation", "toCreate toUpdate toDelete")
"""What storage must do so that a note has exactly the cards its templates
generate.

toCreate -- new cards, with id, deck and scheduling state
toUpdate -- existing cards whose question or answer changed
toDelete -- existing cards no template generates anymore
"""


class ReconciliationEngine:
    """Matches the drafts of a note against its stored cards.

    A card is identified by (template name, ordinal). A stored card whose
    identity is still generated keeps its id, deck, scheduling state, flag,
    mark and suspension; only its question and answer follow the drafts.
    """

    def __init__(self, col):
        self.col = col

    def reconcile(self, existing, drafts, model, did, now, usn):
        """The Reconciliation turning existing into the cards of drafts.

        Cards in existing whose content changed are modified in place.

        Keyword arguments:
        existing -- the stored cards of one note
        drafts -- the drafts compiled from this note
        model -- the note type, used to find the templates of new cards
        did -- deck of new cards whose template has no deck override
        now -- creation time given to the scheduler for new cards
        usn -- usn of created and changed cards
        """
        have = {}
        toDelete = []
        for card in sorted(existing, key=lambda card: card.id):
            if card.key() in have:
                # two cards for the same identity; keep the older
                toDelete.append(card)
            else:
                have[card.key()] = card
        toCreate = []
        toUpdate = []
        for draft in drafts:
            card = have.pop((draft.templateName, draft.ord), None)
            if card is None:
                toCreate.append(self.newCard(draft, model, did, now, usn))
            elif card.front != draft.front or card.back != draft.back:
                card.front = draft.front
                card.back = draft.back
                card.usn = usn
                toUpdate.append(card)
        # template removed, gate closed or cloze deleted
        toDelete.extend(have.values())
        return Reconciliation(toCreate, toUpdate, toDelete)

    def newCard(self, draft, model, did, now, usn):
        """A new card object for draft, not yet in storage.

        Its deck is the deck override of its template if there is a deck
        with this name, otherwise did.
        """
        card = Card(self.col.storage.nextID("card"))
        card.nid = draft.nid
        card.templateName = draft.templateName
        card.ord = draft.ord
        card.front = draft.front
        card.back = draft.back
        card.did = self.deckFor(model.getTemplate(draft.templateName), did)
        card.srs = self.col.sched.newCard(now)
        card.usn = usn
        return card

    def deckFor(self, template, did):
        override = template and template['deckOverride']
        if not override:
            return did
        odid = self.col.decks.id(override, create=False)
        if odid is None:
            self.col.log("no deck named %s for template %s, using deck %s" % (
                override, template.getName(), did))
            return did
        return odid
