# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from microdote.consts import CARD_NEW, QUEUE_NEW


class Scheduler:
    """The spaced repetition algorithm, as card generation sees it.

    The state it returns is opaque: cards store it and give it back, and
    nothing else reads it. Generation only ever asks for the state of a new
    card; answering is left to the scheduling backend, which subclasses
    this.
    """
    name = "base"

    def newCard(self, now):
        """The scheduling state of a card created at now (seconds)."""
        return dict(type=CARD_NEW, queue=QUEUE_NEW, due=now, ivl=0,
                    factor=0, reps=0, lapses=0, left=0)

    def answer(self, state, rating, now):
        """A pair (new state, review log entry) for answering a card in
        state with rating (1 to 4) at now."""
        raise NotImplementedError(
            "%s scheduler can't answer cards" % self.name)
