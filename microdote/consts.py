# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

# Fields
##########################################################################

# names which would collide with values the renderer provides itself
RESERVED_FIELD_NAMES = frozenset(("Tags", "Type", "Deck", "Card", "FrontSide"))

# the field cloze ordinals are read from. Note types don't declare it.
CLOZE_FIELD = "Text"

# the field appended to the back of cloze cards by the built-in type
EXTRA_FIELD = "Extra"

# Rendering
##########################################################################

TYPE_ANSWER_PROMPT = "[type your answer here]"
TYPE_ANSWER_EMPTY = "[type: empty]"

CLOZE_MASK = "[...]"

# Cards
##########################################################################

# Card types
CARD_NEW = 0
CARD_LRN = 1
CARD_DUE = 2
CARD_RELRN = 3

# Queue types
QUEUE_SUSPENDED = -1
QUEUE_NEW = 0
QUEUE_LRN = 1
QUEUE_REV = 2

# Flags
FLAG_NONE = 0
FLAG_MAX = 7

# ordinal of every card generated by a non-cloze template
STD_ORD = 0

# Decks
##########################################################################

DEFAULT_DECK_ID = 1
DEFAULT_DECK_NAME = "Default"

# Ratings, passed through to the scheduler
##########################################################################

RATING_AGAIN = 1
RATING_HARD = 2
RATING_GOOD = 3
RATING_EASY = 4
