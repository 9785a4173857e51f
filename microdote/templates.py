# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from microdote.utils import DictAugmented

"""tmpls (a template): a dict with
name -- "template name, unique in its note type. Part of the identity of
        its cards",
qfmt -- "question format string",
afmt -- "answer format string",
css -- "styling of the cards",
ifFieldNonEmpty -- "name of a field, or None. When set, a card is only
        generated when this field is not blank. Ignored by cloze templates",
cloze -- "whether one card is generated for each cloze number",
deckOverride -- "name of the deck the new cards go to, or None",
bqfmt -- "browser question format",
bafmt -- "browser answer format"
"""

defaultTemplate = {
    'name': "",
    'qfmt': "",
    'afmt': "",
    'css': "",
    'ifFieldNonEmpty': None,
    'cloze': False,
    'deckOverride': None,
    'bqfmt': "",
    'bafmt': "",
}

# keys updateTemplate accepts
editableKeys = ('qfmt', 'afmt', 'css', 'ifFieldNonEmpty', 'deckOverride',
                'bqfmt', 'bafmt')

class CardTemplate(DictAugmented):
    """Templates are not necessarily in a note type. ModelManager.addTemplate
    puts them there."""

    def new(self, name, default):
        super().new(name, defaultTemplate)

    def load(self, dict):
        # older registries lack the newer keys
        for key, value in defaultTemplate.items():
            self[key] = value
        super().load(dict)

    def isCloze(self):
        return bool(self['cloze'])

    def gate(self):
        """The name of the field this template requires, or None."""
        if self.isCloze():
            return None
        return self['ifFieldNonEmpty'] or None

    def gateOpen(self, fields):
        """Whether the gate let a card be generated from fields.

        fields -- dict from field name to content; absent is blank"""
        gate = self.gate()
        if not gate:
            return True
        return bool((fields.get(gate) or "").strip())

