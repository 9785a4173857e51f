# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from microdote.cards import CardDraft
from microdote.consts import CLOZE_FIELD, STD_ORD
from microdote.errors import MicrodoteError
from microdote.hooks import runFilter
from microdote.template import ClozeTemplate, Template, extractOrdinals


class CardCompiler:
    """Renders the cards a note currently generates.

    Compilation doesn't read or write storage: the drafts have no id, deck
    or scheduling state, and compiling the same note twice gives the same
    drafts. Notes of different note types may be compiled concurrently.
    """

    def compile(self, model, note):
        """The list of drafts of the cards of note, in the order of the
        templates of model, then by cloze number.

        A missing field renders as the empty string. Raise
        MicrodoteError("unknownNoteType") if model is not the note type
        of note.

        Keyword arguments:
        model -- the note type of the note, or None if none was found
        note -- a Note
        """
        if model is None or model.getName() != note.typeName:
            raise MicrodoteError("unknownNoteType", name=note.typeName)
        fields = runFilter("mungeFields", dict(note.fields), model, note)
        drafts = []
        for template in model['tmpls']:
            if template.isCloze():
                drafts.extend(self._clozeDrafts(model, note, template, fields))
            elif template.gateOpen(note.fields):
                drafts.append(self._draft(model, note, template, fields))
        return drafts

    def _draft(self, model, note, template, fields):
        """The only draft of a standard template."""
        front = self._renderQuestion(
            Template(template['qfmt']), fields, model, note)
        back = self._renderAnswer(
            Template(template['afmt']), fields, front, model, note)
        return CardDraft(note.id, template.getName(), STD_ORD, front, back)

    def _clozeDrafts(self, model, note, template, fields):
        """One draft for each cloze number of the cloze field. None when
        the field has no cloze."""
        drafts = []
        for ord in extractOrdinals(note[CLOZE_FIELD]):
            front = self._renderQuestion(
                ClozeTemplate(template['qfmt'], ord, reveal=False),
                fields, model, note)
            back = self._renderAnswer(
                ClozeTemplate(template['afmt'], ord, reveal=True),
                fields, front, model, note)
            drafts.append(CardDraft(note.id, template.getName(), ord, front, back))
        return drafts

    def _renderQuestion(self, template, fields, model, note):
        html = template.render(fields)
        return runFilter("mungeQA", html, "q", fields, model, note)

    def _renderAnswer(self, template, fields, front, model, note):
        html = template.render(fields, frontSide=front)
        return runFilter("mungeQA", html, "a", fields, model, note)
