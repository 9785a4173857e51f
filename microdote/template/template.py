# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import re

from microdote.consts import TYPE_ANSWER_EMPTY, TYPE_ANSWER_PROMPT
from microdote.template.cloze import renderCloze

modifiers = {}
clozeModifiers = {}
def modifier(symbol, registry=modifiers):
    """Decorator for associating a function with a tag modifier.

    @modifier('P')
    def render_tongue(self, tag_name=None, context=None):
        return ":P %s" % context.get(tag_name, "")

    {{P:yo}} => :P <content of field yo>
    """
    def set_modifier(func):
        registry[symbol] = func
        return func
    return set_modifier


class Template:
    """A question or answer format, and the way to fill it from a note.

    Every {{...}} is a tag. {{Name}} is replaced by the field Name, or by
    nothing if there is no such field. {{mod:Name}} calls the modifier mod
    when one is registered, and is otherwise looked up as a field called
    "mod:Name". {{FrontSide}} is replaced by the rendered question when one
    is given.

    The output of a tag is never scanned again: a {{FrontSide}} inside the
    rendered question stays as it is in the answer.
    """

    # from {{ foo }} return ({{ foo }}, " foo ")
    tag_re = re.compile(r"\{\{([^}]+)\}\}")

    # registries are searched in order
    registries = (modifiers,)

    def __init__(self, template):
        self.template = template or ""
        self.frontSide = None

    def render(self, context, frontSide=None):
        """The template, with each tag replaced according to context.

        context -- dict from field name to its content
        frontSide -- the rendered question, when rendering an answer
        """
        self.frontSide = frontSide
        return self.tag_re.sub(lambda match: self.sub_tag(match, context),
                               self.template)

    def sub_tag(self, match, context):
        tag_name = match.group(1).strip()
        if tag_name == "FrontSide" and self.frontSide is not None:
            return self.frontSide
        if ":" in tag_name:
            mod, field = tag_name.split(":", 1)
            func = self.modifierFor(mod.strip())
            if func:
                return func(self, field.strip(), context)
        return self.render_unescaped(tag_name, context)

    def modifierFor(self, symbol):
        for registry in self.registries:
            if symbol in registry:
                return registry[symbol]

    def render_unescaped(self, tag_name, context):
        """The content of the field, or the empty string."""
        return context.get(tag_name) or ""

    @modifier('type')
    def render_type(self, tag_name, context):
        # typing the answer is done by the reviewer; only show where
        if context.get(tag_name):
            return TYPE_ANSWER_PROMPT
        return TYPE_ANSWER_EMPTY


class ClozeTemplate(Template):
    """A template of a cloze card type, rendered for a single cloze
    number."""

    registries = (clozeModifiers, modifiers)

    def __init__(self, template, ord, reveal):
        super().__init__(template)
        self.ord = ord
        self.reveal = reveal

    @modifier('cloze', clozeModifiers)
    def render_cloze(self, tag_name, context):
        return renderCloze(context.get(tag_name) or "", self.ord, self.reveal)


def render(template, context, frontSide=None):
    return Template(template).render(context, frontSide)

def renderWithCloze(template, context, ord, reveal, frontSide=None):
    return ClozeTemplate(template, ord, reveal).render(context, frontSide)
