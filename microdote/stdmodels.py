# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from microdote.consts import CLOZE_FIELD, EXTRA_FIELD

models = []

cardCss = """\
.card {
 font-family: arial;
 font-size: 20px;
 text-align: center;
 color: black;
 background-color: white;
}
"""

# Basic
##########################################################################

def _newBasicModel(col, name=None):
    mm = col.models
    model = mm.new(name or "Basic")
    mm.addField(model, "Front")
    mm.addField(model, "Back")
    template = mm.newTemplate("Card 1", css=cardCss)
    template['qfmt'] = "Q: {{Front}}"
    template['afmt'] = "A: {{Back}}"
    mm.addTemplate(model, template)
    return model

def addBasicModel(col):
    model = _newBasicModel(col)
    col.models.add(model)
    return model

models.append(("Basic", addBasicModel))

# Forward & Reverse
##########################################################################

def _newForwardReverse(col, name=None, templateName="Card 2"):
    mm = col.models
    model = _newBasicModel(col, name or "Basic (and reversed card)")
    template = mm.newTemplate(templateName, css=cardCss)
    template['qfmt'] = "Q: {{Back}}"
    template['afmt'] = "A: {{Front}}"
    mm.addTemplate(model, template)
    return model

def addForwardReverse(col):
    model = _newForwardReverse(col)
    col.models.add(model)
    return model

models.append(("Basic (and reversed card)", addForwardReverse))

# Forward & Optional Reverse
##########################################################################

def addForwardOptionalReverse(col):
    mm = col.models
    model = _newForwardReverse(col, "Basic (optional reversed card)",
                               "Card 2 (optional reverse)")
    av = "Add Reverse"
    mm.addField(model, av)
    mm.updateTemplate(model, "Card 2 (optional reverse)", ifFieldNonEmpty=av)
    mm.add(model)
    return model

models.append(("Basic (optional reversed card)", addForwardOptionalReverse))

# Basic w/ typing
##########################################################################

def addBasicTypingModel(col):
    model = _newBasicModel(col, "Basic (type in the answer)")
    template = model['tmpls'][0]
    template['qfmt'] = "Q: {{Front}}\n\n{{type:Back}}"
    col.models.add(model)
    return model

models.append(("Basic (type in the answer)", addBasicTypingModel))

# Cloze
##########################################################################

def addClozeModel(col):
    mm = col.models
    model = mm.new("Cloze")
    mm.addField(model, CLOZE_FIELD)
    mm.addField(model, EXTRA_FIELD)
    template = mm.newTemplate("Cloze", cloze=True)
    fmt = "{{cloze:%s}}" % CLOZE_FIELD
    template['css'] = cardCss + """
.cloze {
 font-weight: bold;
 color: blue;
}
"""
    template['qfmt'] = "Q: " + fmt
    template['afmt'] = "A: " + fmt + "\n\nExtra: {{%s}}" % EXTRA_FIELD
    mm.addTemplate(model, template)
    mm.add(model)
    return model

models.append(("Cloze", addClozeModel))

def addStdModels(col):
    """Add every built-in note type to col."""
    return [add(col) for name, add in models]
