# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import re

from microdote.consts import CLOZE_MASK

clozeReg = r"(?s)\{\{c(%s)::(.*?)(::(.*?))?\}\}"
r"""clozeReg % n is the regexp recognizing the occurrences of cloze number n.
   clozeReg % r"\d+" is the regexp recognizing any cloze occurrence.
   group 1 is the number, group 2 the answer, group 3 the hint with its
   leading ::, group 4 the hint.
"""

anyCloze = re.compile(clozeReg % r"\d+")

def extractOrdinals(text):
    """The sorted list of distinct cloze numbers found in text.

    Numbers which are not positive are ignored; {{c0::...}} makes no card."""
    ords = set()
    for match in anyCloze.finditer(text or ""):
        ord = int(match.group(1))
        if ord > 0:
            ords.add(ord)
    return sorted(ords)

def renderCloze(text, ord, reveal):
    """Text with the clozes numbered ord hidden (reveal false) or shown
    emphasized (reveal true). Every other cloze shows its answer.

    Keyword arguments:
    text -- the content of the cloze field
    ord -- the cloze number of the card being rendered
    reveal -- False on the question side, True on the answer side
    """
    def repl(match):
        if int(match.group(1)) != ord:
            return match.group(2)
        if reveal:
            buf = match.group(2)
        elif match.group(4) and match.group(4).strip():
            buf = "[%s]" % match.group(4)
        else:
            buf = CLOZE_MASK
        return "<span class=cloze>%s</span>" % buf
    return anyCloze.sub(repl, text or "")
