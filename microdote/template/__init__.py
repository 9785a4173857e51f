# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

from microdote.template.cloze import extractOrdinals, renderCloze
from microdote.template.template import (ClozeTemplate, Template, render,
                                         renderWithCloze)
