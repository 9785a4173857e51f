# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import re
from typing import Any, Dict

from microdote.consts import RESERVED_FIELD_NAMES
from microdote.errors import FieldError

defaultFieldOptions: Dict[str, Any] = {
    # the following alter editing only; cards don't depend on them
    'font': "Arial",
    'fontSize': 20,
    'rtl': False,
    'htmlEditor': False,
}

#Regexp associating to a mustache the name of its field. Group 1 is the
#chain of modifiers, as in {{type:Back}}
fieldTagReg = r'\{\{(\s*(?:[^{}:]*:)*\s*)%s(\s*)\}\}'

def renameInTemplate(txt, oldName, newName):
    """txt, where each tag showing the field oldName, possibly through a
    modifier as in {{type:oldName}}, shows newName instead."""
    def repl(match):
        return '{{' + match.group(1) + newName + match.group(2) + '}}'
    return re.sub(fieldTagReg % re.escape(oldName), repl, txt or "")

def checkFieldName(names, name):
    """Raise FieldError unless name can be added to the field names.

    Comparison is case sensitive: Front and front are distinct fields."""
    if not name or not name.strip():
        raise FieldError("field name is required")
    if name in RESERVED_FIELD_NAMES:
        raise FieldError("'%s' is a reserved field name" % name)
    if name in names:
        raise FieldError("field name already exists")

def isPermutation(current, candidate):
    """Whether candidate holds exactly the fields of current, each once."""
    return (len(candidate) == len(current)
            and len(set(candidate)) == len(candidate)
            and set(candidate) == set(current))
