# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import copy

from microdote.templates import CardTemplate
from microdote.utils import DictAugmented, checksum, intTime

"""A note type is composed of:
name -- the name of the note type, unique in the collection. Notes refer
        to their type by this name,
flds -- the list of field names, in order. Names are unique,
tmpls -- the list of templates, see templates.py,
sortf -- Integer specifying which field is used for sorting. It's a
         position in flds: reordering the fields may make it point to
         another field,
fieldOptions -- dict from field name to its editing options, see fields.py,
mod -- modification time in seconds,
usn -- Update sequence number"""

defaultModel = {
    'sortf': 0,
    'mod': 0,
    'usn': 0,
}

class NoteType(DictAugmented):

    def load(self, dict):
        super().load(dict)
        self['tmpls'] = [CardTemplate(dict=template) for template in self.get('tmpls', [])]
        self['flds'] = list(self.get('flds', []))
        self.setdefault('fieldOptions', {})
        for key, value in defaultModel.items():
            self.setdefault(key, value)

    def new(self, name, default):
        assert(isinstance(name, str))
        model = copy.deepcopy(defaultModel)
        model['name'] = name
        model['mod'] = intTime()
        model['flds'] = []
        model['tmpls'] = []
        model['fieldOptions'] = {}
        self.load(model)

    # Fields
    ##################################################

    def fieldNames(self):
        """The list of names of fields of this note type."""
        return list(self['flds'])

    def sortIdx(self):
        """The index of the field used for sorting."""
        return self['sortf']

    def sortFieldName(self):
        return self['flds'][self['sortf']]

    # Templates
    ##################################################

    def templateNames(self):
        return [template.getName() for template in self['tmpls']]

    def getTemplate(self, name):
        """The template called name, or None."""
        for template in self['tmpls']:
            if template.getName() == name:
                return template

    def hasCloze(self):
        return any(template.isCloze() for template in self['tmpls'])

    # Schema hash
    ##################################################

    def scmhash(self):
        """Return a hash of the schema, to see if note types are
        compatible. Consider only name of fields and of card type, and
        not the card type itself.
        """
        scm = ""
        for name in self['flds']:
            scm += name
        for template in self['tmpls']:
            scm += template.getName()
        return checksum(scm)
