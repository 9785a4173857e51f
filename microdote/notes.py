# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import json

from microdote.utils import intTime


class Note:
    """A note is the content a user typed, from which the cards are
    generated.

    id -- the id of the note, None until it's added to a collection
    typeName -- the name of its note type
    fields -- dict from field name to content. A missing field is blank
    tags -- list of tags
    crt -- creation time, in seconds
    mod -- modification time, in seconds
    usn -- update sequence number
    """

    def __init__(self, typeName=None, fields=None, tags=None, id=None):
        self.id = id
        self.typeName = typeName
        self.fields = dict(fields or {})
        self.tags = list(tags or [])
        self.crt = self.mod = intTime()
        self.usn = 0

    def load(self, row):
        """Fill the note from a storage row.

        Raise ValueError if the stored fields or tags are not valid JSON,
        or if the fields are not a mapping from string to string."""
        self.id = row['id']
        self.typeName = row['type']
        self.fields = json.loads(row['flds'])
        self.tags = json.loads(row['tags'])
        if not isinstance(self.fields, dict):
            raise ValueError("note %s: fields are not a mapping" % self.id)
        for key, value in self.fields.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise ValueError("note %s: field %r is not text" % (self.id, key))
        self.crt = row['crt']
        self.mod = row['mod']
        self.usn = row['usn']
        return self

    def row(self):
        """The storage row of this note."""
        return dict(id=self.id, type=self.typeName,
                    flds=json.dumps(self.fields), tags=json.dumps(self.tags),
                    crt=self.crt, mod=self.mod, usn=self.usn)

    # Dict interface
    ##################################################

    def keys(self):
        return list(self.fields.keys())

    def values(self):
        return list(self.fields.values())

    def items(self):
        return list(self.fields.items())

    def __getitem__(self, key):
        return self.fields.get(key, "")

    def __setitem__(self, key, value):
        self.fields[key] = value

    def __contains__(self, key):
        return key in self.fields

    # Tags
    ##################################################

    def hasTag(self, tag):
        return tag.lower() in (t.lower() for t in self.tags)

    def stringTags(self):
        return " ".join(self.tags)

    def delTag(self, tag):
        self.tags = [t for t in self.tags if t.lower() != tag.lower()]

    def addTag(self, tag):
        # duplicates are ignored
        if not self.hasTag(tag):
            self.tags.append(tag)
