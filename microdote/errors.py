# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

class MicrodoteError(Exception):
    def __init__(self, type, **data):
        super().__init__()
        self.type = type
        self.data = data
    def __str__(self):
        type = self.type
        if self.data:
            type += ": %s" % repr(self.data)
        return type

class FieldError(Exception):
    """An edit of a note type's fields was refused. The note type is left
    as it was before the edit."""
    def __init__(self, description):
        super().__init__()
        self.description = description
    def __str__(self):
        return "Couldn't edit field: " + self.description

class TemplateError(Exception):
    """An edit of a note type's templates was refused."""
    def __init__(self, description):
        super().__init__()
        self.description = description
    def __str__(self):
        return "Couldn't edit card type: " + self.description

class StorageError(Exception):
    def __init__(self, description):
        super().__init__()
        self.description = description
    def __str__(self):
        return "Storage failure: " + self.description
