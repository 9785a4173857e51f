# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import copy
import json
import time

import jsonschema
from jsonschema.exceptions import ValidationError

from microdote.errors import FieldError, MicrodoteError, TemplateError
from microdote.fields import (checkFieldName, defaultFieldOptions,
                              isPermutation, renameInTemplate)
from microdote.hooks import runHook
from microdote.model import NoteType
from microdote.notes import Note
from microdote.templates import CardTemplate, defaultTemplate, editableKeys
from microdote.utils import checksum, intTime

"""This module deals with note types. The note types of a collection are
kept in a registry, a JSON object from note type name to note type. See
model.py for the content of a note type and templates.py for the content
of a template.

Each edit of a note type either succeeds completely or raises and leaves
the note type as it was. After an edit, the notes of the type are updated
and, if the configuration 'regenOnEdit' is set, their cards are
regenerated."""

registrySchema = {
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "minLength": 1},
            "flds": {"type": "array", "items": {"type": "string"}, "minItems": 1},
            "tmpls": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string", "minLength": 1},
                        "qfmt": {"type": "string"},
                        "afmt": {"type": "string"},
                        "ifFieldNonEmpty": {"type": ["string", "null"]},
                        "cloze": {"type": "boolean"},
                        "deckOverride": {"type": ["string", "null"]},
                    },
                    "required": ["name", "qfmt", "afmt"],
                },
            },
            "sortf": {"type": "integer", "minimum": 0},
            "fieldOptions": {"type": "object"},
        },
        "required": ["name", "flds", "tmpls"],
    },
}

class ModelManager:

    """This object is usually denoted mm as a variable. Or .models in
    collection.

    models -- dict from name to note type
    changed -- whether the registry must be written to storage
    """

    # Saving/loading registry
    #############################################################

    def __init__(self, col):
        """Returns a ModelManager whose collection is col."""
        self.col = col
        self.models = {}
        self.changed = False

    def load(self, json_):
        """Load registry from JSON. None is an empty registry.

        Raise MicrodoteError("invalidNoteTypes") if json_ is not a valid
        registry."""
        self.changed = False
        self.models = {}
        if json_ is None:
            return
        try:
            data = json.loads(json_)
            jsonschema.validate(data, registrySchema)
        except (json.decoder.JSONDecodeError, ValidationError) as e:
            raise MicrodoteError("invalidNoteTypes", reason=str(e).split("\n")[0])
        for model in data.values():
            model = NoteType(dict=model)
            self.models[model.getName()] = model

    def save(self, model=None):
        """Mark model modified if provided, and schedule a registry flush.

        Calls hook noteTypeChanged."""
        if model:
            model['mod'] = intTime()
            model['usn'] = self.col.usn()
            runHook("noteTypeChanged", model)
        self.changed = True

    def flush(self):
        "Flush the registry if any note types were changed."
        if self.changed:
            self.col.storage.setModels(json.dumps(self.models))
            self.changed = False

    # Retrieving and creating note types
    #############################################################

    def current(self):
        """The note type last used to add a note, or the first one."""
        model = self.byName(self.col.conf['curModel'])
        if model:
            return model
        if self.models:
            return list(self.models.values())[0]

    def byName(self, name):
        """The note type called name, or None."""
        return self.models.get(name)

    def have(self, name):
        return name in self.models

    def all(self):
        "Get all note type objects."
        return list(self.models.values())

    def allNames(self):
        return list(self.models.keys())

    def new(self, name):
        "A new note type, not yet in the registry."
        return NoteType(name=name)

    def add(self, model):
        """Add model to the registry, renaming it if its name is taken."""
        self.ensureNameUnique(model)
        self.models[model.getName()] = model
        self.save(model)

    def rem(self, model):
        "Delete model, and all its notes and cards."
        nids = [row['id'] for row in self.col.storage.getNotesByType(model.getName())]
        self.col.remNotes(nids)
        del self.models[model.getName()]
        if self.col.conf['curModel'] == model.getName():
            self.col.conf['curModel'] = None
        self.save()

    def ensureNameUnique(self, model):
        """Transform the name of model into a new name.

        If a note type with this name already exists in the manager,
        the name of this object is appended by - and by 5 characters
        generated using the current time."""
        if model.getName() in self.models and self.models[model.getName()] is not model:
            model.setName(model.getName() + "-" + checksum(str(time.time()))[:5])

    def useCount(self, model):
        """Number of notes using the note type model."""
        return len(self.col.storage.getNotesByType(model.getName()))

    # Fields
    ##################################################

    def addField(self, model, name, idx=None):
        """Insert a field called name at position idx, or last.

        Raise FieldError if the name is taken or reserved."""
        checkFieldName(model['flds'], name)
        if idx is None:
            idx = len(model['flds'])
        if not 0 <= idx <= len(model['flds']):
            raise FieldError("no position %d" % idx)
        model['flds'].insert(idx, name)
        model['fieldOptions'][name] = copy.deepcopy(defaultFieldOptions)
        # the sort field keeps its position
        def add(fields):
            fields.setdefault(name, "")
        self._transformFields(model, add)
        self.save(model)
        return self._regenerate(model)

    def renameField(self, model, oldName, newName):
        """Rename the field. In each template, find the mustache related to
        this field and change them. The template whose gate was this field
        now has newName as gate.

        Raise FieldError, without any change, if newName is taken or
        reserved."""
        self._checkHasField(model, oldName)
        if oldName == newName:
            return
        checkFieldName([name for name in model['flds'] if name != oldName], newName)
        for template in model['tmpls']:
            for fmt in ('qfmt', 'afmt', 'bqfmt', 'bafmt'):
                template[fmt] = renameInTemplate(template[fmt], oldName, newName)
            if template['ifFieldNonEmpty'] == oldName:
                template['ifFieldNonEmpty'] = newName
        model['flds'][model['flds'].index(oldName)] = newName
        options = model['fieldOptions'].pop(oldName, None)
        if options is not None:
            model['fieldOptions'][newName] = options
        def rename(fields):
            if oldName in fields:
                fields[newName] = fields.pop(oldName)
        self._transformFields(model, rename)
        self.save(model)
        return self._regenerate(model)

    def remField(self, model, name):
        """Remove a field from a note type, and its content from each note
        of this type.

        A template gated by this field becomes unconditional. Tags showing
        this field are kept in the templates; they render as empty.

        Raise FieldError if it is the only field."""
        self._checkHasField(model, name)
        if len(model['flds']) == 1:
            raise FieldError("a note type needs at least one field")
        # save old sort field
        sortFldName = model.sortFieldName() if model['sortf'] < len(model['flds']) else None
        model['flds'].remove(name)
        # restore old sort field if possible, or revert to first field
        if sortFldName in model['flds']:
            model['sortf'] = model['flds'].index(sortFldName)
        else:
            model['sortf'] = 0
        for template in model['tmpls']:
            if template['ifFieldNonEmpty'] == name:
                template['ifFieldNonEmpty'] = None
        model['fieldOptions'].pop(name, None)
        def delete(fields):
            fields.pop(name, None)
        self._transformFields(model, delete)
        self.save(model)
        return self._regenerate(model)

    def reorderFields(self, model, names):
        """Make names the field list of model.

        The sort field is a position, so after reordering it may be
        another field. Raise FieldError unless names holds exactly the
        current fields."""
        names = list(names)
        if not isPermutation(model['flds'], names):
            raise FieldError("new order must contain the same fields")
        model['flds'] = names
        self.save(model)
        return self._regenerate(model)

    def setSortIdx(self, model, idx):
        """State that the sort field of model is the field at position idx."""
        if not 0 <= idx < len(model['flds']):
            raise FieldError("no field at position %d" % idx)
        model['sortf'] = idx
        self.save(model)

    def setFieldOptions(self, model, name, **options):
        """Change the editing options of field name. Cards don't depend on
        them, so nothing is regenerated."""
        self._checkHasField(model, name)
        unknown = set(options) - set(defaultFieldOptions)
        if unknown:
            raise FieldError("unknown options: %s" % ", ".join(sorted(unknown)))
        current = model['fieldOptions'].setdefault(name, copy.deepcopy(defaultFieldOptions))
        current.update(options)
        self.save(model)

    def fieldOptions(self, model, name):
        self._checkHasField(model, name)
        return model['fieldOptions'].get(name, copy.deepcopy(defaultFieldOptions))

    def _checkHasField(self, model, name):
        if name not in model['flds']:
            raise FieldError("no field called %s" % name)

    def _transformFields(self, model, fn):
        """For each note of the model model, apply fn to its field map,
        and save the note modified.

        fn -- a function modifying a dict from field name to content."""
        if not self.have(model.getName()):
            return
        for row in self.col.storage.getNotesByType(model.getName()):
            try:
                note = Note().load(row)
            except ValueError as e:
                self.col.log("skipping note %s: %s" % (row['id'], e))
                continue
            fn(note.fields)
            note.mod = intTime()
            note.usn = self.col.usn()
            self.col.storage.updateNote(note.row())

    # Templates
    ##################################################

    def newTemplate(self, name, **values):
        """A new template, whose content is the one of defaultTemplate
        updated with values, and name is name."""
        template = CardTemplate(name=name, default=defaultTemplate)
        template.update(values)
        return template

    def addTemplate(self, model, template):
        """Add template in model, as last element, and generate its cards.

        Raise TemplateError if its name is used in model, or if its gate
        is not a field of model."""
        if not template.getName():
            raise TemplateError("a card type needs a name")
        if model.getTemplate(template.getName()) is not None:
            raise TemplateError("card type name already exists")
        self._checkGate(model, template.gate())
        model['tmpls'].append(template)
        self.save(model)
        return self._regenerate(model)

    def updateTemplate(self, model, name, **changes):
        """Change the template called name, then regenerate the cards of
        every note of model.

        Only the keys of templates.editableKeys can be changed."""
        template = self._getTemplate(model, name)
        unknown = set(changes) - set(editableKeys)
        if unknown:
            raise TemplateError("can't change %s" % ", ".join(sorted(unknown)))
        if 'ifFieldNonEmpty' in changes and not template.isCloze():
            self._checkGate(model, changes['ifFieldNonEmpty'])
        template.update(changes)
        self.save(model)
        return self._regenerate(model)

    def remTemplate(self, model, name):
        """Remove the template called name, and its cards.

        Raise TemplateError if it is the last template."""
        template = self._getTemplate(model, name)
        if len(model['tmpls']) == 1:
            raise TemplateError("a note type needs at least one card type")
        model['tmpls'].remove(template)
        self.save(model)
        return self._regenerate(model)

    def _getTemplate(self, model, name):
        template = model.getTemplate(name)
        if template is None:
            raise MicrodoteError("unknownTemplate", name=name)
        return template

    def _checkGate(self, model, gate):
        if gate and gate not in model['flds']:
            raise TemplateError("no field called %s" % gate)

    def _regenerate(self, model):
        """The report of the regeneration of the cards of model, or None if
        editing doesn't regenerate cards."""
        if not self.have(model.getName()) or not self.col.conf['regenOnEdit']:
            return None
        return self.col.regenerateCards(model)
