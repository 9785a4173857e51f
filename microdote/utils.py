# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

import copy
import os
import re
import time
from hashlib import sha1
from html.entities import name2codepoint

# Time handling
##############################################################################

def intTime(scale=1):
    "The time in integer seconds. Pass scale=1000 to get milliseconds."
    return int(time.time()*scale)

# HTML
##############################################################################
reComment = re.compile("(?s)<!--.*?-->")
reStyle = re.compile("(?si)<style.*?>.*?</style>")
reScript = re.compile("(?si)<script.*?>.*?</script>")
reTag = re.compile("(?s)<.*?>")
reEnts = re.compile(r"&#?\w+;")

def stripHTML(text):
    text = reComment.sub("", text)
    text = reStyle.sub("", text)
    text = reScript.sub("", text)
    text = reTag.sub("", text)
    text = entsToTxt(text)
    return text

def entsToTxt(html):
    # entitydefs defines nbsp as \xa0 instead of a standard space, so we
    # replace it first
    html = html.replace("&nbsp;", " ")
    def fixup(match):
        text = match.group(0)
        if text[:2] == "&#":
            # character reference
            try:
                if text[:3] == "&#x":
                    return chr(int(text[3:-1], 16))
                else:
                    return chr(int(text[2:-1]))
            except ValueError:
                pass
        else:
            # named entity
            try:
                text = chr(name2codepoint[text[1:-1]])
            except KeyError:
                pass
        return text # leave as is
    return reEnts.sub(fixup, html)

# Checksums
##############################################################################

def checksum(data):
    if isinstance(data, str):
        data = data.encode("utf-8")
    return sha1(data).hexdigest()

# Dict-backed objects
##############################################################################

class DictAugmented(dict):
    """A dict, as found in the JSON registry, with a few methods on top.

    Keys are the serialized names, so that json.dumps(obj) gives back what
    load() received.
    """

    def __init__(self, dict=None, name=None, default=None):
        super().__init__()
        if dict is not None:
            self.load(dict)
        else:
            self.new(name, default or {})

    def load(self, dict):
        self.update(dict)

    def new(self, name, default):
        self.load(copy.deepcopy(default))
        self['name'] = name

    def getName(self):
        return self['name']

    def setName(self, name):
        self['name'] = name

# OS helpers
##############################################################################

devMode = os.getenv("MICRODOTEDEV", "")
