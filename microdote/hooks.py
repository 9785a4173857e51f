# -*- coding: utf-8 -*-
# License: GNU AGPL, version 3 or later; http://www.gnu.org/licenses/agpl.html

"""\
Hooks - hook management and tools for extending Microdote
==========================================================

To find available hooks, grep for runHook and runFilter in the source code.
A function that raises is removed from its hook before the error is
propagated, so a broken add-on can't fail the same way twice.
"""

import traceback

_hooks = {}

def runHook(hook, *args):
    "Run all functions on hook."
    hook = _hooks.get(hook, None)
    if hook:
        for func in list(hook):
            try:
                func(*args)
            except Exception:
                hook.remove(func)
                raise

def runFilter(hook, arg, *args):
    """Apply each function registered on hook to arg, passing the result
    of one to the next."""
    hook = _hooks.get(hook, None)
    if hook:
        for func in list(hook):
            try:
                arg = func(arg, *args)
            except Exception:
                traceback.print_exc()
                hook.remove(func)
                raise
    return arg

def addHook(hook, func):
    "Add a function to hook. Ignore if already on hook."
    if not _hooks.get(hook, None):
        _hooks[hook] = []
    if func not in _hooks[hook]:
        _hooks[hook].append(func)

def remHook(hook, func):
    "Remove a function if is on hook."
    hook = _hooks.get(hook, [])
    if func in hook:
        hook.remove(func)
