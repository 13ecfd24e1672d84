"""Builtin module providing the host primitives.

Each primitive is a Python function taking the evaluation frame followed by
its Iron arguments. They are wrapped as `iron.Builtin` and bound in the
global scope of every interpreter.
"""

__all__ = ["create_module", "populate"]

import logging

import iron

_log = logging.getLogger(__name__)


def builtin_add(frame, *numbers):
    """Sum of numbers, integer unless a float is involved. (+) is 0."""
    total = 0
    for number in numbers:
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise iron.EvalError(f"+ expects numbers, got {iron.type_name(number)}")
        total += number
    return total


def builtin_equal(frame, first, *rest):
    """True when every argument equals the first."""
    return all(iron.equal(first, other) for other in rest)


def builtin_print(frame, *values):
    """Write values to stdout with no separator or newline."""
    print(*(iron.to_text(v) for v in values), sep="", end="", flush=True)
    return None


def builtin_get(frame, container, index):
    return iron.get_item(container, index)


def builtin_set(frame, container, index, value):
    return iron.set_item(container, index, value)


def builtin_len(frame, container):
    return iron.length(container)


def builtin_type(frame, value):
    """Name of the value type as a symbol."""
    return iron.Symbol(iron.type_name(value))


def builtin_import(frame, *paths):
    """Run Iron modules and copy their bindings into the calling scope."""
    interp = frame.interp
    if interp is None:
        raise iron.EvalError("import needs an interpreter")
    for path in paths:
        if not isinstance(path, str) or isinstance(path, iron.Symbol):
            raise iron.EvalError(f"import expects string paths, got {iron.type_name(path)}")
        interp.import_module(path, frame.scope)
    return None


_BUILTINS = {
    "+": builtin_add,
    "=": builtin_equal,
    "print": builtin_print,
    "get": builtin_get,
    "set": builtin_set,
    "len": builtin_len,
    "type": builtin_type,
    "import": builtin_import,
}


def create_module():
    """Create the builtin callables keyed by their Iron names."""
    return {name: iron.Builtin(name, func) for name, func in _BUILTINS.items()}


def populate(scope):
    """Bind every builtin into a scope."""
    for name, builtin in create_module().items():
        scope.define(name, builtin)
    _log.debug("bound %d builtins", len(_BUILTINS))
    return scope
