"""Text forms of Iron values.

format_value(val)   → str, the source-like form shown by the REPL and AST dump
to_text(val)        → str, the form written by `print`
"""

__all__ = ["format_value", "to_text"]

import iron

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}


def format_value(value):
    """Format a value the way it would be written in source.

    Strings are quoted and escaped, symbols keep their quote and callables
    show their definition or builtin name.
    """
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, iron.Symbol):
        return f"'{value}"
    if isinstance(value, str):
        return '"' + "".join(_ESCAPES.get(c, c) for c in value) + '"'
    if isinstance(value, list):
        return "[" + " ".join(format_value(v) for v in value) + "]"
    if isinstance(value, tuple):
        return "'" + _format_quoted(value)
    if isinstance(value, iron.Builtin):
        return f"<builtin {value.name}>"
    if isinstance(value, iron.Function):
        return value.unparse()
    return repr(value)


def _format_quoted(value):
    # Inside quoted data symbols are written bare
    if isinstance(value, tuple):
        return "(" + " ".join(_format_quoted(v) for v in value) + ")"
    if isinstance(value, iron.Symbol):
        return str(value)
    return format_value(value)


def to_text(value):
    """Text written by `print`, strings and symbols without quotes."""
    if isinstance(value, str):
        return str(value)
    return format_value(value)
