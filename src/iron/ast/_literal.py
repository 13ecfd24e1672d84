"""Nodes for literal values."""

__all__ = ["Number", "String", "Symbol", "Boolean", "Nil", "Comment"]

import iron

from . import _base

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}


class Number(_base.AstNode):
    """Numeric literal."""

    def __init__(self, value: int | float):
        self.value = value

    def evaluate(self, frame):
        """Numbers evaluate to themselves."""
        return self.value
        yield  # Make it a generator

    def unparse(self) -> str:
        return repr(self.value)

    def __repr__(self):
        return f"Number({self.value!r})"


class String(_base.AstNode):
    """String literal."""

    def __init__(self, value: str):
        self.value = value

    def evaluate(self, frame):
        return self.value
        yield  # generator

    def unparse(self) -> str:
        escaped = "".join(_ESCAPES.get(c, c) for c in self.value)
        return f'"{escaped}"'

    def __repr__(self):
        return f"String({self.value!r})"


class Symbol(_base.AstNode):
    """Quoted name, 'name."""

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, frame):
        return iron.Symbol(self.name)
        yield  # generator

    def unparse(self) -> str:
        return f"'{self.name}"

    def __repr__(self):
        return f"Symbol({self.name!r})"


class Boolean(_base.AstNode):
    """The true and false keywords."""

    def __init__(self, value: bool):
        self.value = value

    def evaluate(self, frame):
        return self.value
        yield  # generator

    def unparse(self) -> str:
        return "true" if self.value else "false"

    def __repr__(self):
        return f"Boolean({self.value})"


class Nil(_base.AstNode):

    def evaluate(self, frame):
        return None
        yield  # generator

    def unparse(self) -> str:
        return "nil"

    def __repr__(self):
        return "Nil()"


class Comment(_base.AstNode):
    """Top level comment, kept so the AST dump can show it.

    Comments evaluate to nil. The release optimize pass removes them
    before execution.
    """

    def __init__(self, text: str):
        self.text = text

    def evaluate(self, frame):
        return None
        yield  # generator

    def unparse(self) -> str:
        return f";{self.text}"

    def __repr__(self):
        return f"Comment({self.text!r})"
