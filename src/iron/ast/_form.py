"""Special forms, expressions that control evaluation of their operands."""

__all__ = ["Fn", "If", "Define"]

import iron

from . import _base


class Fn(_base.AstNode):
    """Function literal, (fn [params...] body...).

    Evaluates to a closure over the scope it is evaluated in. The last
    parameter may end with "..." to collect any remaining arguments.

    Args:
        params: (list[str]) Parameter names
        body: (list[AstNode]) Body expressions
    """

    def __init__(self, params, body):
        self.params = list(params)
        self.body = list(body)

    def evaluate(self, frame):
        return iron.Function(self.params, self.body, frame.scope)
        yield  # generator

    def unparse(self) -> str:
        body = "".join(f" {node.unparse()}" for node in self.body)
        return f"(fn [{' '.join(self.params)}]{body})"

    def __repr__(self):
        return f"Fn([{' '.join(self.params)}], {len(self.body)})"


class If(_base.AstNode):
    """Conditional, (if cond then [else]).

    Only the selected branch is evaluated. Without an else branch a false
    condition gives nil.
    """

    def __init__(self, cond, then, otherwise=None):
        self.cond = cond
        self.then = then
        self.otherwise = otherwise

    def evaluate(self, frame):
        cond = yield iron.Compute(self.cond)
        if iron.truthy(cond):
            return (yield iron.Compute(self.then))
        if self.otherwise is not None:
            return (yield iron.Compute(self.otherwise))
        return None

    def unparse(self) -> str:
        parts = ["if", self.cond.unparse(), self.then.unparse()]
        if self.otherwise is not None:
            parts.append(self.otherwise.unparse())
        return f"({' '.join(parts)})"

    def __repr__(self):
        return "If()"


class Define(_base.AstNode):
    """Binding, (define name value), in the scope being evaluated.

    Returns the bound value. An anonymous function takes the name, which
    then shows up in error messages and debug logs.
    """

    def __init__(self, name: str, value):
        self.name = name
        self.value = value

    def evaluate(self, frame):
        value = yield iron.Compute(self.value)
        if isinstance(value, iron.Function) and value.name is None:
            value.name = self.name
        return frame.scope.define(self.name, value)

    def unparse(self) -> str:
        return f"(define {self.name} {self.value.unparse()})"

    def __repr__(self):
        return f"Define({self.name})"
