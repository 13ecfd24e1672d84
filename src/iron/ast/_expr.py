"""Nodes for expressions: identifiers, calls and collection literals."""

__all__ = ["Root", "Identifier", "Sexpr", "ArrayLiteral", "QuotedList", "Apply"]

import iron

from . import _base, _literal


class Root(_base.AstNode):
    """Top level of a parsed source, a sequence of expressions.

    Evaluates each expression in order and returns the value of the last
    one, or nil when there is nothing to run.

    Args:
        kids: (list[AstNode]) Top level expressions and comments
    """

    def __init__(self, kids):
        self.kids = list(kids)

    def evaluate(self, frame):
        result = None
        for kid in self.kids:
            if isinstance(kid, _literal.Comment):
                continue
            result = yield iron.Compute(kid)
        return result

    def optimize(self):
        """Copy of this tree without top level comments."""
        root = Root(k for k in self.kids if not isinstance(k, _literal.Comment))
        root.position = self.position
        return root

    def unparse(self) -> str:
        return "\n".join(kid.unparse() for kid in self.kids)

    def __repr__(self):
        return f"Root({len(self.kids)})"


class Identifier(_base.AstNode):
    """Reference to a name in the current scope."""

    def __init__(self, name: str):
        self.name = name

    def evaluate(self, frame):
        return frame.scope.lookup(self.name)
        yield  # generator

    def unparse(self) -> str:
        return self.name

    def __repr__(self):
        return f"Identifier({self.name})"


class Sexpr(_base.AstNode):
    """Call expression, (head operand...).

    The head and then every operand are evaluated left to right before the
    callee is invoked with the operand values.

    Args:
        head: (AstNode) Expression producing the callable
        operands: (list[AstNode]) Argument expressions
    """

    def __init__(self, head, operands):
        self.head = head
        self.operands = list(operands)

    def evaluate(self, frame):
        callee = yield iron.Compute(self.head)
        args = []
        for operand in self.operands:
            args.append((yield iron.Compute(operand)))
        if not iron.is_callable(callee):
            raise iron.EvalError(
                f"{self.head.unparse()} is not callable, got {iron.type_name(callee)}"
            )
        return (yield from callee.invoke(frame, args))

    def unparse(self) -> str:
        parts = [self.head.unparse()]
        parts.extend(op.unparse() for op in self.operands)
        return f"({' '.join(parts)})"

    def __repr__(self):
        return f"Sexpr({self.head.unparse()}, {len(self.operands)})"


class ArrayLiteral(_base.AstNode):
    """Array constructor, [item...], builds a new array on every evaluation."""

    def __init__(self, items):
        self.items = list(items)

    def evaluate(self, frame):
        values = iron.Array()
        for item in self.items:
            values.append((yield iron.Compute(item)))
        return values

    def unparse(self) -> str:
        return f"[{' '.join(item.unparse() for item in self.items)}]"

    def __repr__(self):
        return f"ArrayLiteral({len(self.items)})"


class QuotedList(_base.AstNode):
    """Quoted data, '(a 1 "x"), evaluates to an immutable list.

    The contents are converted to values by the parser and are never
    evaluated.

    Args:
        value: (List) The quoted data
    """

    def __init__(self, value):
        self.value = iron.List(value)

    def evaluate(self, frame):
        return self.value
        yield  # generator

    def unparse(self) -> str:
        return iron.format_value(self.value)

    def __repr__(self):
        return f"QuotedList({len(self.value)})"


class Apply(_base.AstNode):
    """Invoke a callable with values that are already computed.

    Never produced by the parser. Builtins written in Python yield these
    (through `frame.call`) to call back into Iron code.

    Args:
        func: (Function | Builtin) Callable to invoke
        args: (list) Argument values
    """

    def __init__(self, func, args):
        self.func = func
        self.args = list(args)

    def evaluate(self, frame):
        if not iron.is_callable(self.func):
            raise iron.EvalError(f"cannot call {iron.type_name(self.func)}")
        return (yield from self.func.invoke(frame, self.args))

    def unparse(self) -> str:
        parts = [iron.format_value(self.func)]
        parts.extend(iron.format_value(arg) for arg in self.args)
        return f"({' '.join(parts)})"

    def __repr__(self):
        return f"Apply({self.func!r}, {len(self.args)})"
