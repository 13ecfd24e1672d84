"""Lexical scopes for variable bindings"""

__all__ = ["Scope"]

import iron


class Scope:
    """One level of lexical bindings with an optional enclosing scope.

    Every function call gets a fresh scope whose parent is the scope the
    function was defined in, which is what makes functions closures.

    Args:
        parent: (Scope | None) Enclosing scope

    Attributes:
        parent: (Scope | None) Enclosing scope
        bindings: (dict) Names defined directly in this scope
    """

    __slots__ = ("parent", "bindings")

    def __init__(self, parent=None):
        self.parent = parent
        self.bindings = {}

    def __repr__(self):
        names = ", ".join(self.bindings)
        return f"Scope<{names}>"

    def __contains__(self, name):
        return self.owner(name) is not None

    def owner(self, name):
        """Find the scope in the chain that defines name, or None."""
        scope = self
        while scope is not None:
            if name in scope.bindings:
                return scope
            scope = scope.parent
        return None

    def lookup(self, name):
        """Get the value bound to name in this scope or an enclosing one.

        Raises:
            EvalError: The name is not defined anywhere in the chain
        """
        scope = self.owner(name)
        if scope is None:
            raise iron.EvalError(f"ident {name} not declared")
        return scope.bindings[name]

    def define(self, name, value):
        """Bind name in this scope, shadowing any outer binding."""
        self.bindings[name] = value
        return value
