"""Callable values: closures defined in Iron and builtins written in Python"""

__all__ = ["Function", "Builtin", "REST_SUFFIX"]

import inspect
import logging

import iron

_log = logging.getLogger(__name__)

# Parameter name suffix that collects remaining arguments into an array
REST_SUFFIX = "..."


class Function:
    """A function defined in Iron with `fn`.

    This is a closure, bundling the parameter names, the body nodes, and
    the scope in which the function was defined.

    Args:
        params: (list[str]) Parameter names, the last may end with "..."
        body: (list[AstNode]) Expressions evaluated in order on each call
        closure: (Scope) Scope captured at definition
        name: (str | None) Name given by `define`, for messages

    Attributes:
        params: (tuple[str]) Parameter names
        body: (tuple[AstNode]) Body expressions
        closure: (Scope) Captured scope
        name: (str | None) Name given by `define`
    """

    __slots__ = ("params", "body", "closure", "name")

    def __init__(self, params, body, closure, name=None):
        self.params = tuple(params)
        self.body = tuple(body)
        self.closure = closure
        self.name = name

    def __repr__(self):
        return f"Function<{self.name or 'anonymous'}>"

    def unparse(self):
        params = " ".join(self.params)
        body = "".join(f" {node.unparse()}" for node in self.body)
        return f"(fn [{params}]{body})"

    def bind(self, args):
        """Create the call scope with parameters bound to args.

        Surplus arguments are dropped. A rest parameter collects everything
        from its position onward, possibly nothing.

        Raises:
            EvalError: Fewer arguments than plain parameters
        """
        scope = iron.Scope(self.closure)
        for position, param in enumerate(self.params):
            if param.endswith(REST_SUFFIX):
                scope.define(param[: -len(REST_SUFFIX)], iron.Array(args[position:]))
                break
            if position >= len(args):
                raise iron.EvalError(
                    f"{self.name or 'fn'} missing argument '{param}' "
                    f"(got {len(args)} of {len(self.params)})"
                )
            scope.define(param, args[position])
        return scope

    def invoke(self, frame, args):
        """Generator evaluating the body in a new scope, returns the last value."""
        _log.debug("calling %s with %d args", self.name or "fn", len(args))
        scope = self.bind(args)
        result = None
        for node in self.body:
            result = yield iron.Compute(node, scope)
        return result


class Builtin:
    """Function implemented in Python.

    The Python callable receives the evaluation frame followed by the
    positional Iron arguments. It may be a plain function returning a value,
    or a generator function that yields `Compute` requests (usually built
    with `frame.call`) and receives their results. Generators let builtins
    call back into Iron code while staying inside the engine loop.

    Args:
        name: (str) Name the builtin is bound to
        python_func: (callable) Callable(frame, *args) -> value or generator

    Attributes:
        name: (str) Name the builtin is bound to
        python_func: (callable) Wrapped Python callable
        signature: (inspect.Signature) Used to check arity before calling
    """

    __slots__ = ("name", "python_func", "signature")

    def __init__(self, name, python_func):
        self.name = name
        self.python_func = python_func
        self.signature = inspect.signature(python_func)

    def __repr__(self):
        return f"Builtin<{self.name}>"

    def unparse(self):
        return self.name

    def invoke(self, frame, args):
        """Generator running the Python function, driving it if it yields."""
        try:
            self.signature.bind(frame, *args)
        except TypeError as e:
            raise iron.EvalError(f"{self.name}: {e}") from e

        result = self.python_func(frame, *args)
        if inspect.isgenerator(result):
            result = yield from result
        return result
