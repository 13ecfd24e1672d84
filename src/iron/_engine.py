"""Engine for evaluating AST nodes with a linked chain of frames.

Every AST node evaluates through a generator. When a node needs the value
of a child it yields a `Compute` request instead of recursing; the engine
starts a frame for the child, runs it, and sends the result back into the
waiting parent. Nested Iron calls therefore grow a chain of heap objects
rather than the Python call stack, so deeply recursive scripts are limited
only by `max_depth`.

The engine doesn't know about language semantics - it just drives nodes.
"""

__all__ = ["Engine", "Compute", "DEFAULT_MAX_DEPTH"]

import logging

import iron

_log = logging.getLogger(__name__)

# Deepest chain of pending frames before evaluation is abandoned
DEFAULT_MAX_DEPTH = 200_000


class Engine:
    """Evaluation engine driving node generators.

    Args:
        interp: (Interp | None) Interpreter that owns this engine, made
            available to builtins through `frame.interp`
        max_depth: (int) Limit on the number of pending frames

    Attributes:
        interp: (Interp | None) Owning interpreter
        max_depth: (int) Limit on the number of pending frames
    """

    def __init__(self, interp=None, max_depth=DEFAULT_MAX_DEPTH):
        self.interp = interp
        self.max_depth = max_depth

    def __repr__(self):
        return f"Engine<max_depth={self.max_depth}>"

    def run(self, node, scope=None):
        """Run a node and return its result.

        This is the main entry point for evaluation. It handles the generator
        protocol: yielding children, sending results back, getting final result.

        Errors raised by any node propagate out of `run` unchanged, after the
        pending generators have been closed. An `IronError` without a source
        position gets the position of the nearest source node.

        Args:
            node: (AstNode) AST node to evaluate
            scope: (Scope | None) Scope for identifier lookups, a fresh empty
                scope when not given

        Returns:
            (object) Final Iron value from node evaluation
        """
        if scope is None:
            scope = iron.Scope()
        _log.debug("run %r", node)

        result = None
        depth = 0
        newest = _Frame(node, None, scope, self)
        current = newest

        while current:
            try:
                # Advance generator - yields a Compute request
                if current is newest:
                    request = next(current.gen)
                else:
                    request = current.gen.send(result)

                depth += 1
                if depth > self.max_depth:
                    raise iron.EvalError(
                        f"evaluation depth exceeded {self.max_depth} frames"
                    )

                newest = _Frame(request.node, current, request.scope, self)
                current = newest

            except StopIteration as e:
                # Handle returned value and step out to parent
                result = e.value
                depth -= 1
                current = current.previous

            except Exception as error:
                if isinstance(error, iron.IronError) and error.position is None:
                    error.position = _position(current)
                _unwind(current)
                raise

        return result


class Compute:
    """Request to evaluate a child AST node.

    This is yielded from `AstNode.evaluate` when further processing is requested.
    The engine receives this request and creates an internal _Frame to track execution.

    Args:
        node: (AstNode) AST node to evaluate
        scope: (Scope | None) Scope for the child, inherits the parent's when None
    """

    __slots__ = ("node", "scope")

    def __init__(self, node, scope=None):
        self.node = node
        self.scope = scope

    def __repr__(self):
        if self.scope is not None:
            return f"Compute(node={self.node!r}, scope={self.scope!r})"
        return f"Compute(node={self.node!r})"


class _Frame:
    """Evaluation frame - represents one step in the call chain.

    Frames form a linked list through `previous`, eliminating the need for
    a separate stack. The generator is created automatically during
    initialization.

    Args:
        node: (AstNode) AST node being evaluated
        previous: (_Frame | None) Parent frame (None for root)
        scope: (Scope | None) Scope for this frame, inherits previous when None
        engine: (Engine) Engine driving this frame
    """

    __slots__ = ("node", "gen", "previous", "scope", "engine")

    def __init__(self, node, previous, scope, engine):
        self.node = node
        self.previous = previous
        self.engine = engine
        self.scope = scope if scope is not None else previous.scope
        self.gen = node.evaluate(self)

    @property
    def interp(self):
        """(Interp | None) Interpreter owning the engine."""
        return self.engine.interp

    def call(self, func, *args):
        """Build a request that invokes func with already computed arguments.

        Python builtins yield the result of this to call back into Iron
        code without leaving the engine loop.
        """
        return Compute(iron.ast.Apply(func, args))

    def __repr__(self):
        depth = 0
        frame = self
        while frame.previous:
            depth += 1
            frame = frame.previous
        return f"_Frame(depth={depth}, node={self.node!r})"


def _position(frame):
    """Position of the nearest node that came from source."""
    while frame is not None:
        if frame.node.position is not None:
            return frame.node.position
        frame = frame.previous
    return None


def _unwind(frame):
    """Close every pending generator from frame back to the root."""
    while frame is not None:
        frame.gen.close()
        frame = frame.previous
