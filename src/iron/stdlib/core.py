"""Traversal library: not, push, do, foreach and map.

Generic sequencing and collection traversal built only on the host
primitives (`len`, `get`, `set`, truthiness and calls). None of these
functions catch errors. Anything raised by a primitive or a callback
propagates to the caller and stops the traversal where it happened,
leaving earlier side effects in place.

The loops are generators. Each callback is requested from the engine
with `frame.call`, so a traversal over a long container never deepens
the Python stack.
"""

import iron


def not_(frame, value):
    """Boolean negation using the same truthiness as `if`."""
    return not iron.truthy(value)


def push(frame, container, value):
    """Append value by writing at index (len container).

    Returns:
        Whatever `set` returns, the written value
    """
    return iron.set_item(container, iron.length(container), value)


def do(frame, *thunks):
    """Call each thunk once, in order, then return nil.

    A thunk that isn't callable fails only when its turn comes, after the
    earlier thunks have run.
    """
    for thunk in thunks:
        yield frame.call(thunk)
    return None


def foreach(frame, values, callback):
    """Call (callback element index) for each index in ascending order.

    The walk covers the length read on entry. Shrinking the container from
    the callback makes the next `get` fail with the usual index error.
    """
    for index in range(iron.length(values)):
        element = iron.get_item(values, index)
        yield frame.call(callback, element, index)
    return None


def map_(frame, values, callback):
    """New array of (callback element index) results, in order.

    The input is never modified and the result is always a fresh array.
    """
    result = iron.Array()
    for index in range(iron.length(values)):
        element = iron.get_item(values, index)
        mapped = yield frame.call(callback, element, index)
        push(frame, result, mapped)
    return result


def create_module():
    """Create the core library callables keyed by their Iron names."""
    funcs = [not_, push, do, foreach, map_]
    return {f.__name__.rstrip("_"): iron.Builtin(f.__name__.rstrip("_"), f) for f in funcs}
