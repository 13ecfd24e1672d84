"""Runtime values for Iron.

Iron values are plain Python objects so host code can pass them in and out
without wrapping. The mapping is:

    nil       None
    boolean   bool
    integer   int
    float     float
    string    str
    symbol    Symbol
    array     Array (any Python list is accepted)
    list      List (any Python tuple is accepted)
    code      Function or Builtin

The container helpers here (`length`, `get_item`, `set_item`) are the
primitives behind the `len`, `get` and `set` builtins. They raise
`EvalError` for every misuse so a script never sees a raw Python error.
"""

__all__ = [
    "Symbol",
    "Array",
    "List",
    "type_name",
    "truthy",
    "equal",
    "is_callable",
    "is_container",
    "length",
    "get_item",
    "set_item",
]

import iron


class Symbol(str):
    """Quoted name, written as 'name in source."""

    __slots__ = ()

    def __repr__(self):
        return f"Symbol({str(self)!r})"


class Array(list):
    """Ordered, zero-based, growable container.

    Arrays are the only values scripts can write into, through `set` and
    `push`. They are shared by reference, so a function that receives an
    array and pushes to it mutates the caller's array.
    """

    __slots__ = ()

    def __repr__(self):
        return f"Array({list(self)!r})"


class List(tuple):
    """Immutable list of quoted data, written as '(a b c) in source."""

    __slots__ = ()

    def __repr__(self):
        return f"List({tuple(self)!r})"


def type_name(value):
    """Name of the Iron type for a value, as reported by the `type` builtin.

    Args:
        value: (object) Any Iron value
    Returns:
        (str) One of nil, boolean, integer, float, symbol, string, array,
            list, code
    """
    if value is None:
        return "nil"
    # bool before int, Symbol before str
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, Symbol):
        return "symbol"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, tuple):
        return "list"
    if is_callable(value):
        return "code"
    raise iron.EvalError(f"not an Iron value: {type(value).__name__}")


def truthy(value):
    """Truth test shared by `if` and `not`: only false and nil are false."""
    return value is not None and value is not False


def equal(left, right):
    """Structural equality used by `=`.

    Values of different Iron types are never equal, so `1` and `1.0` differ
    and so do `1` and `true`. Callables compare by identity.
    """
    if type_name(left) != type_name(right):
        return False
    if isinstance(left, (list, tuple)):
        if len(left) != len(right):
            return False
        return all(equal(a, b) for a, b in zip(left, right))
    if is_callable(left):
        return left is right
    return left == right


def is_callable(value):
    """True for values that can be invoked with arguments."""
    return isinstance(value, (iron.Function, iron.Builtin))


def is_container(value):
    """True for values that `set` and `push` can write to."""
    return isinstance(value, list)


def length(value):
    """Number of items in an array, list or string."""
    if isinstance(value, (list, tuple, str)):
        return len(value)
    raise iron.EvalError(f"len expects array, list or string, got {type_name(value)}")


def get_item(value, index):
    """Read one item, counting negative indices from the end.

    Args:
        value: (Array | List | str) Sequence to read
        index: (int) Position to read
    Returns:
        (object) The stored value
    Raises:
        EvalError: Not a sequence, index not an integer, or out of range
    """
    if not isinstance(value, (list, tuple, str)):
        raise iron.EvalError(f"get expects array, list or string, got {type_name(value)}")
    index = _normalize_index(value, index, "get")
    if index >= len(value):
        raise iron.EvalError(
            f"index {index} out of range for {type_name(value)} of length {len(value)}"
        )
    return value[index]


def set_item(container, index, value):
    """Write one item into an array, growing it when needed.

    Writing at the current length appends. Writing further past the end
    fills the gap with nil.

    Args:
        container: (Array) Array to modify in place
        index: (int) Position to write, negative counts from the end
        value: (object) Value to store
    Returns:
        (object) The written value
    """
    if not is_container(container):
        raise iron.EvalError(f"set expects array, got {type_name(container)}")
    index = _normalize_index(container, index, "set")
    if index < len(container):
        container[index] = value
    else:
        container.extend([None] * (index - len(container)))
        container.append(value)
    return value


def _normalize_index(sequence, index, name):
    """Validate an index and resolve negative positions."""
    if not isinstance(index, int) or isinstance(index, bool):
        raise iron.EvalError(f"{name} index must be integer, got {type_name(index)}")
    if index < 0:
        if -index > len(sequence):
            raise iron.EvalError(
                f"absolute value of {index} is too large for the {type_name(sequence)}"
            )
        index += len(sequence)
    return index
