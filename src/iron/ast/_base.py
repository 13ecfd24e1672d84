"""Node for base classes."""

__all__ = ["AstNode", "SourcePosition"]

from collections.abc import Generator
from dataclasses import dataclass

import iron


@dataclass
class SourcePosition:
    """Source code position information for AST nodes.

    Tracks where an AST node originated in the source code,
    useful for error messages and debugging.

    Attributes:
        filename: Source file path (e.g., "examples/traverse.irl")
        start_line: Starting line number (1-indexed)
        start_column: Starting column number (1-indexed)
        end_line: Ending line number (1-indexed)
        end_column: Ending column number (1-indexed)
    """
    filename: str | None = None
    start_line: int | None = None
    start_column: int | None = None
    end_line: int | None = None
    end_column: int | None = None

    def describe(self) -> str:
        """Format position for error messages."""
        if self.filename:
            return f"{self.filename}:{self.start_line}:{self.start_column}"
        return f"line {self.start_line}, column {self.start_column}"


class AstNode:
    """Base class for all AST nodes.

    AST nodes are immutable structures that describe how Iron works at runtime.
    They are validated on construction by the parser.

    They are driven by the `evaluate` generator that returns a computed
    value and may yield `Compute` requests for further evaluation.
    The yield is a two way channel that receives the resulting value from
    the evaluated node.

    This is a base class that should not be instantiated directly.
    Subclasses must implement evaluate() and unparse().

    Attributes:
        position: Optional source position information (filename, line, column).
                  Set by parser when creating nodes from source code.
    """

    position = None

    def evaluate(self, frame) -> Generator['iron.Compute', object, object]:
        """Evaluate this node to produce a value.

        Args:
            frame: The engine frame running this node

        Yields:
            Compute requests for child nodes that need evaluation

        Receives:
            Values (results from evaluating children)

        Returns:
            Final Iron value
        """
        raise NotImplementedError(f"{self.__class__.__name__}.evaluate() not implemented")

    def unparse(self) -> str:
        """Convert this node back to source code.

        Used for debugging, error messages, and the AST dump.
        Should produce valid Iron source that parses back to equivalent AST.
        """
        raise NotImplementedError(f"{self.__class__.__name__}.unparse() not implemented")

    def children(self):
        """Child nodes in source order."""
        kids = []
        for key, value in vars(self).items():
            if key == "position":
                continue
            if isinstance(value, AstNode):
                kids.append(value)
            elif isinstance(value, (list, tuple)):
                kids.extend(v for v in value if isinstance(v, AstNode))
        return kids

    def print_tree(self, depth=0, file=None):
        """Print ast nodes for debugging."""
        indent = "  " * depth
        print(f"{indent}{self!r}", file=file)
        for child in self.children():
            child.print_tree(depth + 1, file=file)

    def matches(self, other) -> bool:
        """Hierarchical comparison of AST structure.

        Compares node types, attributes (excluding position), and recursively
        compares all children. Useful for testing round-trip parsing.
        """
        if type(other) is not type(self):
            return False
        mine = {k: v for k, v in vars(self).items() if k != "position"}
        theirs = {k: v for k, v in vars(other).items() if k != "position"}
        if mine.keys() != theirs.keys():
            return False
        return all(_matches(mine[key], theirs[key]) for key in mine)


def _matches(left, right):
    if isinstance(left, AstNode):
        return isinstance(right, AstNode) and left.matches(right)
    if isinstance(left, (list, tuple)) and not isinstance(left, str):
        if not isinstance(right, (list, tuple)) or len(left) != len(right):
            return False
        return all(_matches(a, b) for a, b in zip(left, right))
    return iron.equal(left, right) if _comparable(left) else left == right


def _comparable(value):
    """Plain Iron data compares with type-strict equality."""
    return value is None or isinstance(value, (bool, int, float, str))
