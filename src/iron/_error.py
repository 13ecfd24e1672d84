"""Error classes and helpers"""

__all__ = ["IronError", "EvalError", "ModuleError", "ParseError"]


class IronError(Exception):
    """Base class for errors raised by the Iron interpreter.

    Args:
        message: (str) Error description
        position: (SourcePosition | None) Where in the source the error occurred

    Attributes:
        message: (str) Error description
        position: (SourcePosition | None) Where in the source the error occurred
    """

    def __init__(self, message, position=None):
        self.message = message
        self.position = position
        super().__init__(message)

    def __str__(self):
        if self.position is not None and self.position.start_line:
            return f"{self.message} ({self.position.describe()})"
        return self.message


class ParseError(IronError):
    """Exception raised for parsing errors."""


class EvalError(IronError):
    """Error raised while evaluating code.

    Covers every failure of the host primitives: unknown identifiers,
    calling something that is not callable, missing arguments, type
    mismatches and out of range indexing. The engine fills in the position
    of the failing node when the raiser did not know it.
    """


class ModuleError(IronError):
    """Error locating or loading an imported module."""
