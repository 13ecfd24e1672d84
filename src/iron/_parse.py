"""Parse Iron source into ast nodes.

The lark grammar only knows about brackets and atoms. Converting the lark
tree gives the parser its second job: recognizing the special forms
(`fn`, `if`, `define`) and the `true`, `false` and `nil` keywords, and
checking the forms are well shaped. Every node created from source gets a
`SourcePosition`.

The intermediate lark tree is not exposed to the api.
"""

__all__ = ["parse", "pos_from_lark"]

import logging
import re

import lark

import iron

_log = logging.getLogger(__name__)

_KEYWORDS = {"true": True, "false": False, "nil": None}

_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}


def parse(source, filename=None):
    """Parse source into an ast tree.

    Args:
        source: (str) Iron source code
        filename: (str | None) Name used in positions and error messages

    Returns:
        (ast.Root) Parsed tree, top level comments included

    Raises:
        ParseError: Invalid syntax or a malformed special form
    """
    _log.debug("parse %s (%d chars)", filename or "<string>", len(source))
    parser = _lark_parser("iron")
    try:
        tree = parser.parse(source)
    except lark.UnexpectedInput as e:
        raise iron.ParseError(_describe_error(e), _error_position(e, filename)) from None
    return _Converter(filename).convert(tree)


def pos_from_lark(treetoken, filename=None):
    """Create the source position from a lark Tree or Token value."""
    if isinstance(treetoken, lark.Token):
        token = treetoken
        return iron.ast.SourcePosition(
            filename,
            token.line,
            token.column,
            token.end_line or token.line,
            token.end_column or token.column,
        )
    meta = treetoken.meta
    if meta.empty:
        return iron.ast.SourcePosition(filename)
    return iron.ast.SourcePosition(
        filename,
        meta.line,
        meta.column,
        meta.end_line or meta.line,
        meta.end_column or meta.column,
    )


def _describe_error(error):
    if isinstance(error, lark.UnexpectedCharacters):
        return f"unexpected character {error.char!r}"
    if isinstance(error, lark.UnexpectedToken):
        if error.token.type == "$END":
            return "unexpected end of input, missing closing bracket"
        return f"unexpected {error.token.value!r}"
    return "unexpected end of input"


def _error_position(error, filename):
    line = getattr(error, "line", None)
    column = getattr(error, "column", None)
    if not isinstance(line, int) or line < 1:
        return iron.ast.SourcePosition(filename)
    return iron.ast.SourcePosition(filename, line, column, line, column)


class _Converter:
    """Converts a lark tree to ast nodes, one per source file."""

    def __init__(self, filename):
        self.filename = filename

    def convert(self, tree):
        """Convert a lark tree to a node.

        Args:
            tree: (lark.Tree) Lark tree to convert, of any grammar rule
        Returns:
            (AstNode) Node with its position set
        """
        node = self._convert(tree)
        node.position = pos_from_lark(tree, self.filename)
        return node

    def _error(self, message, tree):
        return iron.ParseError(message, pos_from_lark(tree, self.filename))

    def _exprs(self, kids):
        """Convert kids, discarding nested comments."""
        return [self.convert(kid) for kid in kids if kid.data != "comment"]

    def _convert(self, tree):
        kids = tree.children
        match tree.data:
            case "start":
                return iron.ast.Root(self.convert(kid) for kid in kids)
            case "sexpr":
                return self._sexpr(tree, self._exprs(kids))
            case "array":
                return iron.ast.ArrayLiteral(self._exprs(kids))
            case "quoted":
                return iron.ast.QuotedList(self._quote_all(kids[1:]))
            case "integer":
                return iron.ast.Number(int(kids[0]))
            case "float":
                return iron.ast.Number(float(kids[0]))
            case "string":
                return iron.ast.String(self._unescape(kids[0], tree))
            case "symbol":
                return iron.ast.Symbol(kids[0][1:])
            case "identifier":
                name = kids[0].value
                if name in _KEYWORDS:
                    value = _KEYWORDS[name]
                    return iron.ast.Nil() if value is None else iron.ast.Boolean(value)
                return iron.ast.Identifier(name)
            case "comment":
                return iron.ast.Comment(kids[0][1:])
            case _:
                raise ValueError(f"Unhandled grammar rule: {tree.data}")

    def _sexpr(self, tree, items):
        if not items:
            raise self._error("empty expression ()", tree)
        head, operands = items[0], items[1:]
        if isinstance(head, iron.ast.Identifier):
            match head.name:
                case "fn":
                    return self._fn(tree, operands)
                case "if":
                    if not 2 <= len(operands) <= 3:
                        raise self._error(
                            f"if needs 2 or 3 operands, got {len(operands)}", tree
                        )
                    return iron.ast.If(*operands)
                case "define":
                    if len(operands) != 2:
                        raise self._error(
                            f"define takes a name and a value, got {len(operands)} operands",
                            tree,
                        )
                    if not isinstance(operands[0], iron.ast.Identifier):
                        raise self._error(
                            f"define needs an identifier for its name, got {operands[0].unparse()}",
                            tree,
                        )
                    return iron.ast.Define(operands[0].name, operands[1])
        return iron.ast.Sexpr(head, operands)

    def _fn(self, tree, operands):
        if not operands or not isinstance(operands[0], iron.ast.ArrayLiteral):
            raise self._error("fn needs a parameter array, (fn [params...] body...)", tree)
        params = []
        for param in operands[0].items:
            if not isinstance(param, iron.ast.Identifier):
                raise self._error(f"fn parameter must be a name, got {param.unparse()}", tree)
            params.append(param.name)
        for param in params[:-1]:
            if param.endswith(iron.REST_SUFFIX):
                raise self._error(f"rest parameter {param} must be last", tree)
        if params and params[-1] == iron.REST_SUFFIX:
            raise self._error("rest parameter needs a name before ...", tree)
        return iron.ast.Fn(params, operands[1:])

    def _quote_all(self, kids):
        return [self._quote(kid) for kid in kids if kid.data != "comment"]

    def _quote(self, tree):
        """Convert quoted source to plain values instead of nodes."""
        kids = tree.children
        match tree.data:
            case "sexpr" | "array":
                return iron.List(self._quote_all(kids))
            case "quoted":
                return iron.List(self._quote_all(kids[1:]))
            case "integer":
                return int(kids[0])
            case "float":
                return float(kids[0])
            case "string":
                return self._unescape(kids[0], tree)
            case "symbol":
                return iron.Symbol(kids[0][1:])
            case "identifier":
                name = kids[0].value
                if name in _KEYWORDS:
                    return _KEYWORDS[name]
                return iron.Symbol(name)
            case _:
                raise ValueError(f"Unhandled grammar rule: {tree.data}")

    def _unescape(self, token, tree):
        def replace(match):
            char = match.group(1)
            if char not in _ESCAPES:
                raise self._error(f"\\{char} is not a valid escape sequence", tree)
            return _ESCAPES[char]

        return _ESCAPE_RE.sub(replace, token[1:-1])


_parsers = {}


def _lark_parser(name):
    """Get globally shared lark parser.

    Args:
        name: (str) name of the grammar file (without .lark)

    Returns:
        (lark.Lark) Parser instance
    """
    parser = _parsers.get(name)
    if parser is not None:
        return parser

    path = f"lark/{name}.lark"
    parser = lark.Lark.open(
        path, rel_to=__file__, parser="lalr", propagate_positions=True
    )
    _parsers[name] = parser
    return parser
