"""Test parsing source into ast nodes."""

import pytest

import iron
import irontest


def parse_one(code):
    """Parse code holding a single expression and return its node."""
    root = iron.parse(code)
    assert len(root.kids) == 1
    return root.kids[0]


@irontest.params(
    "code node",
    integer=("42", iron.ast.Number(42)),
    negative=("-7", iron.ast.Number(-7)),
    float=("3.5", iron.ast.Number(3.5)),
    exponent=("1.0e3", iron.ast.Number(1000.0)),
    string=('"text"', iron.ast.String("text")),
    symbol=("'name", iron.ast.Symbol("name")),
    true=("true", iron.ast.Boolean(True)),
    false=("false", iron.ast.Boolean(False)),
    nil=("nil", iron.ast.Nil()),
    minus=("-", iron.ast.Identifier("-")),
    dashed=("do-two", iron.ast.Identifier("do-two")),
    rest=("args...", iron.ast.Identifier("args...")),
)
def test_atoms(key, code, node):
    assert parse_one(code).matches(node)


def test_number_types():
    assert type(parse_one("10").value) is int
    assert type(parse_one("10.0").value) is float


@irontest.params(
    "code expected",
    newline=(r'"a\nb"', "a\nb"),
    tab=(r'"a\tb"', "a\tb"),
    backslash=(r'"a\\b"', "a\\b"),
    quote=(r'"say \"hi\""', 'say "hi"'),
    multiline=('"one\ntwo"', "one\ntwo"),
)
def test_string_escapes(key, code, expected):
    assert parse_one(code).value == expected


def test_invalid_escape():
    with pytest.raises(iron.ParseError) as exc_info:
        iron.parse(r'(print "bad \q escape")')
    irontest.assert_error(exc_info, "\\q is not a valid escape sequence")


def test_sexpr():
    node = parse_one("(+ 1 (+ 2 3))")
    assert isinstance(node, iron.ast.Sexpr)
    assert node.head.matches(iron.ast.Identifier("+"))
    assert len(node.operands) == 2
    assert isinstance(node.operands[1], iron.ast.Sexpr)


def test_array_commas():
    spaced = parse_one("[v i 2]")
    commas = parse_one("[v, i,2]")
    assert isinstance(spaced, iron.ast.ArrayLiteral)
    assert spaced.matches(commas)


def test_quoted_list_is_data():
    node = parse_one("'(a 1 \"x\" (b c) nil 'd)")
    assert isinstance(node, iron.ast.QuotedList)
    expected = iron.List((
        iron.Symbol("a"),
        1,
        "x",
        iron.List((iron.Symbol("b"), iron.Symbol("c"))),
        None,
        iron.Symbol("d"),
    ))
    assert iron.equal(node.value, expected)


def test_empty_quoted_list():
    node = parse_one("'()")
    assert node.value == ()


def test_comments():
    root = iron.parse("; header\n(+ 1 ; inline\n 2)\n")
    assert len(root.kids) == 2
    assert root.kids[0].matches(iron.ast.Comment(" header"))
    assert len(root.kids[1].operands) == 2

    optimized = root.optimize()
    assert len(optimized.kids) == 1
    assert isinstance(optimized.kids[0], iron.ast.Sexpr)


def test_empty_source():
    root = iron.parse("")
    assert root.kids == []


def test_positions():
    root = iron.parse("(define x 1)\n\n  (print x)", filename="pos.irl")
    second = root.kids[1]
    assert second.position.filename == "pos.irl"
    assert second.position.start_line == 3
    assert second.position.start_column == 3
    assert second.operands[0].position.start_column == 10
    assert second.position.describe() == "pos.irl:3:3"


def test_special_forms():
    fn = parse_one("(fn [a rest...] (print a) rest)")
    assert isinstance(fn, iron.ast.Fn)
    assert fn.params == ["a", "rest..."]
    assert len(fn.body) == 2

    cond = parse_one("(if true 1)")
    assert isinstance(cond, iron.ast.If)
    assert cond.otherwise is None

    define = parse_one("(define answer 42)")
    assert isinstance(define, iron.ast.Define)
    assert define.name == "answer"

    # Special form names only count in head position
    call = parse_one("(print fn)")
    assert isinstance(call, iron.ast.Sexpr)


@irontest.params(
    "code message",
    empty=("()", "empty expression"),
    fn_no_params=("(fn)", "fn needs a parameter array"),
    fn_bad_param=("(fn [1] 1)", "fn parameter must be a name"),
    fn_rest_first=("(fn [a... b] a)", "rest parameter a... must be last"),
    fn_bare_rest=("(fn [...] 1)", "rest parameter needs a name"),
    if_short=("(if true)", "if needs 2 or 3 operands"),
    if_long=("(if true 1 2 3)", "if needs 2 or 3 operands"),
    define_short=("(define x)", "define takes a name and a value"),
    define_name=('(define "x" 1)', "define needs an identifier"),
    unclosed=("(+ 1 2", "unexpected end of input"),
    stray=(")", "unexpected ')'"),
)
def test_parse_errors(key, code, message):
    with pytest.raises(iron.ParseError) as exc_info:
        iron.parse(code)
    irontest.assert_error(exc_info, message)


def test_parse_error_position():
    with pytest.raises(iron.ParseError) as exc_info:
        iron.parse("(define x 1)\n(+ 1 ]", filename="bad.irl")
    position = exc_info.value.position
    assert position.filename == "bad.irl"
    assert position.start_line == 2
    assert "bad.irl:2:" in str(exc_info.value)


@irontest.params(
    "code",
    call=("(+ 1 2.5 -3)",),
    nested=("(foreach [1 2] (fn [v i] (print v i)))",),
    forms=("(define f (fn [a b...] (if (= a 1) b nil)))",),
    strings=('(print "tab\\there" \'sym)',),
    quoted=("'(a (b 1) \"c\")",),
)
def test_unparse_round_trip(key, code):
    node = parse_one(code)
    again = parse_one(node.unparse())
    assert node.matches(again)
